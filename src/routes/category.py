"""
Category Routes
Expense category management endpoints
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from src.config.database import get_db
from src.services.auth_service import auth_service
from src.services.category_service import category_service
from src.models.user import User
from src.schemas.category import CategoryCreate, CategoryUpdate, CategoryResponse

router = APIRouter()


@router.get("", response_model=List[CategoryResponse])
async def list_categories(
    organization_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(auth_service.get_current_user)
):
    """Categories of an organization"""
    return category_service.list_categories(db, current_user.id, organization_id)


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    data: CategoryCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(auth_service.get_current_user)
):
    """Create a category (admins only)"""
    return category_service.create_category(db, current_user.id, data)


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(auth_service.get_current_user)
):
    return category_service.get_category(db, current_user.id, category_id)


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: int,
    data: CategoryUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(auth_service.get_current_user)
):
    """Update a category (admins only)"""
    return category_service.update_category(db, current_user.id, category_id, data)


@router.delete("/{category_id}")
async def delete_category(
    category_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(auth_service.get_current_user)
):
    """Delete a category and its policies (admins only)"""
    category_service.delete_category(db, current_user.id, category_id)
    return {"success": True, "message": "Category deleted"}
