"""
Review Routes
Manual approval workflow endpoints
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from src.config.database import get_db
from src.services.auth_service import auth_service
from src.services.review_service import review_service
from src.models.user import User
from src.schemas.expense import ExpenseResponse
from src.schemas.review import ReviewCreate

router = APIRouter()


@router.get("/pending", response_model=List[ExpenseResponse])
async def list_pending_expenses(
    organization_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(auth_service.get_current_user)
):
    """Expenses awaiting review, oldest first (admins only)"""
    return review_service.list_pending(db, current_user.id, organization_id)


@router.post("/{expense_id}/approve", response_model=ExpenseResponse)
async def approve_expense(
    expense_id: int,
    data: Optional[ReviewCreate] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(auth_service.get_current_user)
):
    """Approve a submitted expense (admins only)"""
    return review_service.approve_expense(db, expense_id, current_user.id, data.comment if data else None)


@router.post("/{expense_id}/reject", response_model=ExpenseResponse)
async def reject_expense(
    expense_id: int,
    data: Optional[ReviewCreate] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(auth_service.get_current_user)
):
    """Reject a submitted expense (admins only)"""
    return review_service.reject_expense(db, expense_id, current_user.id, data.comment if data else None)
