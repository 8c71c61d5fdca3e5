"""
Policy Routes
Spending policy management and resolution endpoints
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from src.config.database import get_db
from src.services.auth_service import auth_service
from src.services.policy_service import policy_service
from src.models.user import User
from src.schemas.policy import PolicyCreate, PolicyUpdate, PolicyResponse, PolicyDebugResponse

router = APIRouter()


@router.get("", response_model=List[PolicyResponse])
async def list_policies(
    organization_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(auth_service.get_current_user)
):
    """Org-wide and user-specific policies of an organization"""
    return policy_service.list_policies(db, current_user.id, organization_id)


@router.post("", response_model=PolicyResponse, status_code=status.HTTP_201_CREATED)
async def create_policy(
    data: PolicyCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(auth_service.get_current_user)
):
    """Create a policy; leave user_id empty for an org-wide policy (admins only)"""
    return policy_service.create_policy(db, current_user.id, data)


@router.get("/resolve", response_model=PolicyResponse)
async def resolve_policy(
    organization_id: int,
    user_id: int,
    category_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(auth_service.get_current_user)
):
    """
    Policy that governs user_id's expenses in category_id

    A user-specific policy wins over the organization-wide one.
    Responds 404 when neither exists.
    """
    return policy_service.resolve_policy(db, current_user.id, organization_id, user_id, category_id)


@router.get("/debug", response_model=PolicyDebugResponse)
async def debug_policy(
    organization_id: int,
    user_id: int,
    category_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(auth_service.get_current_user)
):
    """Both candidate policies, the selected one and the reason"""
    result = policy_service.debug_policy(db, current_user.id, organization_id, user_id, category_id)
    return PolicyDebugResponse.model_validate(result)


@router.get("/{policy_id}", response_model=PolicyResponse)
async def get_policy(
    policy_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(auth_service.get_current_user)
):
    return policy_service.get_policy(db, current_user.id, policy_id)


@router.put("/{policy_id}", response_model=PolicyResponse)
async def update_policy(
    policy_id: int,
    data: PolicyUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(auth_service.get_current_user)
):
    """Change limit, period or auto-approval (admins only)"""
    return policy_service.update_policy(db, current_user.id, policy_id, data)


@router.delete("/{policy_id}")
async def delete_policy(
    policy_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(auth_service.get_current_user)
):
    """Delete a policy (admins only)"""
    policy_service.delete_policy(db, current_user.id, policy_id)
    return {"success": True, "message": "Policy deleted"}
