"""
Organization Routes
Organizations, members and roles
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from src.config.database import get_db
from src.services.auth_service import auth_service
from src.services.organization_service import organization_service
from src.models.organization import MemberRole
from src.models.user import User
from src.schemas.organization import (
    OrganizationCreate,
    OrganizationUpdate,
    OrganizationResponse,
    OrganizationSummary,
    OrganizationDetail,
    MembershipResponse,
    InviteUserRequest,
    UpdateMemberRoleRequest,
)

router = APIRouter()


@router.post("", response_model=OrganizationResponse, status_code=status.HTTP_201_CREATED)
async def create_organization(
    data: OrganizationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(auth_service.get_current_user)
):
    """Create an organization; the caller becomes its admin"""
    return organization_service.create_organization(db, current_user.id, data.name)


@router.get("", response_model=List[OrganizationSummary])
async def list_organizations(
    db: Session = Depends(get_db),
    current_user: User = Depends(auth_service.get_current_user)
):
    """Organizations the caller belongs to"""
    rows = organization_service.list_organizations(db, current_user.id)
    return [
        OrganizationSummary(
            id=organization.id,
            name=organization.name,
            created_at=organization.created_at,
            updated_at=organization.updated_at,
            role=role.value
        )
        for organization, role in rows
    ]


@router.get("/{organization_id}", response_model=OrganizationDetail)
async def get_organization(
    organization_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(auth_service.get_current_user)
):
    """Organization details with members and the caller's role"""
    organization, role = organization_service.get_organization(db, current_user.id, organization_id)
    return OrganizationDetail(
        id=organization.id,
        name=organization.name,
        created_at=organization.created_at,
        updated_at=organization.updated_at,
        current_user_role=role.value,
        members=[MembershipResponse.model_validate(m) for m in organization.memberships]
    )


@router.put("/{organization_id}", response_model=OrganizationResponse)
async def update_organization(
    organization_id: int,
    data: OrganizationUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(auth_service.get_current_user)
):
    """Rename an organization (admins only)"""
    return organization_service.update_organization(db, current_user.id, organization_id, data.name)


@router.get("/{organization_id}/membership", response_model=MembershipResponse)
async def get_current_membership(
    organization_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(auth_service.get_current_user)
):
    """The caller's own membership and role"""
    return organization_service.get_current_membership(db, current_user.id, organization_id)


@router.get("/{organization_id}/members", response_model=List[MembershipResponse])
async def list_members(
    organization_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(auth_service.get_current_user)
):
    """Members of the organization"""
    return organization_service.list_members(db, current_user.id, organization_id)


@router.post("/{organization_id}/members", response_model=MembershipResponse, status_code=status.HTTP_201_CREATED)
async def invite_user(
    organization_id: int,
    data: InviteUserRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(auth_service.get_current_user)
):
    """Add an existing user by email (admins only)"""
    return organization_service.invite_user(
        db, current_user.id, organization_id, data.email, MemberRole(data.role.value)
    )


@router.patch("/{organization_id}/members/{user_id}", response_model=MembershipResponse)
async def update_member_role(
    organization_id: int,
    user_id: int,
    data: UpdateMemberRoleRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(auth_service.get_current_user)
):
    """Change another member's role (admins only)"""
    return organization_service.update_member_role(
        db, current_user.id, organization_id, user_id, MemberRole(data.role.value)
    )


@router.delete("/{organization_id}/members/{user_id}")
async def remove_member(
    organization_id: int,
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(auth_service.get_current_user)
):
    """Remove another member (admins only)"""
    organization_service.remove_member(db, current_user.id, organization_id, user_id)
    return {"success": True, "message": "Member removed"}
