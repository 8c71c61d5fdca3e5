"""
Organization Schemas
Pydantic models for organizations and memberships
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import List, Optional
from datetime import datetime
from enum import Enum

from src.schemas.user import UserBrief


class MemberRoleEnum(str, Enum):
    """Member role enumeration"""
    ADMIN = "ADMIN"
    MEMBER = "MEMBER"


class OrganizationCreate(BaseModel):
    """Schema for creating an organization"""
    name: str = Field(..., min_length=1, max_length=200)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Organization name is required")
        return value


class OrganizationUpdate(OrganizationCreate):
    """Schema for renaming an organization"""
    pass


class OrganizationResponse(BaseModel):
    """Schema for organization response"""
    id: int
    name: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class OrganizationSummary(OrganizationResponse):
    """Organization as listed for the current user"""
    role: MemberRoleEnum


class MembershipResponse(BaseModel):
    """Schema for membership response"""
    id: int
    organization_id: int
    user_id: int
    role: MemberRoleEnum
    created_at: datetime
    user: UserBrief

    model_config = ConfigDict(from_attributes=True)


class OrganizationDetail(OrganizationResponse):
    """Organization with its members and the caller's role"""
    current_user_role: MemberRoleEnum
    members: List[MembershipResponse]


class InviteUserRequest(BaseModel):
    """Add an existing user to the organization by email"""
    email: EmailStr
    role: MemberRoleEnum = MemberRoleEnum.MEMBER


class UpdateMemberRoleRequest(BaseModel):
    """Change the role of another member"""
    role: MemberRoleEnum
