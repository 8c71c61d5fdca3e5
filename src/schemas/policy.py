"""
Policy Schemas
Pydantic models for spending policies and policy resolution
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime
from enum import Enum

from src.schemas.category import CategoryBrief
from src.schemas.user import UserBrief


class PolicyPeriodEnum(str, Enum):
    """Policy period enumeration"""
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"


class PolicyUpdate(BaseModel):
    """Schema for updating a policy's limit and behaviour"""
    max_amount: int = Field(..., gt=0, strict=True, description="Limit in minor currency units")
    period: PolicyPeriodEnum
    auto_approve: bool


class PolicyCreate(PolicyUpdate):
    """Schema for creating a policy; omit user_id for an org-wide policy"""
    organization_id: int
    category_id: int
    user_id: Optional[int] = None


class PolicyResponse(BaseModel):
    """Schema for policy response"""
    id: int
    organization_id: int
    category_id: int
    user_id: Optional[int] = None
    max_amount: int
    period: PolicyPeriodEnum
    auto_approve: bool
    is_user_specific: bool
    category: CategoryBrief
    user: Optional[UserBrief] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class PolicyDebugResponse(BaseModel):
    """Both candidate policies and the one the precedence rule selected"""
    user_specific_policy: Optional[PolicyResponse] = None
    organization_policy: Optional[PolicyResponse] = None
    selected_policy: Optional[PolicyResponse] = None
    reason: str

    model_config = ConfigDict(from_attributes=True)
