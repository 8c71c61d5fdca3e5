"""
User Schemas
Pydantic models for user-related responses
"""

from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime


class UserBrief(BaseModel):
    """Compact user representation embedded in other responses"""
    id: int
    email: str
    name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class UserResponse(UserBrief):
    """Schema for user response"""
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
