"""
Expense Schemas - Pydantic V2
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List
from datetime import datetime, date
from enum import Enum

from src.config.settings import settings
from src.schemas.category import CategoryBrief
from src.schemas.user import UserBrief
from src.utils import helpers


class ExpenseStatusEnum(str, Enum):
    """Expense status enumeration"""
    SUBMITTED = "SUBMITTED"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class ExpenseSubmit(BaseModel):
    """Schema for submitting a new expense"""
    organization_id: int
    category_id: int
    amount: int = Field(..., gt=0, strict=True, description="Amount in minor currency units")
    expense_date: date
    description: str

    @field_validator("expense_date")
    @classmethod
    def validate_not_future(cls, value: date) -> date:
        """Expenses cannot be dated after today"""
        if value > helpers.today():
            raise ValueError("Date cannot be in the future")
        return value

    @field_validator("description")
    @classmethod
    def validate_description(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Please provide a description")
        if len(value) > settings.DESCRIPTION_MAX_LENGTH:
            raise ValueError(
                f"Description must be {settings.DESCRIPTION_MAX_LENGTH} characters or less"
            )
        return value


class ReviewResponse(BaseModel):
    """Schema for a review trail entry"""
    id: int
    expense_id: int
    reviewer_id: Optional[int] = None
    reviewer: Optional[UserBrief] = None
    status: ExpenseStatusEnum
    comment: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ExpenseResponse(BaseModel):
    """Schema for expense response"""
    id: int
    organization_id: int
    user_id: int
    category_id: int
    amount: int
    expense_date: date
    description: str
    status: ExpenseStatusEnum
    user: UserBrief
    category: CategoryBrief
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ExpenseDetailResponse(ExpenseResponse):
    """Expense with its review trail, oldest first"""
    reviews: List[ReviewResponse] = []


class ExpenseSubmitResponse(BaseModel):
    """Outcome of an expense submission"""
    success: bool = True
    status: ExpenseStatusEnum
    message: str
    expense: ExpenseResponse


class ExpenseListResponse(BaseModel):
    """Schema for list of expenses"""
    total: int
    expenses: List[ExpenseResponse]
