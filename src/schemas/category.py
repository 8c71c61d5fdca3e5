"""
Category Schemas
Pydantic models for expense categories
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime

from src.config.settings import settings


class CategoryBrief(BaseModel):
    """Compact category representation"""
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class CategoryUpdate(BaseModel):
    """Schema for updating a category"""
    name: str = Field(..., min_length=1)
    description: Optional[str] = Field(None, max_length=1000)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Category name is required")
        if len(value) > settings.CATEGORY_NAME_MAX_LENGTH:
            raise ValueError(
                f"Category name must be {settings.CATEGORY_NAME_MAX_LENGTH} characters or less"
            )
        return value

    @field_validator("description")
    @classmethod
    def blank_description_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None


class CategoryCreate(CategoryUpdate):
    """Schema for creating a category"""
    organization_id: int


class CategoryResponse(BaseModel):
    """Schema for category response"""
    id: int
    organization_id: int
    name: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
