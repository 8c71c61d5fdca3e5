"""
Authentication Routes
Identity of the calling user
"""

from fastapi import APIRouter, Depends

from src.services.auth_service import auth_service
from src.models.user import User
from src.schemas.user import UserResponse

router = APIRouter()


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(auth_service.get_current_user)):
    """Return the user the bearer token belongs to"""
    return current_user
