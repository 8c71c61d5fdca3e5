"""
Authentication Service
Resolves the calling user from a bearer token issued by the identity provider
"""

from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from src.config.database import get_db
from src.models.user import User
from src.utils.security import decode_token
from src.utils.logger import setup_logger

logger = setup_logger()

bearer_scheme = HTTPBearer(auto_error=False)


class AuthService:
    """Authentication service"""

    async def get_current_user(
        self,
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
        db: Session = Depends(get_db)
    ) -> User:
        """
        Get current authenticated user from token

        Args:
            credentials: Bearer credentials from the Authorization header
            db: Database session

        Returns:
            User: Current user

        Raises:
            HTTPException: If authentication fails
        """
        credentials_exception = HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

        if credentials is None:
            raise credentials_exception

        payload = decode_token(credentials.credentials)
        if payload is None:
            logger.warning("Rejected invalid or expired bearer token")
            raise credentials_exception

        user_id = payload.get("sub")
        if user_id is None or not str(user_id).isdigit():
            raise credentials_exception

        user = db.query(User).filter(User.id == int(user_id)).first()
        if user is None:
            raise credentials_exception

        return user


# Create singleton instance
auth_service = AuthService()
