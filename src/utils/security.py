"""
Security Utilities
JWT encoding and decoding for bearer authentication
"""

from datetime import datetime, timedelta
from typing import Optional, Dict, Any
from jose import JWTError, jwt

from src.config.settings import settings


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed access token

    Args:
        data: Claims to encode, "sub" must hold the user id
        expires_delta: Custom lifetime, defaults to ACCESS_TOKEN_EXPIRE_MINUTES

    Returns:
        str: Encoded JWT
    """
    to_encode = data.copy()
    expire = datetime.utcnow() + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire, "type": "access"})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Decode and verify a JWT

    Args:
        token: Encoded JWT

    Returns:
        dict: Token claims, or None if the token is invalid or expired
    """
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
