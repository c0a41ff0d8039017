"""
Route dependencies: bearer-token authentication.
"""

from typing import Optional
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from models.auth import User
from services.auth_service import get_auth_service
from exceptions import InvalidTokenError

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_current_user(token: Optional[str] = Depends(oauth2_scheme)) -> User:
    """
    Resolve the Authorization header to a user.

    Raises:
        InvalidTokenError: Missing, invalid or expired token (401)
    """
    if not token:
        raise InvalidTokenError("Not authenticated")
    return get_auth_service().verify_token(token)
