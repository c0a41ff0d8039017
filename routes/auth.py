"""
Auth API routes.

Registration and password reset both need a code from /send-code.
"""

from fastapi import APIRouter, Depends
import structlog

from models.auth import (
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    SendCodeRequest,
    TokenResponse,
    User,
)
from services.auth_service import get_auth_service
from services.catalog_service import get_catalog_service
from routes.dependencies import get_current_user
from routes.errors import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/send-code")
async def send_code(data: SendCodeRequest):
    """Email a verification code."""
    try:
        get_auth_service().send_verification_code(data.email)
        return {"sent": True}

    except Exception as e:
        return handle_error(e)


@router.post("/register", response_model=TokenResponse, status_code=201)
async def register(data: RegisterRequest):
    """
    Register a new account and start it with the demo catalog.

    Raises:
        400: Verification code wrong or expired
        409: Username or email already registered
        422: Validation error
    """
    try:
        service = get_auth_service()
        user = service.register(data.username, data.password, data.email, data.code)
        get_catalog_service().initialize(user.username)

        return TokenResponse(
            access_token=service.create_access_token(user.username),
            user=user
        )

    except Exception as e:
        return handle_error(e)


@router.post("/login", response_model=TokenResponse)
async def login(data: LoginRequest):
    """
    Login with username or email.

    Raises:
        401: Wrong credentials
    """
    try:
        service = get_auth_service()
        user = service.login(data.identifier, data.password)

        return TokenResponse(
            access_token=service.create_access_token(user.username),
            user=user
        )

    except Exception as e:
        return handle_error(e)


@router.post("/reset-password")
async def reset_password(data: ResetPasswordRequest):
    """
    Set a new password using an emailed code.

    Raises:
        400: Verification code wrong or expired
        404: No account for this email
    """
    try:
        get_auth_service().reset_password(data.email, data.code, data.new_password)
        return {"reset": True}

    except Exception as e:
        return handle_error(e)


@router.get("/me", response_model=User)
async def me(user: User = Depends(get_current_user)):
    """Current user."""
    return user
