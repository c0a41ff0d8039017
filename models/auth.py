"""
Auth schemas: accounts, requests and tokens.

Passwords are taken exactly as typed: request models that carry one turn
off whitespace stripping and trim their other string fields themselves.
"""

from pydantic import ConfigDict, EmailStr, Field, field_validator
from typing import Any, Optional

from models.base import BaseSchema

# bcrypt only accepts the first 72 bytes
MAX_PASSWORD_BYTES = 72


def strip_text(v: Any) -> Any:
    return v.strip() if isinstance(v, str) else v


def check_password_bytes(v: str) -> str:
    if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
    return v


class UserAccount(BaseSchema):
    """Stored account. Never returned by the API."""

    username: str = Field(..., min_length=1, max_length=64)
    email: str = Field(..., min_length=3, max_length=254)
    password_hash: str


class User(BaseSchema):
    """Public view of an account."""

    username: str
    email: Optional[str] = None


class SendCodeRequest(BaseSchema):
    """Request a verification code."""

    email: EmailStr


class PasswordRequest(BaseSchema):
    """Base for requests carrying a raw password."""

    model_config = ConfigDict(str_strip_whitespace=False)


class RegisterRequest(PasswordRequest):
    """Register a new account with an emailed code."""

    username: str = Field(..., min_length=3, max_length=64)
    password: str = Field(..., min_length=6, max_length=MAX_PASSWORD_BYTES)
    email: EmailStr
    code: str = Field(..., min_length=6, max_length=6)

    @field_validator("username", "email", "code", mode="before")
    @classmethod
    def strip_fields(cls, v: Any) -> Any:
        return strip_text(v)

    @field_validator("username")
    @classmethod
    def username_no_spaces(cls, v: str) -> str:
        if any(ch.isspace() for ch in v):
            raise ValueError("username must not contain whitespace")
        return v

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        return check_password_bytes(v)


class LoginRequest(PasswordRequest):
    """Login with username or email."""

    identifier: str = Field(..., min_length=1, description="Username or email")
    password: str = Field(..., min_length=1, max_length=MAX_PASSWORD_BYTES)

    @field_validator("identifier", mode="before")
    @classmethod
    def strip_identifier(cls, v: Any) -> Any:
        return strip_text(v)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        return check_password_bytes(v)


class ResetPasswordRequest(PasswordRequest):
    """Set a new password with an emailed code."""

    email: EmailStr
    code: str = Field(..., min_length=6, max_length=6)
    new_password: str = Field(..., min_length=6, max_length=MAX_PASSWORD_BYTES)

    @field_validator("email", "code", mode="before")
    @classmethod
    def strip_fields(cls, v: Any) -> Any:
        return strip_text(v)

    @field_validator("new_password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        return check_password_bytes(v)


class TokenResponse(BaseSchema):
    """Bearer token issued after login or registration."""

    access_token: str
    token_type: str = "bearer"
    user: User
