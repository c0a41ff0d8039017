"""
Custom exception classes for the application.

Every error the API returns is an AppError subclass and renders through
AppError.to_dict().
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "PRODUCT_NOT_FOUND")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class ConflictError(AppError):
    """Conflict with existing resource (409)."""

    def __init__(
        self,
        message: str,
        code: str = "CONFLICT",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=409,
            details=details
        )


class DuplicateError(ConflictError):
    """Duplicate resource (409)."""

    def __init__(
        self,
        resource: str,
        field: str,
        value: str
    ):
        super().__init__(
            code=f"{resource.upper()}_{field.upper()}_EXISTS",
            message=f"{resource} with this {field} already exists",
            details={field: value}
        )


class AuthenticationError(AppError):
    """Authentication failed (401)."""

    def __init__(
        self,
        message: str,
        code: str = "AUTHENTICATION_FAILED",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=401,
            details=details
        )


class DatabaseError(AppError):
    """Database operation failed (500)."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="DATABASE_ERROR",
            message=f"Database {operation} failed: {message}",
            status_code=500,
            details={"operation": operation, **(details or {})}
        )


# ===================
# PRODUCT ERRORS
# ===================

class ProductNotFoundError(NotFoundError):
    """Product not found in the caller's catalog."""

    def __init__(self, product_id: str):
        super().__init__(
            resource="Product",
            identifier=product_id,
            code="PRODUCT_NOT_FOUND"
        )


class InvalidCategoryError(ValidationError):
    """Invalid product category."""

    def __init__(self, category: Any, valid: list[str]):
        super().__init__(
            code="PRODUCT_INVALID_CATEGORY",
            message=f"Category must be one of: {', '.join(valid)}",
            details={"provided": str(category), "valid": valid}
        )


class InvalidFieldError(ValidationError):
    """Field edit names a field that cannot be edited."""

    def __init__(self, field: str, valid: list[str]):
        super().__init__(
            code="PRODUCT_INVALID_FIELD",
            message=f"Field '{field}' cannot be edited",
            details={"provided": field, "valid": valid}
        )


# ===================
# AUTH ERRORS
# ===================

class InvalidCredentialsError(AuthenticationError):
    """Username/email and password do not match."""

    def __init__(self):
        super().__init__(
            code="INVALID_CREDENTIALS",
            message="Incorrect username/email or password"
        )


class InvalidTokenError(AuthenticationError):
    """Access token missing, expired or malformed."""

    def __init__(self, reason: str = "Could not validate credentials"):
        super().__init__(
            code="INVALID_TOKEN",
            message=reason
        )


class InvalidVerificationCodeError(AppError):
    """Verification code wrong or expired (400)."""

    def __init__(self, email: str):
        super().__init__(
            code="INVALID_VERIFICATION_CODE",
            message="Verification code is incorrect or has expired",
            status_code=400,
            details={"email": email}
        )


class UsernameExistsError(DuplicateError):
    """Username already registered."""

    def __init__(self, username: str):
        super().__init__(
            resource="User",
            field="username",
            value=username
        )


class EmailExistsError(DuplicateError):
    """Email already registered."""

    def __init__(self, email: str):
        super().__init__(
            resource="User",
            field="email",
            value=email
        )


class AccountNotFoundError(NotFoundError):
    """No account registered for this email."""

    def __init__(self, email: str):
        super().__init__(
            resource="Account",
            identifier=email,
            code="ACCOUNT_NOT_FOUND"
        )
