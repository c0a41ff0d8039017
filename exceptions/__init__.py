"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,
    ConflictError,
    DuplicateError,
    AuthenticationError,
    DatabaseError,

    # Product-specific
    ProductNotFoundError,
    InvalidCategoryError,
    InvalidFieldError,

    # Auth
    InvalidCredentialsError,
    InvalidTokenError,
    InvalidVerificationCodeError,
    UsernameExistsError,
    EmailExistsError,
    AccountNotFoundError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "DuplicateError",
    "AuthenticationError",
    "DatabaseError",

    # Product
    "ProductNotFoundError",
    "InvalidCategoryError",
    "InvalidFieldError",

    # Auth
    "InvalidCredentialsError",
    "InvalidTokenError",
    "InvalidVerificationCodeError",
    "UsernameExistsError",
    "EmailExistsError",
    "AccountNotFoundError",
]
