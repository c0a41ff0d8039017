"""
Auth service: accounts, verification codes and access tokens.

Stores are injected: the service owns no global state, so each test (or
tenant) gets its own isolated users and codes.
"""

import secrets
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Optional
import bcrypt
import structlog
from jose import jwt, JWTError

from config import settings
from models.auth import User, UserAccount
from services.repositories import (
    UserRepository,
    VerificationCodeStore,
    InMemoryVerificationCodeStore,
    build_user_repository,
)
from exceptions import (
    AccountNotFoundError,
    EmailExistsError,
    InvalidCredentialsError,
    InvalidTokenError,
    InvalidVerificationCodeError,
    UsernameExistsError,
)

logger = structlog.get_logger(__name__)


class CodeSender(ABC):
    """Delivers a verification code to an email address."""

    @abstractmethod
    def send(self, email: str, code: str) -> None:
        """Deliver the code."""


class LoggingCodeSender(CodeSender):
    """Writes the code to the log instead of sending mail (development)."""

    def send(self, email: str, code: str) -> None:
        logger.info("verification_code_sent", email=email, code=code)


def generate_code() -> str:
    """Six-digit numeric code, 100000-999999."""
    return str(100000 + secrets.randbelow(900000))


class AuthService:
    """
    Auth business logic.

    Handles registration with emailed codes, login by username or email,
    password reset and bearer tokens.
    """

    def __init__(
        self,
        users: UserRepository,
        codes: VerificationCodeStore,
        sender: CodeSender,
        secret_key: str,
        algorithm: str = "HS256",
        token_ttl_minutes: int = 1440,
        hash_rounds: int = 12,
    ):
        self.users = users
        self.codes = codes
        self.sender = sender
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.token_ttl = timedelta(minutes=token_ttl_minutes)
        self.hash_rounds = hash_rounds

    # ===================
    # PASSWORDS
    # ===================

    def hash_password(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.hash_rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    @staticmethod
    def verify_password(password: str, password_hash: str) -> bool:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))

    # ===================
    # VERIFICATION CODES
    # ===================

    def send_verification_code(self, email: str) -> None:
        """Issue a fresh code for ``email`` and deliver it."""
        code = generate_code()
        self.codes.put(email, code)
        self.sender.send(email, code)
        logger.info("verification_code_issued", email=email)

    def _check_code(self, email: str, code: str) -> None:
        stored = self.codes.get(email)
        if stored is None or not secrets.compare_digest(stored, code):
            logger.warning("verification_code_rejected", email=email)
            raise InvalidVerificationCodeError(email)

    # ===================
    # ACCOUNTS
    # ===================

    def register(self, username: str, password: str, email: str, code: str) -> User:
        """
        Create an account.

        Checks, in order: code, username, email.

        Raises:
            InvalidVerificationCodeError: Code wrong or expired
            UsernameExistsError: Username taken
            EmailExistsError: Email taken
        """
        logger.info("registering_user", username=username)

        self._check_code(email, code)

        if self.users.get_by_username(username):
            raise UsernameExistsError(username)
        if self.users.get_by_email(email):
            raise EmailExistsError(email)

        self.users.save(
            UserAccount(
                username=username,
                email=email,
                password_hash=self.hash_password(password),
            )
        )
        self.codes.delete(email)

        logger.info("user_registered", username=username)
        return User(username=username, email=email)

    def login(self, identifier: str, password: str) -> User:
        """
        Authenticate by username or email.

        Raises:
            InvalidCredentialsError: No match
        """
        account = self.users.get_by_username(identifier) or self.users.get_by_email(identifier)

        if account is None or not self.verify_password(password, account.password_hash):
            logger.warning("login_failed", identifier=identifier)
            raise InvalidCredentialsError()

        logger.info("user_logged_in", username=account.username)
        return User(username=account.username, email=account.email)

    def reset_password(self, email: str, code: str, new_password: str) -> None:
        """
        Set a new password.

        Raises:
            InvalidVerificationCodeError: Code wrong or expired
            AccountNotFoundError: No account for this email
        """
        self._check_code(email, code)

        account = self.users.get_by_email(email)
        if account is None:
            raise AccountNotFoundError(email)

        account.password_hash = self.hash_password(new_password)
        self.users.save(account)
        self.codes.delete(email)

        logger.info("password_reset", username=account.username)

    def get_user(self, username: str) -> Optional[User]:
        account = self.users.get_by_username(username)
        if account is None:
            return None
        return User(username=account.username, email=account.email)

    # ===================
    # TOKENS
    # ===================

    def create_access_token(self, username: str) -> str:
        expire = datetime.now(timezone.utc) + self.token_ttl
        return jwt.encode(
            {"sub": username, "exp": expire},
            self.secret_key,
            algorithm=self.algorithm,
        )

    def verify_token(self, token: str) -> User:
        """
        Resolve a bearer token to its user.

        Raises:
            InvalidTokenError: Bad signature, expired, or unknown user
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            raise InvalidTokenError() from e

        username = payload.get("sub")
        if not username:
            raise InvalidTokenError()

        user = self.get_user(username)
        if user is None:
            raise InvalidTokenError("Account no longer exists")
        return user


def build_auth_service(users: UserRepository) -> AuthService:
    """AuthService wired from settings."""
    return AuthService(
        users=users,
        codes=InMemoryVerificationCodeStore(ttl_minutes=settings.verification_code_ttl_minutes),
        sender=LoggingCodeSender(),
        secret_key=settings.secret_key,
        algorithm=settings.jwt_algorithm,
        token_ttl_minutes=settings.access_token_expire_minutes,
        hash_rounds=settings.password_hash_rounds,
    )


# Singleton instance for convenience
_auth_service: Optional[AuthService] = None


def get_auth_service() -> AuthService:
    """Get or create AuthService instance."""
    global _auth_service
    if _auth_service is None:
        _auth_service = build_auth_service(build_user_repository(settings.storage_backend))
    return _auth_service
