"""
Storage repositories for catalogs, user accounts and verification codes.

Services receive these by injection. Each concern has an abstract base,
a thread-safe in-memory implementation (single instance deployments and
tests) and, where data must survive restarts, a Supabase implementation.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from threading import Lock
from typing import Optional
import structlog

from models.auth import UserAccount
from models.catalog import CatalogData
from exceptions import DatabaseError

logger = structlog.get_logger(__name__)


# ===================
# CATALOGS
# ===================

class CatalogRepository(ABC):
    """Persists one CatalogData per username."""

    @abstractmethod
    def get(self, username: str) -> Optional[CatalogData]:
        """Return the stored catalog, or None if the user has none yet."""

    @abstractmethod
    def save(self, username: str, data: CatalogData) -> None:
        """Store the catalog, replacing any previous version."""


class InMemoryCatalogRepository(CatalogRepository):
    """Catalogs held in process memory. Copies in and out."""

    def __init__(self):
        self._catalogs: dict[str, CatalogData] = {}
        self._lock = Lock()

    def get(self, username: str) -> Optional[CatalogData]:
        with self._lock:
            data = self._catalogs.get(username)
            return data.model_copy(deep=True) if data else None

    def save(self, username: str, data: CatalogData) -> None:
        with self._lock:
            self._catalogs[username] = data.model_copy(deep=True)


class SupabaseCatalogRepository(CatalogRepository):
    """
    Catalogs stored in the `catalogs` table.

    Columns: username (pk), data (jsonb), updated_at.
    """

    def __init__(self, client):
        self.db = client
        self.table = "catalogs"

    def get(self, username: str) -> Optional[CatalogData]:
        logger.debug("getting_catalog", username=username)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("username", username)
                .execute()
            )
        except Exception as e:
            logger.error("get_catalog_failed", username=username, error=str(e))
            raise DatabaseError("select", str(e))

        if not result.data:
            return None

        return CatalogData.model_validate(result.data[0]["data"])

    def save(self, username: str, data: CatalogData) -> None:
        logger.debug("saving_catalog", username=username, products=len(data.products))

        try:
            self.db.table(self.table).upsert(
                {
                    "username": username,
                    "data": data.model_dump(mode="json"),
                    "updated_at": data.last_updated.isoformat(),
                },
                on_conflict="username",
            ).execute()
        except Exception as e:
            logger.error("save_catalog_failed", username=username, error=str(e))
            raise DatabaseError("upsert", str(e))


# ===================
# USERS
# ===================

class UserRepository(ABC):
    """Persists user accounts."""

    @abstractmethod
    def get_by_username(self, username: str) -> Optional[UserAccount]:
        """Look up an account by username."""

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[UserAccount]:
        """Look up an account by email."""

    @abstractmethod
    def save(self, account: UserAccount) -> None:
        """Create the account, or update it if the username exists."""


class InMemoryUserRepository(UserRepository):
    """Accounts held in process memory."""

    def __init__(self):
        self._accounts: dict[str, UserAccount] = {}
        self._lock = Lock()

    def get_by_username(self, username: str) -> Optional[UserAccount]:
        with self._lock:
            account = self._accounts.get(username)
            return account.model_copy() if account else None

    def get_by_email(self, email: str) -> Optional[UserAccount]:
        with self._lock:
            for account in self._accounts.values():
                if account.email == email:
                    return account.model_copy()
            return None

    def save(self, account: UserAccount) -> None:
        with self._lock:
            self._accounts[account.username] = account.model_copy()


class SupabaseUserRepository(UserRepository):
    """
    Accounts stored in the `users` table.

    Columns: username (pk), email (unique), password_hash.
    """

    def __init__(self, client):
        self.db = client
        self.table = "users"

    def _get_one(self, column: str, value: str) -> Optional[UserAccount]:
        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq(column, value)
                .execute()
            )
        except Exception as e:
            logger.error("get_user_failed", column=column, error=str(e))
            raise DatabaseError("select", str(e))

        if not result.data:
            return None

        return UserAccount(**result.data[0])

    def get_by_username(self, username: str) -> Optional[UserAccount]:
        return self._get_one("username", username)

    def get_by_email(self, email: str) -> Optional[UserAccount]:
        return self._get_one("email", email)

    def save(self, account: UserAccount) -> None:
        try:
            self.db.table(self.table).upsert(
                account.model_dump(),
                on_conflict="username",
            ).execute()
        except Exception as e:
            logger.error("save_user_failed", username=account.username, error=str(e))
            raise DatabaseError("upsert", str(e))


# ===================
# VERIFICATION CODES
# ===================

class VerificationCodeStore(ABC):
    """Short-lived verification codes keyed by email."""

    @abstractmethod
    def put(self, email: str, code: str) -> None:
        """Store a code, replacing any earlier one for this email."""

    @abstractmethod
    def get(self, email: str) -> Optional[str]:
        """Return the live code, or None if missing or expired."""

    @abstractmethod
    def delete(self, email: str) -> None:
        """Consume the code."""


class InMemoryVerificationCodeStore(VerificationCodeStore):
    """Codes in memory with TTL expiration."""

    def __init__(self, ttl_minutes: int = 10):
        self.ttl = timedelta(minutes=ttl_minutes)
        self._codes: dict[str, tuple[datetime, str]] = {}
        self._lock = Lock()

    def put(self, email: str, code: str) -> None:
        expires_at = datetime.now(timezone.utc) + self.ttl
        with self._lock:
            self._codes[email] = (expires_at, code)
            self._cleanup_expired()

    def get(self, email: str) -> Optional[str]:
        with self._lock:
            entry = self._codes.get(email)
            if entry is None:
                return None
            expires_at, code = entry
            if datetime.now(timezone.utc) > expires_at:
                del self._codes[email]
                return None
            return code

    def delete(self, email: str) -> None:
        with self._lock:
            self._codes.pop(email, None)

    def _cleanup_expired(self) -> None:
        """Remove all expired entries. Caller holds the lock."""
        now = datetime.now(timezone.utc)
        expired = [k for k, (exp, _) in self._codes.items() if now > exp]
        for k in expired:
            del self._codes[k]


# ===================
# FACTORIES
# ===================

def build_catalog_repository(backend: str) -> CatalogRepository:
    """Catalog repository for the configured storage backend."""
    if backend == "supabase":
        from config import get_supabase_client
        return SupabaseCatalogRepository(get_supabase_client())
    return InMemoryCatalogRepository()


def build_user_repository(backend: str) -> UserRepository:
    """User repository for the configured storage backend."""
    if backend == "supabase":
        from config import get_supabase_client
        return SupabaseUserRepository(get_supabase_client())
    return InMemoryUserRepository()
