"""
Database connection management.

Provides the Supabase client used by the supabase storage backend.
The client is created lazily, so the in-memory backend never needs
Supabase credentials.
"""

from supabase import create_client, Client
from functools import lru_cache
import structlog

from config.settings import settings

logger = structlog.get_logger(__name__)


class DatabaseConnectionError(Exception):
    """Failed to connect to database."""
    pass


@lru_cache()
def get_supabase_client() -> Client:
    """
    Get cached Supabase client instance.

    Uses lru_cache to ensure only one client is created.
    Call get_supabase_client.cache_clear() to reconnect.

    Returns:
        Client: Supabase client

    Raises:
        DatabaseConnectionError: If credentials are missing or connection fails
    """
    if not settings.supabase_configured:
        raise DatabaseConnectionError(
            "SUPABASE_URL and SUPABASE_KEY must be set for the supabase backend"
        )

    try:
        logger.info(
            "connecting_to_supabase",
            url=settings.supabase_url[:30] + "..."  # Log partial URL only
        )

        client = create_client(
            settings.supabase_url,
            settings.supabase_key
        )

        logger.info("supabase_connected", status="success")

        return client

    except Exception as e:
        logger.error(
            "supabase_connection_failed",
            error=str(e),
            error_type=type(e).__name__
        )
        raise DatabaseConnectionError(f"Failed to connect to Supabase: {e}") from e


def check_connection() -> dict:
    """
    Check storage health.

    Returns:
        dict: Backend name and connection status
    """
    if settings.storage_backend == "memory":
        return {"status": "healthy", "backend": "memory"}

    try:
        client = get_supabase_client()
        catalogs = client.table("catalogs").select("username", count="exact").execute()

        return {
            "status": "healthy",
            "backend": "supabase",
            "catalogs_count": catalogs.count
        }

    except Exception as e:
        return {
            "status": "unhealthy",
            "backend": "supabase",
            "error": str(e)
        }

