"""
Application settings loaded from environment variables.

Uses pydantic-settings for validation and type safety.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings.

    All values loaded from .env file or environment variables.
    Validation happens automatically on startup.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),  # Check current dir, then parent
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra env vars
    )

    # ===================
    # STORAGE
    # ===================
    storage_backend: str = Field(
        default="memory",
        pattern="^(memory|supabase)$",
        description="Where catalogs and user accounts are persisted"
    )
    supabase_url: Optional[str] = Field(
        None,
        description="Supabase project URL (required for the supabase backend)"
    )
    supabase_key: Optional[str] = Field(
        None,
        description="Supabase anon/public key"
    )
    autosave_debounce_seconds: float = Field(
        default=1.5,
        ge=0,
        le=60,
        description="Quiet period after the last edit before the catalog is saved"
    )

    # ===================
    # AUTH
    # ===================
    secret_key: str = Field(
        default="stockflow-dev-secret-change-me",
        min_length=16,
        description="Signing key for access tokens"
    )
    jwt_algorithm: str = Field(
        default="HS256",
        description="Access token signing algorithm"
    )
    access_token_expire_minutes: int = Field(
        default=1440,
        ge=1,
        le=43200,
        description="Access token lifetime"
    )
    verification_code_ttl_minutes: int = Field(
        default=10,
        ge=1,
        le=120,
        description="How long an emailed verification code stays valid"
    )
    password_hash_rounds: int = Field(
        default=12,
        ge=4,
        le=16,
        description="bcrypt cost factor"
    )

    # ===================
    # PLANNING DEFAULTS
    # ===================
    default_sea_freight_days: int = Field(
        default=30,
        ge=1,
        le=365,
        description="Sea freight days for a freshly created catalog"
    )

    # ===================
    # APP SETTINGS
    # ===================
    environment: str = Field(
        default="development",
        pattern="^(development|staging|production)$",
        description="Application environment"
    )
    debug: bool = Field(
        default=True,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API host"
    )
    api_port: int = Field(
        default=8000,
        ge=1000,
        le=65535,
        description="API port"
    )

    # ===================
    # COMPUTED PROPERTIES
    # ===================
    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def supabase_configured(self) -> bool:
        """Check if Supabase credentials are present."""
        return bool(self.supabase_url and self.supabase_key)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload.

    Returns:
        Settings: Application settings

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()


# For convenient imports: from config.settings import settings
settings = get_settings()
