"""
Catalog schemas: the per-user persisted unit and its sync state.
"""

from pydantic import Field
from datetime import datetime, timezone
from enum import Enum

from models.base import BaseSchema
from models.product import Product
from models.coverage import MAX_SEA_FREIGHT_DAYS, LeadTimeConfig


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SyncStatus(str, Enum):
    """State of the debounced catalog save."""
    SAVING = "saving"
    SAVED = "saved"
    ERROR = "error"


class CatalogData(BaseSchema):
    """
    One user's catalog as persisted.

    Products keep insertion order; that order is the catalog order used
    for tie-breaks and exports.
    """

    products: list[Product] = Field(default_factory=list)
    sea_freight_days: int = Field(30, ge=1, le=MAX_SEA_FREIGHT_DAYS)
    last_updated: datetime = Field(default_factory=utc_now)

    @property
    def lead_time(self) -> LeadTimeConfig:
        return LeadTimeConfig(sea_freight_days=self.sea_freight_days)


class CatalogResponse(BaseSchema):
    """Catalog snapshot plus save state."""

    products: list[Product]
    sea_freight_days: int
    last_updated: datetime
    sync_status: SyncStatus


class SyncStatusResponse(BaseSchema):
    """Save state for the current user."""

    status: SyncStatus
