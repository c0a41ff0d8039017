"""
Catalog API routes: full snapshot and save state.
"""

from fastapi import APIRouter, Depends
import structlog

from models.auth import User
from models.catalog import CatalogResponse, SyncStatusResponse
from services.catalog_service import get_catalog_service
from routes.dependencies import get_current_user
from routes.errors import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("", response_model=CatalogResponse)
async def get_catalog(user: User = Depends(get_current_user)):
    """Products, sea freight days, last update time and sync status."""
    try:
        service = get_catalog_service()
        catalog = service.snapshot(user.username)

        return CatalogResponse(
            products=catalog.products,
            sea_freight_days=catalog.sea_freight_days,
            last_updated=catalog.last_updated,
            sync_status=service.sync_status(user.username)
        )

    except Exception as e:
        return handle_error(e)


@router.post("/save", response_model=SyncStatusResponse)
async def save_catalog(user: User = Depends(get_current_user)):
    """Write any pending changes now instead of waiting for the debounce."""
    try:
        service = get_catalog_service()
        service.autosave.flush(user.username)
        return SyncStatusResponse(status=service.sync_status(user.username))

    except Exception as e:
        return handle_error(e)


@router.get("/sync-status", response_model=SyncStatusResponse)
async def get_sync_status(user: User = Depends(get_current_user)):
    """saving, saved or error."""
    try:
        return SyncStatusResponse(status=get_catalog_service().sync_status(user.username))

    except Exception as e:
        return handle_error(e)
