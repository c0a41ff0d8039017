"""
Settings API routes.

Only sea freight days are editable; production and safety stock days are
fixed.
"""

from fastapi import APIRouter, Depends
import structlog

from models.auth import User
from models.coverage import LeadTimeResponse, LeadTimeUpdate
from services.catalog_service import get_catalog_service
from routes.dependencies import get_current_user
from routes.errors import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("/lead-time", response_model=LeadTimeResponse)
async def get_lead_time(user: User = Depends(get_current_user)):
    """Lead time with total and target coverage days."""
    try:
        config = get_catalog_service().lead_time(user.username)
        return LeadTimeResponse.from_config(config)

    except Exception as e:
        return handle_error(e)


@router.patch("/lead-time", response_model=LeadTimeResponse)
async def update_lead_time(data: LeadTimeUpdate, user: User = Depends(get_current_user)):
    """
    Change sea freight days.

    Input is parsed like a form field and never goes below 1.
    """
    try:
        config = get_catalog_service().set_sea_freight_days(user.username, data.sea_freight_days)
        return LeadTimeResponse.from_config(config)

    except Exception as e:
        return handle_error(e)
