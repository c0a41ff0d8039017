"""
Restock API routes.

Selection, bulk carton/specs edits, the restock plan and its Excel export.
"""

from datetime import date
from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
import structlog

from models.auth import User
from models.product import Product
from models.restock import BulkRestockUpdate, RestockPlan, SelectionResponse
from services.catalog_service import get_catalog_service
from services.coverage_service import compute_calculations
from services.restock_service import build_restock_plan
from services.export_service import (
    XLSX_MEDIA_TYPE,
    get_export_service,
    restock_filename,
)
from routes.dependencies import get_current_user
from routes.errors import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter()


def _selection(ids: list[str]) -> SelectionResponse:
    return SelectionResponse(selected_ids=ids, total=len(ids))


def _current_plan(username: str) -> RestockPlan:
    service = get_catalog_service()
    catalog = service.snapshot(username)
    calculations = compute_calculations(catalog.products, catalog.lead_time)
    return build_restock_plan(
        catalog.products,
        calculations,
        service.selected_ids(username),
        today=date.today()
    )


# ===================
# SELECTION
# ===================

@router.get("/selection", response_model=SelectionResponse)
async def get_selection(user: User = Depends(get_current_user)):
    """Selected product ids in catalog order."""
    try:
        return _selection(get_catalog_service().selected_ids(user.username))

    except Exception as e:
        return handle_error(e)


@router.delete("/selection", response_model=SelectionResponse)
async def clear_selection(user: User = Depends(get_current_user)):
    """Deselect everything."""
    try:
        get_catalog_service().clear_selection(user.username)
        return _selection([])

    except Exception as e:
        return handle_error(e)


@router.post("/selection/all", response_model=SelectionResponse)
async def toggle_select_all(user: User = Depends(get_current_user)):
    """Select all products, or clear if all are already selected."""
    try:
        return _selection(get_catalog_service().toggle_select_all(user.username))

    except Exception as e:
        return handle_error(e)


@router.post("/selection/{product_id}", response_model=SelectionResponse)
async def toggle_selection(product_id: str, user: User = Depends(get_current_user)):
    """
    Select or deselect one product.

    Raises:
        404: Product not found
    """
    try:
        return _selection(get_catalog_service().toggle_selection(user.username, product_id))

    except Exception as e:
        return handle_error(e)


# ===================
# PLAN
# ===================

@router.post("/bulk", response_model=list[Product])
async def bulk_update(data: BulkRestockUpdate, user: User = Depends(get_current_user)):
    """
    Apply carton size and/or specs to several products.

    Carton size applies only when positive; specs only when not blank.
    """
    try:
        return get_catalog_service().bulk_update(
            user.username,
            data.product_ids,
            qty_per_carton=data.qty_per_carton,
            specs=data.specs
        )

    except Exception as e:
        return handle_error(e)


@router.get("/plan", response_model=RestockPlan)
async def get_plan(user: User = Depends(get_current_user)):
    """Restock quantities and cartons for the selected products."""
    try:
        return _current_plan(user.username)

    except Exception as e:
        return handle_error(e)


@router.get("/export")
async def export_plan(user: User = Depends(get_current_user)):
    """Download the restock plan as an Excel file."""
    try:
        plan = _current_plan(user.username)
        output = get_export_service().generate_restock_excel(plan)

        return StreamingResponse(
            output,
            media_type=XLSX_MEDIA_TYPE,
            headers={
                "Content-Disposition": f"attachment; filename={restock_filename(plan.generated_on)}"
            }
        )

    except Exception as e:
        return handle_error(e)
