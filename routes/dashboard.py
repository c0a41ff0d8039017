"""
Dashboard API routes.

Coverage metrics, status counts and alerts for the current catalog.
Every request recomputes from a fresh snapshot.
"""

from fastapi import APIRouter, Depends
import structlog

from models.auth import User
from models.coverage import AlertItem, CoverageReport, ProductCalculation, Stats
from services.catalog_service import get_catalog_service
from services.coverage_service import (
    compute_aggregates,
    compute_calculations,
    evaluate_catalog,
    get_alert_list,
)
from routes.dependencies import get_current_user
from routes.errors import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("", response_model=CoverageReport)
async def get_dashboard(user: User = Depends(get_current_user)):
    """
    Full coverage report.

    Returns lead time, per-product calculations, aggregate stats and the
    alert list from one consistent snapshot.
    """
    try:
        catalog = get_catalog_service().snapshot(user.username)
        return evaluate_catalog(catalog.products, catalog.lead_time)

    except Exception as e:
        return handle_error(e)


@router.get("/calculations", response_model=dict[str, ProductCalculation])
async def get_calculations(user: User = Depends(get_current_user)):
    """Per-product calculations keyed by product id."""
    try:
        catalog = get_catalog_service().snapshot(user.username)
        return compute_calculations(catalog.products, catalog.lead_time)

    except Exception as e:
        return handle_error(e)


@router.get("/stats", response_model=Stats)
async def get_stats(user: User = Depends(get_current_user)):
    """SKU count, alert count, total restock quantity and stock per category."""
    try:
        catalog = get_catalog_service().snapshot(user.username)
        calculations = compute_calculations(catalog.products, catalog.lead_time)
        return compute_aggregates(catalog.products, calculations)

    except Exception as e:
        return handle_error(e)


@router.get("/alerts", response_model=list[AlertItem])
async def get_alerts(user: User = Depends(get_current_user)):
    """
    Products in Critical or Warning status.

    Sorted by days of coverage, soonest stockout first.
    """
    try:
        catalog = get_catalog_service().snapshot(user.username)
        calculations = compute_calculations(catalog.products, catalog.lead_time)
        return get_alert_list(catalog.products, calculations)

    except Exception as e:
        return handle_error(e)
