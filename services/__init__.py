"""
Business logic services.

Each service handles one domain area.
"""

from services.coverage_service import (
    compute_calculations,
    compute_aggregates,
    get_alert_list,
    evaluate_catalog,
)
from services.catalog_service import CatalogService, get_catalog_service
from services.autosave_service import AutosaveService
from services.auth_service import AuthService, get_auth_service
from services.restock_service import build_restock_plan
from services.export_service import ExportService, get_export_service

__all__ = [
    "compute_calculations",
    "compute_aggregates",
    "get_alert_list",
    "evaluate_catalog",
    "CatalogService",
    "get_catalog_service",
    "AutosaveService",
    "AuthService",
    "get_auth_service",
    "build_restock_plan",
    "ExportService",
    "get_export_service",
]
