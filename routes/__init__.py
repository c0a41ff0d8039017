"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.auth import router as auth_router
from routes.products import router as products_router
from routes.dashboard import router as dashboard_router
from routes.settings import router as settings_router
from routes.catalog import router as catalog_router
from routes.restock import router as restock_router

__all__ = [
    "auth_router",
    "products_router",
    "dashboard_router",
    "settings_router",
    "catalog_router",
    "restock_router",
]
