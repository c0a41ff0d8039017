"""
Pydantic models for validation and serialization.
"""

from models.base import BaseSchema
from models.product import (
    Category,
    EditableField,
    ProductCreate,
    Product,
    FieldEdit,
    ProductListResponse,
)
from models.coverage import (
    CoverageStatus,
    LeadTimeConfig,
    LeadTimeUpdate,
    LeadTimeResponse,
    FiniteCoverage,
    UnboundedCoverage,
    Coverage,
    ProductCalculation,
    Stats,
    AlertItem,
    CoverageReport,
)
from models.catalog import (
    SyncStatus,
    CatalogData,
    CatalogResponse,
    SyncStatusResponse,
)
from models.auth import (
    UserAccount,
    User,
    SendCodeRequest,
    RegisterRequest,
    LoginRequest,
    ResetPasswordRequest,
    TokenResponse,
)
from models.restock import (
    RestockLine,
    RestockPlan,
    BulkRestockUpdate,
    SelectionResponse,
)

__all__ = [
    "BaseSchema",
    # Product
    "Category",
    "EditableField",
    "ProductCreate",
    "Product",
    "FieldEdit",
    "ProductListResponse",
    # Coverage
    "CoverageStatus",
    "LeadTimeConfig",
    "LeadTimeUpdate",
    "LeadTimeResponse",
    "FiniteCoverage",
    "UnboundedCoverage",
    "Coverage",
    "ProductCalculation",
    "Stats",
    "AlertItem",
    "CoverageReport",
    # Catalog
    "SyncStatus",
    "CatalogData",
    "CatalogResponse",
    "SyncStatusResponse",
    # Auth
    "UserAccount",
    "User",
    "SendCodeRequest",
    "RegisterRequest",
    "LoginRequest",
    "ResetPasswordRequest",
    "TokenResponse",
    # Restock
    "RestockLine",
    "RestockPlan",
    "BulkRestockUpdate",
    "SelectionResponse",
]
