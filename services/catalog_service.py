"""
Catalog service for business logic operations.

Keeps a working copy of each user's catalog in memory. Edits apply to the
working copy immediately and are persisted through the AutosaveService.
Readers get deep-copied snapshots, so the coverage engine never sees a
half-applied edit.
"""

from threading import Lock
from typing import Any, Iterable, Optional
from uuid import uuid4
import structlog
from pydantic import ValidationError as PydanticValidationError

from config import settings
from models.product import (
    Category,
    EditableField,
    FieldEdit,
    Product,
    ProductCreate,
)
from models.catalog import CatalogData, SyncStatus, utc_now
from models.coverage import MAX_SEA_FREIGHT_DAYS, LeadTimeConfig
from services.autosave_service import AutosaveService
from services.repositories import CatalogRepository, build_catalog_repository
from utils.number_utils import clamp_at_least
from exceptions import (
    InvalidCategoryError,
    InvalidFieldError,
    ProductNotFoundError,
    ValidationError,
)

logger = structlog.get_logger(__name__)


# Catalog a new user starts with
DEFAULT_PRODUCTS: list[dict] = [
    {
        "id": "1",
        "sku": "SF-001",
        "name": "Wireless Noise-Cancelling Headphones (Pro)",
        "store": "Amazon US",
        "category": Category.ELECTRONICS,
        "image": "https://images.unsplash.com/photo-1505740420928-5e560c06d30e?w=150&h=150&fit=crop",
        "available_stock": 120,
        "in_transit_stock": 50,
        "planned_shipment": 0,
        "sales_last_7_days": 85,
    },
    {
        "id": "2",
        "sku": "SF-002",
        "name": "Ergonomic Office Chair",
        "store": "Shopify Store",
        "category": Category.HOME,
        "image": "https://images.unsplash.com/photo-1592078615290-033ee584e267?w=150&h=150&fit=crop",
        "available_stock": 45,
        "in_transit_stock": 0,
        "planned_shipment": 0,
        "sales_last_7_days": 20,
    },
    {
        "id": "3",
        "sku": "SF-003",
        "name": "Cotton Crew-Neck T-Shirt",
        "store": "Amazon US",
        "category": Category.APPAREL,
        "image": "https://images.unsplash.com/photo-1521572163474-6864f9cf17ab?w=150&h=150&fit=crop",
        "available_stock": 1500,
        "in_transit_stock": 200,
        "planned_shipment": 500,
        "sales_last_7_days": 140,
    },
]

EDITABLE_FIELDS = [f.value for f in EditableField]


class CatalogService:
    """
    Catalog business logic.

    Handles product add/edit/delete, lead time, and the restock selection
    for each user.
    """

    def __init__(
        self,
        repository: CatalogRepository,
        autosave: AutosaveService,
        default_sea_freight_days: int = 30,
    ):
        self.repository = repository
        self.autosave = autosave
        self.default_sea_freight_days = default_sea_freight_days

        self._catalogs: dict[str, CatalogData] = {}
        self._selections: dict[str, set[str]] = {}
        self._lock = Lock()

    # ===================
    # LOADING
    # ===================

    def new_catalog(self) -> CatalogData:
        """Fresh catalog seeded with the demo products."""
        return CatalogData(
            products=[Product(**row) for row in DEFAULT_PRODUCTS],
            sea_freight_days=self.default_sea_freight_days,
        )

    def _working_copy(self, username: str) -> CatalogData:
        """Load the working copy. Caller holds the lock."""
        data = self._catalogs.get(username)
        if data is None:
            data = self.repository.get(username)
            if data is None:
                logger.info("catalog_initialized", username=username)
                data = self.new_catalog()
            self._catalogs[username] = data
            self._selections.setdefault(username, set())
        return data

    def initialize(self, username: str) -> CatalogData:
        """Create and persist a fresh catalog for a new account."""
        data = self.new_catalog()
        with self._lock:
            self._catalogs[username] = data
            self._selections[username] = set()
        self.repository.save(username, data.model_copy(deep=True))
        return data.model_copy(deep=True)

    def snapshot(self, username: str) -> CatalogData:
        """Consistent deep copy of the user's catalog."""
        with self._lock:
            return self._working_copy(username).model_copy(deep=True)

    def _commit(self, username: str, data: CatalogData) -> None:
        """Install a new working copy and schedule its save. Caller holds the lock."""
        data.last_updated = utc_now()
        self._catalogs[username] = data
        self.autosave.schedule(username, data.model_copy(deep=True))

    # ===================
    # READ OPERATIONS
    # ===================

    def list_products(self, username: str) -> list[Product]:
        """All products in catalog order."""
        return self.snapshot(username).products

    def get_product(self, username: str, product_id: str) -> Product:
        """
        Get a single product by id.

        Raises:
            ProductNotFoundError: If the id is not in the catalog
        """
        for product in self.list_products(username):
            if product.id == product_id:
                return product
        raise ProductNotFoundError(product_id)

    def lead_time(self, username: str) -> LeadTimeConfig:
        return self.snapshot(username).lead_time

    def sync_status(self, username: str) -> SyncStatus:
        return self.autosave.status(username)

    # ===================
    # WRITE OPERATIONS
    # ===================

    def add_product(self, username: str, data: ProductCreate) -> Product:
        """
        Add a product with a freshly generated id.

        Args:
            username: Catalog owner
            data: Product fields

        Returns:
            Created Product
        """
        product = Product(id=str(uuid4()), **data.model_dump())

        with self._lock:
            catalog = self._working_copy(username).model_copy(deep=True)
            catalog.products = [*catalog.products, product]
            self._commit(username, catalog)

        logger.info("product_added", username=username, product_id=product.id, sku=product.sku)
        return product

    def update_field(self, username: str, product_id: str, edit: FieldEdit) -> Product:
        """
        Edit one field, replacing the whole record on id match.

        Args:
            username: Catalog owner
            product_id: Product to edit
            edit: Field name and raw value

        Returns:
            Updated Product

        Raises:
            InvalidFieldError: Field is not editable
            InvalidCategoryError: Category value is not a known category
            ValidationError: Value rejected by the product schema
            ProductNotFoundError: If the id is not in the catalog
        """
        if edit.field not in EDITABLE_FIELDS:
            raise InvalidFieldError(edit.field, EDITABLE_FIELDS)

        if edit.field == EditableField.CATEGORY.value and edit.value not in Category.labels():
            raise InvalidCategoryError(edit.value, Category.labels())

        updated = self._replace(username, product_id, {edit.field: edit.value})

        logger.info(
            "product_field_updated",
            username=username,
            product_id=product_id,
            field=edit.field
        )
        return updated

    def bulk_update(
        self,
        username: str,
        product_ids: Iterable[str],
        qty_per_carton: Optional[int] = None,
        specs: Optional[str] = None,
    ) -> list[Product]:
        """
        Apply carton size and/or specs to several products.

        qty_per_carton is applied only when positive, specs only when not
        blank. Unknown ids are skipped.

        Returns:
            Updated products in catalog order
        """
        changes: dict[str, Any] = {}
        if qty_per_carton is not None and qty_per_carton > 0:
            changes["qty_per_carton"] = qty_per_carton
        if specs is not None and specs.strip():
            changes["specs"] = specs

        wanted = set(product_ids)

        with self._lock:
            catalog = self._working_copy(username).model_copy(deep=True)
            updated = []
            products = []
            for product in catalog.products:
                if product.id in wanted and changes:
                    product = self._validated(product, changes)
                    updated.append(product)
                products.append(product)

            if updated:
                catalog.products = products
                self._commit(username, catalog)

        logger.info(
            "products_bulk_updated",
            username=username,
            count=len(updated),
            fields=list(changes.keys())
        )
        return updated

    def delete_product(self, username: str, product_id: str) -> None:
        """
        Remove a product and drop it from the selection.

        Raises:
            ProductNotFoundError: If the id is not in the catalog
        """
        with self._lock:
            catalog = self._working_copy(username).model_copy(deep=True)
            remaining = [p for p in catalog.products if p.id != product_id]
            if len(remaining) == len(catalog.products):
                raise ProductNotFoundError(product_id)

            catalog.products = remaining
            self._selections.setdefault(username, set()).discard(product_id)
            self._commit(username, catalog)

        logger.info("product_deleted", username=username, product_id=product_id)

    def set_sea_freight_days(self, username: str, value: Any) -> LeadTimeConfig:
        """
        Change sea freight days.

        The value is parsed like a form input and kept within
        1..MAX_SEA_FREIGHT_DAYS.
        """
        days = clamp_at_least(value, 1, MAX_SEA_FREIGHT_DAYS)

        with self._lock:
            catalog = self._working_copy(username).model_copy(deep=True)
            catalog.sea_freight_days = days
            self._commit(username, catalog)

        logger.info("sea_freight_days_updated", username=username, sea_freight_days=days)
        return LeadTimeConfig(sea_freight_days=days)

    def _replace(self, username: str, product_id: str, changes: dict[str, Any]) -> Product:
        with self._lock:
            catalog = self._working_copy(username).model_copy(deep=True)
            updated = None
            products = []
            for product in catalog.products:
                if product.id == product_id:
                    product = self._validated(product, changes)
                    updated = product
                products.append(product)

            if updated is None:
                raise ProductNotFoundError(product_id)

            catalog.products = products
            self._commit(username, catalog)
            return updated

    @staticmethod
    def _validated(product: Product, changes: dict[str, Any]) -> Product:
        """Build the replacement record through the schema so clamping applies."""
        try:
            return Product.model_validate({**product.model_dump(), **changes})
        except PydanticValidationError as e:
            raise ValidationError(
                message="Invalid product value",
                code="PRODUCT_INVALID_VALUE",
                details={"errors": e.errors(include_url=False, include_context=False)}
            )

    # ===================
    # SELECTION
    # ===================

    def selected_ids(self, username: str) -> list[str]:
        """Selected ids in catalog order."""
        with self._lock:
            catalog = self._working_copy(username)
            selection = self._selections.get(username, set())
            return [p.id for p in catalog.products if p.id in selection]

    def toggle_selection(self, username: str, product_id: str) -> list[str]:
        """
        Select or deselect one product.

        Raises:
            ProductNotFoundError: If the id is not in the catalog
        """
        with self._lock:
            catalog = self._working_copy(username)
            if not any(p.id == product_id for p in catalog.products):
                raise ProductNotFoundError(product_id)
            selection = self._selections.setdefault(username, set())
            if product_id in selection:
                selection.discard(product_id)
            else:
                selection.add(product_id)
        return self.selected_ids(username)

    def toggle_select_all(self, username: str) -> list[str]:
        """Clear the selection if everything is selected, else select all."""
        with self._lock:
            catalog = self._working_copy(username)
            all_ids = {p.id for p in catalog.products}
            selection = self._selections.setdefault(username, set())
            if selection >= all_ids:
                self._selections[username] = set()
            else:
                self._selections[username] = all_ids
        return self.selected_ids(username)

    def clear_selection(self, username: str) -> None:
        with self._lock:
            self._selections[username] = set()

    # ===================
    # LIFECYCLE
    # ===================

    def forget(self, username: str) -> None:
        """Drop the in-memory working copy (flushes pending saves first)."""
        self.autosave.flush(username)
        with self._lock:
            self._catalogs.pop(username, None)
            self._selections.pop(username, None)


# Singleton instance for convenience
_catalog_service: Optional[CatalogService] = None


def get_catalog_service() -> CatalogService:
    """Get or create CatalogService instance."""
    global _catalog_service
    if _catalog_service is None:
        repository = build_catalog_repository(settings.storage_backend)
        _catalog_service = CatalogService(
            repository=repository,
            autosave=AutosaveService(
                repository,
                debounce_seconds=settings.autosave_debounce_seconds
            ),
            default_sea_freight_days=settings.default_sea_freight_days,
        )
    return _catalog_service
