"""
Product schemas for validation and serialization.

Quantity fields are clamped on the way in: whatever the user typed, a
Product never holds a negative or non-integer quantity.
"""

from pydantic import Field, field_validator
from typing import Any, Optional
from enum import Enum

from models.base import BaseSchema
from utils.number_utils import MAX_QUANTITY, clamp_quantity


class Category(str, Enum):
    """Product categories."""
    ELECTRONICS = "Electronics"
    HOME = "Home"
    APPAREL = "Apparel"
    ACCESSORIES = "Accessories"
    TOYS = "Toys"

    @classmethod
    def labels(cls) -> list[str]:
        return [c.value for c in cls]


QUANTITY_FIELDS = (
    "available_stock",
    "in_transit_stock",
    "planned_shipment",
    "sales_last_7_days",
)


class EditableField(str, Enum):
    """Fields a user may edit on a single product."""
    SKU = "sku"
    NAME = "name"
    STORE = "store"
    CATEGORY = "category"
    IMAGE = "image"
    AVAILABLE_STOCK = "available_stock"
    IN_TRANSIT_STOCK = "in_transit_stock"
    PLANNED_SHIPMENT = "planned_shipment"
    SALES_LAST_7_DAYS = "sales_last_7_days"
    CUSTOM_RESTOCK_QTY = "custom_restock_qty"
    SPECS = "specs"
    QTY_PER_CARTON = "qty_per_carton"


class ProductBase(BaseSchema):
    """Fields shared by create payloads and stored products."""

    sku: str = Field(
        ...,
        min_length=1,
        max_length=64,
        description="Stock keeping unit",
        examples=["SF-001"]
    )
    name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Product name"
    )
    store: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Store / sales channel name",
        examples=["Amazon US"]
    )
    category: Category = Field(..., description="Product category")
    image: Optional[str] = Field(None, description="Image URL or data reference")

    available_stock: int = Field(0, ge=0, le=MAX_QUANTITY, description="Units on hand")
    in_transit_stock: int = Field(0, ge=0, le=MAX_QUANTITY, description="Units shipped, not yet received")
    planned_shipment: int = Field(0, ge=0, le=MAX_QUANTITY, description="Units planned, not yet shipped")
    sales_last_7_days: int = Field(0, ge=0, le=MAX_QUANTITY, description="Units sold in the last 7 days")

    custom_restock_qty: Optional[int] = Field(
        None,
        ge=0,
        le=MAX_QUANTITY,
        description="User override for the restock quantity"
    )
    specs: Optional[str] = Field(None, max_length=200, description="Free-text specs, e.g. 90x120")
    qty_per_carton: Optional[int] = Field(None, ge=0, le=MAX_QUANTITY, description="Units per carton")

    @field_validator(*QUANTITY_FIELDS, mode="before")
    @classmethod
    def clamp_quantities(cls, v: Any) -> int:
        """Non-numeric or negative input becomes 0."""
        return clamp_quantity(v)

    @field_validator("custom_restock_qty", "qty_per_carton", mode="before")
    @classmethod
    def clamp_optional_quantities(cls, v: Any) -> Optional[int]:
        """Absent stays absent; anything else is clamped like a quantity."""
        if v is None:
            return None
        return clamp_quantity(v)

    @property
    def total_pipeline_stock(self) -> int:
        return self.available_stock + self.in_transit_stock + self.planned_shipment


class ProductCreate(ProductBase):
    """
    Add a new product.

    Required: sku, name, store, category
    The id is generated by the catalog.
    """


class Product(ProductBase):
    """A product as stored in a catalog."""

    id: str = Field(..., min_length=1, description="Product identifier")


class FieldEdit(BaseSchema):
    """
    Edit one field of one product.

    The value is taken as typed; the catalog parses it for the target field.
    """

    field: str = Field(..., description="Field name, e.g. available_stock")
    value: Any = Field(None, description="New value")


class ProductListResponse(BaseSchema):
    """Products in catalog order."""

    data: list[Product]
    total: int
