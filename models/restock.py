"""
Restock plan schemas.
"""

from pydantic import Field, field_validator
from typing import Any, Optional
from datetime import date

from models.base import BaseSchema
from utils.number_utils import parse_int


class RestockLine(BaseSchema):
    """One product on a restock plan."""

    product_id: str
    sku: str
    name: str
    store: str
    specs: Optional[str] = None
    qty_per_carton: Optional[int] = None
    restock_qty: int = Field(..., ge=0)
    cartons: int = Field(..., ge=0)


class RestockPlan(BaseSchema):
    """Restock plan for the selected products, in catalog order."""

    generated_on: date
    lines: list[RestockLine]
    total_qty: int
    total_cartons: int


class BulkRestockUpdate(BaseSchema):
    """
    Apply carton size and/or specs to several products at once.

    qty_per_carton is applied only when it parses to a positive integer;
    specs only when not blank.
    """

    product_ids: list[str] = Field(..., min_length=1)
    qty_per_carton: Optional[int] = None
    specs: Optional[str] = Field(None, max_length=200)

    @field_validator("qty_per_carton", mode="before")
    @classmethod
    def parse_carton(cls, v: Any) -> Optional[int]:
        if v is None:
            return None
        parsed = parse_int(v)
        return parsed if parsed > 0 else None


class SelectionResponse(BaseSchema):
    """Selected product ids, in catalog order."""

    selected_ids: list[str]
    total: int
