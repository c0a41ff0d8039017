"""
Coverage schemas: lead time, per-product calculations and aggregates.

Coverage is a sum type. A product with no sales velocity has unbounded
coverage, represented by UnboundedCoverage rather than a float infinity,
so every threshold comparison is an explicit method call.
"""

from pydantic import Field
from typing import Annotated, Literal, Union
from enum import Enum

from models.base import BaseSchema
from models.product import Product

PRODUCTION_DAYS = 7
SAFETY_STOCK_DAYS = 7
DAYS_PER_MONTH = 30
SALES_WINDOW_DAYS = 7
MAX_SEA_FREIGHT_DAYS = 365


class CoverageStatus(str, Enum):
    """Stock status, from most to least urgent."""
    CRITICAL = "Critical"        # Stocks out before replenishment can arrive
    WARNING = "Warning"          # Below target, above the critical floor
    HEALTHY = "Healthy"
    OVERSTOCKED = "Overstocked"  # Dead stock, or more than double the target


ALERT_STATUSES = frozenset({CoverageStatus.CRITICAL, CoverageStatus.WARNING})


class LeadTimeConfig(BaseSchema):
    """
    Replenishment lead time.

    Only sea freight is user-editable; production and safety stock days
    are fixed.
    """

    sea_freight_days: int = Field(30, ge=1, le=MAX_SEA_FREIGHT_DAYS, description="Days at sea")
    production_days: Literal[7] = Field(PRODUCTION_DAYS, description="Days in production")
    safety_stock_days: Literal[7] = Field(SAFETY_STOCK_DAYS, description="Safety buffer days")

    @property
    def total_lead_time(self) -> int:
        return self.sea_freight_days + self.production_days + self.safety_stock_days

    @property
    def target_coverage_days(self) -> int:
        # Target window equals the full replenishment lead time
        return self.total_lead_time


class LeadTimeUpdate(BaseSchema):
    """Change sea freight days. Parsed and kept within 1..MAX_SEA_FREIGHT_DAYS by the catalog."""

    sea_freight_days: Union[int, float, str, None] = Field(..., description="New sea freight days")


class LeadTimeResponse(BaseSchema):
    """Lead time with derived values."""

    sea_freight_days: int
    production_days: int
    safety_stock_days: int
    total_lead_time: int
    target_coverage_days: int

    @classmethod
    def from_config(cls, config: LeadTimeConfig) -> "LeadTimeResponse":
        return cls(
            sea_freight_days=config.sea_freight_days,
            production_days=config.production_days,
            safety_stock_days=config.safety_stock_days,
            total_lead_time=config.total_lead_time,
            target_coverage_days=config.target_coverage_days,
        )


# ===================
# COVERAGE SUM TYPE
# ===================

class FiniteCoverage(BaseSchema):
    """Coverage of a known number of days."""

    kind: Literal["finite"] = "finite"
    days: float = Field(..., ge=0)

    def is_below(self, threshold: float) -> bool:
        return self.days < threshold

    def exceeds(self, threshold: float) -> bool:
        return self.days > threshold

    def scaled(self, divisor: float) -> "FiniteCoverage":
        return FiniteCoverage(days=self.days / divisor)


class UnboundedCoverage(BaseSchema):
    """No sales velocity: stock never runs out at the current rate."""

    kind: Literal["unbounded"] = "unbounded"

    def is_below(self, threshold: float) -> bool:
        return False

    def scaled(self, divisor: float) -> "UnboundedCoverage":
        return self


Coverage = Annotated[
    Union[FiniteCoverage, UnboundedCoverage],
    Field(discriminator="kind")
]


# ===================
# CALCULATION RESULTS
# ===================

class ProductCalculation(BaseSchema):
    """Derived metrics for one product. Never persisted."""

    daily_sales: float
    total_pipeline_stock: int
    days_coverage: Coverage
    months_coverage: Coverage
    target_stock_level: float
    restock_needed_qty: int = Field(..., ge=0, description="System recommendation")
    display_restock_qty: int = Field(..., ge=0, description="Override if set, else recommendation")
    status: CoverageStatus
    is_low_stock: bool


class Stats(BaseSchema):
    """Aggregate statistics over a catalog."""

    total_skus: int
    critical_alerts: int = Field(..., description="Products in Critical or Warning status")
    total_restock_qty: int
    per_category_stock: dict[str, int] = Field(
        default_factory=dict,
        description="Category label -> available stock, in first-seen order"
    )


class AlertItem(BaseSchema):
    """A product that needs attention, with its calculation."""

    product: Product
    calculation: ProductCalculation


class CoverageReport(BaseSchema):
    """Everything the dashboard shows for one catalog snapshot."""

    lead_time: LeadTimeResponse
    calculations: dict[str, ProductCalculation]
    stats: Stats
    alerts: list[AlertItem]
