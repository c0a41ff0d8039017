"""
Coverage calculation service: Core business logic.

Turns a catalog snapshot into per-product coverage metrics, a status for
each product, aggregate statistics and the alert list.

Everything here is a pure function of its arguments: no I/O, no state,
same input gives the same output. Callers pass a consistent snapshot.

Status priority (first match wins):
    1. No sales but stock in the pipeline   -> OVERSTOCKED
    2. Coverage < total lead time           -> CRITICAL
    3. Coverage < target coverage days      -> WARNING
    4. Coverage > 2 x target coverage days  -> OVERSTOCKED
    5. Otherwise                            -> HEALTHY
"""

from math import ceil
from typing import Iterable, Mapping, Sequence, Union
import structlog

from models.product import Product
from models.coverage import (
    ALERT_STATUSES,
    DAYS_PER_MONTH,
    SALES_WINDOW_DAYS,
    AlertItem,
    CoverageReport,
    CoverageStatus,
    FiniteCoverage,
    LeadTimeConfig,
    LeadTimeResponse,
    ProductCalculation,
    Stats,
    UnboundedCoverage,
)

logger = structlog.get_logger(__name__)

CoverageValue = Union[FiniteCoverage, UnboundedCoverage]


def calculate_days_coverage(total_pipeline_stock: int, daily_sales: float) -> CoverageValue:
    """Days the pipeline lasts at the current daily sales rate."""
    if daily_sales > 0:
        return FiniteCoverage(days=total_pipeline_stock / daily_sales)
    return UnboundedCoverage()


def calculate_restock_needed(target_stock_level: float, total_pipeline_stock: int) -> int:
    """
    Units to order to reach the target stock level.

    Rounded up, never negative: the system never recommends destocking.
    """
    return max(0, ceil(target_stock_level - total_pipeline_stock))


def classify_status(
    daily_sales: float,
    total_pipeline_stock: int,
    days_coverage: CoverageValue,
    total_lead_time: int,
    target_coverage_days: int,
) -> CoverageStatus:
    """
    Classify a product by the priority chain in the module docstring.

    Threshold rules only apply to finite coverage. Unbounded coverage with
    stock is caught by rule 1; with nothing in the pipeline it matches no
    rule and ends up HEALTHY.
    """
    if daily_sales == 0 and total_pipeline_stock > 0:
        return CoverageStatus.OVERSTOCKED

    if isinstance(days_coverage, FiniteCoverage):
        if days_coverage.is_below(total_lead_time):
            return CoverageStatus.CRITICAL
        if days_coverage.is_below(target_coverage_days):
            return CoverageStatus.WARNING
        if days_coverage.exceeds(target_coverage_days * 2):
            return CoverageStatus.OVERSTOCKED

    return CoverageStatus.HEALTHY


def calculate_product(product: Product, lead_time: LeadTimeConfig) -> ProductCalculation:
    """
    Calculate coverage metrics for a single product.

    Args:
        product: Product with clamped, non-negative quantities
        lead_time: Lead time configuration

    Returns:
        ProductCalculation
    """
    daily_sales = product.sales_last_7_days / SALES_WINDOW_DAYS
    total_pipeline_stock = product.total_pipeline_stock

    days_coverage = calculate_days_coverage(total_pipeline_stock, daily_sales)
    target_stock_level = daily_sales * lead_time.target_coverage_days
    restock_needed_qty = calculate_restock_needed(target_stock_level, total_pipeline_stock)

    if product.custom_restock_qty is not None:
        display_restock_qty = product.custom_restock_qty
    else:
        display_restock_qty = restock_needed_qty

    return ProductCalculation(
        daily_sales=daily_sales,
        total_pipeline_stock=total_pipeline_stock,
        days_coverage=days_coverage,
        months_coverage=days_coverage.scaled(DAYS_PER_MONTH),
        target_stock_level=target_stock_level,
        restock_needed_qty=restock_needed_qty,
        display_restock_qty=display_restock_qty,
        status=classify_status(
            daily_sales,
            total_pipeline_stock,
            days_coverage,
            total_lead_time=lead_time.total_lead_time,
            target_coverage_days=lead_time.target_coverage_days,
        ),
        is_low_stock=days_coverage.is_below(lead_time.target_coverage_days),
    )


def compute_calculations(
    products: Iterable[Product],
    lead_time: LeadTimeConfig,
) -> dict[str, ProductCalculation]:
    """
    Calculate every product in a catalog.

    Args:
        products: Products in catalog order (may be empty)
        lead_time: Lead time configuration

    Returns:
        Mapping product id -> ProductCalculation, in catalog order
    """
    return {
        product.id: calculate_product(product, lead_time)
        for product in products
    }


def compute_aggregates(
    products: Sequence[Product],
    calculations: Mapping[str, ProductCalculation],
) -> Stats:
    """
    Aggregate statistics for the dashboard.

    Products without a calculation (stale id) are left out of the alert
    and restock totals but still count as SKUs and as category stock.

    Args:
        products: Products in catalog order
        calculations: Output of compute_calculations()

    Returns:
        Stats
    """
    critical_alerts = 0
    total_restock_qty = 0
    per_category_stock: dict[str, int] = {}

    for product in products:
        calc = calculations.get(product.id)
        if calc is not None:
            if calc.status in ALERT_STATUSES:
                critical_alerts += 1
            total_restock_qty += calc.display_restock_qty

        label = product.category.value
        per_category_stock[label] = per_category_stock.get(label, 0) + product.available_stock

    return Stats(
        total_skus=len(products),
        critical_alerts=critical_alerts,
        total_restock_qty=total_restock_qty,
        per_category_stock=per_category_stock,
    )


def get_alert_list(
    products: Sequence[Product],
    calculations: Mapping[str, ProductCalculation],
) -> list[AlertItem]:
    """
    Products in CRITICAL or WARNING status, soonest stockout first.

    sorted() is stable, so equal coverage keeps catalog order.
    Alert statuses always carry finite coverage.
    """
    alerts = []
    for product in products:
        calc = calculations.get(product.id)
        if calc is None or calc.status not in ALERT_STATUSES:
            continue
        alerts.append(AlertItem(product=product, calculation=calc))

    return sorted(alerts, key=lambda item: item.calculation.days_coverage.days)


def evaluate_catalog(
    products: Sequence[Product],
    lead_time: LeadTimeConfig,
) -> CoverageReport:
    """
    Run the full calculation for one catalog snapshot.

    Returns:
        CoverageReport with lead time, calculations, stats and alerts
    """
    calculations = compute_calculations(products, lead_time)
    stats = compute_aggregates(products, calculations)
    alerts = get_alert_list(products, calculations)

    logger.debug(
        "coverage_evaluated",
        total_skus=stats.total_skus,
        critical_alerts=stats.critical_alerts,
        total_restock_qty=stats.total_restock_qty,
        total_lead_time=lead_time.total_lead_time,
    )

    return CoverageReport(
        lead_time=LeadTimeResponse.from_config(lead_time),
        calculations=calculations,
        stats=stats,
        alerts=alerts,
    )
