"""
Restock plan: quantities and cartons for the selected products.
"""

from datetime import date
from math import ceil
from typing import Iterable, Mapping, Optional, Sequence

from models.product import Product
from models.coverage import ProductCalculation
from models.restock import RestockLine, RestockPlan


def cartons_for(qty: int, qty_per_carton: Optional[int]) -> int:
    """Cartons needed for ``qty`` units; 0 when carton size is unknown."""
    if not qty_per_carton or qty_per_carton <= 0:
        return 0
    return ceil(qty / qty_per_carton)


def restock_qty_for(product: Product, calc: Optional[ProductCalculation]) -> int:
    """Override if set, else the recommendation, else 0 without a calculation."""
    if product.custom_restock_qty is not None:
        return product.custom_restock_qty
    if calc is None:
        return 0
    return calc.restock_needed_qty


def build_restock_plan(
    products: Sequence[Product],
    calculations: Mapping[str, ProductCalculation],
    selected_ids: Iterable[str],
    today: Optional[date] = None,
) -> RestockPlan:
    """
    Build the restock plan for the selected products.

    Args:
        products: Products in catalog order
        calculations: Output of compute_calculations()
        selected_ids: Ids to include; unknown ids are ignored
        today: Plan date (defaults to today)

    Returns:
        RestockPlan with one line per selected product, in catalog order
    """
    selected = set(selected_ids)
    lines = []

    for product in products:
        if product.id not in selected:
            continue
        qty = restock_qty_for(product, calculations.get(product.id))
        lines.append(
            RestockLine(
                product_id=product.id,
                sku=product.sku,
                name=product.name,
                store=product.store,
                specs=product.specs,
                qty_per_carton=product.qty_per_carton,
                restock_qty=qty,
                cartons=cartons_for(qty, product.qty_per_carton),
            )
        )

    return RestockPlan(
        generated_on=today or date.today(),
        lines=lines,
        total_qty=sum(line.restock_qty for line in lines),
        total_cartons=sum(line.cartons for line in lines),
    )
