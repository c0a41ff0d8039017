"""
Unit tests for the restock plan.
"""

from datetime import date

import pytest

from models.coverage import LeadTimeConfig
from services.coverage_service import compute_calculations
from services.restock_service import build_restock_plan, cartons_for, restock_qty_for
from tests.factories import ProductFactory


class TestCartons:
    """Tests for cartons_for."""

    @pytest.mark.parametrize("qty, per_carton, expected", [
        (430, 24, 18),
        (48, 24, 2),
        (0, 24, 0),
        (10, None, 0),
        (10, 0, 0),
    ])
    def test_cartons(self, qty, per_carton, expected):
        assert cartons_for(qty, per_carton) == expected


class TestRestockPlan:
    """Tests for build_restock_plan."""

    @pytest.fixture
    def products(self):
        return [
            ProductFactory.create(id="a", available_stock=10, sales_last_7_days=70, qty_per_carton=24),
            ProductFactory.create(id="b", available_stock=10, sales_last_7_days=70, custom_restock_qty=50),
            ProductFactory.create(id="c", available_stock=1000, sales_last_7_days=70),
        ]

    def test_lines_in_catalog_order(self, products):
        calculations = compute_calculations(products, LeadTimeConfig())

        plan = build_restock_plan(products, calculations, ["c", "a"], today=date(2026, 10, 19))

        assert [line.product_id for line in plan.lines] == ["a", "c"]
        assert plan.generated_on == date(2026, 10, 19)

    def test_quantities_and_totals(self, products):
        # Arrange
        calculations = compute_calculations(products, LeadTimeConfig())

        # Act
        plan = build_restock_plan(products, calculations, ["a", "b", "c"])

        # Assert
        assert [line.restock_qty for line in plan.lines] == [430, 50, 0]
        assert [line.cartons for line in plan.lines] == [18, 0, 0]
        assert plan.total_qty == 480
        assert plan.total_cartons == 18

    def test_empty_selection(self, products):
        plan = build_restock_plan(products, {}, [])

        assert plan.lines == []
        assert plan.total_qty == 0

    def test_unknown_ids_ignored(self, products):
        plan = build_restock_plan(products, {}, ["zzz"])
        assert plan.lines == []

    def test_missing_calculation_uses_override_or_zero(self, products):
        assert restock_qty_for(products[0], None) == 0
        assert restock_qty_for(products[1], None) == 50
