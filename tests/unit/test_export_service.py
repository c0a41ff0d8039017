"""
Tests for export_service: Restock plan Excel generation.
"""

from datetime import date

import pytest
from openpyxl import load_workbook

from models.restock import RestockLine, RestockPlan
from services.export_service import (
    COLUMNS,
    ExportService,
    get_export_service,
    restock_filename,
)


@pytest.fixture
def plan() -> RestockPlan:
    lines = [
        RestockLine(
            product_id="1", sku="SF-001", name="Headphones", store="Amazon US",
            specs="Black", qty_per_carton=24, restock_qty=430, cartons=18,
        ),
        RestockLine(
            product_id="2", sku="SF-002", name="Chair", store="Shopify Store",
            restock_qty=50, cartons=0,
        ),
    ]
    return RestockPlan(
        generated_on=date(2026, 10, 19),
        lines=lines,
        total_qty=480,
        total_cartons=18,
    )


class TestFilename:
    def test_includes_date(self):
        assert restock_filename(date(2026, 1, 5)) == "StockFlow_restock_2026-01-05.xlsx"


class TestGenerateRestockExcel:
    """Tests for ExportService.generate_restock_excel."""

    def test_layout(self, plan):
        # Act
        output = ExportService().generate_restock_excel(plan)
        ws = load_workbook(output).active

        # Assert
        assert ws["A1"].value == "StockFlow Restock Plan"
        assert ws["B2"].value == "2026-10-19"
        assert [ws.cell(row=4, column=i).value for i in range(1, len(COLUMNS) + 1)] == [
            label for label, _ in COLUMNS
        ]

    def test_lines(self, plan):
        ws = load_workbook(ExportService().generate_restock_excel(plan)).active

        assert [ws.cell(row=5, column=i).value for i in range(1, 8)] == [
            "SF-001", "Headphones", "Amazon US", "Black", 24, 430, 18
        ]
        # Unknown specs and carton size show as "-"
        assert ws.cell(row=6, column=4).value == "-"
        assert ws.cell(row=6, column=5).value == "-"

    def test_totals_row(self, plan):
        ws = load_workbook(ExportService().generate_restock_excel(plan)).active

        assert ws.cell(row=7, column=1).value == "TOTAL"
        assert ws.cell(row=7, column=6).value == 480
        assert ws.cell(row=7, column=7).value == 18

    def test_empty_plan(self):
        empty = RestockPlan(generated_on=date(2026, 10, 19), lines=[], total_qty=0, total_cartons=0)

        ws = load_workbook(ExportService().generate_restock_excel(empty)).active

        assert ws.cell(row=5, column=1).value == "TOTAL"
        assert ws.cell(row=5, column=6).value == 0

    def test_singleton(self):
        assert get_export_service() is get_export_service()
