"""
Export service: Generate restock plan Excel files.

Writes the restock plan the purchaser sends to the supplier: one row per
product with specs, carton size, quantity and cartons, plus totals.
"""

from datetime import date
from io import BytesIO
from typing import Optional

from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, Border, Side, PatternFill
import structlog

from models.restock import RestockPlan

logger = structlog.get_logger(__name__)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

COLUMNS = [
    ("SKU", 16),
    ("Product", 40),
    ("Store", 20),
    ("Specs", 16),
    ("Qty / Carton", 14),
    ("Restock Qty", 14),
    ("Cartons", 12),
]


def restock_filename(plan_date: date) -> str:
    """'StockFlow_restock_2026-10-19.xlsx'"""
    return f"StockFlow_restock_{plan_date.isoformat()}.xlsx"


class ExportService:
    """Service for generating restock plan files."""

    def generate_restock_excel(self, plan: RestockPlan) -> BytesIO:
        """
        Generate Excel file for a restock plan.

        Layout:
            Row 1: title
            Row 2: plan date
            Row 4: column headers
            Row 5+: one row per line
            Last row: totals

        Args:
            plan: RestockPlan to export

        Returns:
            BytesIO containing the Excel file
        """
        logger.info(
            "generating_restock_excel",
            lines=len(plan.lines),
            total_qty=plan.total_qty,
            total_cartons=plan.total_cartons,
        )

        wb = Workbook()
        ws = wb.active
        ws.title = "Restock Plan"

        # Styles
        bold_font = Font(bold=True)
        title_font = Font(bold=True, size=14)
        header_fill = PatternFill(start_color="DBEAFE", end_color="DBEAFE", fill_type="solid")
        thin_border = Border(bottom=Side(style="thin", color="000000"))
        center = Alignment(horizontal="center")

        for idx, (_, width) in enumerate(COLUMNS, start=1):
            ws.column_dimensions[chr(ord("A") + idx - 1)].width = width

        # Row 1-2: Title and date
        ws["A1"] = "StockFlow Restock Plan"
        ws["A1"].font = title_font
        ws["A2"] = "Date:"
        ws["B2"] = plan.generated_on.isoformat()

        # Row 4: Column headers
        header_row = 4
        for idx, (label, _) in enumerate(COLUMNS, start=1):
            cell = ws.cell(row=header_row, column=idx, value=label)
            cell.font = bold_font
            cell.fill = header_fill
            cell.border = thin_border
            cell.alignment = center

        # Lines
        row = header_row + 1
        for line in plan.lines:
            values = [
                line.sku,
                line.name,
                line.store,
                line.specs or "-",
                line.qty_per_carton or "-",
                line.restock_qty,
                line.cartons,
            ]
            for idx, value in enumerate(values, start=1):
                ws.cell(row=row, column=idx, value=value)
            ws.cell(row=row, column=6).number_format = "#,##0"
            row += 1

        # Totals
        ws.cell(row=row, column=1, value="TOTAL").font = bold_font
        total_qty = ws.cell(row=row, column=6, value=plan.total_qty)
        total_qty.font = bold_font
        total_qty.number_format = "#,##0"
        ws.cell(row=row, column=7, value=plan.total_cartons).font = bold_font
        for idx in range(1, len(COLUMNS) + 1):
            ws.cell(row=row, column=idx).border = thin_border

        logger.info(
            "restock_excel_generated",
            lines=len(plan.lines),
            total_row=row,
        )

        # Save to BytesIO
        output = BytesIO()
        wb.save(output)
        output.seek(0)

        return output


# Singleton instance
_export_service: Optional[ExportService] = None


def get_export_service() -> ExportService:
    """Get or create ExportService instance."""
    global _export_service
    if _export_service is None:
        _export_service = ExportService()
    return _export_service
