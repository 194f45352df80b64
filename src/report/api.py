from __future__ import annotations

from src.rangeparser.model import CellRange
from src.workbook.workbook import WorksheetHandle
from .report import ReportError, TableRenderer


def render_values_table(worksheet: WorksheetHandle, cell_range: CellRange) -> str:
    """Public API (Report)

    Contract:
    - HTML <table>: header row of column letters, one <tr> per sheet row headed by its number.
    - Stored values, HTML-escaped; empty cells render empty.
    """
    return TableRenderer().render_values_table(worksheet, cell_range)


def render_formula_table(worksheet: WorksheetHandle, cell_range: CellRange) -> str:
    """Same layout as render_values_table, formula source shown for formula cells."""
    return TableRenderer().render_formula_table(worksheet, cell_range)
