from __future__ import annotations

import html
from datetime import date, datetime, time
from typing import Any, Callable, List

from openpyxl.utils.cell import get_column_letter

from src.rangeparser.model import CellRange
from src.workbook.workbook import WorkbookError, WorksheetHandle


class ReportError(RuntimeError):
    pass


class TableRenderer:
    def render_values_table(self, worksheet: WorksheetHandle, cell_range: CellRange) -> str:
        return self._render(worksheet, cell_range, lambda ref: self._format_value(worksheet.get_value(ref)))

    def render_formula_table(self, worksheet: WorksheetHandle, cell_range: CellRange) -> str:
        def cell_text(ref: str) -> str:
            formula = worksheet.get_formula(ref)
            if formula is not None:
                return formula
            return self._format_value(worksheet.get_value(ref))

        return self._render(worksheet, cell_range, cell_text)

    def _render(self, worksheet: WorksheetHandle, cell_range: CellRange, cell_text: Callable[[str], str]) -> str:
        cols = [get_column_letter(c) for c in range(cell_range.start_col, cell_range.end_col + 1)]
        lines: List[str] = ["<table>"]
        lines.append("<tr><th></th>" + "".join(f"<th>{c}</th>" for c in cols) + "</tr>")
        try:
            for row in range(cell_range.start_row, cell_range.end_row + 1):
                cells = "".join(f"<td>{html.escape(cell_text(f'{c}{row}'))}</td>" for c in cols)
                lines.append(f"<tr><th>{row}</th>{cells}</tr>")
        except WorkbookError as e:
            raise ReportError(f"cannot render table for {worksheet.name}: {e}") from e
        lines.append("</table>")
        return "\n".join(lines)

    def _format_value(self, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, bool):
            return "TRUE" if value else "FALSE"
        if isinstance(value, datetime):
            if value.time() == time(0, 0):
                return value.date().isoformat()
            return value.isoformat()
        if isinstance(value, (date, time)):
            return value.isoformat()
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)
