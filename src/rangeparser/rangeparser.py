from __future__ import annotations

import re
from typing import Tuple

from openpyxl.utils.cell import column_index_from_string, get_column_letter

from .model import CellRange


MAX_COLUMN: int = 16384  # XFD
MAX_ROW: int = 1048576

_cell_re = re.compile(r"^\$?([A-Za-z]{1,3})\$?([0-9]+)$")


class RangeParseError(RuntimeError):
    pass


class RangeParser:
    def parse_range(self, range_str: str) -> CellRange:
        if not isinstance(range_str, str) or not range_str.strip():
            raise RangeParseError("range must be a non-empty string")

        expr = range_str.strip()
        # Sheet prefix ("Sheet1!A1:B2") is accepted and ignored
        if "!" in expr:
            expr = expr.rsplit("!", 1)[1]

        parts = expr.split(":")
        if len(parts) == 1:
            parts = [parts[0], parts[0]]
        if len(parts) != 2:
            raise RangeParseError(f"invalid range: {range_str}")

        start_col, start_row = self._parse_cell(parts[0], range_str)
        end_col, end_row = self._parse_cell(parts[1], range_str)

        if start_col > end_col or start_row > end_row:
            raise RangeParseError(f"invalid range: {range_str} (start cell must be above and left of end cell)")

        return CellRange(start_col=start_col, start_row=start_row, end_col=end_col, end_row=end_row)

    def cell_name(self, col: int, row: int) -> str:
        if not 1 <= col <= MAX_COLUMN or not 1 <= row <= MAX_ROW:
            raise RangeParseError(f"cell coordinates out of bounds: column={col}, row={row}")
        return f"{get_column_letter(col)}{row}"

    def range_ref(self, cell_range: CellRange) -> str:
        start = self.cell_name(cell_range.start_col, cell_range.start_row)
        end = self.cell_name(cell_range.end_col, cell_range.end_row)
        return f"{start}:{end}"

    def _parse_cell(self, cell: str, range_str: str) -> Tuple[int, int]:
        m = _cell_re.match(cell.strip())
        if not m:
            raise RangeParseError(f"invalid range: {range_str}")
        col = column_index_from_string(m.group(1).upper())
        row = int(m.group(2))
        if col > MAX_COLUMN or not 1 <= row <= MAX_ROW:
            raise RangeParseError(f"invalid range: {range_str} (cell {cell} out of bounds)")
        return col, row
