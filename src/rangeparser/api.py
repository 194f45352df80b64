from __future__ import annotations

from .model import CellRange
from .rangeparser import RangeParser, RangeParseError


def parse_range(range_str: str) -> CellRange:
    """Public API (RangeParser)

    Contract:
    - Grammar: <col><row>:<col><row> (e.g. "A1:C10"), inclusive bounds, 1-based.
    - Column letters are case-insensitive; "$" markers and a "Sheet!" prefix are ignored.
    - A single cell ("B3") is the range B3:B3.
    - Start must not be right of / below end.
    - Malformed input -> RangeParseError.
    """
    return RangeParser().parse_range(range_str)


def cell_name(col: int, row: int) -> str:
    """(3, 10) -> "C10". Out-of-bounds coordinates raise RangeParseError."""
    return RangeParser().cell_name(col, row)


def range_ref(cell_range: CellRange) -> str:
    return RangeParser().range_ref(cell_range)
