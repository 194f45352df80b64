from __future__ import annotations

from typing import Sequence

from src.classifier.model import Scalar
from src.rangeparser.model import CellRange
from .gridvalidator import GridShapeError, GridValidator


def validate_grid(values: Sequence[Sequence[Scalar]], cell_range: CellRange) -> None:
    """Public API (GridValidator)

    Contract:
    - len(values) must equal cell_range.row_size.
    - Every row (checked in order) must have cell_range.col_size items.
    - First mismatch -> GridShapeError naming the row index, actual and expected size.
    - Pure: no side effects.
    """
    GridValidator().validate(values, cell_range)
