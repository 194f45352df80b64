from __future__ import annotations

from typing import Sequence

from src.classifier.model import Scalar
from src.rangeparser.model import CellRange


class GridShapeError(RuntimeError):
    pass


class GridValidator:
    def validate(self, values: Sequence[Sequence[Scalar]], cell_range: CellRange) -> None:
        if len(values) != cell_range.row_size:
            raise GridShapeError(
                f"number of rows in data ({len(values)}) does not match range size ({cell_range.row_size})"
            )
        for i, row in enumerate(values):
            if len(row) != cell_range.col_size:
                raise GridShapeError(
                    f"number of columns in row {i} ({len(row)}) does not match range size ({cell_range.col_size})"
                )
