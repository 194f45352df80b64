from __future__ import annotations

from typing import Sequence

from src.classifier.model import Scalar
from .model import WriteResult
from .sheetwriter import InvalidArgumentError, SheetWriter, SheetWriterError


def write_to_sheet(
    file_path: str,
    sheet_name: str,
    new_sheet: bool,
    range_str: str,
    values: Sequence[Sequence[Scalar]],
) -> WriteResult:
    """Public API (SheetWriter)

    Contract:
    - Range and grid shape are validated before the workbook is touched.
    - new_sheet=True creates sheet_name first (duplicate -> SheetWriterError).
    - Cells are written row-major; "=..." strings as formulas, ISO date strings as
      timestamps, everything else unchanged.
    - First failure aborts; the file on disk only changes on a successful save.
    - Report table shows formulas if any cell got a formula, values otherwise.
    - Caller errors -> InvalidArgumentError, everything else -> SheetWriterError.
    """
    return SheetWriter().write_to_sheet(file_path, sheet_name, new_sheet, range_str, values)
