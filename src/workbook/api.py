from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

from .workbook import WorkbookHandle, WorkbookOpener


@contextmanager
def open_workbook(file_path: str, use_lock: Optional[bool] = None) -> Iterator[WorkbookHandle]:
    """Public API (Workbook)

    Contract:
    - Existing .xlsx/.xlsm only; a missing or unreadable file raises WorkbookError.
    - One writer per file: create-exclusive lock file .<filename>.lock next to the
      workbook (disable with EXCEL_SHEET_WRITER_LOCK=0); held until exit.
    - find_sheet() is a context manager; the worksheet handle is released on exit.
    - save() is atomic (temp file + replace).
    """
    with WorkbookOpener(use_lock).open(file_path) as handle:
        yield handle
