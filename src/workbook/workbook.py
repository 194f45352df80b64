from __future__ import annotations

import logging
import os
import shutil
import tempfile
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Iterator, List, Optional

from openpyxl import load_workbook
from openpyxl.workbook.workbook import Workbook
from openpyxl.worksheet.worksheet import Worksheet


BACKEND_NAME: str = "openpyxl"
MAX_SHEET_TITLE_LENGTH: int = 31
INVALID_SHEET_TITLE_CHARS = set(':\\/?*[]')
LOCK_ENV_VAR: str = "EXCEL_SHEET_WRITER_LOCK"

logger = logging.getLogger(__name__)


class WorkbookError(RuntimeError):
    pass


class SheetNotFoundError(WorkbookError):
    pass


class SheetExistsError(WorkbookError):
    pass


class WorkbookLockedError(WorkbookError):
    pass


def to_native(value: Any) -> Any:
    # openpyxl cannot store zone-aware timestamps; keep the wall-clock time
    if isinstance(value, datetime) and value.tzinfo is not None:
        return value.replace(tzinfo=None)
    return value


class WorksheetHandle:
    def __init__(self, ws: Worksheet) -> None:
        self._ws = ws
        self._released = False

    @property
    def name(self) -> str:
        return self._ws.title

    @property
    def released(self) -> bool:
        return self._released

    def set_value(self, cell: str, value: Any) -> None:
        c = self._worksheet()[cell]
        try:
            c.value = to_native(value)
        except Exception as e:
            raise WorkbookError(f"cannot write {cell}: {e}") from e
        if isinstance(value, str) and value.startswith("="):
            # literal text, not a formula
            c.data_type = "s"

    def set_formula(self, cell: str, formula: str) -> None:
        if not formula.startswith("="):
            raise WorkbookError(f"formula must start with '=': {formula!r}")
        c = self._worksheet()[cell]
        try:
            c.value = formula
        except Exception as e:
            raise WorkbookError(f"cannot write formula to {cell}: {e}") from e
        c.data_type = "f"

    def get_value(self, cell: str) -> Any:
        return self._worksheet()[cell].value

    def get_formula(self, cell: str) -> Optional[str]:
        c = self._worksheet()[cell]
        if c.data_type != "f":
            return None
        # ArrayFormula / DataTableFormula keep the source in .text
        return getattr(c.value, "text", None) or str(c.value)

    def release(self) -> None:
        self._released = True

    def _worksheet(self) -> Worksheet:
        if self._released:
            raise WorkbookError(f"worksheet handle released: {self._ws.title}")
        return self._ws


class WorkbookHandle:
    def __init__(self, path: Path, wb: Workbook) -> None:
        self._path = path
        self._wb = wb

    @property
    def path(self) -> Path:
        return self._path

    def backend_name(self) -> str:
        return BACKEND_NAME

    def sheet_names(self) -> List[str]:
        return list(self._wb.sheetnames)

    def create_sheet(self, name: str) -> None:
        self._check_sheet_title(name)
        # Excel sheet names are case-insensitive
        if name.lower() in (n.lower() for n in self._wb.sheetnames):
            raise SheetExistsError(f"sheet already exists: {name}")
        self._wb.create_sheet(title=name)
        logger.debug("created sheet %r in %s", name, self._path)

    @contextmanager
    def find_sheet(self, name: str) -> Iterator[WorksheetHandle]:
        if name not in self._wb.sheetnames:
            raise SheetNotFoundError(f"sheet not found: {name}")
        handle = WorksheetHandle(self._wb[name])
        try:
            yield handle
        finally:
            handle.release()

    def save(self) -> None:
        # Write next to the target, then swap: a failed save leaves the file untouched
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self._path.name}.", suffix=".tmp", dir=str(self._path.parent))
            os.close(fd)
        except OSError as e:
            raise WorkbookError(f"cannot save workbook {self._path}: {e}") from e
        tmp_path = Path(tmp_name)
        try:
            self._wb.save(str(tmp_path))
            shutil.copymode(str(self._path), str(tmp_path))
            os.replace(str(tmp_path), str(self._path))
        except Exception as e:
            tmp_path.unlink(missing_ok=True)
            raise WorkbookError(f"cannot save workbook {self._path}: {e}") from e

    def close(self) -> None:
        self._wb.close()

    def _check_sheet_title(self, name: str) -> None:
        if not name or not name.strip():
            raise WorkbookError("sheet name must not be empty")
        if len(name) > MAX_SHEET_TITLE_LENGTH:
            raise WorkbookError(f"sheet name longer than {MAX_SHEET_TITLE_LENGTH} characters: {name}")
        bad = sorted(ch for ch in set(name) if ch in INVALID_SHEET_TITLE_CHARS)
        if bad:
            raise WorkbookError(f"invalid character(s) {''.join(bad)!r} in sheet name: {name}")


class WorkbookOpener:
    def __init__(self, use_lock: Optional[bool] = None) -> None:
        if use_lock is None:
            use_lock = os.environ.get(LOCK_ENV_VAR, "1") != "0"
        self._use_lock = use_lock

    @contextmanager
    def open(self, file_path: str) -> Iterator[WorkbookHandle]:
        path = Path(file_path)
        if not path.is_file():
            raise WorkbookError(f"workbook not found: {path}")

        lock_path = self.lock_path(path)
        if self._use_lock:
            self._acquire_lock(lock_path)
        try:
            try:
                wb = load_workbook(str(path), keep_vba=path.suffix.lower() == ".xlsm")
            except Exception as e:
                raise WorkbookError(f"cannot open workbook {path}: {e}") from e
            handle = WorkbookHandle(path, wb)
            try:
                yield handle
            finally:
                handle.close()
        finally:
            if self._use_lock:
                self._release_lock(lock_path)

    def lock_path(self, path: Path) -> Path:
        return path.parent / f".{path.name}.lock"

    def _acquire_lock(self, lock_path: Path) -> None:
        try:
            fd = os.open(str(lock_path), os.O_CREAT | os.O_EXCL | os.O_WRONLY)
            os.close(fd)
        except FileExistsError:
            raise WorkbookLockedError(f"workbook is locked by another writer: {lock_path}")

    def _release_lock(self, lock_path: Path) -> None:
        try:
            lock_path.unlink(missing_ok=True)
        except OSError:
            logger.warning("cannot remove lock file %s", lock_path)
