from __future__ import annotations

import logging
from typing import List, Sequence

from src.classifier.api import classify_value
from src.classifier.model import Formula, Scalar
from src.gridvalidator.api import validate_grid
from src.gridvalidator.gridvalidator import GridShapeError
from src.rangeparser.api import cell_name, parse_range
from src.rangeparser.model import CellRange
from src.rangeparser.rangeparser import RangeParseError
from src.report.api import render_formula_table, render_values_table
from src.report.report import ReportError
from src.workbook.api import open_workbook
from src.workbook.workbook import SheetNotFoundError, WorkbookError, WorkbookHandle, WorksheetHandle
from .model import WriteOutcome, WriteResult


logger = logging.getLogger(__name__)


class InvalidArgumentError(RuntimeError):
    """Caller-correctable request problem (range, grid shape, unknown sheet)."""


class SheetWriterError(RuntimeError):
    """Internal failure. Nothing was persisted."""


class SheetWriter:
    def write_to_sheet(
        self,
        file_path: str,
        sheet_name: str,
        new_sheet: bool,
        range_str: str,
        values: Sequence[Sequence[Scalar]],
    ) -> WriteResult:
        logger.info("write %s!%s in %s (new_sheet=%s)", sheet_name, range_str, file_path, new_sheet)

        # Validation before anything is opened or mutated
        try:
            cell_range = parse_range(range_str)
            validate_grid(values, cell_range)
        except (RangeParseError, GridShapeError) as e:
            logger.warning("rejected request: %s", e)
            raise InvalidArgumentError(str(e)) from e

        try:
            with open_workbook(file_path) as workbook:
                if new_sheet:
                    workbook.create_sheet(sheet_name)
                with workbook.find_sheet(sheet_name) as worksheet:
                    outcome = self._write_grid(worksheet, cell_range, values)
                    workbook.save()
                    report = self._build_report(workbook, worksheet, cell_range, sheet_name, range_str, outcome)
                backend = workbook.backend_name()
        except SheetNotFoundError as e:
            logger.warning("rejected request: %s", e)
            raise InvalidArgumentError(str(e)) from e
        except (WorkbookError, RangeParseError, ReportError) as e:
            logger.exception("write to %s failed", file_path)
            raise SheetWriterError(str(e)) from e

        logger.info("wrote %d cell(s) to %s!%s", outcome.cells_written, sheet_name, range_str)
        return WriteResult(
            file_path=file_path,
            sheet_name=sheet_name,
            range_ref=range_str,
            backend=backend,
            wrote_formula=outcome.any_formula_written,
            cells_written=outcome.cells_written,
            report=report,
        )

    def _write_grid(
        self,
        worksheet: WorksheetHandle,
        cell_range: CellRange,
        values: Sequence[Sequence[Scalar]],
    ) -> WriteOutcome:
        outcome = WriteOutcome()
        # Row-major, so addresses and writes happen in a fixed order
        for i, row in enumerate(values):
            for j, raw in enumerate(row):
                cell = cell_name(cell_range.start_col + j, cell_range.start_row + i)
                classified = classify_value(raw)
                if isinstance(classified, Formula):
                    worksheet.set_formula(cell, classified.source)
                    outcome.any_formula_written = True
                else:
                    # Date / Literal
                    worksheet.set_value(cell, classified.value)
                outcome.cells_written += 1
        return outcome

    def _build_report(
        self,
        workbook: WorkbookHandle,
        worksheet: WorksheetHandle,
        cell_range: CellRange,
        sheet_name: str,
        range_str: str,
        outcome: WriteOutcome,
    ) -> str:
        # One formula anywhere switches the whole table to formula display
        if outcome.any_formula_written:
            table = render_formula_table(worksheet, cell_range)
        else:
            table = render_values_table(worksheet, cell_range)

        lines: List[str] = [
            "<h2>Written Sheet</h2>",
            table,
            "<h2>Metadata</h2>",
            "<ul>",
            f"<li>backend: {workbook.backend_name()}</li>",
            f"<li>sheet name: {sheet_name}</li>",
            f"<li>read range: {range_str}</li>",
            "</ul>",
            "<h2>Notice</h2>",
            "<p>Values wrote successfully.</p>",
        ]
        return "\n".join(lines) + "\n"
