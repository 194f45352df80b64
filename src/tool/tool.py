from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Mapping, Optional, Tuple

from src.sheetwriter.sheetwriter import InvalidArgumentError, SheetWriter, SheetWriterError
from .model import ToolResult


TOOL_NAME: str = "excel_write_to_sheet"

TOOL_DEFINITION: Dict[str, Any] = {
    "name": TOOL_NAME,
    "description": "Write values to the Excel sheet",
    "inputSchema": {
        "type": "object",
        "properties": {
            "fileAbsolutePath": {
                "type": "string",
                "description": "Absolute path to the Excel file",
            },
            "sheetName": {
                "type": "string",
                "description": "Sheet name in the Excel file",
            },
            "newSheet": {
                "type": "boolean",
                "description": "Create a new sheet if true, otherwise write to the existing sheet",
            },
            "range": {
                "type": "string",
                "description": 'Range of cells in the Excel sheet (e.g., "A1:C10")',
            },
            "values": {
                "type": "array",
                "description": 'Values to write to the Excel sheet. If the value is a formula, it should start with "="',
                "items": {
                    "type": "array",
                    "items": {
                        "anyOf": [
                            {"type": "string"},
                            {"type": "number"},
                            {"type": "boolean"},
                            {"type": "null"},
                        ]
                    },
                },
            },
        },
        "required": ["fileAbsolutePath", "sheetName", "newSheet", "range", "values"],
    },
}

_SCALAR_TYPES = (str, int, float, bool, type(None))

logger = logging.getLogger(__name__)


class WriteToSheetTool:
    def __init__(self, writer: Optional[SheetWriter] = None) -> None:
        self._writer = writer or SheetWriter()

    def handle(self, arguments: Optional[Mapping[str, Any]]) -> ToolResult:
        if arguments is not None and not isinstance(arguments, Mapping):
            return self._result("INVALID_ARGUMENT", "arguments must be an object")
        args, issues = self._parse_arguments(arguments or {})
        if issues:
            logger.warning("invalid arguments for %s: %s", TOOL_NAME, "; ".join(issues))
            return self._result("INVALID_ARGUMENT", "\n".join(issues))

        try:
            res = self._writer.write_to_sheet(
                args["fileAbsolutePath"],
                args["sheetName"],
                args["newSheet"],
                args["range"],
                args["values"],
            )
        except InvalidArgumentError as e:
            return self._result("INVALID_ARGUMENT", str(e))
        except SheetWriterError as e:
            return self._result("INTERNAL_ERROR", str(e))
        return self._result("OK", res.report)

    def _parse_arguments(self, raw: Mapping[str, Any]) -> Tuple[Dict[str, Any], List[str]]:
        args: Dict[str, Any] = {}
        issues: List[str] = []

        path = raw.get("fileAbsolutePath")
        if not isinstance(path, str) or not path:
            issues.append("fileAbsolutePath: is required and must be a string")
        elif not os.path.isabs(path):
            issues.append(f"fileAbsolutePath: must be an absolute path: {path}")
        else:
            args["fileAbsolutePath"] = path

        sheet_name = raw.get("sheetName")
        if not isinstance(sheet_name, str) or not sheet_name:
            issues.append("sheetName: is required and must be a string")
        else:
            args["sheetName"] = sheet_name

        new_sheet = raw.get("newSheet", False)
        if new_sheet is None:
            new_sheet = False
        if not isinstance(new_sheet, bool):
            issues.append("newSheet: must be a boolean")
        else:
            args["newSheet"] = new_sheet

        range_str = raw.get("range")
        if not isinstance(range_str, str) or not range_str:
            issues.append("range: is required and must be a string")
        else:
            args["range"] = range_str

        values = raw.get("values")
        grid_issue = self._check_grid(values)
        if grid_issue:
            issues.append(f"values: {grid_issue}")
        else:
            args["values"] = [list(row) for row in values]

        return args, issues

    def _check_grid(self, values: Any) -> Optional[str]:
        if values is None:
            return "is required"
        if not isinstance(values, (list, tuple)):
            return "must be a 2D array"
        for i, row in enumerate(values):
            if not isinstance(row, (list, tuple)):
                return "must be a 2D array"
            for j, v in enumerate(row):
                if not isinstance(v, _SCALAR_TYPES):
                    return f"row {i} column {j}: unsupported value type {type(v).__name__}"
        return None

    def _result(self, status: str, text: str) -> ToolResult:
        return ToolResult(status=status, text=text)

