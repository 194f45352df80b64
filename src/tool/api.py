from __future__ import annotations

from typing import Any, Mapping, Optional

from .model import ToolResult
from .tool import TOOL_DEFINITION, TOOL_NAME, WriteToSheetTool


def handle_write_to_sheet(arguments: Optional[Mapping[str, Any]]) -> ToolResult:
    """Public API (Tool: excel_write_to_sheet)

    Contract:
    - Arguments: fileAbsolutePath (absolute str), sheetName (str), newSheet (bool, default false),
      range (str, e.g. "A1:C10"), values (2D array of str/number/bool/null).
    - All argument issues are reported together -> INVALID_ARGUMENT.
    - Range / grid shape / unknown sheet -> INVALID_ARGUMENT.
    - Open / create-sheet / write / save failures -> INTERNAL_ERROR (file unchanged).
    - OK -> HTML report (table, backend, sheet name, range).
    """
    return WriteToSheetTool().handle(arguments)
