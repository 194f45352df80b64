from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from src.logging_utils import configure_logging
from src.tool.api import handle_write_to_sheet

SEPARATOR = "=" * 78

EXIT_CODES = {"OK": 0, "INTERNAL_ERROR": 1, "INVALID_ARGUMENT": 2}


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Write a grid of values into an Excel sheet range.")
    ap.add_argument("request", help="JSON file with the excel_write_to_sheet arguments")
    ap.add_argument("--debug", action="store_true", help="verbose logging to the console")
    ns = ap.parse_args(argv)

    configure_logging(debug=ns.debug)

    try:
        arguments = json.loads(Path(ns.request).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        print(f"cannot read request {ns.request}: {e}", file=sys.stderr)
        return EXIT_CODES["INVALID_ARGUMENT"]

    res = handle_write_to_sheet(arguments)
    print(SEPARATOR)
    print(f"status: {res.status}")
    print(SEPARATOR)
    print(res.text)
    return EXIT_CODES[res.status]


if __name__ == "__main__":
    sys.exit(main())
