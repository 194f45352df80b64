from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path


LOG_DIR_ENV_VAR = "EXCEL_SHEET_WRITER_LOG_DIR"
LOG_FILE_NAME = "excel_sheet_writer.log"
LOG_MAX_BYTES = 1_000_000
LOG_BACKUP_COUNT = 3
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

FILE_HANDLER_NAME = "excel_sheet_writer.file"
CONSOLE_HANDLER_NAME = "excel_sheet_writer.console"


def configure_logging(*, debug: bool = False, log_path: str | None = None) -> None:
    """Route log records to a rotating log file, and to stderr in debug mode.

    Handlers are identified by name, so repeated calls only adjust the level
    and add the console handler when debug is switched on later.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if debug else logging.INFO)

    installed = {h.get_name() for h in root.handlers}
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    if FILE_HANDLER_NAME not in installed:
        file_handler = RotatingFileHandler(
            _resolve_log_path(log_path),
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        _install(root, file_handler, FILE_HANDLER_NAME, formatter)

    if debug and CONSOLE_HANDLER_NAME not in installed:
        _install(root, logging.StreamHandler(), CONSOLE_HANDLER_NAME, formatter)


def _resolve_log_path(log_path: str | None) -> str:
    if log_path is not None:
        return log_path
    env_log_dir = os.environ.get(LOG_DIR_ENV_VAR)
    log_dir = Path(env_log_dir) if env_log_dir else Path.cwd() / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    return str(log_dir / LOG_FILE_NAME)


def _install(root: logging.Logger, handler: logging.Handler, name: str, formatter: logging.Formatter) -> None:
    handler.set_name(name)
    handler.setFormatter(formatter)
    root.addHandler(handler)
