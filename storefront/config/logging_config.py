# storefront/config/logging_config.py

"""Per-run logging for a storefront session.

Each launch writes ``logs/run_YYYYMMDD_HHMMSS.log``. Every ``storefront.*``
logger feeds that one file, so a session's cart changes, searches, API
calls and checkout attempts read as a single timeline. Noisy modules are
capped through ``Settings.LOG_LEVELS``; the stderr handler follows
``STOREFRONT_LOG_LEVEL`` so the TUI and JSON output stay clean by default.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from storefront.config.settings import Settings

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)-18s | "
    "%(funcName)s:%(lineno)d | %(message)s"
)
_CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _apply_module_levels() -> None:
    for name, level in Settings.LOG_LEVELS.items():
        logging.getLogger(name).setLevel(level)


def setup_logging() -> Path:
    """Attach the session's file and stderr handlers to ``storefront``.

    Safe to call more than once; later calls keep the first handlers and
    only re-apply the per-module levels.

    Returns:
        Path of the log file for this run.
    """
    logs_dir: Path = Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = logs_dir / f"run_{datetime.now():%Y%m%d_%H%M%S}.log"

    app_logger = logging.getLogger("storefront")
    app_logger.setLevel(logging.DEBUG)
    _apply_module_levels()

    if app_logger.handlers:
        return log_file

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, _DATE_FORMAT))

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(Settings.CONSOLE_LOG_LEVEL)
    console_handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))

    app_logger.addHandler(file_handler)
    app_logger.addHandler(console_handler)

    app_logger.info(
        "Session log %s (console level %s)",
        log_file,
        Settings.CONSOLE_LOG_LEVEL,
    )
    return log_file
