# src/goal_planner/logging_setup.py

"""
Logging for the console app.

The REPL owns stdout, so console logs go to stderr and are kept sparse;
the log file under the data directory gets everything.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "planner.log"

# Most specific prefix first. Anything unlisted (openai, httpx, py.warnings) is ERROR+.
_CONSOLE_THRESHOLDS: tuple[tuple[str, int], ...] = (
    ("goal_planner.llm.client", logging.WARNING),  # one line per model attempt
    ("goal_planner.", logging.NOTSET),
)
_DEFAULT_CONSOLE_THRESHOLD = logging.ERROR

_QUIET_LIBRARIES = ("httpx", "httpcore", "openai")


def console_threshold(logger_name: str) -> int:
    for prefix, level in _CONSOLE_THRESHOLDS:
        if logger_name.startswith(prefix):
            return level
    return _DEFAULT_CONSOLE_THRESHOLD


class _ConsoleNoiseFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= console_threshold(record.name)


def parse_level(name: str | None, default: int = logging.WARNING) -> int:
    """'info' -> logging.INFO; unknown names fall back to `default`."""
    level = logging.getLevelName(str(name or "").strip().upper())
    return level if isinstance(level, int) else default


def setup_logging(level_name: str | None, *, log_dir: str | Path) -> Path:
    """
    Install the console and file handlers on the root logger.

    Replaces any handlers already there, so calling it again is harmless.
    Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(parse_level(level_name))
    console.addFilter(_ConsoleNoiseFilter())

    file_handler = logging.FileHandler(log_file, encoding="utf-8")

    for handler in (console, file_handler):
        handler.setFormatter(fmt)
    logging.basicConfig(level=logging.DEBUG, handlers=[console, file_handler], force=True)

    logging.captureWarnings(True)
    for name in _QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)

    return log_file
