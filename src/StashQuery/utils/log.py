"""StashQuery logging.

Console lines look like ``06-15 15:30:00 [INFO] Matched 3 of 120 records``.
The console follows the configured level. An optional per-action file always
records DEBUG, so the compiled filters of every query land in the file even
when the console is quiet.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Final

LINE_FORMAT: Final = "%(asctime)s [%(tag)s] %(message)s"
DATE_FORMAT: Final = "%m-%d %H:%M:%S"

_TAGS: Final[dict[int, str]] = {
    logging.DEBUG: "DEBG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERRO",
    logging.CRITICAL: "ERRO",
}

log = logging.getLogger("StashQuery")


def _tag(record: logging.LogRecord) -> bool:
    record.tag = _TAGS.get(record.levelno, record.levelname[:4])
    return True


def _prepare(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LINE_FORMAT, DATE_FORMAT))
    handler.addFilter(_tag)
    return handler


def level_number(name: str | None) -> int:
    """Map a level name to its number; unknown names fall back to INFO."""
    number = logging.getLevelName((name or "INFO").upper())
    return number if isinstance(number, int) else logging.INFO


def action_log_path(log_dir: str | Path, action: str, *, now: datetime | None = None) -> Path:
    """Return ``<log_dir>/<action>/<action>_<mmddHHMMSS>.log``."""
    stamp = (now or datetime.now()).strftime("%m%d%H%M%S")
    return Path(log_dir or "log") / action / f"{action}_{stamp}.log"


def configure_logging(
    *,
    level: str = "INFO",
    action: str | None = None,
    log_to_file: bool = False,
    log_dir: str = "log",
) -> Path | None:
    """Install the console handler and, if asked, a DEBUG file handler.

    Calling it again replaces the handlers of the previous call.

    Args:
        level: Console level name (e.g., INFO, DEBUG).
        action: CLI action name; required for the file handler.
        log_to_file: Mirror records to ``action_log_path(log_dir, action)``.
        log_dir: Base directory for log files.

    Returns:
        Path of the log file, or None when logging to console only.
    """
    console_level = level_number(level)
    handlers = [_prepare(logging.StreamHandler(), console_level)]

    log_path = None
    if log_to_file and action:
        log_path = action_log_path(log_dir, action)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(_prepare(logging.FileHandler(log_path, encoding="utf-8"), logging.DEBUG))

    for old in list(log.handlers):
        log.removeHandler(old)
        old.close()
    for handler in handlers:
        log.addHandler(handler)
    log.setLevel(min(handler.level for handler in handlers))
    log.propagate = False
    return log_path
