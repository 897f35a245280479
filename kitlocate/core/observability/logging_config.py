"""
Logging setup for kitlocate.

``main.cli`` calls ``setup_logging`` before any command runs; modules
just use ``logging.getLogger(__name__)``.

Diagnostics always land on stderr. Stdout is reserved for the resolved
tool path (or JSON), so scripts can capture it with ``$(kitlocate find ...)``.

Console level, highest priority first:
    --debug, --verbose, --quiet, $KITLOCATE_LOG_LEVEL, WARNING

A log file can be added with $KITLOCATE_LOG_FILE, optionally at its own
level via $KITLOCATE_LOG_FILE_LEVEL.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

LOG_LEVEL_ENV = "KITLOCATE_LOG_LEVEL"
LOG_FILE_ENV = "KITLOCATE_LOG_FILE"
LOG_FILE_LEVEL_ENV = "KITLOCATE_LOG_FILE_LEVEL"

# Console detail grows as the level drops: bare messages for warnings,
# logger names at INFO, source lines at DEBUG.
_CONSOLE_FORMATS: list[tuple[int, str, str | None]] = [
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d  %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
]
_CONSOLE_DEFAULT_FORMAT = "%(message)s"

_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d  %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def level_from_flags(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Pick the console level name from CLI flags and the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    env = os.environ if environ is None else environ
    return env.get(LOG_LEVEL_ENV, "WARNING")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Install kitlocate's handlers on the root logger.

    Replaces any handlers already present, so repeated calls never
    duplicate output.

    Args:
        level: Console level name; unknown names mean WARNING.
        log_file: Also write records to this file.
        log_file_level: Level for the file; defaults to ``level``.
    """
    console_level = _to_level(level)
    handlers: list[logging.Handler] = [_console_handler(console_level)]

    if log_file:
        file_level = _to_level(log_file_level) if log_file_level else console_level
        handlers.append(_file_handler(log_file, file_level))

    root = logging.getLogger()
    root.handlers.clear()
    for handler in handlers:
        root.addHandler(handler)
    # The root must let through whatever the chattiest handler wants
    root.setLevel(min(h.level for h in handlers))

    logging.raiseExceptions = False


def _console_handler(level: int) -> logging.Handler:
    fmt, datefmt = _CONSOLE_DEFAULT_FORMAT, None
    for threshold, candidate, candidate_datefmt in _CONSOLE_FORMATS:
        if level <= threshold:
            fmt, datefmt = candidate, candidate_datefmt
            break

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    return handler


def _file_handler(path: str, level: int) -> logging.Handler:
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
    return handler


def _to_level(name: str | None) -> int:
    """Map a level name to its number, WARNING when unrecognised."""
    value = logging.getLevelName(name.upper()) if name else None
    return value if isinstance(value, int) else logging.WARNING
