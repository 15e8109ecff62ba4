"""
Logging configuration — set up once by the CLI entrypoint.

Every module uses ``logger = logging.getLogger(__name__)`` and inherits
this config. Package-tool output itself is never routed through logging:
the tools write straight to the terminal.

Levels are resolved in precedence order:
    --debug  >  --verbose  >  --quiet  >  ARCHUP_LOG_LEVEL  >  WARNING

Optional file output via ARCHUP_LOG_FILE / ARCHUP_LOG_FILE_LEVEL.
"""

from __future__ import annotations

import logging
import os
import sys

# ── Format strings ──────────────────────────────────────────────

# WARNING and above: the message is all the user needs
_FMT_MINIMAL = "%(message)s"

# INFO: which module decided what
_FMT_VERBOSE = "%(asctime)s [%(name)s] %(message)s"

# DEBUG: every command line, with file:line
_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"

_DATEFMT_CONSOLE = "%H:%M:%S"

# File output is always full detail
_FMT_FILE = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"

LOG_LEVEL_ENV = "ARCHUP_LOG_LEVEL"
LOG_FILE_ENV = "ARCHUP_LOG_FILE"
LOG_FILE_LEVEL_ENV = "ARCHUP_LOG_FILE_LEVEL"


def resolve_level(debug: bool = False, verbose: bool = False, quiet: bool = False) -> str:
    """Pick the console level from CLI flags, falling back to the env var."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return os.environ.get(LOG_LEVEL_ENV, "WARNING")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Configure the root logger for the whole process.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to a log file.
        log_file_level: Optional separate level for the log file.
            Defaults to the console level.
    """
    numeric_level = _parse_level(level)

    if numeric_level <= logging.DEBUG:
        fmt = _FMT_DEBUG
    elif numeric_level <= logging.INFO:
        fmt = _FMT_VERBOSE
    else:
        fmt = _FMT_MINIMAL

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric_level)
    console.setFormatter(
        logging.Formatter(fmt, datefmt=None if fmt == _FMT_MINIMAL else _DATEFMT_CONSOLE)
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)

    effective_level = numeric_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else numeric_level
        effective_level = min(effective_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)

    root.setLevel(effective_level)

    # A broken log handler must not abort an upgrade halfway through
    logging.raiseExceptions = False


def _parse_level(level: str | None) -> int:
    """Convert a level name to its numeric constant (WARNING if unknown)."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
