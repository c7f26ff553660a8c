"""Logging setup for the itchy command line.

Search results go to stdout, so diagnostics are written to stderr. Every
module logs below the ``itchy`` logger (``itchy.sync``, ``itchy.database``,
...) and the console shows which one a message came from.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

__all__ = ["CONSOLE_FORMAT", "FILE_FORMAT", "logger", "setup_logging"]

logger = logging.getLogger("itchy")

CONSOLE_FORMAT = "[%(levelname)s] %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_CONSOLE_HANDLER = "itchy-console"


def setup_logging(
    level: int = logging.INFO,
    log_file: Path | None = None,
) -> None:
    """Install the console handler and an optional file handler.

    The console handler is installed once; later calls adjust its level.
    File handlers always record DEBUG, so a log file keeps the failing SQL
    of a run even without ``--verbose``.

    Args:
        level: Console logging level (default: INFO).
        log_file: Optional path to a log file.
    """
    console = next((h for h in logger.handlers if h.get_name() == _CONSOLE_HANDLER), None)
    if console is None:
        console = logging.StreamHandler(sys.stderr)
        console.set_name(_CONSOLE_HANDLER)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        logger.addHandler(console)
    console.setLevel(level)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)

    has_file = any(isinstance(h, logging.FileHandler) for h in logger.handlers)
    logger.setLevel(logging.DEBUG if has_file else level)
