"""Logging setup shared by the dtsgen CLI, batch runner and service."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List

_LOGGER_NAME = "dtsgen"

CONSOLE_FORMAT = "[dtsgen] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return `dtsgen.<name>`, or the package logger when no name is given."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Route `dtsgen.*` records to stderr and, when given, to `log_file`.

    Declarations may be written to stdout, so console records always go to
    stderr. A batch run logs one `Processing:` line per module; the file sink
    keeps that history with timestamps. Calling this again replaces (and
    closes) the handlers installed by the previous call.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    sinks: List[tuple[logging.Handler, str]] = [
        (logging.StreamHandler(sys.stderr), CONSOLE_FORMAT)
    ]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        sinks.append((logging.FileHandler(log_file, encoding="utf-8"), FILE_FORMAT))

    for handler, fmt in sinks:
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(handler)
    return logger


__all__ = ["configure_logging", "get_logger"]
