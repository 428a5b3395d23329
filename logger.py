"""
logger.py
Logging setup for the console. Modules log through get_logger("<module>"), children of
the "imani" logger whose handlers are attached once here.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import config

APP_LOGGER = "imani"


def setup_logger(
    name: str = APP_LOGGER,
    level: int | str | None = None,
    log_file: Path | None = None,
) -> logging.Logger:
    """
    Configure and return the application logger.
    Idempotent: a logger that already has handlers is returned untouched.
    """
    log = logging.getLogger(name)
    if log.handlers:
        return log

    log.setLevel(level if level is not None else config.log_level())
    fmt = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    h = logging.StreamHandler(sys.stderr)
    h.setFormatter(fmt)
    log.addHandler(h)

    log_file = log_file or config.log_file()
    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setFormatter(fmt)
        log.addHandler(fh)

    return log


def get_logger(module: str) -> logging.Logger:
    """Child of the application logger, e.g. get_logger("store") -> imani.store."""
    return logging.getLogger(f"{APP_LOGGER}.{module}")
