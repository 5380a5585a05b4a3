"""Logging helpers for the sheetmerge package."""
from __future__ import annotations

import logging

_LOG_CONFIGURED = False


def _configure_logging() -> None:
    """Attach one console handler to the package logger, once."""
    global _LOG_CONFIGURED
    if _LOG_CONFIGURED:
        return

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(logging.INFO)

    root_logger = logging.getLogger("sheetmerge")
    root_logger.setLevel(logging.INFO)
    root_logger.addHandler(console_handler)
    root_logger.propagate = False

    _LOG_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger scoped under ``sheetmerge``."""
    _configure_logging()
    return logging.getLogger(f"sheetmerge.{name}")
