"""
Centralized logging configuration.

Usage:
    from workforce.logging_config import setup_logging, get_logger

    setup_logging()
    logger = get_logger(__name__)

Environment Variables:
    WORKFORCE_DEBUG: Set to "true" to enable debug logging
"""

from __future__ import annotations

import logging
import os
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"

_configured = False


def is_debug_enabled() -> bool:
    return os.getenv("WORKFORCE_DEBUG", "false").lower() in ("true", "1", "yes")


def setup_logging(level: int | None = None) -> None:
    """Attach a single stream handler to the package logger (idempotent)."""
    global _configured
    if _configured:
        return

    if level is None:
        level = logging.DEBUG if is_debug_enabled() else logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root = logging.getLogger("workforce")
    root.setLevel(level)
    root.addHandler(handler)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Get a module logger under the package namespace."""
    if not name.startswith("workforce"):
        name = f"workforce.{name}"
    return logging.getLogger(name)
