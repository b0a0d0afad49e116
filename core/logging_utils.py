# core/logging_utils.py

"""
Logging setup for the tracker CLI.

Models only ever call `logging.getLogger(__name__)`; handlers are attached here, once,
by the program entry point.
"""

from __future__ import annotations

import logging

from core.config import get_log_level

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(level: str | None = None) -> logging.Handler:
    """
    Attach a stream handler to the root logger.

    Args:
        level: Optional level name. See `core.config.get_log_level()` for the fallbacks.

    Returns:
        The attached handler (for later removal).
    """
    root = logging.getLogger()
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    root.addHandler(handler)
    root.setLevel(get_log_level(level))
    return handler


def teardown_logging(handler: logging.Handler) -> None:
    """
    Remove a handler previously attached by `setup_logging()`.
    """
    logging.getLogger().removeHandler(handler)
