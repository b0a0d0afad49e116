# core/config.py

"""
Program-wide constants and environment-driven settings.
"""

import logging
import os

# assignment names are measured in UTF-8 bytes
MAX_NAME_LEN = 32

# ceiling for a single weight and for the sum of weights within a class
MAX_TOTAL_VALUE = 100.0

# non-zero percentages below this are probably fractions typed as percentages
MIN_PERCENT_WARNING = 0.1

DEFAULT_TRACKER_NAME = "Default Tracker"

LOG_LEVEL_ENV = "TRACKER_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


def get_log_level(override: str | None = None) -> int:
    """
    Resolves the logging level for the program.

    Args:
        override (str | None): An explicit level name (e.g. from a command-line flag). Takes precedence when given.

    Returns:
        The numeric logging level.

    Raises:
        ValueError: If the resolved name is not a recognized logging level.

    Notes:
        - Falls back to the `TRACKER_LOG_LEVEL` environment variable, then to `WARNING`.
    """
    name = override or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL
    level = logging.getLevelName(name.strip().upper())

    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: '{name}'.")

    return level
