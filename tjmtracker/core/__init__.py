"""
TJM Tracker Core - Shared services for all modules.

Usage:
    from tjmtracker.core import get_db, get_config, get_logger, TJM_PATHS
"""

from tjmtracker.core.config import get_config, get_config_value, TJM_PATHS
from tjmtracker.core.db import get_db, migrate_all
from tjmtracker.core.errors import NotFoundError, TrackerError, ValidationError
from tjmtracker.core.logging import get_logger
from tjmtracker.core.periods import current_period, normalize_month

__all__ = [
    "get_config",
    "get_config_value",
    "TJM_PATHS",
    "get_db",
    "migrate_all",
    "get_logger",
    "TrackerError",
    "ValidationError",
    "NotFoundError",
    "current_period",
    "normalize_month",
]
