"""
Logging configuration for TJM Tracker.

Every module logger writes to stderr so CLI output on stdout stays parseable.
Level and format come from the ``logging`` section of config.yaml.
"""

import logging
import sys
from typing import Dict, Optional

from tjmtracker.core.config import get_config_value

_DEFAULT_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"

_loggers: Dict[str, logging.Logger] = {}


def _configured_level() -> int:
    name = str(get_config_value("logging", "level", default="INFO")).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a configured logger for a module.

    Args:
        name: Logger name (e.g., 'tjmtracker.projects', 'tjmtracker.api')
        level: Logging level (default: config logging.level, else INFO)

    Returns:
        Configured logger
    """
    if name in _loggers:
        return _loggers[name]

    level = level if level is not None else _configured_level()
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(
            get_config_value("logging", "format", default=_DEFAULT_FORMAT),
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        logger.addHandler(handler)

    _loggers[name] = logger
    return logger
