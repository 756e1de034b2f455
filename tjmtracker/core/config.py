"""
Configuration management for TJM Tracker.

Loads config.yaml and provides type-safe access to settings.
"""

import os
import yaml
from pathlib import Path
from typing import Any, Dict, Optional

# Config file lives alongside the tjmtracker package
_PACKAGE_DIR = Path(__file__).parent.parent.resolve()
CONFIG_PATH = _PACKAGE_DIR / "config.yaml"

# Cache for loaded config
_config_cache: Optional[Dict[str, Any]] = None


def get_config(reload: bool = False) -> Dict[str, Any]:
    """
    Load configuration from config.yaml.

    Args:
        reload: Force reload even if cached

    Returns:
        Configuration dictionary
    """
    global _config_cache

    if _config_cache is not None and not reload:
        return _config_cache

    if not CONFIG_PATH.exists():
        raise FileNotFoundError(f"Config file not found: {CONFIG_PATH}")

    with open(CONFIG_PATH, "r", encoding="utf-8") as f:
        _config_cache = yaml.safe_load(f) or {}

    return _config_cache


def get_config_value(*keys: str, default: Any = None) -> Any:
    """
    Get a nested config value safely.

    Args:
        *keys: Path of keys to traverse (e.g., 'server', 'port')
        default: Value to return if key not found

    Example:
        port = get_config_value('server', 'port', default=5000)
    """
    config = get_config()

    for key in keys:
        if isinstance(config, dict) and key in config:
            config = config[key]
        else:
            return default

    return config


class TrackerPaths:
    """
    Centralized path access for TJM Tracker.

    Paths come from config.yaml with sensible fallbacks. The TJM_DATABASE
    environment variable overrides the database location.

    Usage:
        from tjmtracker.core.config import TJM_PATHS
        db = TJM_PATHS.database
    """

    def __init__(self):
        self._config = None

    def _ensure_config(self):
        if self._config is None:
            self._config = get_config()

    def _resolve(self, raw: str) -> Path:
        """Resolve a path: if relative, resolve against _PACKAGE_DIR."""
        p = Path(raw)
        if not p.is_absolute():
            p = _PACKAGE_DIR / p
        return p

    @property
    def database(self) -> Path:
        env_path = os.environ.get("TJM_DATABASE")
        if env_path:
            return self._resolve(env_path)
        self._ensure_config()
        raw = self._config.get("destinations", {}).get("database", "data/tjmtracker.db")
        return self._resolve(raw)

    @property
    def frontend(self) -> Path:
        return _PACKAGE_DIR / "frontend"

    @property
    def root(self) -> Path:
        return _PACKAGE_DIR


# Singleton instance
TJM_PATHS = TrackerPaths()
