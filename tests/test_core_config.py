"""Tests for config loading and TJM_PATHS path resolution."""

from tjmtracker.core.config import TJM_PATHS, _PACKAGE_DIR, get_config, get_config_value


def test_get_config_returns_dict():
    config = get_config(reload=True)
    assert isinstance(config, dict)
    assert "destinations" in config


def test_get_config_caching():
    c1 = get_config()
    c2 = get_config()
    assert c1 is c2


def test_get_config_reload_returns_fresh():
    get_config()
    c2 = get_config(reload=True)
    c3 = get_config()
    assert c3 is c2


def test_get_config_value_nested():
    assert get_config_value("server", "port") == 5000


def test_get_config_value_missing_returns_default():
    result = get_config_value("nonexistent", "deep", "path", default="fallback")
    assert result == "fallback"


def test_database_path_is_absolute(monkeypatch):
    monkeypatch.delenv("TJM_DATABASE", raising=False)
    assert TJM_PATHS.database.is_absolute()
    assert str(TJM_PATHS.database).endswith("tjmtracker.db")
    assert str(TJM_PATHS.database).startswith(str(_PACKAGE_DIR))


def test_database_env_override(monkeypatch, tmp_path):
    target = tmp_path / "other.db"
    monkeypatch.setenv("TJM_DATABASE", str(target))
    assert TJM_PATHS.database == target


def test_frontend_dir_holds_templates():
    assert (TJM_PATHS.frontend / "templates" / "base.html").exists()
