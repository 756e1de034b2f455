"""
Shared test fixtures for TJM Tracker.

Provides an in-memory database with all schemas, a Flask test client over a
temporary database file, a CLI runner, and seed data fixtures.
"""

import sqlite3
from contextlib import contextmanager
from datetime import date
from unittest.mock import patch

import pytest

from tjmtracker.core.db import apply_schemas


@pytest.fixture
def memory_db():
    """Provide an in-memory SQLite database with ALL schemas applied in FK order."""
    conn = sqlite3.connect(":memory:")
    conn.execute("PRAGMA foreign_keys = ON")
    conn.row_factory = sqlite3.Row
    apply_schemas(conn)

    yield conn
    conn.close()


@pytest.fixture
def mock_db(memory_db):
    """Patch get_db everywhere to return the in-memory database."""

    @contextmanager
    def _get_db(readonly=False):
        yield memory_db

    with patch("tjmtracker.core.db.get_db", _get_db), \
         patch("tjmtracker.core.get_db", _get_db), \
         patch("tjmtracker.projects.registry.get_db", _get_db), \
         patch("tjmtracker.collaborators.snapshots.get_db", _get_db), \
         patch("tjmtracker.reporting.recap.get_db", _get_db):
        yield memory_db


@pytest.fixture
def db_file(tmp_path, monkeypatch):
    """Point TJM_DATABASE at a fresh file under tmp_path."""
    path = tmp_path / "tracker.db"
    monkeypatch.setenv("TJM_DATABASE", str(path))
    return path


@pytest.fixture
def fixed_today(monkeypatch):
    """Pin the current period to March 2025."""
    today = date(2025, 3, 15)
    monkeypatch.setattr("tjmtracker.core.periods.get_today", lambda: today)
    return today


@pytest.fixture
def app(db_file, fixed_today):
    from tjmtracker.api import create_app

    web = create_app()
    web.config["TESTING"] = True
    return web


@pytest.fixture
def client(app):
    """Flask test client backed by a temporary database file."""
    return app.test_client()


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()


@pytest.fixture
def seed_projects(memory_db):
    """Insert two projects. Returns their ids (p1, p2)."""
    memory_db.execute("INSERT INTO projects (id, name) VALUES (1, 'Apollo')")
    memory_db.execute("INSERT INTO projects (id, name) VALUES (2, 'Borealis')")
    memory_db.commit()
    return 1, 2
