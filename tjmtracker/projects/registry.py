"""
Project Registry Business Logic

Project names referenced by id from collaborator snapshots.
No Flask imports — this module is used by both CLI and API layers.
"""

import sqlite3
from typing import Any, Dict, Iterable, List, Optional

from tjmtracker.core import (
    NotFoundError,
    ValidationError,
    get_config_value,
    get_db,
    get_logger,
)

logger = get_logger("tjmtracker.projects.registry")

UNKNOWN_PROJECT = "Unknown project"


def _to_dict(row: sqlite3.Row) -> Dict[str, Any]:
    return {"id": row["id"], "name": row["name"]}


def _clean_name(name: Optional[str]) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Project name is required")
    return cleaned


def list_projects(conn: Optional[sqlite3.Connection] = None) -> List[Dict[str, Any]]:
    """List all projects ordered by name."""
    sql = "SELECT id, name FROM projects ORDER BY name COLLATE NOCASE, id"

    def _run(c: sqlite3.Connection):
        return [_to_dict(r) for r in c.execute(sql).fetchall()]

    if conn:
        return _run(conn)
    with get_db(readonly=True) as c:
        return _run(c)


def get_project(conn: sqlite3.Connection, project_id: int) -> Optional[Dict[str, Any]]:
    row = conn.execute(
        "SELECT id, name FROM projects WHERE id = ?", (project_id,)
    ).fetchone()
    return _to_dict(row) if row else None


def missing_project_ids(conn: sqlite3.Connection, project_ids: Iterable[int]) -> List[int]:
    """Return the ids from project_ids that are not in the registry."""
    wanted = list(dict.fromkeys(project_ids))
    if not wanted:
        return []
    placeholders = ",".join("?" for _ in wanted)
    found = {
        r["id"]
        for r in conn.execute(
            f"SELECT id FROM projects WHERE id IN ({placeholders})", wanted
        ).fetchall()
    }
    return [pid for pid in wanted if pid not in found]


def create_project(conn: sqlite3.Connection, name: str) -> Dict[str, Any]:
    """Create a project. Raises ValidationError on an empty name."""
    cleaned = _clean_name(name)
    cursor = conn.execute("INSERT INTO projects (name) VALUES (?)", (cleaned,))
    conn.commit()
    logger.info("Created project %s (%s)", cursor.lastrowid, cleaned)
    return {"id": cursor.lastrowid, "name": cleaned}


def rename_project(conn: sqlite3.Connection, project_id: int, name: str) -> Dict[str, Any]:
    cleaned = _clean_name(name)
    cursor = conn.execute(
        "UPDATE projects SET name = ?, updated_at = datetime('now') WHERE id = ?",
        (cleaned, project_id),
    )
    if cursor.rowcount == 0:
        raise NotFoundError("Project", project_id)
    conn.commit()
    logger.info("Renamed project %s to %s", project_id, cleaned)
    return {"id": project_id, "name": cleaned}


def delete_project(conn: sqlite3.Connection, project_id: int) -> None:
    """Delete a project.

    Snapshot assignments pointing at it are left alone and show up as an
    unknown project from then on.
    """
    cursor = conn.execute("DELETE FROM projects WHERE id = ?", (project_id,))
    if cursor.rowcount == 0:
        raise NotFoundError("Project", project_id)
    conn.commit()
    logger.info("Deleted project %s", project_id)


def unknown_project_label() -> str:
    """Display name for assignments whose project was deleted."""
    return get_config_value(
        "reporting", "unknown_project_label", default=UNKNOWN_PROJECT
    )
