"""
Collaborator Snapshot Business Logic

A snapshot is one collaborator's staffing for one month/year: the ordered
project assignments with days worked, the daily rate (TJM) and a comment.
Every snapshot of the same person hangs off a stable collaborator identity,
keyed by name, so there is at most one snapshot per (collaborator, month, year).

No Flask imports — this module is used by both CLI and API layers.
"""

import math
import sqlite3
from typing import Any, Dict, List, Optional, Sequence, Tuple

from tjmtracker.core import NotFoundError, ValidationError, get_db, get_logger
from tjmtracker.core.periods import normalize_month, normalize_year
from tjmtracker.projects.registry import missing_project_ids, unknown_project_label

logger = get_logger("tjmtracker.collaborators.snapshots")

_SNAPSHOT_SELECT = """
    SELECT s.id, s.collaborator_id, c.name, s.month, s.year, s.tjm, s.comments
    FROM collaborator_snapshots s
    JOIN collaborators c ON c.id = s.collaborator_id
"""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _clean_name(name: Optional[str]) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Collaborator name is required")
    return cleaned


def validate_project_ids(conn: sqlite3.Connection, project_ids: Sequence[int]) -> List[int]:
    """Deduplicate project_ids (first-seen order) and check they all exist."""
    wanted = list(dict.fromkeys(project_ids))
    missing = missing_project_ids(conn, wanted)
    if missing:
        raise ValidationError(
            f"{len(missing)} of {len(wanted)} project(s) do not exist: "
            + ", ".join(str(pid) for pid in missing)
        )
    return wanted


def get_snapshot_row(conn: sqlite3.Connection, snapshot_id: int) -> sqlite3.Row:
    """Fetch the raw snapshot row. Raises NotFoundError if unknown."""
    row = conn.execute(
        _SNAPSHOT_SELECT + " WHERE s.id = ?", (snapshot_id,)
    ).fetchone()
    if not row:
        raise NotFoundError("Collaborator", snapshot_id)
    return row


def find_snapshot_id(
    conn: sqlite3.Connection, collaborator_id: int, month: str, year: int
) -> Optional[int]:
    row = conn.execute(
        "SELECT id FROM collaborator_snapshots "
        "WHERE collaborator_id = ? AND month = ? AND year = ?",
        (collaborator_id, month, year),
    ).fetchone()
    return row["id"] if row else None


def _find_collaborator_id(conn: sqlite3.Connection, name: str) -> Optional[int]:
    row = conn.execute(
        "SELECT id FROM collaborators WHERE name = ?", (name,)
    ).fetchone()
    return row["id"] if row else None


def _drop_orphan_collaborator(conn: sqlite3.Connection, collaborator_id: int) -> None:
    conn.execute(
        "DELETE FROM collaborators WHERE id = ? AND NOT EXISTS "
        "(SELECT 1 FROM collaborator_snapshots WHERE collaborator_id = ?)",
        (collaborator_id, collaborator_id),
    )


def get_assignments(conn: sqlite3.Connection, snapshot_id: int) -> List[Tuple[int, float]]:
    """Return the ordered (project_id, days_worked) pairs of a snapshot."""
    rows = conn.execute(
        "SELECT project_id, days_worked FROM snapshot_projects "
        "WHERE snapshot_id = ? ORDER BY position, project_id",
        (snapshot_id,),
    ).fetchall()
    return [(r["project_id"], r["days_worked"]) for r in rows]


def insert_assignments(
    conn: sqlite3.Connection,
    snapshot_id: int,
    assignments: Sequence[Tuple[int, float]],
) -> None:
    conn.executemany(
        "INSERT INTO snapshot_projects (snapshot_id, project_id, days_worked, position) "
        "VALUES (?, ?, ?, ?)",
        [
            (snapshot_id, project_id, days, position)
            for position, (project_id, days) in enumerate(assignments)
        ],
    )


def insert_snapshot(
    conn: sqlite3.Connection,
    collaborator_id: int,
    month: str,
    year: int,
    tjm: Optional[float] = None,
    comments: Optional[str] = None,
) -> int:
    """Insert a bare snapshot row. sqlite3.IntegrityError if the period exists."""
    cursor = conn.execute(
        "INSERT INTO collaborator_snapshots (collaborator_id, month, year, tjm, comments) "
        "VALUES (?, ?, ?, ?, ?)",
        (collaborator_id, month, year, tjm, comments),
    )
    return cursor.lastrowid


def touch_snapshot(conn: sqlite3.Connection, snapshot_id: int) -> None:
    conn.execute(
        "UPDATE collaborator_snapshots SET updated_at = datetime('now') WHERE id = ?",
        (snapshot_id,),
    )


def _load_projects(
    conn: sqlite3.Connection, snapshot_ids: Sequence[int]
) -> Dict[int, List[Dict[str, Any]]]:
    """Resolve assignments of the given snapshots to project names."""
    result: Dict[int, List[Dict[str, Any]]] = {sid: [] for sid in snapshot_ids}
    if not snapshot_ids:
        return result

    unknown = unknown_project_label()
    placeholders = ",".join("?" for _ in snapshot_ids)
    rows = conn.execute(
        f"""
        SELECT sp.snapshot_id, sp.project_id, sp.days_worked, p.name AS project_name
        FROM snapshot_projects sp
        LEFT JOIN projects p ON p.id = sp.project_id
        WHERE sp.snapshot_id IN ({placeholders})
        ORDER BY sp.snapshot_id, sp.position, sp.project_id
        """,
        list(snapshot_ids),
    ).fetchall()
    for r in rows:
        result[r["snapshot_id"]].append({
            "projectId": r["project_id"],
            "name": r["project_name"] if r["project_name"] is not None else unknown,
            "daysWorked": r["days_worked"],
        })
    return result


def _serialize(row: sqlite3.Row, projects: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "id": row["id"],
        "collaboratorId": row["collaborator_id"],
        "name": row["name"],
        "month": row["month"],
        "year": row["year"],
        "tjm": row["tjm"],
        "comments": row["comments"],
        "totalDaysWorked": sum(p["daysWorked"] for p in projects),
        "projects": projects,
    }


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def list_snapshots(
    conn: Optional[sqlite3.Connection] = None,
    *,
    month: Optional[str] = None,
    year: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """List snapshots, filtered by whichever of month/year is given.

    With neither, every snapshot is returned.
    """
    sql = _SNAPSHOT_SELECT
    conditions = []
    params: list = []
    if month is not None:
        conditions.append("s.month = ?")
        params.append(normalize_month(month))
    if year is not None:
        conditions.append("s.year = ?")
        params.append(normalize_year(year))
    if conditions:
        sql += " WHERE " + " AND ".join(conditions)
    sql += " ORDER BY s.year, s.month, c.name COLLATE NOCASE, s.id"

    def _run(c: sqlite3.Connection):
        rows = c.execute(sql, params).fetchall()
        projects = _load_projects(c, [r["id"] for r in rows])
        return [_serialize(r, projects[r["id"]]) for r in rows]

    if conn:
        return _run(conn)
    with get_db(readonly=True) as c:
        return _run(c)


def get_snapshot(conn: sqlite3.Connection, snapshot_id: int) -> Dict[str, Any]:
    """Return one serialized snapshot. Raises NotFoundError if unknown."""
    row = get_snapshot_row(conn, snapshot_id)
    return _serialize(row, _load_projects(conn, [snapshot_id])[snapshot_id])


def list_rates(conn: Optional[sqlite3.Connection] = None) -> List[Dict[str, Any]]:
    """Latest snapshot of every collaborator with its TJM."""
    sql = """
        SELECT s.id, s.collaborator_id, c.name, s.month, s.year, s.tjm
        FROM collaborators c
        JOIN collaborator_snapshots s ON s.id = (
            SELECT s2.id FROM collaborator_snapshots s2
            WHERE s2.collaborator_id = c.id
            ORDER BY s2.year DESC, s2.month DESC
            LIMIT 1
        )
        ORDER BY c.name COLLATE NOCASE
    """

    def _run(c: sqlite3.Connection):
        return [
            {
                "id": r["id"],
                "collaboratorId": r["collaborator_id"],
                "name": r["name"],
                "month": r["month"],
                "year": r["year"],
                "tjm": r["tjm"],
            }
            for r in c.execute(sql).fetchall()
        ]

    if conn:
        return _run(conn)
    with get_db(readonly=True) as c:
        return _run(c)


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------


def create_snapshot(
    conn: sqlite3.Connection,
    name: str,
    project_ids: Sequence[int],
    month: str,
    year: int,
    *,
    tjm: Optional[float] = None,
    comments: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Create a collaborator snapshot for month/year with every project at 0 days.

    Attaches to the existing collaborator identity when the name is known.

    Raises:
        ValidationError: empty name, unknown project ids, or the collaborator
            already has a snapshot for that month/year. Nothing is persisted.
    """
    cleaned = _clean_name(name)
    month = normalize_month(month)
    year = normalize_year(year)
    wanted = validate_project_ids(conn, project_ids)

    collaborator_id = _find_collaborator_id(conn, cleaned)
    if collaborator_id and find_snapshot_id(conn, collaborator_id, month, year):
        raise ValidationError(
            f"Collaborator '{cleaned}' already exists for {month}/{year}"
        )

    try:
        if collaborator_id is None:
            collaborator_id = conn.execute(
                "INSERT INTO collaborators (name) VALUES (?)", (cleaned,)
            ).lastrowid
        snapshot_id = insert_snapshot(conn, collaborator_id, month, year, tjm, comments)
        insert_assignments(conn, snapshot_id, [(pid, 0) for pid in wanted])
    except sqlite3.IntegrityError as e:
        conn.rollback()
        if "UNIQUE constraint failed" not in str(e):
            raise
        raise ValidationError(
            f"Collaborator '{cleaned}' already exists for {month}/{year}"
        )
    conn.commit()

    logger.info(
        "Created snapshot %s for %s (%s/%s, %d project(s))",
        snapshot_id, cleaned, month, year, len(wanted),
    )
    return get_snapshot(conn, snapshot_id)


def update_snapshot(
    conn: sqlite3.Connection,
    snapshot_id: int,
    name: str,
    project_ids: Sequence[int],
) -> Dict[str, Any]:
    """
    Rename a snapshot's collaborator and replace its project list.

    Days already recorded for projects that stay in the list are kept,
    newly added projects start at 0, removed projects are dropped.

    A new name that is free renames the collaborator across all months. A
    name that belongs to another collaborator moves this snapshot to that
    collaborator, unless they already have a snapshot for the same period.
    """
    row = get_snapshot_row(conn, snapshot_id)
    cleaned = _clean_name(name)
    wanted = validate_project_ids(conn, project_ids)

    if cleaned != row["name"]:
        other_id = _find_collaborator_id(conn, cleaned)
        if other_id is None:
            conn.execute(
                "UPDATE collaborators SET name = ? WHERE id = ?",
                (cleaned, row["collaborator_id"]),
            )
        else:
            if find_snapshot_id(conn, other_id, row["month"], row["year"]):
                raise ValidationError(
                    f"Collaborator '{cleaned}' already exists for "
                    f"{row['month']}/{row['year']}"
                )
            conn.execute(
                "UPDATE collaborator_snapshots SET collaborator_id = ? WHERE id = ?",
                (other_id, snapshot_id),
            )
            _drop_orphan_collaborator(conn, row["collaborator_id"])

    previous = dict(get_assignments(conn, snapshot_id))
    conn.execute("DELETE FROM snapshot_projects WHERE snapshot_id = ?", (snapshot_id,))
    insert_assignments(
        conn, snapshot_id, [(pid, previous.get(pid, 0)) for pid in wanted]
    )
    touch_snapshot(conn, snapshot_id)
    conn.commit()

    logger.info("Updated snapshot %s (%s, %d project(s))", snapshot_id, cleaned, len(wanted))
    return get_snapshot(conn, snapshot_id)


def delete_snapshot(conn: sqlite3.Connection, snapshot_id: int) -> None:
    """Hard-delete a snapshot and its assignments."""
    row = get_snapshot_row(conn, snapshot_id)
    conn.execute("DELETE FROM collaborator_snapshots WHERE id = ?", (snapshot_id,))
    _drop_orphan_collaborator(conn, row["collaborator_id"])
    conn.commit()
    logger.info("Deleted snapshot %s (%s)", snapshot_id, row["name"])


def update_comment(
    conn: sqlite3.Connection, snapshot_id: int, comments: Optional[str]
) -> Dict[str, Any]:
    """Overwrite the comment. An empty string is a valid comment."""
    get_snapshot_row(conn, snapshot_id)
    conn.execute(
        "UPDATE collaborator_snapshots SET comments = ?, updated_at = datetime('now') "
        "WHERE id = ?",
        (comments if comments is not None else "", snapshot_id),
    )
    conn.commit()
    logger.info("Updated comment on snapshot %s", snapshot_id)
    return get_snapshot(conn, snapshot_id)


def update_rate(
    conn: sqlite3.Connection, snapshot_id: int, tjm: Optional[float]
) -> Dict[str, Any]:
    """Set the daily rate. None clears it; any number is accepted."""
    if tjm is not None and (isinstance(tjm, bool) or not isinstance(tjm, (int, float))):
        raise ValidationError("TJM must be a number")
    if tjm is not None and not math.isfinite(tjm):
        raise ValidationError("TJM must be a finite number")
    get_snapshot_row(conn, snapshot_id)
    conn.execute(
        "UPDATE collaborator_snapshots SET tjm = ?, updated_at = datetime('now') "
        "WHERE id = ?",
        (tjm, snapshot_id),
    )
    conn.commit()
    logger.info("Set TJM of snapshot %s to %s", snapshot_id, tjm)
    return get_snapshot(conn, snapshot_id)
