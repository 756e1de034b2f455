"""
Days-Worked Recorder

Sets the number of days a collaborator worked on a project for a given
month/year, creating that month's snapshot when it does not exist yet.
Recording is an overwrite: the last value written wins.
"""

import math
import sqlite3
from typing import Any, Dict, Tuple

from tjmtracker.core import ValidationError, get_logger
from tjmtracker.core.periods import normalize_month, normalize_year
from tjmtracker.collaborators.snapshots import (
    find_snapshot_id,
    get_assignments,
    get_snapshot,
    get_snapshot_row,
    insert_assignments,
    insert_snapshot,
    touch_snapshot,
)

logger = get_logger("tjmtracker.collaborators.recorder")


def validate_days(days: Any) -> float:
    if isinstance(days, bool) or not isinstance(days, (int, float)):
        raise ValidationError("Days worked must be a number")
    if not math.isfinite(days):
        raise ValidationError("Days worked must be a finite number")
    if days < 0:
        raise ValidationError("Days worked must be zero or more")
    return days


def _set_days(
    conn: sqlite3.Connection, snapshot_id: int, project_id: int, days: float
) -> None:
    cursor = conn.execute(
        "UPDATE snapshot_projects SET days_worked = ? "
        "WHERE snapshot_id = ? AND project_id = ?",
        (days, snapshot_id, project_id),
    )
    if cursor.rowcount == 0:
        raise ValidationError("Project is not assigned to this collaborator")
    touch_snapshot(conn, snapshot_id)


def record_days(
    conn: sqlite3.Connection,
    snapshot_id: int,
    project_id: int,
    days: float,
    month: str,
    year: int,
) -> Tuple[Dict[str, Any], bool]:
    """
    Record days worked on a project for the collaborator owning snapshot_id.

    The target is that collaborator's snapshot for month/year. When it exists
    the project's day count is overwritten. Otherwise a new snapshot is
    cloned from snapshot_id (same projects and TJM, every count at 0) and the
    project's count is set on it.

    Args:
        conn: Open database connection
        snapshot_id: Any snapshot of the collaborator
        project_id: Project to record against; must be assigned
        days: Days worked, zero or more
        month: Two-digit month code
        year: Four-digit year

    Returns:
        (target snapshot, True if it was created by this call)

    Raises:
        ValidationError: negative days, or project not assigned
        NotFoundError: unknown snapshot_id
    """
    days = validate_days(days)
    month = normalize_month(month)
    year = normalize_year(year)
    source = get_snapshot_row(conn, snapshot_id)

    target_id = find_snapshot_id(conn, source["collaborator_id"], month, year)
    created = False

    if target_id is None:
        assignments = get_assignments(conn, snapshot_id)
        if project_id not in {pid for pid, _ in assignments}:
            raise ValidationError("Project is not assigned to this collaborator")
        try:
            target_id = insert_snapshot(
                conn, source["collaborator_id"], month, year, tjm=source["tjm"]
            )
            insert_assignments(
                conn,
                target_id,
                [(pid, days if pid == project_id else 0) for pid, _ in assignments],
            )
            created = True
        except sqlite3.IntegrityError as e:
            conn.rollback()
            if "UNIQUE constraint failed" not in str(e):
                raise
            # Another request created the period first; record onto that one.
            target_id = find_snapshot_id(conn, source["collaborator_id"], month, year)
            if target_id is None:
                raise

    if not created:
        _set_days(conn, target_id, project_id, days)
    conn.commit()

    logger.info(
        "Recorded %s day(s) on project %s for %s (%s/%s)%s",
        days, project_id, source["name"], month, year,
        " in new snapshot" if created else "",
    )
    return get_snapshot(conn, target_id), created
