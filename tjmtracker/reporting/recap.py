"""
Monthly Cost Recap

Cost of an assignment = days worked x the snapshot's TJM (an unset TJM costs
nothing). Costs are summed per project within a month, then per month.

Months are keyed by (year, month) so the same month of two different years
never collapses into one line.
"""

import sqlite3
from typing import Any, Dict, List, Optional

from tjmtracker.core import get_db, get_logger
from tjmtracker.core.periods import normalize_year
from tjmtracker.projects.registry import unknown_project_label

logger = get_logger("tjmtracker.reporting.recap")


def recap_by_month(
    conn: Optional[sqlite3.Connection] = None,
    *,
    year: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """
    Aggregate assignment costs per project and per month.

    Args:
        conn: Open connection (a read-only one is opened when omitted)
        year: Restrict to one year

    Returns:
        List ordered by (year, month) of
        {"month", "year", "projects": [{"id", "name", "totalCost"}], "totalMonthCost"}
    """
    sql = """
        SELECT s.year, s.month, sp.project_id, p.name AS project_name,
               SUM(sp.days_worked * COALESCE(s.tjm, 0)) AS total_cost
        FROM snapshot_projects sp
        JOIN collaborator_snapshots s ON s.id = sp.snapshot_id
        LEFT JOIN projects p ON p.id = sp.project_id
    """
    params: list = []
    if year is not None:
        sql += " WHERE s.year = ?"
        params.append(normalize_year(year))
    sql += """
        GROUP BY s.year, s.month, sp.project_id
        ORDER BY s.year, s.month, p.name IS NULL, p.name COLLATE NOCASE, sp.project_id
    """

    def _run(c: sqlite3.Connection) -> List[Dict[str, Any]]:
        unknown = unknown_project_label()
        months: List[Dict[str, Any]] = []
        current = None
        for r in c.execute(sql, params).fetchall():
            if current is None or (current["year"], current["month"]) != (r["year"], r["month"]):
                current = {
                    "month": r["month"],
                    "year": r["year"],
                    "projects": [],
                    "totalMonthCost": 0,
                }
                months.append(current)
            cost = r["total_cost"] or 0
            current["projects"].append({
                "id": r["project_id"],
                "name": r["project_name"] if r["project_name"] is not None else unknown,
                "totalCost": cost,
            })
            current["totalMonthCost"] += cost
        logger.debug("Recap computed for %d month(s)", len(months))
        return months

    if conn:
        return _run(conn)
    with get_db(readonly=True) as c:
        return _run(c)
