"""
Excel Export for Collaborator Snapshots

Writes the collaborator table (one row per snapshot) to an .xlsx workbook.
Uses openpyxl. No Flask imports.
"""

import sqlite3
from io import BytesIO
from typing import Any, Dict, List, Optional

from tjmtracker.core import get_logger
from tjmtracker.collaborators.snapshots import list_snapshots

logger = get_logger("tjmtracker.collaborators.excel_io")

EXPORT_HEADERS = [
    "Name",
    "Month",
    "Projects",
    "Total Days Worked",
    "Total Cost (TJM)",
    "Comments",
]

_COLUMN_WIDTHS = [20, 10, 30, 18, 18, 30]


def snapshot_to_row(snapshot: Dict[str, Any]) -> List[Any]:
    """Flatten a serialized snapshot into one export row."""
    projects = ", ".join(
        f"{p['name']} ({p['daysWorked']:g} d)" for p in snapshot["projects"]
    )
    total_days = snapshot["totalDaysWorked"]
    tjm = snapshot["tjm"] or 0
    return [
        snapshot["name"],
        f"{snapshot['month']}/{snapshot['year']}",
        projects,
        total_days,
        total_days * tjm,
        snapshot["comments"] or "",
    ]


def export_snapshots_xlsx(
    conn: sqlite3.Connection,
    month: Optional[str] = None,
    year: Optional[int] = None,
) -> BytesIO:
    """Export snapshots (optionally filtered by month/year) as an .xlsx file."""
    from openpyxl import Workbook
    from openpyxl.styles import Alignment, Font

    snapshots = list_snapshots(conn, month=month, year=year)

    wb = Workbook()
    ws = wb.active
    ws.title = "Collaborators"

    for col, header in enumerate(EXPORT_HEADERS, 1):
        cell = ws.cell(row=1, column=col, value=header)
        cell.font = Font(bold=True)
        cell.alignment = Alignment(horizontal="center")

    for row_num, snapshot in enumerate(snapshots, start=2):
        for col, value in enumerate(snapshot_to_row(snapshot), 1):
            ws.cell(row=row_num, column=col, value=value)

    for i, w in enumerate(_COLUMN_WIDTHS, 1):
        ws.column_dimensions[chr(64 + i)].width = w

    output = BytesIO()
    wb.save(output)
    output.seek(0)
    logger.info("Exported %d snapshot(s) to Excel", len(snapshots))
    return output
