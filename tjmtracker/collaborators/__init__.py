"""
Collaborators module — monthly snapshots, days-worked recording, Excel export.
"""

from tjmtracker.collaborators.recorder import record_days
from tjmtracker.collaborators.snapshots import (
    create_snapshot,
    delete_snapshot,
    get_snapshot,
    list_rates,
    list_snapshots,
    update_comment,
    update_rate,
    update_snapshot,
)

__all__ = [
    "create_snapshot",
    "delete_snapshot",
    "get_snapshot",
    "list_rates",
    "list_snapshots",
    "record_days",
    "update_comment",
    "update_rate",
    "update_snapshot",
]
