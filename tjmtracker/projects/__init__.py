"""
Projects module — project registry.

Business logic lives in registry.py; CLI commands in cli.py.
"""

from tjmtracker.projects.registry import (
    create_project,
    delete_project,
    get_project,
    list_projects,
    missing_project_ids,
    rename_project,
    unknown_project_label,
)

__all__ = [
    "create_project",
    "delete_project",
    "get_project",
    "list_projects",
    "missing_project_ids",
    "rename_project",
    "unknown_project_label",
]
