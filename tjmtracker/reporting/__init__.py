"""Reporting module — monthly cost recap."""

from tjmtracker.reporting.recap import recap_by_month

__all__ = ["recap_by_month"]
