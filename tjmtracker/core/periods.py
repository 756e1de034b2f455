"""
Month/year period helpers.

Business logic always receives month and year explicitly; only the API and
CLI boundaries fall back to the current period.
"""

from datetime import date
from typing import Any, Optional, Tuple

from tjmtracker.core.config import get_config_value
from tjmtracker.core.errors import ValidationError


def normalize_month(value: Any) -> str:
    """Normalize 3, "3" or "03" to the two-digit month code "03"."""
    if isinstance(value, bool):
        raise ValidationError(f"Invalid month: {value!r}")
    try:
        month = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid month: {value!r}")
    if not 1 <= month <= 12:
        raise ValidationError(f"Month must be between 1 and 12, got {month}")
    return f"{month:02d}"


def normalize_year(value: Any) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"Invalid year: {value!r}")
    try:
        year = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid year: {value!r}")
    if not 1900 <= year <= 9999:
        raise ValidationError(f"Year out of range: {year}")
    return year


def get_today() -> date:
    """Return today's date, or the date pinned by config periods.today."""
    pinned = get_config_value("periods", "today")
    if pinned:
        if isinstance(pinned, date):
            return pinned
        return date.fromisoformat(str(pinned))
    return date.today()


def current_period(today: Optional[date] = None) -> Tuple[str, int]:
    """Return ("MM", YYYY) for the given day (default: get_today())."""
    today = today or get_today()
    return f"{today.month:02d}", today.year


def resolve_period(
    month: Any = None, year: Any = None, today: Optional[date] = None
) -> Tuple[str, int]:
    """Fill a missing month and/or year from the current period."""
    default_month, default_year = current_period(today)
    m = normalize_month(month) if month not in (None, "") else default_month
    y = normalize_year(year) if year not in (None, "") else default_year
    return m, y
