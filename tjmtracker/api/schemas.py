"""
Request body schemas for the JSON API.

Each endpoint declares the fields it accepts; parse_body() checks presence and
type before anything reaches the business logic.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from tjmtracker.core.errors import ValidationError
from tjmtracker.core.periods import normalize_month, normalize_year


@dataclass(frozen=True)
class FieldDef:
    """Definition for a single request field."""

    name: str                          # JSON key
    type: str = "text"                 # text | int | float | id_list | month | year
    required: bool = False
    nullable: bool = False             # accept an explicit null


class _CoerceError:
    """Sentinel for failed type coercion."""
    pass


_COERCE_ERROR = _CoerceError()

_TYPE_LABELS = {
    "text": "a string",
    "int": "an integer",
    "float": "a finite number",
    "id_list": "a list of ids",
    "month": "a month (1-12)",
    "year": "a year",
}


def _as_int(raw: Any) -> Any:
    if isinstance(raw, bool):
        return _COERCE_ERROR
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str) and raw.strip().lstrip("-").isdigit():
        return int(raw.strip())
    return _COERCE_ERROR


def _coerce_value(raw: Any, field_def: FieldDef) -> Any:
    """Coerce a raw JSON value to the field's declared type."""
    t = field_def.type

    if t == "text":
        return raw if isinstance(raw, str) else _COERCE_ERROR

    if t == "int":
        return _as_int(raw)

    if t == "float":
        if isinstance(raw, bool):
            return _COERCE_ERROR
        if isinstance(raw, (int, float)):
            value = raw
        elif isinstance(raw, str):
            try:
                value = float(raw)
            except ValueError:
                return _COERCE_ERROR
        else:
            return _COERCE_ERROR
        # NaN and infinities cannot be stored or serialized as JSON
        try:
            finite = math.isfinite(value)
        except OverflowError:
            finite = False
        return value if finite else _COERCE_ERROR

    if t == "id_list":
        if not isinstance(raw, list):
            return _COERCE_ERROR
        ids = [_as_int(item) for item in raw]
        if any(i is _COERCE_ERROR for i in ids):
            return _COERCE_ERROR
        return ids

    if t == "month":
        try:
            return normalize_month(raw)
        except ValidationError:
            return _COERCE_ERROR

    if t == "year":
        try:
            return normalize_year(raw)
        except ValidationError:
            return _COERCE_ERROR

    return raw


def parse_body(data: Any, fields: List[FieldDef]) -> Dict[str, Any]:
    """
    Validate a decoded JSON body against a field list.

    Unknown keys are ignored. Optional fields that are absent come back as None.

    Raises:
        ValidationError: body is not an object, a required field is missing,
            or a value has the wrong type. All problems are reported at once.
    """
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")

    result: Dict[str, Any] = {}
    errors: List[str] = []

    for f in fields:
        raw = data.get(f.name)
        if raw is None or (isinstance(raw, str) and not raw.strip() and f.type != "text"):
            if f.required and not (raw is None and f.nullable and f.name in data):
                errors.append(f"Field '{f.name}' is required")
            result[f.name] = None
            continue

        value = _coerce_value(raw, f)
        if value is _COERCE_ERROR:
            errors.append(f"Field '{f.name}' must be {_TYPE_LABELS.get(f.type, f.type)}")
        else:
            result[f.name] = value

    if errors:
        raise ValidationError("; ".join(errors))
    return result


# ---------------------------------------------------------------------------
# Endpoint schemas
# ---------------------------------------------------------------------------

PROJECT_BODY = [FieldDef("name", "text", required=True)]

SNAPSHOT_CREATE_BODY = [
    FieldDef("name", "text", required=True),
    FieldDef("projects", "id_list", required=True),
    FieldDef("month", "month"),
    FieldDef("year", "year"),
]

SNAPSHOT_UPDATE_BODY = [
    FieldDef("name", "text", required=True),
    FieldDef("projects", "id_list", required=True),
]

ADD_DAYS_BODY = [
    FieldDef("projectId", "int", required=True),
    FieldDef("days", "float", required=True),
    FieldDef("month", "month"),
    FieldDef("year", "year"),
]

COMMENT_BODY = [FieldDef("comments", "text", nullable=True)]

TJM_BODY = [FieldDef("tjm", "float", required=True, nullable=True)]


def parse_query_period(args) -> Dict[str, Optional[Any]]:
    """Parse optional ?month=&year= query parameters."""
    return parse_body(
        {"month": args.get("month"), "year": args.get("year")},
        [FieldDef("month", "month"), FieldDef("year", "year")],
    )
