"""
Output formatters for CLI display.

Supports human-readable, JSON, and markdown output modes.
"""

import json
from enum import Enum
from typing import Any, List, Optional, Sequence


class OutputFormat(str, Enum):
    HUMAN = "human"
    JSON = "json"
    MARKDOWN = "markdown"


def _fmt_cell(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:,.2f}"
    if value is None:
        return "-"
    return str(value)


def format_table(
    rows: Sequence[Sequence[Any]],
    headers: Sequence[str],
    fmt: OutputFormat = OutputFormat.HUMAN,
    title: Optional[str] = None,
    raw: Any = None,
) -> str:
    """Format tabular rows for display.

    JSON mode dumps ``raw`` when given (the un-flattened data), else the rows
    keyed by header.
    """
    if fmt == OutputFormat.JSON:
        data = raw if raw is not None else [dict(zip(headers, r)) for r in rows]
        return json.dumps(data, indent=2, default=str)
    elif fmt == OutputFormat.MARKDOWN:
        return _format_markdown(rows, headers, title)
    else:
        return _format_human(rows, headers, title)


def _format_human(rows: Sequence[Sequence[Any]], headers: Sequence[str], title: Optional[str]) -> str:
    lines: List[str] = []
    if title:
        lines.extend([title, "=" * len(title), ""])

    cells = [[_fmt_cell(v) for v in r] for r in rows]
    widths = [
        max([len(h)] + [len(r[i]) for r in cells]) for i, h in enumerate(headers)
    ]
    lines.append("  ".join(h.ljust(w) for h, w in zip(headers, widths)))
    lines.append("  ".join("-" * w for w in widths))
    for r in cells:
        lines.append("  ".join(c.ljust(w) for c, w in zip(r, widths)))

    return "\n".join(lines)


def _format_markdown(rows: Sequence[Sequence[Any]], headers: Sequence[str], title: Optional[str]) -> str:
    lines: List[str] = []
    if title:
        lines.extend([f"# {title}", ""])

    lines.append("| " + " | ".join(headers) + " |")
    lines.append("|" + "|".join("---" for _ in headers) + "|")
    for r in rows:
        lines.append("| " + " | ".join(_fmt_cell(v) for v in r) + " |")

    return "\n".join(lines)
