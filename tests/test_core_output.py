"""Tests for CLI table formatting."""

import json

from tjmtracker.core.output import OutputFormat, format_table

ROWS = [["03/2025", "Apollo", 1000.0], ["03/2025", "TOTAL", 1000.0]]
HEADERS = ["Month", "Project", "Cost"]


def test_human_has_title_and_aligned_columns():
    out = format_table(ROWS, HEADERS, OutputFormat.HUMAN, title="Recap")
    lines = out.splitlines()
    assert lines[0] == "Recap"
    assert "1,000.00" in out
    assert lines[3].startswith("Month")


def test_markdown_table():
    out = format_table(ROWS, HEADERS, OutputFormat.MARKDOWN)
    assert out.splitlines()[0] == "| Month | Project | Cost |"
    assert "| 03/2025 | Apollo | 1,000.00 |" in out


def test_json_uses_raw_when_given():
    out = format_table(ROWS, HEADERS, OutputFormat.JSON, raw=[{"month": "03"}])
    assert json.loads(out) == [{"month": "03"}]


def test_json_keys_rows_by_header():
    out = format_table(ROWS[:1], HEADERS, OutputFormat.JSON)
    assert json.loads(out) == [{"Month": "03/2025", "Project": "Apollo", "Cost": 1000.0}]
