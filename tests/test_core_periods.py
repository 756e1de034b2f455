"""Tests for month/year normalization and current-period defaults."""

from datetime import date

import pytest

from tjmtracker.core.errors import ValidationError
from tjmtracker.core.periods import (
    current_period,
    get_today,
    normalize_month,
    normalize_year,
    resolve_period,
)


class TestNormalizeMonth:
    @pytest.mark.parametrize("raw", [3, "3", "03", " 3 "])
    def test_two_digit_code(self, raw):
        assert normalize_month(raw) == "03"

    def test_december(self):
        assert normalize_month(12) == "12"

    @pytest.mark.parametrize("raw", [0, 13, "abc", None, True, "1.5"])
    def test_invalid(self, raw):
        with pytest.raises(ValidationError):
            normalize_month(raw)


class TestNormalizeYear:
    def test_int_and_string(self):
        assert normalize_year(2025) == 2025
        assert normalize_year("2025") == 2025

    @pytest.mark.parametrize("raw", ["x", 12, None, False])
    def test_invalid(self, raw):
        with pytest.raises(ValidationError):
            normalize_year(raw)


class TestCurrentPeriod:
    def test_explicit_today(self):
        assert current_period(date(2024, 11, 2)) == ("11", 2024)

    def test_pinned_by_config(self, monkeypatch):
        monkeypatch.setattr(
            "tjmtracker.core.periods.get_config_value",
            lambda *keys, default=None: "2023-07-01",
        )
        assert get_today() == date(2023, 7, 1)
        assert current_period() == ("07", 2023)

    def test_unpinned_uses_clock(self, monkeypatch):
        monkeypatch.setattr(
            "tjmtracker.core.periods.get_config_value",
            lambda *keys, default=None: None,
        )
        assert get_today() == date.today()


class TestResolvePeriod:
    def test_fills_missing_values(self):
        assert resolve_period(today=date(2025, 4, 1)) == ("04", 2025)

    def test_keeps_given_values(self):
        assert resolve_period("9", 2022, today=date(2025, 4, 1)) == ("09", 2022)

    def test_fills_only_missing_year(self):
        assert resolve_period("01", None, today=date(2025, 4, 1)) == ("01", 2025)
