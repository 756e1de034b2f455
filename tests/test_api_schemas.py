"""Tests for api.schemas — request body validation."""

import pytest

from tjmtracker.api.schemas import (
    ADD_DAYS_BODY,
    COMMENT_BODY,
    SNAPSHOT_CREATE_BODY,
    TJM_BODY,
    FieldDef,
    parse_body,
    parse_query_period,
)
from tjmtracker.core.errors import ValidationError


class TestParseBody:
    def test_non_object_body(self):
        with pytest.raises(ValidationError, match="JSON object"):
            parse_body(["name"], SNAPSHOT_CREATE_BODY)

    def test_none_body(self):
        with pytest.raises(ValidationError):
            parse_body(None, SNAPSHOT_CREATE_BODY)

    def test_optional_fields_default_to_none(self):
        data = parse_body({"name": "Alice", "projects": [1, "2"]}, SNAPSHOT_CREATE_BODY)
        assert data == {"name": "Alice", "projects": [1, 2], "month": None, "year": None}

    def test_month_normalized(self):
        data = parse_body({"name": "A", "projects": [], "month": 4, "year": "2025"}, SNAPSHOT_CREATE_BODY)
        assert data["month"] == "04"
        assert data["year"] == 2025

    def test_all_errors_reported(self):
        with pytest.raises(ValidationError) as exc:
            parse_body({"projects": "1", "month": 13}, SNAPSHOT_CREATE_BODY)
        message = str(exc.value)
        assert "'name' is required" in message
        assert "'projects' must be a list of ids" in message
        assert "'month' must be a month" in message

    @pytest.mark.parametrize("projects", [[1, "x"], [True], [1.5]])
    def test_bad_id_list(self, projects):
        with pytest.raises(ValidationError):
            parse_body({"name": "A", "projects": projects}, SNAPSHOT_CREATE_BODY)

    def test_unknown_keys_ignored(self):
        data = parse_body({"comments": "hi", "extra": 1}, COMMENT_BODY)
        assert data == {"comments": "hi"}


class TestAddDaysBody:
    def test_valid(self):
        data = parse_body({"projectId": "3", "days": "2.5"}, ADD_DAYS_BODY)
        assert data["projectId"] == 3
        assert data["days"] == 2.5

    def test_days_required(self):
        with pytest.raises(ValidationError, match="'days' is required"):
            parse_body({"projectId": 3}, ADD_DAYS_BODY)

    def test_days_must_be_number(self):
        with pytest.raises(ValidationError, match="'days' must be a finite number"):
            parse_body({"projectId": 3, "days": "many"}, ADD_DAYS_BODY)

    def test_negative_days_pass_schema(self):
        # Range is checked by the recorder, not the schema.
        assert parse_body({"projectId": 3, "days": -2}, ADD_DAYS_BODY)["days"] == -2


class TestNonFiniteNumbers:
    @pytest.mark.parametrize("days", ["nan", "NaN", "Infinity", "-inf", float("nan"), float("inf"), 10 ** 400])
    def test_days_rejected(self, days):
        with pytest.raises(ValidationError, match="'days' must be a finite number"):
            parse_body({"projectId": 1, "days": days}, ADD_DAYS_BODY)

    @pytest.mark.parametrize("tjm", ["nan", "Infinity", float("-inf")])
    def test_tjm_rejected(self, tjm):
        with pytest.raises(ValidationError, match="'tjm' must be a finite number"):
            parse_body({"tjm": tjm}, TJM_BODY)


class TestNullable:
    def test_explicit_null_tjm(self):
        assert parse_body({"tjm": None}, TJM_BODY) == {"tjm": None}

    def test_missing_tjm(self):
        with pytest.raises(ValidationError):
            parse_body({}, TJM_BODY)

    def test_text_must_be_string(self):
        with pytest.raises(ValidationError):
            parse_body({"name": 5}, [FieldDef("name", "text", required=True)])


class TestQueryPeriod:
    def test_empty(self):
        assert parse_query_period({}) == {"month": None, "year": None}

    def test_values(self):
        assert parse_query_period({"month": "3", "year": "2025"}) == {"month": "03", "year": 2025}

    def test_blank_values_ignored(self):
        assert parse_query_period({"month": "", "year": ""}) == {"month": None, "year": None}
