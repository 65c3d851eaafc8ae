"""Tests for request validation."""
from __future__ import annotations

from datetime import date, datetime

import pytest

from cpr.validator import InvalidMonthError, parse_month, validate_month, validate_uploads


class TestParseMonth:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("2025-03", "2025-03"),
            ("2025-3", "2025-03"),
            ("2025/12", "2025-12"),
            (" 2025-03-15 ", "2025-03"),
            (date(2025, 3, 9), "2025-03"),
            (datetime(2024, 11, 30, 12, 0), "2024-11"),
        ],
    )
    def test_accepted_forms(self, raw, expected):
        assert parse_month(raw) == expected

    @pytest.mark.parametrize("raw", ["2025-13", "2025-00", "March", "", None, "25-03"])
    def test_rejected_forms(self, raw):
        with pytest.raises(InvalidMonthError):
            parse_month(raw)


def test_validate_month_dict():
    assert validate_month("2025-03") == {"valid": True, "month": "2025-03", "errors": []}
    result = validate_month("nope")
    assert result["valid"] is False
    assert result["errors"]


class TestValidateUploads:
    def test_all_present(self):
        assert validate_uploads("2025-03", object(), object()) == {"valid": True, "errors": []}

    def test_missing_fields_reported(self):
        result = validate_uploads("", None, None)
        assert result["valid"] is False
        assert len(result["errors"]) == 3

    def test_bad_month(self):
        result = validate_uploads("2025-13", object(), object())
        assert result["valid"] is False
        assert "out of range" in result["errors"][0]

    @pytest.mark.parametrize("month", ["1999-01", "2040-12", "2025/7"])
    def test_free_text_month_accepted(self, month):
        assert validate_uploads(month, object(), object())["valid"] is True
