"""
Tests for user-facing text formatting.

No locale is assumed beyond the en_US default set in conftest.
"""

import logging
from datetime import timezone

import pytest

from finance_tracker.formatting import (
    DATE_NOT_SET,
    INVALID_DATE,
    format_cents,
    format_date,
    frequency_phrase,
    ordinal_suffix,
    recurrence_sentence,
)
from finance_tracker.formatting.dates import parse_date_value


class TestOrdinalSuffix:
    """Tests for ordinal_suffix."""

    @pytest.mark.parametrize(
        "n, expected",
        [
            (1, "1st"),
            (2, "2nd"),
            (3, "3rd"),
            (4, "4th"),
            (11, "11th"),
            (12, "12th"),
            (13, "13th"),
            (21, "21st"),
            (22, "22nd"),
            (23, "23rd"),
            (31, "31st"),
            (101, "101st"),
            (111, "111th"),
            (112, "112th"),
            (113, "113th"),
            (0, "0th"),
        ],
    )
    def test_known_values(self, n, expected):
        assert ordinal_suffix(n) == expected

    def test_negative_keeps_sign(self):
        """Test the suffix uses the absolute value but the sign is kept."""
        assert ordinal_suffix(-1) == "-1st"
        assert ordinal_suffix(-12) == "-12th"
        assert ordinal_suffix(-23) == "-23rd"

    def test_teens_always_th(self):
        """Test every n with n % 100 in 11..13 gets 'th'."""
        for n in range(0, 1000):
            if 11 <= n % 100 <= 13:
                assert ordinal_suffix(n).endswith("th")


class TestFrequencyPhrase:
    """Tests for frequency_phrase."""

    def test_known_codes(self):
        assert frequency_phrase("monthly") == "each month"
        assert frequency_phrase("bi-monthly") == "every two months"
        assert frequency_phrase("quarterly") == "each quarter"
        assert frequency_phrase("semi-annually") == "twice a year"
        assert frequency_phrase("yearly") == "each year"

    def test_unknown_code_passes_through(self):
        assert frequency_phrase("weekly") == "weekly"
        assert frequency_phrase("") == ""


class TestRecurrenceSentence:

    def test_monthly(self):
        assert recurrence_sentence(19, "monthly") == "Due on the 19th each month"

    def test_quarterly_first(self):
        assert recurrence_sentence(1, "quarterly") == "Due on the 1st each quarter"

    def test_unknown_frequency(self):
        assert recurrence_sentence(3, "fortnightly") == "Due on the 3rd fortnightly"


class TestFormatDate:
    """Tests for format_date sentinels and rendering."""

    def test_none_is_not_set(self):
        assert format_date(None) == DATE_NOT_SET
        assert DATE_NOT_SET == "Date not set"

    def test_empty_and_blank_are_not_set(self):
        assert format_date("") == DATE_NOT_SET
        assert format_date("   ") == DATE_NOT_SET

    def test_garbage_is_invalid(self):
        assert format_date("not-a-date") == INVALID_DATE
        assert INVALID_DATE == "Invalid date"

    def test_impossible_date_is_invalid(self):
        assert format_date("2024-02-30") == INVALID_DATE

    def test_invalid_date_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING):
            format_date("not-a-date")
        assert any(
            r.levelno == logging.WARNING and "invalid_date" in r.getMessage()
            for r in caplog.records
        )

    def test_date_only_string(self):
        """Test a date-only string renders without a UTC shift."""
        result = format_date("2024-03-15")
        assert result not in (DATE_NOT_SET, INVALID_DATE)
        assert "March" in result
        assert "15" in result
        assert "2024" in result
        assert result == "March 15, 2024"

    def test_timestamp_with_offset(self):
        result = format_date("2024-03-15T10:00:00Z", tzinfo=timezone.utc)
        assert result == "March 15, 2024"

    def test_naive_timestamp(self):
        assert format_date("2024-03-15T23:30:00") == "March 15, 2024"

    def test_custom_format(self):
        assert format_date("2024-03-15", format="MMM y") == "Mar 2024"
        assert format_date("2024-03-15", format="short") == "3/15/24"

    def test_other_locale(self):
        result = format_date("2024-03-15", locale="de_DE")
        assert "März" in result
        assert "2024" in result

    def test_unknown_locale_degrades(self, caplog):
        """Test an unexpected formatting error returns the sentinel and logs."""
        with caplog.at_level(logging.ERROR):
            assert format_date("2024-03-15", locale="xx_NOPE") == INVALID_DATE
        assert any("date_format_failed" in r.getMessage() for r in caplog.records)

    def test_parse_date_value(self):
        assert parse_date_value("2024-03-15").day == 15
        assert parse_date_value("2024-03-15T10:00:00Z").hour == 10
        assert parse_date_value("nope") is None
        assert parse_date_value("2024-03-15Tgarbage") is None


class TestFormatCents:

    def test_default_usd(self):
        assert format_cents(12345) == "$123.45"

    def test_zero(self):
        assert format_cents(0) == "$0.00"

    def test_thousands(self):
        assert format_cents(149999) == "$1,499.99"

    def test_configured_currency(self, monkeypatch):
        monkeypatch.setenv("FINANCE_FORMAT_CURRENCY", "eur")
        assert format_cents(500) == "€5.00"
