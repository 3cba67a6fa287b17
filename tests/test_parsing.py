"""Tests for console input parsing."""

from datetime import date

import pytest

from ledger.validation import (
    InputParseError,
    parse_amount,
    parse_day,
    parse_destination,
    parse_int,
    parse_month,
    parse_year,
)


class TestParseNumbers:
    """Tests for integer, amount and year parsing."""

    @pytest.mark.parametrize("raw,expected", [("42", 42), (" 7 ", 7), ("-3", -3), ("+5", 5)])
    def test_parse_int(self, raw, expected):
        assert parse_int(raw) == expected

    @pytest.mark.parametrize("raw", ["", "abc", "1.5", "12abc", "1 000"])
    def test_parse_int_rejects_non_integers(self, raw):
        with pytest.raises(InputParseError, match="Enter an integer"):
            parse_int(raw)

    def test_parse_amount(self):
        assert parse_amount("100") == 100

    @pytest.mark.parametrize("raw", ["0", "-5"])
    def test_parse_amount_rejects_non_positive(self, raw):
        with pytest.raises(InputParseError, match="greater than zero"):
            parse_amount(raw)

    def test_parse_year(self):
        assert parse_year("2024") == 2024

    @pytest.mark.parametrize("raw", ["0", "-1", "10000"])
    def test_parse_year_bounds(self, raw):
        with pytest.raises(InputParseError):
            parse_year(raw)


class TestParseDates:
    """Tests for day and month parsing."""

    def test_parse_day(self):
        assert parse_day("2024-01-05") == date(2024, 1, 5)
        assert parse_day(" 2024-02-29 ") == date(2024, 2, 29)

    @pytest.mark.parametrize("raw", ["2024-1-5", "24-01-05", "2024/01/05", "20240105", ""])
    def test_parse_day_rejects_wrong_format(self, raw):
        with pytest.raises(InputParseError, match="YYYY-MM-DD"):
            parse_day(raw)

    @pytest.mark.parametrize("raw", ["2023-02-29", "2024-13-01", "2024-04-31"])
    def test_parse_day_rejects_impossible_dates(self, raw):
        with pytest.raises(InputParseError, match="Invalid date"):
            parse_day(raw)

    def test_parse_month(self):
        assert parse_month("2024-01") == (2024, 1)

    @pytest.mark.parametrize("raw", ["2024-1", "2024-01-05", "01-2024"])
    def test_parse_month_rejects_wrong_format(self, raw):
        with pytest.raises(InputParseError, match="YYYY-MM"):
            parse_month(raw)

    @pytest.mark.parametrize("raw", ["2024-00", "2024-13"])
    def test_parse_month_bounds(self, raw):
        with pytest.raises(InputParseError, match="between 01 and 12"):
            parse_month(raw)


class TestParseDestination:
    def test_trims(self):
        assert parse_destination("  ledger.json ") == "ledger.json"

    def test_rejects_blank(self):
        with pytest.raises(InputParseError):
            parse_destination("   ")
