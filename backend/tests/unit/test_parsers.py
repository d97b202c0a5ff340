"""
Tests for core/parsers.py - calendar date and month label parsing
"""

from datetime import date

from core.parsers import parse_calendar_date, parse_full_date, parse_month_label


class TestParseMonthLabel:
    """Tests for month label parsing"""

    def test_name_with_year_suffix(self):
        assert parse_month_label("May'25") == (5, 2025)

    def test_name_is_case_insensitive(self):
        assert parse_month_label("DECEMBER'24") == (12, 2024)

    def test_whitespace_around_name(self):
        assert parse_month_label(" july ' 26") == (7, 2026)

    def test_missing_suffix_gives_no_year(self):
        assert parse_month_label("March") == (3, None)

    def test_non_numeric_suffix_gives_no_year(self):
        assert parse_month_label("March'xx") == (3, None)

    def test_three_digit_suffix_gives_no_year(self):
        assert parse_month_label("March'125") == (3, None)

    def test_abbreviated_name_is_unknown(self):
        """Only full English month names are recognised"""
        assert parse_month_label("Sep'25") is None

    def test_empty_label(self):
        assert parse_month_label("") is None
        assert parse_month_label(None) is None


class TestParseFullDate:
    def test_valid(self):
        assert parse_full_date("17-05-2025") == (17, 5, 2025)

    def test_wrong_part_count(self):
        assert parse_full_date("17-05") is None

    def test_non_numeric(self):
        assert parse_full_date("aa-05-2025") is None


class TestParseCalendarDate:
    """Tests for parse_calendar_date"""

    def test_full_date(self):
        assert parse_calendar_date("17-05-2025") == date(2025, 5, 17)

    def test_full_date_ignores_month_label(self):
        assert parse_calendar_date("17-05-2025", "December'30") == date(2025, 5, 17)

    def test_impossible_full_date_returns_none(self):
        assert parse_calendar_date("31-02-2025") is None

    def test_bare_day_with_label(self):
        assert parse_calendar_date("6", "May'25") == date(2025, 5, 6)

    def test_bare_day_without_suffix_uses_today_year(self):
        assert parse_calendar_date("6", "May", today=date(2031, 1, 1)) == date(2031, 5, 6)

    def test_bare_day_without_label_returns_none(self):
        assert parse_calendar_date("6") is None

    def test_unknown_month_returns_none(self):
        assert parse_calendar_date("6", "Mayo'25") is None

    def test_non_numeric_day_returns_none(self):
        assert parse_calendar_date("x", "May'25") is None

    def test_day_out_of_range_returns_none(self):
        assert parse_calendar_date("31", "April'25") is None

    def test_empty_token_returns_none(self):
        assert parse_calendar_date("", "May'25") is None
