"""
Tests for utils/dates.py and utils/numbers.py.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from datetime import date, datetime, timedelta, timezone

from taskreport.utils.dates import days_between, normalize_today, parse_date, utc_today
from taskreport.utils.numbers import round_half_up


class TestParseDate:
    def test_iso_date(self):
        assert parse_date("2026-02-15") == date(2026, 2, 15)

    def test_iso_datetime_utc(self):
        assert parse_date("2026-02-15T10:30:00Z") == date(2026, 2, 15)

    def test_iso_datetime_offset_converted_to_utc(self):
        # 23:30 in UTC-5 is already the next day in UTC
        assert parse_date("2026-01-15T23:30:00-05:00") == date(2026, 1, 16)

    def test_naive_datetime(self):
        assert parse_date("2026-01-15T08:00:00") == date(2026, 1, 15)

    def test_us_format(self):
        assert parse_date("02/15/2026") == date(2026, 2, 15)

    def test_surrounding_whitespace(self):
        assert parse_date("  2026-02-15 ") == date(2026, 2, 15)

    def test_empty_and_none(self):
        assert parse_date("") is None
        assert parse_date("   ") is None
        assert parse_date(None) is None

    def test_invalid(self):
        assert parse_date("not a date") is None
        assert parse_date("2026-13-40") is None
        assert parse_date("2026-02-30T10:00:00Z") is None


class TestNormalizeToday:
    def test_date_unchanged(self):
        assert normalize_today(date(2026, 1, 15)) == date(2026, 1, 15)

    def test_datetime_keeps_calendar_day(self):
        assert normalize_today(datetime(2026, 1, 15, 23, 59, 59)) == date(2026, 1, 15)
        assert normalize_today(datetime(2026, 1, 15, 0, 0, 1)) == date(2026, 1, 15)

    def test_aware_datetime_keeps_calendar_day(self):
        assert normalize_today(datetime(2026, 1, 15, 23, 0, tzinfo=timezone.utc)) == date(2026, 1, 15)

    def test_aware_datetime_converted_to_utc(self):
        plus14 = timezone(timedelta(hours=14))
        assert normalize_today(datetime(2026, 1, 16, 1, 0, tzinfo=plus14)) == date(2026, 1, 15)
        minus5 = timezone(timedelta(hours=-5))
        assert normalize_today(datetime(2026, 1, 15, 22, 0, tzinfo=minus5)) == date(2026, 1, 16)

    def test_none_is_utc_today(self):
        assert normalize_today(None) == utc_today()


class TestDaysBetween:
    def test_forward_and_backward(self):
        assert days_between(date(2026, 1, 1), date(2026, 1, 5)) == 4
        assert days_between(date(2026, 1, 15), date(2026, 1, 10)) == -5
        assert days_between(date(2026, 1, 1), date(2026, 1, 1)) == 0


class TestRoundHalfUp:
    def test_halves_go_up(self):
        assert round_half_up(37.5) == 38
        assert round_half_up(12.5) == 13
        assert round_half_up(2.5) == 3

    def test_other_values(self):
        assert round_half_up(0.49) == 0
        assert round_half_up(33.333) == 33
        assert round_half_up(100.0) == 100
