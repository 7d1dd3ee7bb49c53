"""Tests for period selectors and custom date ranges."""

from datetime import date, datetime

import pytest

from workpulse.exceptions import ConfigurationError, InvalidDateRangeError
from workpulse.periods import resolve_date_range

TODAY = date(2024, 3, 10)


class TestResolveDateRange:
    def test_day(self):
        r = resolve_date_range("day", today=TODAY)
        assert r.start == datetime(2024, 3, 10, 0, 0, 0)
        assert r.end == datetime(2024, 3, 10, 23, 59, 59)
        assert r.days == 1

    def test_week_is_trailing_seven_days(self):
        r = resolve_date_range("week", today=TODAY)
        assert r.start.date() == date(2024, 3, 4)
        assert r.end.date() == TODAY
        assert r.days == 7
        assert r.label == "Last 7 days"

    def test_month_is_trailing_thirty_days(self):
        r = resolve_date_range("month", today=TODAY)
        assert r.start.date() == date(2024, 2, 10)
        assert r.days == 30

    def test_all_starts_at_epoch(self):
        r = resolve_date_range("all", today=TODAY)
        assert r.start == datetime(1970, 1, 1)

    def test_aliases_and_case(self):
        assert resolve_date_range("Weekly", today=TODAY).days == 7
        assert resolve_date_range("today", today=TODAY).days == 1

    def test_custom(self):
        r = resolve_date_range("custom", "2024-02-01", "2024-02-10", today=TODAY)
        assert r.start == datetime(2024, 2, 1, 0, 0, 0)
        assert r.end == datetime(2024, 2, 10, 23, 59, 59)
        assert r.label == "2024-02-01 to 2024-02-10"

    def test_custom_single_day(self):
        assert resolve_date_range("custom", "2024-02-01", "2024-02-01", today=TODAY).days == 1

    def test_custom_accepts_date_objects(self):
        r = resolve_date_range("custom", date(2024, 1, 1), date(2024, 1, 2), today=TODAY)
        assert r.days == 2

    def test_custom_reversed(self):
        with pytest.raises(InvalidDateRangeError) as exc:
            resolve_date_range("custom", "2024-02-10", "2024-02-01", today=TODAY)
        assert exc.value.details["start"] == "2024-02-10"
        assert isinstance(exc.value, ConfigurationError)

    @pytest.mark.parametrize("start,end", [(None, "2024-02-01"), ("2024-02-01", None), ("", "")])
    def test_custom_requires_both(self, start, end):
        with pytest.raises(InvalidDateRangeError):
            resolve_date_range("custom", start, end, today=TODAY)

    def test_custom_malformed(self):
        with pytest.raises(InvalidDateRangeError, match="YYYY-MM-DD"):
            resolve_date_range("custom", "02/01/2024", "2024-02-10", today=TODAY)

    def test_unknown_period(self):
        with pytest.raises(InvalidDateRangeError, match="unknown period"):
            resolve_date_range("fortnight", today=TODAY)

    def test_start_end_ignored_for_named_periods(self):
        r = resolve_date_range("day", "2000-01-01", "1999-01-01", today=TODAY)
        assert r.days == 1
