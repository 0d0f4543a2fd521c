"""
Tests for calendar helpers and DateRange.

Covers:
- Month arithmetic across year boundaries
- Inclusive containment
- Default window resolution
- Rejection of reversed ranges
"""

from datetime import date, datetime, timezone

import pytest

from ceramics_kernel.domain.periods import DateRange, add_months, as_date, month_start
from ceramics_kernel.exceptions import InvalidDateRangeError


class TestCalendarHelpers:
    """Tests for month helpers."""

    def test_as_date_strips_time(self):
        assert as_date(datetime(2024, 5, 3, 23, 59, tzinfo=timezone.utc)) == date(2024, 5, 3)

    def test_as_date_passes_dates_through(self):
        assert as_date(date(2024, 5, 3)) == date(2024, 5, 3)

    def test_month_start(self):
        assert month_start(date(2024, 2, 29)) == date(2024, 2, 1)

    def test_add_months_backwards_across_year(self):
        assert add_months(date(2025, 2, 1), -11) == date(2024, 3, 1)

    def test_add_months_forwards_across_year(self):
        assert add_months(date(2024, 11, 1), 3) == date(2025, 2, 1)

    def test_add_months_from_month_end_returns_first(self):
        """31 Jan + 1 month is 1 Feb, never an overflow."""
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 1)


class TestDateRange:
    """Tests for the inclusive DateRange."""

    def test_contains_is_inclusive(self):
        period = DateRange(date(2024, 1, 1), date(2024, 1, 31))

        assert period.contains(date(2024, 1, 1))
        assert period.contains(date(2024, 1, 31))
        assert not period.contains(date(2024, 2, 1))
        assert not period.contains(date(2023, 12, 31))

    def test_single_day_range(self):
        period = DateRange(date(2024, 1, 1), date(2024, 1, 1))
        assert period.days == 1

    def test_reversed_range_rejected(self):
        with pytest.raises(InvalidDateRangeError) as exc_info:
            DateRange(date(2024, 2, 1), date(2024, 1, 1))

        assert exc_info.value.code == "INVALID_DATE_RANGE"
        assert exc_info.value.start == date(2024, 2, 1)

    def test_trailing(self):
        period = DateRange.trailing(date(2024, 6, 15), 30)
        assert period == DateRange(date(2024, 5, 16), date(2024, 6, 15))

    def test_resolve_defaults_both_bounds(self):
        period = DateRange.resolve(None, None, date(2024, 6, 15), 30)
        assert period == DateRange(date(2024, 5, 16), date(2024, 6, 15))

    def test_resolve_start_relative_to_explicit_end(self):
        period = DateRange.resolve(None, date(2024, 3, 31), date(2024, 6, 15), 30)
        assert period.start == date(2024, 3, 1)

    def test_resolve_keeps_explicit_bounds(self):
        period = DateRange.resolve(date(2024, 1, 1), date(2024, 1, 2), date(2024, 6, 15), 30)
        assert period == DateRange(date(2024, 1, 1), date(2024, 1, 2))

    def test_resolve_rejects_start_after_default_end(self):
        with pytest.raises(InvalidDateRangeError):
            DateRange.resolve(date(2024, 7, 1), None, date(2024, 6, 15), 30)
