"""
Tests for reporting window resolution.

Covers:
- Month, year, 30-day and 7-day window starts
- Trailing 12-month series across a year boundary
- Month index lookup
"""

from datetime import date, datetime, timezone

from ceramics_engines.windows import TRAILING_MONTHS, resolve_windows


class TestResolveWindows:
    """Tests for window starts."""

    def test_window_starts(self):
        windows = resolve_windows(date(2024, 6, 15))

        assert windows.today == date(2024, 6, 15)
        assert windows.current_month_start == date(2024, 6, 1)
        assert windows.year_start == date(2024, 1, 1)
        assert windows.last_30_days_start == date(2024, 5, 16)
        assert windows.last_7_days_start == date(2024, 6, 8)

    def test_accepts_datetime(self):
        windows = resolve_windows(datetime(2024, 6, 15, 23, 59, tzinfo=timezone.utc))
        assert windows.today == date(2024, 6, 15)

    def test_trailing_window_crosses_year(self):
        """Any day of February 2025 starts the trailing series on 1 March 2024."""
        for day in (1, 14, 28):
            windows = resolve_windows(date(2025, 2, day))
            assert windows.trailing_12_months_start == date(2024, 3, 1)

    def test_month_starts_oldest_first(self):
        windows = resolve_windows(date(2025, 2, 10))
        starts = windows.month_starts

        assert len(starts) == TRAILING_MONTHS
        assert starts[0] == date(2024, 3, 1)
        assert starts[-1] == date(2025, 2, 1)
        assert list(starts) == sorted(starts)

    def test_january_trailing_window(self):
        windows = resolve_windows(date(2024, 1, 1))
        assert windows.trailing_12_months_start == date(2023, 2, 1)
        assert windows.last_7_days_start == date(2023, 12, 25)


class TestMonthIndex:
    """Tests for mapping a date to its trailing-series slot."""

    def test_current_month_is_last_slot(self):
        windows = resolve_windows(date(2024, 6, 15))
        assert windows.month_index(date(2024, 6, 30)) == 11

    def test_first_slot(self):
        windows = resolve_windows(date(2024, 6, 15))
        assert windows.month_index(date(2023, 7, 1)) == 0

    def test_before_window(self):
        windows = resolve_windows(date(2024, 6, 15))
        assert windows.month_index(date(2023, 6, 30)) is None

    def test_after_current_month(self):
        windows = resolve_windows(date(2024, 6, 15))
        assert windows.month_index(date(2024, 7, 1)) is None
