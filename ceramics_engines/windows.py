"""
Module: ceramics_engines.windows
Responsibility:
    Resolve the calendar windows every dashboard indicator is measured
    against, from a single "now" supplied by the caller.

Architecture position:
    Engines -- pure calculation layer, zero I/O.  Never reads the clock;
    the service passes ``clock.now()`` in.

Invariants enforced:
    - Window starts are inclusive dates.
    - The trailing 12-month window always starts on the first of a month
      and spans exactly 12 month starts, oldest first, ending with the
      current month.

Failure modes:
    None.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from ceramics_kernel.domain.periods import add_months, as_date, month_start

TRAILING_MONTHS = 12


@dataclass(frozen=True)
class ReportingWindows:
    """Inclusive window starts derived from ``today``."""

    today: date
    current_month_start: date
    year_start: date
    last_30_days_start: date
    last_7_days_start: date
    trailing_12_months_start: date

    @property
    def month_starts(self) -> tuple[date, ...]:
        """First day of each of the trailing 12 months, oldest first."""
        return tuple(
            add_months(self.trailing_12_months_start, offset)
            for offset in range(TRAILING_MONTHS)
        )

    def month_index(self, value: date) -> int | None:
        """
        Position 0..11 of ``value``'s month in the trailing series.

        Returns None for dates outside the 12 trailing months.
        """
        start = self.trailing_12_months_start
        index = (value.year - start.year) * 12 + (value.month - start.month)
        if 0 <= index < TRAILING_MONTHS:
            return index
        return None


def resolve_windows(now: date | datetime) -> ReportingWindows:
    """
    Compute all reporting windows for the day containing ``now``.

    The trailing window starts on the first day of the month eleven months
    before the current one, so resolving on any day of February 2025 yields
    1 March 2024.
    """
    today = as_date(now)
    current_month_start = month_start(today)
    return ReportingWindows(
        today=today,
        current_month_start=current_month_start,
        year_start=date(today.year, 1, 1),
        last_30_days_start=today - timedelta(days=30),
        last_7_days_start=today - timedelta(days=7),
        trailing_12_months_start=add_months(current_month_start, -(TRAILING_MONTHS - 1)),
    )
