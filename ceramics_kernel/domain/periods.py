"""
Calendar helpers and the inclusive ``DateRange`` value object.

All report periods in the system are inclusive on both ends and carry
calendar dates only (no time of day).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from ceramics_kernel.exceptions import InvalidDateRangeError


def as_date(value: date | datetime) -> date:
    """Strip the time component from a datetime; dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value


def month_start(value: date) -> date:
    """First day of the month containing ``value``."""
    return value.replace(day=1)


def add_months(value: date, months: int) -> date:
    """
    Shift the first of ``value``'s month by ``months`` (may be negative).

    Always returns the first day of the target month, so day-of-month
    overflow (e.g. 31 Jan + 1) never occurs.
    """
    index = value.year * 12 + (value.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


@dataclass(frozen=True)
class DateRange:
    """
    Inclusive calendar interval ``[start, end]``.

    Raises:
        InvalidDateRangeError: if ``start`` is after ``end``.
    """

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise InvalidDateRangeError(self.start, self.end)

    def contains(self, value: date | datetime) -> bool:
        return self.start <= as_date(value) <= self.end

    @property
    def days(self) -> int:
        """Number of calendar days covered, both ends included."""
        return (self.end - self.start).days + 1

    @classmethod
    def trailing(cls, today: date, days: int) -> DateRange:
        """``[today - days, today]``."""
        return cls(today - timedelta(days=days), today)

    @classmethod
    def resolve(
        cls,
        start: date | None,
        end: date | None,
        today: date,
        default_days: int,
    ) -> DateRange:
        """
        Fill missing bounds from a trailing default window.

        A missing ``end`` becomes ``today``; a missing ``start`` becomes
        ``end - default_days``.  Reversed bounds are rejected, never swapped.
        """
        resolved_end = end or today
        resolved_start = start or (resolved_end - timedelta(days=default_days))
        return cls(resolved_start, resolved_end)
