"""
Module: ceramics_engines.ratios
Responsibility:
    Derived dashboard ratios with explicit zero-guards.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Every percentage is a Decimal rounded to two places with
      ROUND_HALF_UP via ``round_money``.
    - A zero or missing denominator yields 0, never an exception.

Failure modes:
    - ValueError for negative counts (a caller bug, not a data condition).
"""

from __future__ import annotations

from decimal import Decimal

from ceramics_kernel.db.types import ZERO, round_money

HUNDRED = Decimal("100")


def _require_non_negative(**counts: int) -> None:
    for name, value in counts.items():
        if value < 0:
            raise ValueError(f"{name} cannot be negative, got {value}")


def round_ratio(value: Decimal) -> Decimal:
    """Two-place ROUND_HALF_UP rounding used for every displayed ratio."""
    return round_money(value, 2)


def percentage_of(part: Decimal | int, whole: Decimal | int) -> Decimal:
    """``part / whole * 100`` rounded to two places; 0 when ``whole`` is 0."""
    whole = Decimal(whole)
    if whole == 0:
        return round_ratio(ZERO)
    return round_ratio(Decimal(part) / whole * HUNDRED)


def conversion_rate(pending: int, confirmed: int) -> Decimal:
    """
    Share of decided-or-pending sales that were confirmed, in percent.

    ``confirmed / (pending + confirmed) * 100``, 0 when both are 0.
    Always within [0, 100].
    """
    _require_non_negative(pending=pending, confirmed=confirmed)
    return percentage_of(confirmed, pending + confirmed)


def monthly_growth(current: Decimal, previous: Decimal) -> Decimal:
    """
    Month-over-month revenue growth in percent.

    ``(current - previous) / previous * 100``; 0 when there is no positive
    baseline (previous <= 0).
    """
    if previous <= 0:
        return round_ratio(ZERO)
    return round_ratio((current - previous) / previous * HUNDRED)


def total_active_sales(pending: int, confirmed: int, partially_paid: int) -> int:
    """Sales still in play: pending + confirmed + partially paid."""
    _require_non_negative(
        pending=pending, confirmed=confirmed, partially_paid=partially_paid
    )
    return pending + confirmed + partially_paid
