"""
Module: ceramics_engines.indicators
Responsibility:
    Sales KPIs for the dashboard: per-window counts and revenue, status
    breakdown, average ticket, unique customers and the trailing 12-month
    series.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Revenue only ever counts Confirmed sales; counts include every status.
    - The monthly series always has exactly 12 entries, index 0 being the
      first trailing month.  Months without sales stay at zero.
    - Sum of revenue_by_month equals the total net of Confirmed sales
      inside the trailing window.

Failure modes:
    - ReportCancelledError when the caller's cancel event is set.
    - Empty input yields an all-zero result, never an exception.
"""

from __future__ import annotations

import threading
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from ceramics_kernel.db.types import ZERO, round_money
from ceramics_kernel.domain.catalog import SaleStatus
from ceramics_kernel.domain.snapshots import SaleSnapshot
from ceramics_kernel.logging_config import get_logger
from ceramics_engines.cancellation import checked, raise_if_cancelled
from ceramics_engines.tracer import traced_engine
from ceramics_engines.windows import TRAILING_MONTHS, ReportingWindows

logger = get_logger("engines.indicators")


@dataclass(frozen=True)
class WindowTotals:
    """Sales count and Confirmed revenue since a window start."""

    count: int = 0
    revenue: Decimal = ZERO


@dataclass(frozen=True)
class StatusCounts:
    pending: int = 0
    partially_paid: int = 0
    confirmed: int = 0
    cancelled: int = 0
    donation: int = 0

    @property
    def total(self) -> int:
        return (
            self.pending
            + self.partially_paid
            + self.confirmed
            + self.cancelled
            + self.donation
        )


@dataclass(frozen=True)
class SalesIndicators:
    """Raw dashboard KPIs, before derived ratios are attached."""

    this_month: WindowTotals
    this_year: WindowTotals
    last_30_days: WindowTotals
    last_7_days: WindowTotals
    status_counts: StatusCounts
    average_ticket: Decimal
    unique_customers: int
    month_starts: tuple[date, ...]
    sales_by_month: tuple[int, ...]
    revenue_by_month: tuple[Decimal, ...]


class _WindowAccumulator:
    def __init__(self, start: date):
        self.start = start
        self.count = 0
        self.revenue = ZERO

    def add(self, sale: SaleSnapshot) -> None:
        if sale.sale_date < self.start:
            return
        self.count += 1
        if sale.status is SaleStatus.CONFIRMED:
            self.revenue += sale.total_net

    def freeze(self) -> WindowTotals:
        return WindowTotals(count=self.count, revenue=self.revenue)


@traced_engine("indicators", "1.0", fingerprint_fields=("windows",))
def compute_sales_indicators(
    sales: Sequence[SaleSnapshot],
    windows: ReportingWindows,
    cancel_event: threading.Event | None = None,
) -> SalesIndicators:
    """
    Aggregate dashboard KPIs over already-filtered active sales.

    Args:
        sales: Active sales; status counts, average ticket and unique
            customers are computed over all of them.
        windows: Resolved reporting windows.
        cancel_event: Optional cooperative cancellation signal.
    """
    month = _WindowAccumulator(windows.current_month_start)
    year = _WindowAccumulator(windows.year_start)
    last_30 = _WindowAccumulator(windows.last_30_days_start)
    last_7 = _WindowAccumulator(windows.last_7_days_start)
    accumulators = (month, year, last_30, last_7)

    status_tally = {status: 0 for status in SaleStatus}
    confirmed_ticket_sum = ZERO
    confirmed_ticket_count = 0
    customers: set[str] = set()
    sales_by_month = [0] * TRAILING_MONTHS
    revenue_by_month = [ZERO] * TRAILING_MONTHS

    for sale in checked(sales, cancel_event, "sales_indicators"):
        for acc in accumulators:
            acc.add(sale)

        status_tally[sale.status] += 1
        if sale.status is SaleStatus.CONFIRMED and sale.total_net > 0:
            confirmed_ticket_sum += sale.total_net
            confirmed_ticket_count += 1

        name = sale.customer_name.strip()
        if name:
            customers.add(name)

        index = windows.month_index(sale.sale_date)
        if index is not None:
            sales_by_month[index] += 1
            if sale.status is SaleStatus.CONFIRMED:
                revenue_by_month[index] += sale.total_net

    raise_if_cancelled(cancel_event, "sales_indicators")

    average_ticket = ZERO
    if confirmed_ticket_count:
        average_ticket = confirmed_ticket_sum / confirmed_ticket_count

    result = SalesIndicators(
        this_month=month.freeze(),
        this_year=year.freeze(),
        last_30_days=last_30.freeze(),
        last_7_days=last_7.freeze(),
        status_counts=StatusCounts(
            pending=status_tally[SaleStatus.PENDING],
            partially_paid=status_tally[SaleStatus.PARTIALLY_PAID],
            confirmed=status_tally[SaleStatus.CONFIRMED],
            cancelled=status_tally[SaleStatus.CANCELLED],
            donation=status_tally[SaleStatus.DONATION],
        ),
        average_ticket=round_money(average_ticket),
        unique_customers=len(customers),
        month_starts=windows.month_starts,
        sales_by_month=tuple(sales_by_month),
        revenue_by_month=tuple(revenue_by_month),
    )

    logger.debug(
        "sales_indicators_computed",
        extra={
            "sale_count": len(sales),
            "confirmed_count": result.status_counts.confirmed,
            "unique_customers": result.unique_customers,
        },
    )
    return result
