"""
Bank extract aggregation.

Extract values keep their sign end to end: positive lines are money in,
negative lines money out, and totals are plain signed sums.
"""

from __future__ import annotations

import threading
from collections.abc import Sequence
from decimal import Decimal

from ceramics_kernel.db.types import ZERO
from ceramics_kernel.domain.catalog import PaymentMethod, ordinal
from ceramics_kernel.domain.periods import DateRange
from ceramics_kernel.domain.snapshots import ExtractSnapshot
from ceramics_kernel.logging_config import get_logger
from ceramics_engines.cancellation import checked
from ceramics_engines.reconciliation.types import (
    AccountTotal,
    ExtractDirection,
    ExtractLine,
    ExtractSummary,
)
from ceramics_engines.tracer import traced_engine

logger = get_logger("engines.reconciliation.extracts")


def direction_of(value: Decimal) -> ExtractDirection:
    return ExtractDirection.INCOME if value >= 0 else ExtractDirection.OUTFLOW


def select_extract_lines(
    extracts: Sequence[ExtractSnapshot],
    date_range: DateRange,
    account: PaymentMethod | None = None,
    cancel_event: threading.Event | None = None,
) -> tuple[ExtractLine, ...]:
    """Active extracts inside the range (and account), newest first."""
    lines = [
        ExtractLine(
            extract_id=extract.extract_id,
            account=extract.account,
            extract_date=extract.extract_date,
            value=extract.value,
            direction=direction_of(extract.value),
            observation=extract.observation,
            operator_name=extract.operator_name,
        )
        for extract in checked(extracts, cancel_event, "extracts")
        if extract.is_active
        and date_range.contains(extract.extract_date)
        and (account is None or extract.account is account)
    ]
    # Stable sort keeps the source order for same-day lines
    lines.sort(key=lambda line: line.extract_date, reverse=True)
    return tuple(lines)


def totals_by_account(lines: Sequence[ExtractLine]) -> tuple[AccountTotal, ...]:
    totals: dict[PaymentMethod, Decimal] = {}
    counts: dict[PaymentMethod, int] = {}
    for line in lines:
        totals[line.account] = totals.get(line.account, ZERO) + line.value
        counts[line.account] = counts.get(line.account, 0) + 1
    return tuple(
        AccountTotal(account=account, total=totals[account], count=counts[account])
        for account in sorted(totals, key=ordinal)
    )


@traced_engine("extract_summary", "1.0", fingerprint_fields=("date_range", "account"))
def summarize_extracts(
    extracts: Sequence[ExtractSnapshot],
    date_range: DateRange,
    account: PaymentMethod | None = None,
    cancel_event: threading.Event | None = None,
) -> ExtractSummary:
    """Signed extract totals per account plus the general total."""
    lines = select_extract_lines(extracts, date_range, account, cancel_event)
    by_account = totals_by_account(lines)
    total_general = sum((line.value for line in lines), ZERO)

    logger.debug(
        "extracts_summarized",
        extra={"line_count": len(lines), "total_general": total_general},
    )
    return ExtractSummary(
        date_range=date_range,
        account=account,
        totals_by_account=by_account,
        total_general=total_general,
        lines=lines,
    )
