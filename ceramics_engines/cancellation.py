"""
Cooperative cancellation for long aggregations.

Callers pass a ``threading.Event``; engines check it between rows and
between phases.  ``None`` means the computation cannot be cancelled.
A cancelled computation raises and never yields a partial result.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator
from typing import TypeVar

from ceramics_kernel.exceptions import ReportCancelledError
from ceramics_kernel.logging_config import get_logger

logger = get_logger("engines.cancellation")

T = TypeVar("T")


def raise_if_cancelled(cancel_event: threading.Event | None, stage: str) -> None:
    """Raise ReportCancelledError if ``cancel_event`` has been set."""
    if cancel_event is not None and cancel_event.is_set():
        logger.info("report_cancelled", extra={"stage": stage})
        raise ReportCancelledError(stage)


def checked(
    rows: Iterable[T],
    cancel_event: threading.Event | None,
    stage: str,
) -> Iterator[T]:
    """Yield ``rows``, checking for cancellation before each one."""
    if cancel_event is None:
        yield from rows
        return
    for row in rows:
        raise_if_cancelled(cancel_event, stage)
        yield row
