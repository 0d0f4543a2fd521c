"""
Module: ceramics_kernel.selectors.ports
Responsibility: Query filters and the ``ReportingSource`` port through which
    the reporting service reads all of its data.

The SQL implementation lives in ``sql_source``; tests substitute in-memory
fakes.  Every implementation must return immutable snapshots and must honour
``snapshot()`` so that all reads of one report observe the same state.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from datetime import date
from typing import Any, Protocol, runtime_checkable

from ceramics_kernel.domain.catalog import (
    LaunchType,
    PaymentMethod,
    PaymentStatus,
    SaleStatus,
)
from ceramics_kernel.domain.snapshots import (
    CategoryGroupSnapshot,
    CategorySnapshot,
    ExtractSnapshot,
    LaunchSnapshot,
    SaleSnapshot,
)


@dataclass(frozen=True)
class SaleFilter:
    """Inclusive date bounds (either may be open) plus optional statuses."""

    start: date | None = None
    end: date | None = None
    statuses: frozenset[SaleStatus] | None = None
    active_only: bool = True


@dataclass(frozen=True)
class LaunchFilter:
    start: date | None = None
    end: date | None = None
    launch_type: LaunchType | None = None
    status: PaymentStatus | None = None
    payment_method: PaymentMethod | None = None


@dataclass(frozen=True)
class ExtractFilter:
    start: date | None = None
    end: date | None = None
    account: PaymentMethod | None = None
    active_only: bool = True


@runtime_checkable
class ReportingSource(Protocol):
    """Read-only data port consumed by ``ReportingService``."""

    def snapshot(self) -> AbstractContextManager[Any]:
        """Scope in which every list_* call sees one consistent state."""
        ...

    def list_sales(self, criteria: SaleFilter) -> list[SaleSnapshot]:
        ...

    def list_financial_launches(self, criteria: LaunchFilter) -> list[LaunchSnapshot]:
        ...

    def list_bank_extracts(self, criteria: ExtractFilter) -> list[ExtractSnapshot]:
        ...

    def list_categories(self) -> list[CategorySnapshot]:
        """Every category ever created, soft-deleted ones included."""
        ...

    def list_category_groups(self) -> list[CategoryGroupSnapshot]:
        """Every category group ever created, soft-deleted ones included."""
        ...
