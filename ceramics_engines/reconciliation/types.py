"""
Value objects for trial balance reconciliation.

All frozen, all amounts Decimal.  Produced by the pure functions in
``trial_balance`` and ``extracts``; consumed by the reporting assembler.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from uuid import UUID

from ceramics_kernel.domain.catalog import PaymentMethod
from ceramics_kernel.domain.periods import DateRange


class IncomeSource(str, Enum):
    """Where an income row came from."""

    LAUNCH = "launch"
    SALE_PAYMENT = "sale_payment"


class ExtractDirection(str, Enum):
    INCOME = "income"
    OUTFLOW = "outflow"


@dataclass(frozen=True)
class IncomeRow:
    """One unit of received money attributed to an account."""

    account: PaymentMethod
    amount: Decimal
    row_date: date
    source: IncomeSource = IncomeSource.LAUNCH


@dataclass(frozen=True)
class TrialBalanceFilters:
    """
    Optional narrowing of the trial balance.

    ``account`` applies to income, expense and extracts.  ``group_id``,
    ``category_id`` and ``search`` (case-insensitive match on description,
    category name or group name) apply to the expense side only.
    """

    account: PaymentMethod | None = None
    group_id: UUID | None = None
    category_id: UUID | None = None
    search: str | None = None


@dataclass(frozen=True)
class AccountTotal:
    account: PaymentMethod
    total: Decimal
    count: int


@dataclass(frozen=True)
class CategoryTotal:
    category_id: UUID | None
    name: str
    total: Decimal
    launch_count: int


@dataclass(frozen=True)
class GroupTotal:
    """A category group and its categories; group_id None is Uncategorized."""

    group_id: UUID | None
    name: str
    categories: tuple[CategoryTotal, ...]
    group_expense: Decimal

    @property
    def is_uncategorized(self) -> bool:
        return self.group_id is None


@dataclass(frozen=True)
class ExtractLine:
    extract_id: UUID
    account: PaymentMethod
    extract_date: date
    value: Decimal
    direction: ExtractDirection
    observation: str = ""
    operator_name: str = ""


@dataclass(frozen=True)
class TrialBalance:
    """
    Income, categorized expense and bank extracts reconciled into one net.

    ``net_balance = total_income_overall - total_expense_overall
    + total_extract_overall``.
    """

    date_range: DateRange
    filters: TrialBalanceFilters
    income_by_account: tuple[AccountTotal, ...]
    total_income_overall: Decimal
    expense_by_group: tuple[GroupTotal, ...]
    expense_by_account: tuple[AccountTotal, ...]
    total_expense_overall: Decimal
    extracts: tuple[ExtractLine, ...]
    total_extract_overall: Decimal
    net_balance: Decimal

    @property
    def total_expense_by_account(self) -> Decimal:
        """Sum of the per-account expense rows; equals total_expense_overall."""
        return sum((row.total for row in self.expense_by_account), Decimal("0"))


@dataclass(frozen=True)
class ExtractSummary:
    date_range: DateRange
    account: PaymentMethod | None
    totals_by_account: tuple[AccountTotal, ...]
    total_general: Decimal
    lines: tuple[ExtractLine, ...]
