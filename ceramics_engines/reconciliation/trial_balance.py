"""
TrialBalance -- Pure engine reconciling income, categorized expense and
bank extracts into a single net figure for a period.

Architecture: ceramics_engines -- pure calculation, zero I/O, zero DB access.
All inputs are frozen snapshots populated by the service layer.

Invariants enforced:
    - Income rows sum exactly to total_income_overall.
    - Group expenses sum exactly to total_expense_overall.
    - Both grand totals are computed straight from the filtered rows and
      then checked against the breakdowns; a mismatch raises
      TrialBalanceImbalanceError.
    - The Uncategorized group is always present, even when empty.
    - net_balance = income - expense + extract (extract sign preserved).

Failure modes:
    - UnknownCategoryError when a paid expense launch in the period
      references a category id missing from the supplied category list,
      whatever the filters.
    - ReportCancelledError when the caller's cancel event is set.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Sequence
from decimal import Decimal
from uuid import UUID

from ceramics_kernel.db.types import ZERO
from ceramics_kernel.domain.catalog import (
    LaunchType,
    PaymentMethod,
    PaymentStatus,
    SaleStatus,
    ordinal,
)
from ceramics_kernel.domain.periods import DateRange
from ceramics_kernel.domain.snapshots import (
    CategoryGroupSnapshot,
    CategorySnapshot,
    ExtractSnapshot,
    LaunchSnapshot,
    SaleSnapshot,
)
from ceramics_kernel.exceptions import TrialBalanceImbalanceError, UnknownCategoryError
from ceramics_kernel.logging_config import get_logger
from ceramics_engines.cancellation import checked, raise_if_cancelled
from ceramics_engines.reconciliation.extracts import select_extract_lines
from ceramics_engines.reconciliation.types import (
    AccountTotal,
    CategoryTotal,
    GroupTotal,
    IncomeRow,
    IncomeSource,
    TrialBalance,
    TrialBalanceFilters,
)
from ceramics_engines.tracer import traced_engine

logger = get_logger("engines.reconciliation.trial_balance")

UNCATEGORIZED_GROUP_NAME = "Sem grupo"
UNCATEGORIZED_CATEGORY_NAME = "Sem categoria"


# ---------------------------------------------------------------------
# Income rows
# ---------------------------------------------------------------------


def income_rows_from_launches(launches: Iterable[LaunchSnapshot]) -> list[IncomeRow]:
    """Paid Income launches as income rows."""
    return [
        IncomeRow(
            account=launch.payment_method,
            amount=launch.amount,
            row_date=launch.launch_date,
            source=IncomeSource.LAUNCH,
        )
        for launch in launches
        if launch.launch_type is LaunchType.INCOME
        and launch.status is PaymentStatus.PAID
    ]


def income_rows_from_sale_payments(sales: Iterable[SaleSnapshot]) -> list[IncomeRow]:
    """
    Payments received on active, non-cancelled sales as income rows.

    A payment without its own date is attributed to the sale date.
    """
    return [
        IncomeRow(
            account=payment.method,
            amount=payment.amount,
            row_date=payment.payment_date or sale.sale_date,
            source=IncomeSource.SALE_PAYMENT,
        )
        for sale in sales
        if sale.is_active and sale.status is not SaleStatus.CANCELLED
        for payment in sale.payments
    ]


def _account_totals(
    pairs: Iterable[tuple[PaymentMethod, Decimal]],
) -> tuple[AccountTotal, ...]:
    totals: dict[PaymentMethod, Decimal] = {}
    counts: dict[PaymentMethod, int] = {}
    for account, amount in pairs:
        totals[account] = totals.get(account, ZERO) + amount
        counts[account] = counts.get(account, 0) + 1
    ranked = sorted(totals, key=lambda account: (-totals[account], ordinal(account)))
    return tuple(
        AccountTotal(account=account, total=totals[account], count=counts[account])
        for account in ranked
    )


def _check_balanced(section: str, breakdown_total: Decimal, overall: Decimal) -> None:
    if breakdown_total != overall:
        raise TrialBalanceImbalanceError(section, breakdown_total, overall)


# ---------------------------------------------------------------------
# Expense grouping
# ---------------------------------------------------------------------


class _ExpenseClassifier:
    """Resolves each expense launch to its (group, category) bucket."""

    def __init__(
        self,
        categories: Sequence[CategorySnapshot],
        groups: Sequence[CategoryGroupSnapshot],
        uncategorized_category_name: str,
    ):
        self.categories = {c.category_id: c for c in categories}
        self.groups = {g.group_id: g for g in groups}
        self.uncategorized_category_name = uncategorized_category_name

    def category_of(self, launch: LaunchSnapshot) -> CategorySnapshot | None:
        if launch.category_id is None:
            return None
        category = self.categories.get(launch.category_id)
        if category is None:
            raise UnknownCategoryError(str(launch.launch_id), str(launch.category_id))
        return category

    def group_of(self, category: CategorySnapshot | None) -> CategoryGroupSnapshot | None:
        if category is None or category.group_id is None:
            return None
        return self.groups.get(category.group_id)

    def matches(self, launch: LaunchSnapshot, filters: TrialBalanceFilters) -> bool:
        category = self.category_of(launch)
        group = self.group_of(category)
        if filters.category_id is not None and launch.category_id != filters.category_id:
            return False
        if filters.group_id is not None and (group is None or group.group_id != filters.group_id):
            return False
        needle = (filters.search or "").strip().lower()
        if needle:
            haystack = (
                launch.description,
                category.name if category else "",
                group.name if group else "",
            )
            if not any(needle in text.lower() for text in haystack):
                return False
        return True


def _group_expenses(
    launches: Sequence[LaunchSnapshot],
    classifier: _ExpenseClassifier,
    uncategorized_group_name: str,
) -> tuple[GroupTotal, ...]:
    # group_id -> category_id -> [total, count]
    buckets: dict[UUID | None, dict[UUID | None, list]] = {None: {}}
    category_names: dict[UUID | None, str] = {
        None: classifier.uncategorized_category_name,
    }
    for launch in launches:
        category = classifier.category_of(launch)
        group = classifier.group_of(category)
        group_key = group.group_id if group else None
        category_key = category.category_id if category else None
        if category is not None:
            category_names[category_key] = category.name
        bucket = buckets.setdefault(group_key, {}).setdefault(category_key, [ZERO, 0])
        bucket[0] += launch.amount
        bucket[1] += 1

    def build(group_key: UUID | None, name: str) -> GroupTotal:
        rows = [
            CategoryTotal(
                category_id=category_key,
                name=category_names[category_key],
                total=total,
                launch_count=count,
            )
            for category_key, (total, count) in buckets[group_key].items()
        ]
        rows.sort(key=lambda row: (-row.total, row.name))
        return GroupTotal(
            group_id=group_key,
            name=name,
            categories=tuple(rows),
            group_expense=sum((row.total for row in rows), ZERO),
        )

    named = [
        build(group_key, classifier.groups[group_key].name)
        for group_key in buckets
        if group_key is not None
    ]
    named.sort(key=lambda group: (group.name, str(group.group_id)))
    return tuple(named) + (build(None, uncategorized_group_name),)


# ---------------------------------------------------------------------
# Trial balance
# ---------------------------------------------------------------------


@traced_engine("trial_balance", "1.0", fingerprint_fields=("date_range", "filters"))
def compute_trial_balance(
    income_rows: Sequence[IncomeRow],
    expense_launches: Sequence[LaunchSnapshot],
    categories: Sequence[CategorySnapshot],
    groups: Sequence[CategoryGroupSnapshot],
    extracts: Sequence[ExtractSnapshot],
    date_range: DateRange,
    filters: TrialBalanceFilters | None = None,
    cancel_event: threading.Event | None = None,
    uncategorized_group_name: str = UNCATEGORIZED_GROUP_NAME,
    uncategorized_category_name: str = UNCATEGORIZED_CATEGORY_NAME,
) -> TrialBalance:
    """
    Reconcile one period.

    Args:
        income_rows: Candidate income rows (see ``income_rows_from_*``).
        expense_launches: Candidate launches; only Paid Expense launches
            are counted.
        categories: Category catalog used to resolve launch categories.
        groups: Group catalog; categories pointing at a missing group
            fall into Uncategorized.
        extracts: Candidate bank extract lines.
        date_range: Inclusive period.
        filters: Optional account / group / category / search narrowing.
        cancel_event: Optional cooperative cancellation signal.
    """
    filters = filters or TrialBalanceFilters()
    account = filters.account

    # Income
    income = [
        row
        for row in checked(income_rows, cancel_event, "trial_balance.income")
        if date_range.contains(row.row_date)
        and (account is None or row.account is account)
    ]
    income_by_account = _account_totals((row.account, row.amount) for row in income)
    total_income = sum((row.amount for row in income), ZERO)
    _check_balanced(
        "income",
        sum((row.total for row in income_by_account), ZERO),
        total_income,
    )

    # Expense
    classifier = _ExpenseClassifier(categories, groups, uncategorized_category_name)
    candidates = [
        launch
        for launch in checked(expense_launches, cancel_event, "trial_balance.expense")
        if launch.launch_type is LaunchType.EXPENSE
        and launch.status is PaymentStatus.PAID
        and date_range.contains(launch.launch_date)
    ]
    # Every candidate category must resolve, whatever the filters.
    for launch in candidates:
        classifier.category_of(launch)
    expenses = [
        launch
        for launch in candidates
        if (account is None or launch.payment_method is account)
        and classifier.matches(launch, filters)
    ]
    expense_by_group = _group_expenses(expenses, classifier, uncategorized_group_name)
    expense_by_account = _account_totals(
        (launch.payment_method, launch.amount) for launch in expenses
    )
    total_expense = sum((launch.amount for launch in expenses), ZERO)
    _check_balanced(
        "expense",
        sum((group.group_expense for group in expense_by_group), ZERO),
        total_expense,
    )
    _check_balanced(
        "expense_by_account",
        sum((row.total for row in expense_by_account), ZERO),
        total_expense,
    )

    # Extracts
    extract_lines = select_extract_lines(extracts, date_range, account, cancel_event)
    total_extract = sum((line.value for line in extract_lines), ZERO)

    raise_if_cancelled(cancel_event, "trial_balance")

    net_balance = total_income - total_expense + total_extract
    logger.debug(
        "trial_balance_computed",
        extra={
            "period_start": date_range.start,
            "period_end": date_range.end,
            "income_rows": len(income),
            "expense_launches": len(expenses),
            "extract_lines": len(extract_lines),
            "net_balance": net_balance,
        },
    )
    return TrialBalance(
        date_range=date_range,
        filters=filters,
        income_by_account=income_by_account,
        total_income_overall=total_income,
        expense_by_group=expense_by_group,
        expense_by_account=expense_by_account,
        total_expense_overall=total_expense,
        extracts=extract_lines,
        total_extract_overall=total_extract,
        net_balance=net_balance,
    )
