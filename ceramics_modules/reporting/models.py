"""
Report Domain Models (``ceramics_modules.reporting.models``).

Responsibility
--------------
Frozen dataclass value objects returned to callers: the sales dashboard,
the three rankings, the trial balance, the product-items report and the
bank extract summary.

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.  Built by
``ReportAssembler`` and returned by ``ReportingService``.

Invariants enforced
-------------------
* All models are ``frozen=True`` (immutable after construction).
* All monetary fields use ``Decimal`` -- NEVER ``float``.
* Derived ratios are plain fields computed once at assembly time.
* Every line item carries its display label next to its enum value.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from uuid import UUID

from ceramics_kernel.domain.catalog import PaymentMethod, ProductType


# =========================================================================
# Enums
# =========================================================================


class ReportType(str, Enum):
    """Types of reports produced by the service."""

    SALES_DASHBOARD = "sales_dashboard"
    TOP_PRODUCTS = "top_products"
    TOP_CITIES = "top_cities"
    PAYMENT_BREAKDOWN = "payment_breakdown"
    TRIAL_BALANCE = "trial_balance"
    PRODUCT_ITEMS = "product_items"
    EXTRACT_SUMMARY = "extract_summary"


# =========================================================================
# Report Metadata (common to all reports)
# =========================================================================


@dataclass(frozen=True)
class ReportMetadata:
    """Metadata attached to every report."""

    report_type: ReportType
    entity_name: str
    currency: str
    as_of_date: date
    generated_at: str  # ISO format timestamp from injected clock
    period_start: date | None = None
    period_end: date | None = None
    filters: tuple[tuple[str, str], ...] | None = None


# =========================================================================
# Rankings
# =========================================================================


@dataclass(frozen=True)
class ProductRankingLine:
    product: ProductType
    description: str
    total_quantity: Decimal
    total_revenue: Decimal
    sale_count: int


@dataclass(frozen=True)
class PaymentMethodLine:
    method: PaymentMethod
    description: str
    count: int
    total_amount: Decimal
    percentage: Decimal


@dataclass(frozen=True)
class CityRankingLine:
    city: str
    state: str
    sale_count: int
    total_revenue: Decimal


@dataclass(frozen=True)
class TopProductsReport:
    metadata: ReportMetadata
    lines: tuple[ProductRankingLine, ...]


@dataclass(frozen=True)
class TopCitiesReport:
    metadata: ReportMetadata
    lines: tuple[CityRankingLine, ...]


@dataclass(frozen=True)
class PaymentBreakdownReport:
    metadata: ReportMetadata
    lines: tuple[PaymentMethodLine, ...]
    total_count: int
    total_amount: Decimal


# =========================================================================
# Sales Dashboard
# =========================================================================


@dataclass(frozen=True)
class MonthlyPoint:
    """One month of the trailing 12-month series."""

    month_start: date
    sales: int
    revenue: Decimal


@dataclass(frozen=True)
class SalesDashboardReport:
    """
    Dashboard KPIs, rankings and derived ratios.

    ``sales_by_month`` and ``revenue_by_month`` always have 12 entries,
    index 0 being the oldest month.
    """

    metadata: ReportMetadata

    # Window totals (count of all sales, revenue of Confirmed only)
    sales_this_month: int
    revenue_this_month: Decimal
    sales_this_year: int
    revenue_this_year: Decimal
    sales_last_30_days: int
    revenue_last_30_days: Decimal
    sales_last_7_days: int
    revenue_last_7_days: Decimal

    # Status breakdown
    pending_sales: int
    partially_paid_sales: int
    confirmed_sales: int
    cancelled_sales: int
    donation_sales: int

    average_ticket: Decimal
    unique_customers: int

    # Trailing 12 months
    monthly: tuple[MonthlyPoint, ...]
    sales_by_month: tuple[int, ...]
    revenue_by_month: tuple[Decimal, ...]

    # Rankings over the recent window
    top_products: tuple[ProductRankingLine, ...]
    payment_methods: tuple[PaymentMethodLine, ...]
    top_cities: tuple[CityRankingLine, ...]

    # Derived ratios
    conversion_rate: Decimal
    monthly_growth_percentage: Decimal
    total_active_sales: int


# =========================================================================
# Trial Balance
# =========================================================================


@dataclass(frozen=True)
class AccountLine:
    """Total for one account (payment method)."""

    account: PaymentMethod
    description: str
    total: Decimal
    count: int


@dataclass(frozen=True)
class ExpenseCategoryLine:
    category_id: UUID | None
    name: str
    total: Decimal
    launch_count: int


@dataclass(frozen=True)
class ExpenseGroupSection:
    """A category group; ``group_id`` None is the Uncategorized bucket."""

    group_id: UUID | None
    name: str
    categories: tuple[ExpenseCategoryLine, ...]
    group_expense: Decimal


@dataclass(frozen=True)
class ExtractLineItem:
    extract_id: UUID
    account: PaymentMethod
    account_description: str
    extract_date: date
    value: Decimal
    direction: str  # "income" or "outflow"
    observation: str
    operator_name: str


@dataclass(frozen=True)
class TrialBalanceReport:
    """
    Trial balance for a period.

    ``net_balance = total_income_overall - total_expense_overall
    + total_extract_overall``.
    """

    metadata: ReportMetadata
    income_by_account: tuple[AccountLine, ...]
    total_income_overall: Decimal
    expense_by_group: tuple[ExpenseGroupSection, ...]
    expense_by_account: tuple[AccountLine, ...]
    total_expense_by_account: Decimal
    total_expense_overall: Decimal
    extracts: tuple[ExtractLineItem, ...]
    total_extract_overall: Decimal
    net_balance: Decimal


# =========================================================================
# Product Items
# =========================================================================


@dataclass(frozen=True)
class ProductItemsLine:
    product: ProductType
    description: str
    milheiros: Decimal
    units: Decimal
    revenue: Decimal
    breaks: int
    average_price: Decimal


@dataclass(frozen=True)
class ProductItemsReport:
    metadata: ReportMetadata
    lines: tuple[ProductItemsLine, ...]
    total_milheiros: Decimal
    total_units: Decimal
    total_revenue: Decimal
    total_breaks: int


# =========================================================================
# Extract Summary
# =========================================================================


@dataclass(frozen=True)
class ExtractSummaryReport:
    metadata: ReportMetadata
    totals_by_account: tuple[AccountLine, ...]
    total_general: Decimal
    lines: tuple[ExtractLineItem, ...]
