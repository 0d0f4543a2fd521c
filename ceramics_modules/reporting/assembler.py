"""
Report assembly -- pure transformations from engine results to report DTOs.

Every function here is pure: no I/O, no clock, no database.  The service
builds the ``ReportMetadata`` (with the clock timestamp) and hands it in.

Amounts are rounded to ``config.display_precision`` here and nowhere else
upstream.  Every displayed total is the sum of the displayed rows beneath
it; derived ratios are computed exactly once and stored as fields.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Sequence
from datetime import date
from decimal import Decimal
from enum import Enum
from uuid import UUID

from ceramics_kernel.db.types import ZERO, round_money
from ceramics_kernel.domain.catalog import describe
from ceramics_engines.indicators import SalesIndicators
from ceramics_engines.product_items import ProductItemsResult
from ceramics_engines.rankings import CityRanking, PaymentMethodShare, ProductRanking
from ceramics_engines.ratios import conversion_rate, monthly_growth, total_active_sales
from ceramics_engines.reconciliation.types import (
    AccountTotal,
    ExtractLine,
    ExtractSummary,
    GroupTotal,
    TrialBalance,
)

from ceramics_modules.reporting.config import ReportingConfig
from ceramics_modules.reporting.models import (
    AccountLine,
    CityRankingLine,
    ExpenseCategoryLine,
    ExpenseGroupSection,
    ExtractLineItem,
    ExtractSummaryReport,
    MonthlyPoint,
    PaymentBreakdownReport,
    PaymentMethodLine,
    ProductItemsLine,
    ProductItemsReport,
    ProductRankingLine,
    ReportMetadata,
    SalesDashboardReport,
    TopCitiesReport,
    TopProductsReport,
    TrialBalanceReport,
)


class ReportAssembler:
    """
    Merges engine outputs into immutable report DTOs.

    Contract
    --------
    * Inputs are engine results and a prepared ``ReportMetadata``.
    * Outputs are frozen report dataclasses from ``models.py``.

    Non-goals
    ---------
    * Does NOT fetch data or read the clock.
    """

    def __init__(self, config: ReportingConfig):
        self._config = config

    def _money(self, value: Decimal) -> Decimal:
        return round_money(value, self._config.display_precision)

    def _total(self, values: Iterable[Decimal]) -> Decimal:
        """Sum of already displayed amounts, at display scale."""
        return self._money(sum(values, ZERO))

    # -----------------------------------------------------------------
    # Rankings
    # -----------------------------------------------------------------

    def product_lines(
        self, rankings: Sequence[ProductRanking],
    ) -> tuple[ProductRankingLine, ...]:
        return tuple(
            ProductRankingLine(
                product=r.product,
                description=describe(r.product),
                total_quantity=r.total_quantity,
                total_revenue=self._money(r.total_revenue),
                sale_count=r.sale_count,
            )
            for r in rankings
        )

    def payment_lines(
        self, shares: Sequence[PaymentMethodShare],
    ) -> tuple[PaymentMethodLine, ...]:
        return tuple(
            PaymentMethodLine(
                method=s.method,
                description=describe(s.method),
                count=s.count,
                total_amount=self._money(s.total_amount),
                percentage=s.percentage,
            )
            for s in shares
        )

    def city_lines(self, rankings: Sequence[CityRanking]) -> tuple[CityRankingLine, ...]:
        return tuple(
            CityRankingLine(
                city=r.city,
                state=r.state,
                sale_count=r.sale_count,
                total_revenue=self._money(r.total_revenue),
            )
            for r in rankings
        )

    def top_products(
        self, metadata: ReportMetadata, rankings: Sequence[ProductRanking],
    ) -> TopProductsReport:
        return TopProductsReport(metadata=metadata, lines=self.product_lines(rankings))

    def top_cities(
        self, metadata: ReportMetadata, rankings: Sequence[CityRanking],
    ) -> TopCitiesReport:
        return TopCitiesReport(metadata=metadata, lines=self.city_lines(rankings))

    def payment_breakdown(
        self, metadata: ReportMetadata, shares: Sequence[PaymentMethodShare],
    ) -> PaymentBreakdownReport:
        lines = self.payment_lines(shares)
        return PaymentBreakdownReport(
            metadata=metadata,
            lines=lines,
            total_count=sum(line.count for line in lines),
            total_amount=self._total(line.total_amount for line in lines),
        )

    # -----------------------------------------------------------------
    # Dashboard
    # -----------------------------------------------------------------

    def sales_dashboard(
        self,
        metadata: ReportMetadata,
        indicators: SalesIndicators,
        products: Sequence[ProductRanking],
        payments: Sequence[PaymentMethodShare],
        cities: Sequence[CityRanking],
    ) -> SalesDashboardReport:
        status = indicators.status_counts
        revenue_by_month = tuple(self._money(v) for v in indicators.revenue_by_month)
        monthly = tuple(
            MonthlyPoint(month_start=start, sales=count, revenue=revenue)
            for start, count, revenue in zip(
                indicators.month_starts, indicators.sales_by_month, revenue_by_month,
            )
        )

        return SalesDashboardReport(
            metadata=metadata,
            sales_this_month=indicators.this_month.count,
            revenue_this_month=self._money(indicators.this_month.revenue),
            sales_this_year=indicators.this_year.count,
            revenue_this_year=self._money(indicators.this_year.revenue),
            sales_last_30_days=indicators.last_30_days.count,
            revenue_last_30_days=self._money(indicators.last_30_days.revenue),
            sales_last_7_days=indicators.last_7_days.count,
            revenue_last_7_days=self._money(indicators.last_7_days.revenue),
            pending_sales=status.pending,
            partially_paid_sales=status.partially_paid,
            confirmed_sales=status.confirmed,
            cancelled_sales=status.cancelled,
            donation_sales=status.donation,
            average_ticket=indicators.average_ticket,
            unique_customers=indicators.unique_customers,
            monthly=monthly,
            sales_by_month=indicators.sales_by_month,
            revenue_by_month=revenue_by_month,
            top_products=self.product_lines(products),
            payment_methods=self.payment_lines(payments),
            top_cities=self.city_lines(cities),
            conversion_rate=conversion_rate(status.pending, status.confirmed),
            monthly_growth_percentage=monthly_growth(
                indicators.revenue_by_month[-1], indicators.revenue_by_month[-2],
            ),
            total_active_sales=total_active_sales(
                status.pending, status.confirmed, status.partially_paid,
            ),
        )

    # -----------------------------------------------------------------
    # Trial balance and extracts
    # -----------------------------------------------------------------

    def account_lines(self, totals: Sequence[AccountTotal]) -> tuple[AccountLine, ...]:
        return tuple(
            AccountLine(
                account=t.account,
                description=describe(t.account),
                total=self._money(t.total),
                count=t.count,
            )
            for t in totals
        )

    def extract_items(self, lines: Sequence[ExtractLine]) -> tuple[ExtractLineItem, ...]:
        return tuple(
            ExtractLineItem(
                extract_id=line.extract_id,
                account=line.account,
                account_description=describe(line.account),
                extract_date=line.extract_date,
                value=self._money(line.value),
                direction=line.direction.value,
                observation=line.observation,
                operator_name=line.operator_name,
            )
            for line in lines
        )

    def _group_section(self, group: GroupTotal) -> ExpenseGroupSection:
        categories = tuple(
            ExpenseCategoryLine(
                category_id=c.category_id,
                name=c.name,
                total=self._money(c.total),
                launch_count=c.launch_count,
            )
            for c in group.categories
        )
        return ExpenseGroupSection(
            group_id=group.group_id,
            name=group.name,
            categories=categories,
            group_expense=self._total(line.total for line in categories),
        )

    def trial_balance(
        self, metadata: ReportMetadata, balance: TrialBalance,
    ) -> TrialBalanceReport:
        income_lines = self.account_lines(balance.income_by_account)
        sections = tuple(self._group_section(group) for group in balance.expense_by_group)
        expense_lines = self.account_lines(balance.expense_by_account)
        extracts = self.extract_items(balance.extracts)

        total_income = self._total(line.total for line in income_lines)
        total_expense = self._total(section.group_expense for section in sections)
        total_extract = self._total(item.value for item in extracts)
        return TrialBalanceReport(
            metadata=metadata,
            income_by_account=income_lines,
            total_income_overall=total_income,
            expense_by_group=sections,
            expense_by_account=expense_lines,
            total_expense_by_account=self._total(line.total for line in expense_lines),
            total_expense_overall=total_expense,
            extracts=extracts,
            total_extract_overall=total_extract,
            net_balance=total_income - total_expense + total_extract,
        )

    def extract_summary(
        self, metadata: ReportMetadata, summary: ExtractSummary,
    ) -> ExtractSummaryReport:
        totals = self.account_lines(summary.totals_by_account)
        return ExtractSummaryReport(
            metadata=metadata,
            totals_by_account=totals,
            total_general=self._total(line.total for line in totals),
            lines=self.extract_items(summary.lines),
        )

    # -----------------------------------------------------------------
    # Product items
    # -----------------------------------------------------------------

    def product_items(
        self, metadata: ReportMetadata, result: ProductItemsResult,
    ) -> ProductItemsReport:
        lines = tuple(
            ProductItemsLine(
                product=row.product,
                description=describe(row.product),
                milheiros=row.milheiros,
                units=row.units,
                revenue=self._money(row.revenue),
                breaks=row.breaks,
                average_price=row.average_price,
            )
            for row in result.rows
        )
        return ProductItemsReport(
            metadata=metadata,
            lines=lines,
            total_milheiros=result.total_milheiros,
            total_units=result.total_units,
            total_revenue=self._total(line.revenue for line in lines),
            total_breaks=result.total_breaks,
        )


# =========================================================================
# Serialization helper
# =========================================================================


def render_to_dict(obj: object) -> dict | list | str | int | float | bool | None:
    """
    Convert any report dataclass to plain JSON-safe structures.

    Handles:
    - Decimal -> str (preserving precision)
    - UUID -> str
    - date -> ISO format string
    - Enum -> .value
    - Nested frozen dataclasses -> nested dicts
    - Tuples -> lists
    - None preserved
    """
    if obj is None:
        return None
    if isinstance(obj, Decimal):
        return str(obj)
    if isinstance(obj, UUID):
        return str(obj)
    if isinstance(obj, date):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (list, tuple)):
        return [render_to_dict(item) for item in obj]
    if isinstance(obj, dict):
        return {str(k): render_to_dict(v) for k, v in obj.items()}
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {
            f.name: render_to_dict(getattr(obj, f.name))
            for f in dataclasses.fields(obj)
        }
    if isinstance(obj, (str, int, float, bool)):
        return obj
    return str(obj)
