"""
Reporting Module Service (``ceramics_modules.reporting.service``).

Responsibility
--------------
The query surface of the analytics core: sales dashboard, rankings,
trial balance, product-items report and extract summary.  Bridges the
``ReportingSource`` port to the pure engines and the ``ReportAssembler``.
This is a **read-only** service.

Architecture position
---------------------
**Modules layer** -- thin glue.  Constructor: ``source`` + ``clock`` +
``config``.  No financial logic lives in this class.

Invariants enforced
-------------------
* Parameters are validated before any data access.
* All reads of one report happen inside one ``source.snapshot()``.
* All monetary amounts use ``Decimal`` -- NEVER ``float``.

Failure modes
-------------
* Invalid parameters -> ``InvalidDateRangeError`` / ``InvalidLimitError``
  raised before querying.
* Source failure -> ``RepositoryUnavailableError`` (or whatever the source
  raises) propagates; no partial report is produced.
* Cancellation -> ``ReportCancelledError``.

Audit relevance
---------------
A structured ``*_generated`` event is logged for every report; failures
are logged with ``exc_info`` and re-raised unchanged.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date

from ceramics_kernel.domain.catalog import LaunchType, PaymentMethod, PaymentStatus
from ceramics_kernel.domain.clock import Clock, SystemClock
from ceramics_kernel.domain.periods import DateRange
from ceramics_kernel.logging_config import LogContext, get_logger
from ceramics_kernel.selectors.ports import (
    ExtractFilter,
    LaunchFilter,
    ReportingSource,
    SaleFilter,
)
from ceramics_engines.cancellation import raise_if_cancelled
from ceramics_engines.indicators import compute_sales_indicators
from ceramics_engines.product_items import ProductItemsFilters, build_product_items
from ceramics_engines.rankings import (
    RANKED_STATUSES,
    payment_method_breakdown,
    top_cities,
    top_products,
    validate_limit,
)
from ceramics_engines.reconciliation import (
    TrialBalanceFilters,
    compute_trial_balance,
    income_rows_from_launches,
    income_rows_from_sale_payments,
    summarize_extracts,
)
from ceramics_engines.windows import resolve_windows

from ceramics_modules.reporting.assembler import ReportAssembler
from ceramics_modules.reporting.config import ReportingConfig
from ceramics_modules.reporting.models import (
    ExtractSummaryReport,
    PaymentBreakdownReport,
    ProductItemsReport,
    ReportMetadata,
    ReportType,
    SalesDashboardReport,
    TopCitiesReport,
    TopProductsReport,
    TrialBalanceReport,
)
from ceramics_modules.reporting.rendering import ReportRenderer

logger = get_logger("modules.reporting.service")


def _filter_pairs(**values: object) -> tuple[tuple[str, str], ...] | None:
    pairs = tuple(
        (key, str(getattr(value, "value", value)))
        for key, value in sorted(values.items())
        if value not in (None, "")
    )
    return pairs or None


class ReportingService:
    """
    Back-office report generation service.

    Contract
    --------
    * Every public method returns a typed, frozen report DTO (or rendered
      bytes for the ``render_*`` methods).
    * All methods are **read-only**.

    Guarantees
    ----------
    * Computation delegates to the pure engines; presentation delegates to
      ``ReportAssembler``.
    * Clock is injectable for deterministic testing.
    * Omitted period bounds default to a trailing window ending today.

    Non-goals
    ---------
    * Does NOT retry failed reads.
    * Does NOT typeset documents; a ``ReportRenderer`` does.
    """

    def __init__(
        self,
        source: ReportingSource,
        clock: Clock | None = None,
        config: ReportingConfig | None = None,
    ):
        self._source = source
        self._clock = clock or SystemClock()
        self._config = config or ReportingConfig.with_defaults()
        self._assembler = ReportAssembler(self._config)

        logger.info(
            "reporting_service_initialized",
            extra={
                "entity_name": self._config.entity_name,
                "currency": self._config.currency,
            },
        )

    # =========================================================================
    # Internal helpers
    # =========================================================================

    @contextmanager
    def _report_scope(self, report_type: ReportType) -> Iterator[None]:
        """Bind the report type to log context and log any failure."""
        with LogContext.bind(report_type=report_type.value):
            try:
                yield
            except Exception:
                logger.error(
                    "report_failed",
                    extra={"report_type": report_type.value},
                    exc_info=True,
                )
                raise

    def _build_metadata(
        self,
        report_type: ReportType,
        period: DateRange | None = None,
        filters: tuple[tuple[str, str], ...] | None = None,
    ) -> ReportMetadata:
        """Build report metadata with injected clock timestamp."""
        now = self._clock.now()
        return ReportMetadata(
            report_type=report_type,
            entity_name=self._config.entity_name,
            currency=self._config.currency,
            as_of_date=self._clock.today(),
            generated_at=now.isoformat(),
            period_start=period.start if period else None,
            period_end=period.end if period else None,
            filters=filters,
        )

    def _recent_period(self, start: date | None, end: date | None) -> DateRange:
        return DateRange.resolve(
            start, end, self._clock.today(), self._config.recent_window_days,
        )

    def _resolve_limit(self, limit: int | None) -> int:
        return validate_limit(self._config.ranking_limit if limit is None else limit)

    def _ranked_sales(self, period: DateRange):
        return self._source.list_sales(
            SaleFilter(start=period.start, end=period.end, statuses=RANKED_STATUSES)
        )

    # =========================================================================
    # Dashboard
    # =========================================================================

    def sales_indicators(
        self,
        cancel_event: threading.Event | None = None,
    ) -> SalesDashboardReport:
        """
        Generate the sales dashboard.

        Window KPIs, status breakdown and the 12-month series cover every
        active sale; rankings cover the recent window.
        """
        with self._report_scope(ReportType.SALES_DASHBOARD):
            windows = resolve_windows(self._clock.now_utc())
            recent = DateRange.trailing(windows.today, self._config.recent_window_days)
            limit = self._resolve_limit(None)
            raise_if_cancelled(cancel_event, "sales_indicators")

            with self._source.snapshot():
                sales = self._source.list_sales(SaleFilter())

            indicators = compute_sales_indicators(sales, windows, cancel_event)
            products = top_products(sales, recent, limit)
            payments = payment_method_breakdown(sales, recent)
            cities = top_cities(sales, recent, limit)

            metadata = self._build_metadata(ReportType.SALES_DASHBOARD, recent)
            report = self._assembler.sales_dashboard(
                metadata, indicators, products, payments, cities,
            )

            logger.info(
                "sales_dashboard_generated",
                extra={
                    "sale_count": len(sales),
                    "sales_this_month": report.sales_this_month,
                    "revenue_this_month": str(report.revenue_this_month),
                    "conversion_rate": str(report.conversion_rate),
                },
            )
            return report

    # =========================================================================
    # Rankings
    # =========================================================================

    def top_products(
        self,
        start: date | None = None,
        end: date | None = None,
        limit: int | None = None,
    ) -> TopProductsReport:
        """Products ranked by quantity over the period (default: recent window)."""
        with self._report_scope(ReportType.TOP_PRODUCTS):
            period = self._recent_period(start, end)
            resolved_limit = self._resolve_limit(limit)

            with self._source.snapshot():
                sales = self._ranked_sales(period)

            rankings = top_products(sales, period, resolved_limit)
            report = self._assembler.top_products(
                self._build_metadata(
                    ReportType.TOP_PRODUCTS, period, _filter_pairs(limit=resolved_limit),
                ),
                rankings,
            )
            logger.info(
                "top_products_generated",
                extra={"line_count": len(report.lines), "limit": resolved_limit},
            )
            return report

    def top_cities(
        self,
        start: date | None = None,
        end: date | None = None,
        limit: int | None = None,
    ) -> TopCitiesReport:
        """Destinations ranked by sale count over the period."""
        with self._report_scope(ReportType.TOP_CITIES):
            period = self._recent_period(start, end)
            resolved_limit = self._resolve_limit(limit)

            with self._source.snapshot():
                sales = self._ranked_sales(period)

            rankings = top_cities(sales, period, resolved_limit)
            report = self._assembler.top_cities(
                self._build_metadata(
                    ReportType.TOP_CITIES, period, _filter_pairs(limit=resolved_limit),
                ),
                rankings,
            )
            logger.info(
                "top_cities_generated",
                extra={"line_count": len(report.lines), "limit": resolved_limit},
            )
            return report

    def payment_breakdown(
        self,
        start: date | None = None,
        end: date | None = None,
    ) -> PaymentBreakdownReport:
        """Payment methods by usage count over the period."""
        with self._report_scope(ReportType.PAYMENT_BREAKDOWN):
            period = self._recent_period(start, end)

            with self._source.snapshot():
                sales = self._ranked_sales(period)

            shares = payment_method_breakdown(sales, period)
            report = self._assembler.payment_breakdown(
                self._build_metadata(ReportType.PAYMENT_BREAKDOWN, period), shares,
            )
            logger.info(
                "payment_breakdown_generated",
                extra={
                    "line_count": len(report.lines),
                    "total_count": report.total_count,
                },
            )
            return report

    # =========================================================================
    # Trial balance and extracts
    # =========================================================================

    def trial_balance(
        self,
        start: date | None = None,
        end: date | None = None,
        filters: TrialBalanceFilters | None = None,
        cancel_event: threading.Event | None = None,
    ) -> TrialBalanceReport:
        """
        Reconcile income, categorized expense and bank extracts.

        Args:
            start: Period start (default: end minus the configured window).
            end: Period end (default: today).
            filters: Optional account / group / category / search narrowing.
            cancel_event: Optional cooperative cancellation signal.

        Returns:
            TrialBalanceReport whose net equals income - expense + extract.
        """
        with self._report_scope(ReportType.TRIAL_BALANCE):
            period = DateRange.resolve(
                start, end, self._clock.today(), self._config.trial_balance_default_days,
            )
            filters = filters or TrialBalanceFilters()
            account = filters.account
            raise_if_cancelled(cancel_event, "trial_balance")

            with self._source.snapshot():
                launches = self._source.list_financial_launches(
                    LaunchFilter(
                        start=period.start,
                        end=period.end,
                        status=PaymentStatus.PAID,
                        payment_method=account,
                    )
                )
                categories = self._source.list_categories()
                groups = self._source.list_category_groups()
                extracts = self._source.list_bank_extracts(
                    ExtractFilter(start=period.start, end=period.end, account=account)
                )
                sales = []
                if self._config.include_sale_payments_in_income:
                    sales = self._source.list_sales(SaleFilter(end=period.end))

            income_rows = income_rows_from_launches(launches)
            if self._config.include_sale_payments_in_income:
                income_rows += income_rows_from_sale_payments(sales)
            expense_launches = [
                launch for launch in launches if launch.launch_type is LaunchType.EXPENSE
            ]

            balance = compute_trial_balance(
                income_rows,
                expense_launches,
                categories,
                groups,
                extracts,
                period,
                filters,
                cancel_event=cancel_event,
                uncategorized_group_name=self._config.uncategorized_group_name,
                uncategorized_category_name=self._config.uncategorized_category_name,
            )

            metadata = self._build_metadata(
                ReportType.TRIAL_BALANCE,
                period,
                _filter_pairs(
                    account=filters.account,
                    group_id=filters.group_id,
                    category_id=filters.category_id,
                    search=filters.search,
                ),
            )
            report = self._assembler.trial_balance(metadata, balance)

            logger.info(
                "trial_balance_generated",
                extra={
                    "period_start": period.start.isoformat(),
                    "period_end": period.end.isoformat(),
                    "total_income": str(report.total_income_overall),
                    "total_expense": str(report.total_expense_overall),
                    "total_extract": str(report.total_extract_overall),
                    "net_balance": str(report.net_balance),
                },
            )
            return report

    def extract_summary(
        self,
        start: date | None = None,
        end: date | None = None,
        account: PaymentMethod | None = None,
    ) -> ExtractSummaryReport:
        """Bank extract totals per account and overall for the period."""
        with self._report_scope(ReportType.EXTRACT_SUMMARY):
            period = DateRange.resolve(
                start, end, self._clock.today(), self._config.trial_balance_default_days,
            )

            with self._source.snapshot():
                extracts = self._source.list_bank_extracts(
                    ExtractFilter(start=period.start, end=period.end, account=account)
                )

            summary = summarize_extracts(extracts, period, account)
            report = self._assembler.extract_summary(
                self._build_metadata(
                    ReportType.EXTRACT_SUMMARY, period, _filter_pairs(account=account),
                ),
                summary,
            )
            logger.info(
                "extract_summary_generated",
                extra={
                    "line_count": len(report.lines),
                    "total_general": str(report.total_general),
                },
            )
            return report

    # =========================================================================
    # Product items
    # =========================================================================

    def product_items(
        self,
        start: date | None = None,
        end: date | None = None,
        filters: ProductItemsFilters | None = None,
        cancel_event: threading.Event | None = None,
    ) -> ProductItemsReport:
        """Milheiros, units, net revenue and breaks per product."""
        with self._report_scope(ReportType.PRODUCT_ITEMS):
            period = DateRange.resolve(
                start, end, self._clock.today(), self._config.product_items_default_days,
            )
            filters = filters or ProductItemsFilters()
            raise_if_cancelled(cancel_event, "product_items")

            statuses = frozenset({filters.status}) if filters.status else None
            with self._source.snapshot():
                sales = self._source.list_sales(
                    SaleFilter(start=period.start, end=period.end, statuses=statuses)
                )

            result = build_product_items(sales, period, filters, cancel_event)
            metadata = self._build_metadata(
                ReportType.PRODUCT_ITEMS,
                period,
                _filter_pairs(
                    status=filters.status,
                    payment_method=filters.payment_method,
                    city=filters.city,
                    state=filters.state,
                    product=filters.product,
                ),
            )
            report = self._assembler.product_items(metadata, result)

            logger.info(
                "product_items_generated",
                extra={
                    "line_count": len(report.lines),
                    "total_milheiros": str(report.total_milheiros),
                    "total_revenue": str(report.total_revenue),
                },
            )
            return report

    # =========================================================================
    # Rendering
    # =========================================================================

    def render_trial_balance_pdf(
        self,
        renderer: ReportRenderer,
        start: date | None = None,
        end: date | None = None,
        filters: TrialBalanceFilters | None = None,
        cancel_event: threading.Event | None = None,
    ) -> bytes:
        """Generate the trial balance and hand it to ``renderer``."""
        report = self.trial_balance(start, end, filters, cancel_event)
        document = renderer.render_trial_balance(report, self._config.company)
        logger.info("trial_balance_rendered", extra={"size_bytes": len(document)})
        return document

    def render_product_items_pdf(
        self,
        renderer: ReportRenderer,
        start: date | None = None,
        end: date | None = None,
        filters: ProductItemsFilters | None = None,
        cancel_event: threading.Event | None = None,
    ) -> bytes:
        """Generate the product-items report and hand it to ``renderer``."""
        report = self.product_items(start, end, filters, cancel_event)
        document = renderer.render_product_items(report, self._config.company)
        logger.info("product_items_rendered", extra={"size_bytes": len(document)})
        return document
