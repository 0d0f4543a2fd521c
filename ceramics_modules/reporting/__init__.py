"""
Back-office Reporting Module (``ceramics_modules.reporting``).

Responsibility
--------------
Read-only module that turns sales, financial launches and bank extracts
into the sales dashboard, product/city/payment rankings, the trial
balance, the product-items report and the extract summary.

Architecture position
---------------------
**Modules layer** -- glue between the ``ReportingSource`` port, the pure
engines in ``ceramics_engines`` and external report renderers.

Invariants enforced
-------------------
* Nothing is written: every report is computed from one read-only
  snapshot of the source.
* Every report is a frozen dataclass carrying ``ReportMetadata``.

Failure modes
-------------
* Invalid period or limit -> validation error before any query.
* Source unavailable -> ``RepositoryUnavailableError``, no partial report.
"""

from ceramics_modules.reporting.assembler import ReportAssembler, render_to_dict
from ceramics_modules.reporting.config import CompanyProfile, ReportingConfig
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
    ReportType,
    SalesDashboardReport,
    TopCitiesReport,
    TopProductsReport,
    TrialBalanceReport,
)
from ceramics_modules.reporting.rendering import JsonReportRenderer, ReportRenderer
from ceramics_modules.reporting.service import ReportingService

__all__ = [
    # Service
    "ReportingService",
    "ReportAssembler",
    "render_to_dict",
    # Rendering
    "ReportRenderer",
    "JsonReportRenderer",
    # Config
    "ReportingConfig",
    "CompanyProfile",
    # Models
    "ReportType",
    "ReportMetadata",
    "ProductRankingLine",
    "PaymentMethodLine",
    "CityRankingLine",
    "TopProductsReport",
    "TopCitiesReport",
    "PaymentBreakdownReport",
    "MonthlyPoint",
    "SalesDashboardReport",
    "AccountLine",
    "ExpenseCategoryLine",
    "ExpenseGroupSection",
    "ExtractLineItem",
    "TrialBalanceReport",
    "ProductItemsLine",
    "ProductItemsReport",
    "ExtractSummaryReport",
]
