"""
Module: ceramics_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    calculation engines.  This is the import surface for the reporting
    module.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import ceramics_kernel (domain, exceptions, logging, types)
    and sibling engine modules.  MUST NOT import ceramics_modules.

Invariants enforced:
    - Purity: engines NEVER read the clock.  "Now" is passed in by the
      caller, which obtains it from an injected Clock.
    - Decimal-only arithmetic for every amount.
    - Determinism: identical inputs always produce identical outputs.

Audit relevance:
    Every engine invocation is traced via ``@traced_engine`` (see
    ``ceramics_engines.tracer``), emitting CERAMICS_ENGINE_TRACE records.

Usage:
    from ceramics_engines import resolve_windows, compute_sales_indicators
    from ceramics_engines import top_products, compute_trial_balance
"""

from ceramics_engines.cancellation import checked, raise_if_cancelled
from ceramics_engines.indicators import (
    SalesIndicators,
    StatusCounts,
    WindowTotals,
    compute_sales_indicators,
)
from ceramics_engines.product_items import (
    ProductItemsFilters,
    ProductItemsResult,
    ProductItemsRow,
    build_product_items,
    item_net_revenue,
)
from ceramics_engines.rankings import (
    CityRanking,
    PaymentMethodShare,
    ProductRanking,
    payment_method_breakdown,
    top_cities,
    top_products,
)
from ceramics_engines.ratios import (
    conversion_rate,
    monthly_growth,
    percentage_of,
    round_ratio,
    total_active_sales,
)
from ceramics_engines.reconciliation import (
    ExtractSummary,
    IncomeRow,
    TrialBalance,
    TrialBalanceFilters,
    compute_trial_balance,
    income_rows_from_launches,
    income_rows_from_sale_payments,
    summarize_extracts,
)
from ceramics_engines.tracer import traced_engine
from ceramics_engines.windows import ReportingWindows, resolve_windows

__all__ = [
    # Windows
    "ReportingWindows",
    "resolve_windows",
    # Ratios
    "conversion_rate",
    "monthly_growth",
    "percentage_of",
    "round_ratio",
    "total_active_sales",
    # Indicators
    "SalesIndicators",
    "StatusCounts",
    "WindowTotals",
    "compute_sales_indicators",
    # Rankings
    "ProductRanking",
    "PaymentMethodShare",
    "CityRanking",
    "top_products",
    "payment_method_breakdown",
    "top_cities",
    # Product items
    "ProductItemsFilters",
    "ProductItemsResult",
    "ProductItemsRow",
    "build_product_items",
    "item_net_revenue",
    # Reconciliation
    "IncomeRow",
    "TrialBalance",
    "TrialBalanceFilters",
    "ExtractSummary",
    "compute_trial_balance",
    "income_rows_from_launches",
    "income_rows_from_sale_payments",
    "summarize_extracts",
    # Infrastructure
    "checked",
    "raise_if_cancelled",
    "traced_engine",
]
