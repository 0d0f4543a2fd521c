"""
Reconciliation - trial balance and bank extract aggregation.

Pure functions over frozen snapshots; no I/O.
"""

from ceramics_engines.reconciliation.extracts import (
    select_extract_lines,
    summarize_extracts,
)
from ceramics_engines.reconciliation.trial_balance import (
    UNCATEGORIZED_CATEGORY_NAME,
    UNCATEGORIZED_GROUP_NAME,
    compute_trial_balance,
    income_rows_from_launches,
    income_rows_from_sale_payments,
)
from ceramics_engines.reconciliation.types import (
    AccountTotal,
    CategoryTotal,
    ExtractDirection,
    ExtractLine,
    ExtractSummary,
    GroupTotal,
    IncomeRow,
    IncomeSource,
    TrialBalance,
    TrialBalanceFilters,
)

__all__ = [
    "compute_trial_balance",
    "income_rows_from_launches",
    "income_rows_from_sale_payments",
    "summarize_extracts",
    "select_extract_lines",
    "UNCATEGORIZED_GROUP_NAME",
    "UNCATEGORIZED_CATEGORY_NAME",
    "AccountTotal",
    "CategoryTotal",
    "GroupTotal",
    "ExtractDirection",
    "ExtractLine",
    "ExtractSummary",
    "IncomeRow",
    "IncomeSource",
    "TrialBalance",
    "TrialBalanceFilters",
]
