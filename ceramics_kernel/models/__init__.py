"""ORM models. Importing this package registers every table on Base.metadata."""

from ceramics_kernel.models.extract import BankExtract
from ceramics_kernel.models.launch import (
    FinancialLaunch,
    LaunchCategory,
    LaunchCategoryGroup,
)
from ceramics_kernel.models.sale import Sale, SaleItem, SalePayment

__all__ = [
    "Sale",
    "SaleItem",
    "SalePayment",
    "FinancialLaunch",
    "LaunchCategory",
    "LaunchCategoryGroup",
    "BankExtract",
]
