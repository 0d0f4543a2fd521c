"""Read-only selectors and the ReportingSource port."""

from ceramics_kernel.selectors.ports import (
    ExtractFilter,
    LaunchFilter,
    ReportingSource,
    SaleFilter,
)
from ceramics_kernel.selectors.sql_source import SqlReportingSource

__all__ = [
    "ReportingSource",
    "SqlReportingSource",
    "SaleFilter",
    "LaunchFilter",
    "ExtractFilter",
]
