"""
Pure domain layer.

Immutable value objects and enumerations with NO dependencies on:
- ORM (SQLAlchemy)
- Database
- I/O

The only time source is the injectable Clock.
"""

from ceramics_kernel.domain.catalog import (
    LaunchType,
    PaymentMethod,
    PaymentStatus,
    ProductType,
    SaleStatus,
    describe,
    ordinal,
    parse_enum,
)
from ceramics_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from ceramics_kernel.domain.periods import DateRange, add_months, month_start
from ceramics_kernel.domain.snapshots import (
    CategoryGroupSnapshot,
    CategorySnapshot,
    ExtractSnapshot,
    LaunchSnapshot,
    PaymentSnapshot,
    SaleItemSnapshot,
    SaleSnapshot,
)

__all__ = [
    "Clock",
    "DeterministicClock",
    "SystemClock",
    "DateRange",
    "add_months",
    "month_start",
    "ProductType",
    "SaleStatus",
    "PaymentMethod",
    "LaunchType",
    "PaymentStatus",
    "describe",
    "ordinal",
    "parse_enum",
    "SaleSnapshot",
    "SaleItemSnapshot",
    "PaymentSnapshot",
    "LaunchSnapshot",
    "CategorySnapshot",
    "CategoryGroupSnapshot",
    "ExtractSnapshot",
]
