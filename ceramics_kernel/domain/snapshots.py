"""
Immutable snapshot DTOs consumed by the calculation engines.

These are the only shapes engines ever see.  Selectors convert ORM rows
into them inside a read-only transaction; tests build them directly.
All monetary fields are ``Decimal``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from uuid import UUID

from ceramics_kernel.domain.catalog import (
    LaunchType,
    PaymentMethod,
    PaymentStatus,
    ProductType,
    SaleStatus,
)


@dataclass(frozen=True)
class SaleItemSnapshot:
    """One product line of a sale.  ``quantity`` is in milheiros."""

    product: ProductType
    quantity: Decimal
    unit_price: Decimal
    subtotal: Decimal
    breaks: int = 0


@dataclass(frozen=True)
class PaymentSnapshot:
    """Money received against a sale."""

    method: PaymentMethod
    amount: Decimal
    payment_date: date | None = None


@dataclass(frozen=True)
class SaleSnapshot:
    """A sale with its items and payments."""

    sale_id: UUID
    note_number: int
    sale_date: date
    status: SaleStatus
    total_gross: Decimal
    discount: Decimal
    total_net: Decimal
    customer_name: str = ""
    city: str = ""
    state: str = ""
    is_active: bool = True
    items: tuple[SaleItemSnapshot, ...] = field(default_factory=tuple)
    payments: tuple[PaymentSnapshot, ...] = field(default_factory=tuple)

    @property
    def total_paid(self) -> Decimal:
        return sum((p.amount for p in self.payments), Decimal("0"))

    @property
    def remaining_balance(self) -> Decimal:
        return self.total_net - self.total_paid


@dataclass(frozen=True)
class CategoryGroupSnapshot:
    group_id: UUID
    name: str


@dataclass(frozen=True)
class CategorySnapshot:
    category_id: UUID
    name: str
    group_id: UUID | None = None


@dataclass(frozen=True)
class LaunchSnapshot:
    """A financial launch (ledger entry).  ``amount`` is never negative."""

    launch_id: UUID
    description: str
    launch_type: LaunchType
    amount: Decimal
    launch_date: date
    status: PaymentStatus
    payment_method: PaymentMethod
    category_id: UUID | None = None
    due_date: date | None = None

    @property
    def signed_amount(self) -> Decimal:
        """Amount with the sign implied by the launch type."""
        if self.launch_type is LaunchType.EXPENSE:
            return -self.amount
        return self.amount


@dataclass(frozen=True)
class ExtractSnapshot:
    """A manually entered bank extract line; ``value`` keeps its sign."""

    extract_id: UUID
    account: PaymentMethod
    extract_date: date
    value: Decimal
    observation: str = ""
    operator_name: str = ""
    is_active: bool = True
