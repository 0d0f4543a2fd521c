"""
Module: ceramics_engines.product_items
Responsibility:
    The product-items ("milheiro") report: explode the items of matching
    sales, allocate each sale's discount proportionally across its items,
    and total milheiros, units, net revenue and breaks per product.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Per-item net revenue is ``subtotal * (1 - discount / total_gross)``
      rounded to two places, or the plain subtotal when total_gross is 0.
    - Grand totals are sums of the very same per-item values, so the rows
      always add up to the totals.
    - Rows are ordered by revenue descending, then product ordinal.

Failure modes:
    - ReportCancelledError when the caller's cancel event is set.
"""

from __future__ import annotations

import threading
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from ceramics_kernel.db.types import ZERO, round_money
from ceramics_kernel.domain.catalog import (
    PaymentMethod,
    ProductType,
    SaleStatus,
    ordinal,
)
from ceramics_kernel.domain.periods import DateRange
from ceramics_kernel.domain.snapshots import SaleItemSnapshot, SaleSnapshot
from ceramics_engines.cancellation import checked
from ceramics_engines.tracer import traced_engine

UNITS_PER_MILHEIRO = 1000


@dataclass(frozen=True)
class ProductItemsFilters:
    """Optional narrowing of the product-items report; None means any."""

    status: SaleStatus | None = None
    payment_method: PaymentMethod | None = None
    city: str | None = None
    state: str | None = None
    product: ProductType | None = None


@dataclass(frozen=True)
class ProductItemsRow:
    product: ProductType
    milheiros: Decimal
    units: Decimal
    revenue: Decimal
    breaks: int
    average_price: Decimal


@dataclass(frozen=True)
class ProductItemsResult:
    rows: tuple[ProductItemsRow, ...]
    total_milheiros: Decimal
    total_units: Decimal
    total_revenue: Decimal
    total_breaks: int


def item_net_revenue(item: SaleItemSnapshot, sale: SaleSnapshot) -> Decimal:
    """Item subtotal after its proportional share of the sale discount."""
    if sale.total_gross > 0:
        share = Decimal("1") - sale.discount / sale.total_gross
        return round_money(item.subtotal * share)
    return item.subtotal


def _normalized(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip().lower()
    return value or None


def sale_matches(
    sale: SaleSnapshot,
    date_range: DateRange,
    filters: ProductItemsFilters,
) -> bool:
    if not sale.is_active or not date_range.contains(sale.sale_date):
        return False
    if filters.status is not None and sale.status is not filters.status:
        return False
    if filters.payment_method is not None and not any(
        p.method is filters.payment_method for p in sale.payments
    ):
        return False
    city = _normalized(filters.city)
    if city is not None and sale.city.strip().lower() != city:
        return False
    state = _normalized(filters.state)
    if state is not None and sale.state.strip().lower() != state:
        return False
    return True


@traced_engine("product_items", "1.0", fingerprint_fields=("date_range", "filters"))
def build_product_items(
    sales: Sequence[SaleSnapshot],
    date_range: DateRange,
    filters: ProductItemsFilters | None = None,
    cancel_event: threading.Event | None = None,
) -> ProductItemsResult:
    """Group matching sale items by product with discount-adjusted revenue."""
    filters = filters or ProductItemsFilters()

    milheiros: dict[ProductType, Decimal] = {}
    revenue: dict[ProductType, Decimal] = {}
    breaks: dict[ProductType, int] = {}
    for sale in checked(sales, cancel_event, "product_items"):
        if not sale_matches(sale, date_range, filters):
            continue
        for item in sale.items:
            if filters.product is not None and item.product is not filters.product:
                continue
            milheiros[item.product] = milheiros.get(item.product, ZERO) + item.quantity
            revenue[item.product] = revenue.get(item.product, ZERO) + item_net_revenue(item, sale)
            breaks[item.product] = breaks.get(item.product, 0) + item.breaks

    ranked = sorted(revenue, key=lambda product: (-revenue[product], ordinal(product)))
    rows = tuple(
        ProductItemsRow(
            product=product,
            milheiros=milheiros[product],
            units=milheiros[product] * UNITS_PER_MILHEIRO,
            revenue=revenue[product],
            breaks=breaks[product],
            average_price=(
                round_money(revenue[product] / milheiros[product])
                if milheiros[product] > 0
                else ZERO
            ),
        )
        for product in ranked
    )

    total_milheiros = sum((row.milheiros for row in rows), ZERO)
    return ProductItemsResult(
        rows=rows,
        total_milheiros=total_milheiros,
        total_units=total_milheiros * UNITS_PER_MILHEIRO,
        total_revenue=round_money(sum((row.revenue for row in rows), ZERO)),
        total_breaks=sum(row.breaks for row in rows),
    )
