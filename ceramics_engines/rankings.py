"""
Module: ceramics_engines.rankings
Responsibility:
    Top-N rankings over recent sales: products by quantity, payment
    methods by usage, and destination cities by sale count.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Only Confirmed and PartiallyPaid sales inside the date range count.
    - Orderings are total: every tie is broken deterministically (catalog
      ordinal for products and methods, city then state for cities).
    - Payment percentages sum to ~100 when any payment exists, and are all
      zero otherwise.

Failure modes:
    - InvalidLimitError for a negative limit.  A zero limit is valid and
      yields an empty ranking.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from decimal import Decimal

from ceramics_kernel.db.types import ZERO
from ceramics_kernel.domain.catalog import (
    PaymentMethod,
    ProductType,
    SaleStatus,
    ordinal,
)
from ceramics_kernel.domain.periods import DateRange
from ceramics_kernel.domain.snapshots import SaleSnapshot
from ceramics_kernel.exceptions import InvalidLimitError
from ceramics_engines.ratios import percentage_of
from ceramics_engines.tracer import traced_engine

RANKED_STATUSES = frozenset({SaleStatus.CONFIRMED, SaleStatus.PARTIALLY_PAID})
DEFAULT_LIMIT = 10


@dataclass(frozen=True)
class ProductRanking:
    product: ProductType
    total_quantity: Decimal
    total_revenue: Decimal
    sale_count: int


@dataclass(frozen=True)
class PaymentMethodShare:
    method: PaymentMethod
    count: int
    total_amount: Decimal
    percentage: Decimal


@dataclass(frozen=True)
class CityRanking:
    city: str
    state: str
    sale_count: int
    total_revenue: Decimal


def validate_limit(limit: int) -> int:
    """Return ``limit`` unchanged, or raise InvalidLimitError if negative."""
    if limit < 0:
        raise InvalidLimitError(limit)
    return limit


def eligible_sales(
    sales: Sequence[SaleSnapshot],
    date_range: DateRange,
) -> Iterator[SaleSnapshot]:
    """Active Confirmed/PartiallyPaid sales dated inside ``date_range``."""
    for sale in sales:
        if (
            sale.is_active
            and sale.status in RANKED_STATUSES
            and date_range.contains(sale.sale_date)
        ):
            yield sale


@traced_engine("rankings.products", "1.0", fingerprint_fields=("date_range", "limit"))
def top_products(
    sales: Sequence[SaleSnapshot],
    date_range: DateRange,
    limit: int = DEFAULT_LIMIT,
) -> tuple[ProductRanking, ...]:
    """
    Products ranked by total quantity sold, descending.

    ``sale_count`` is the number of distinct sales that include the product.
    """
    validate_limit(limit)

    quantities: dict[ProductType, Decimal] = {}
    revenues: dict[ProductType, Decimal] = {}
    sale_ids: dict[ProductType, set] = {}
    for sale in eligible_sales(sales, date_range):
        for item in sale.items:
            quantities[item.product] = quantities.get(item.product, ZERO) + item.quantity
            revenues[item.product] = revenues.get(item.product, ZERO) + item.subtotal
            sale_ids.setdefault(item.product, set()).add(sale.sale_id)

    ranked = sorted(
        quantities,
        key=lambda product: (-quantities[product], ordinal(product)),
    )
    return tuple(
        ProductRanking(
            product=product,
            total_quantity=quantities[product],
            total_revenue=revenues[product],
            sale_count=len(sale_ids[product]),
        )
        for product in ranked[:limit]
    )


@traced_engine("rankings.payments", "1.0", fingerprint_fields=("date_range",))
def payment_method_breakdown(
    sales: Sequence[SaleSnapshot],
    date_range: DateRange,
) -> tuple[PaymentMethodShare, ...]:
    """
    Payments of eligible sales grouped by method.

    ``percentage`` is the share of payment *count*, not of amount.
    """
    counts: dict[PaymentMethod, int] = {}
    amounts: dict[PaymentMethod, Decimal] = {}
    for sale in eligible_sales(sales, date_range):
        for payment in sale.payments:
            counts[payment.method] = counts.get(payment.method, 0) + 1
            amounts[payment.method] = amounts.get(payment.method, ZERO) + payment.amount

    total_count = sum(counts.values())
    ranked = sorted(counts, key=lambda method: (-counts[method], ordinal(method)))
    return tuple(
        PaymentMethodShare(
            method=method,
            count=counts[method],
            total_amount=amounts[method],
            percentage=percentage_of(counts[method], total_count),
        )
        for method in ranked
    )


@traced_engine("rankings.cities", "1.0", fingerprint_fields=("date_range", "limit"))
def top_cities(
    sales: Sequence[SaleSnapshot],
    date_range: DateRange,
    limit: int = DEFAULT_LIMIT,
) -> tuple[CityRanking, ...]:
    """Destinations ranked by number of sales; blank cities are skipped."""
    validate_limit(limit)

    counts: dict[tuple[str, str], int] = {}
    revenues: dict[tuple[str, str], Decimal] = {}
    for sale in eligible_sales(sales, date_range):
        city = sale.city.strip()
        if not city:
            continue
        key = (city, sale.state.strip())
        counts[key] = counts.get(key, 0) + 1
        revenues[key] = revenues.get(key, ZERO) + sale.total_net

    ranked = sorted(counts, key=lambda key: (-counts[key], key[0], key[1]))
    return tuple(
        CityRanking(
            city=city,
            state=state,
            sale_count=counts[(city, state)],
            total_revenue=revenues[(city, state)],
        )
        for city, state in ranked[:limit]
    )
