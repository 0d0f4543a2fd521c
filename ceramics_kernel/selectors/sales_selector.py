"""
Module: ceramics_kernel.selectors.sales_selector
Responsibility: Read-only queries over sales, converting each row (with its
    items and payments) into a frozen ``SaleSnapshot``.
Architecture position: Kernel > Selectors.

Invariants enforced:
    - Soft-deleted sales (is_active = False) are excluded unless the caller
      explicitly asks otherwise.
    - Enum columns are parsed strictly; an unknown stored value raises
      UnknownEnumValueError rather than being dropped.

Failure modes:
    - UnknownEnumValueError on corrupt status/product/method values.
    - SQLAlchemy errors propagate to the caller.
"""

from sqlalchemy import select

from ceramics_kernel.domain.catalog import (
    PaymentMethod,
    ProductType,
    SaleStatus,
    parse_enum,
)
from ceramics_kernel.domain.snapshots import (
    PaymentSnapshot,
    SaleItemSnapshot,
    SaleSnapshot,
)
from ceramics_kernel.models.sale import Sale
from ceramics_kernel.selectors.base import BaseSelector
from ceramics_kernel.selectors.ports import SaleFilter


class SalesSelector(BaseSelector[Sale]):
    """Selector for sales with their items and payments."""

    def list_sales(self, criteria: SaleFilter) -> list[SaleSnapshot]:
        """
        Sales matching ``criteria``, ordered by date then note number.

        Date bounds are inclusive.
        """
        stmt = select(Sale)
        if criteria.active_only:
            stmt = stmt.where(Sale.is_active.is_(True))
        if criteria.start is not None:
            stmt = stmt.where(Sale.sale_date >= criteria.start)
        if criteria.end is not None:
            stmt = stmt.where(Sale.sale_date <= criteria.end)
        if criteria.statuses is not None:
            stmt = stmt.where(
                Sale.status.in_(sorted(s.value for s in criteria.statuses))
            )
        stmt = stmt.order_by(Sale.sale_date, Sale.note_number)

        return [self._to_snapshot(sale) for sale in self.session.scalars(stmt)]

    @staticmethod
    def _to_snapshot(sale: Sale) -> SaleSnapshot:
        items = tuple(
            SaleItemSnapshot(
                product=parse_enum(ProductType, item.product),
                quantity=item.quantity,
                unit_price=item.unit_price,
                subtotal=item.subtotal,
                breaks=item.breaks,
            )
            for item in sale.items
        )
        payments = tuple(
            PaymentSnapshot(
                method=parse_enum(PaymentMethod, payment.payment_method),
                amount=payment.amount,
                payment_date=payment.payment_date,
            )
            for payment in sale.payments
        )
        return SaleSnapshot(
            sale_id=sale.id,
            note_number=sale.note_number,
            sale_date=sale.sale_date,
            status=parse_enum(SaleStatus, sale.status),
            total_gross=sale.total_gross,
            discount=sale.discount,
            total_net=sale.total_net,
            customer_name=sale.customer_name or "",
            city=sale.city or "",
            state=sale.state or "",
            is_active=sale.is_active,
            items=items,
            payments=payments,
        )
