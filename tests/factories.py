"""Snapshot builders shared by the engine, service and property tests."""

from datetime import date
from decimal import Decimal
from itertools import count
from uuid import UUID, uuid4

from ceramics_kernel.domain.catalog import (
    LaunchType,
    PaymentMethod,
    PaymentStatus,
    ProductType,
    SaleStatus,
)
from ceramics_kernel.domain.snapshots import (
    CategoryGroupSnapshot,
    CategorySnapshot,
    ExtractSnapshot,
    LaunchSnapshot,
    PaymentSnapshot,
    SaleItemSnapshot,
    SaleSnapshot,
)

_note_numbers = count(1)


def item(
    product: ProductType = ProductType.BRICK1_6,
    quantity: str | Decimal = "1",
    subtotal: str | Decimal = "100",
    breaks: int = 0,
) -> SaleItemSnapshot:
    quantity = Decimal(quantity)
    subtotal = Decimal(subtotal)
    unit_price = subtotal / quantity if quantity else Decimal("0")
    return SaleItemSnapshot(
        product=product,
        quantity=quantity,
        unit_price=unit_price,
        subtotal=subtotal,
        breaks=breaks,
    )


def payment(
    method: PaymentMethod = PaymentMethod.CASH,
    amount: str | Decimal = "100",
    payment_date: date | None = None,
) -> PaymentSnapshot:
    return PaymentSnapshot(method=method, amount=Decimal(amount), payment_date=payment_date)


def sale(
    sale_date: date,
    status: SaleStatus = SaleStatus.CONFIRMED,
    total_net: str | Decimal = "100",
    *,
    discount: str | Decimal = "0",
    total_gross: str | Decimal | None = None,
    customer_name: str = "Cliente",
    city: str = "Teresina",
    state: str = "PI",
    is_active: bool = True,
    items: tuple[SaleItemSnapshot, ...] = (),
    payments: tuple[PaymentSnapshot, ...] = (),
) -> SaleSnapshot:
    total_net = Decimal(total_net)
    discount = Decimal(discount)
    gross = Decimal(total_gross) if total_gross is not None else total_net + discount
    return SaleSnapshot(
        sale_id=uuid4(),
        note_number=next(_note_numbers),
        sale_date=sale_date,
        status=status,
        total_gross=gross,
        discount=discount,
        total_net=total_net,
        customer_name=customer_name,
        city=city,
        state=state,
        is_active=is_active,
        items=tuple(items),
        payments=tuple(payments),
    )


def group(name: str) -> CategoryGroupSnapshot:
    return CategoryGroupSnapshot(group_id=uuid4(), name=name)


def category(name: str, group_id: UUID | None = None) -> CategorySnapshot:
    return CategorySnapshot(category_id=uuid4(), name=name, group_id=group_id)


def launch(
    launch_date: date,
    amount: str | Decimal,
    launch_type: LaunchType = LaunchType.EXPENSE,
    *,
    payment_method: PaymentMethod = PaymentMethod.CASH,
    status: PaymentStatus = PaymentStatus.PAID,
    category_id: UUID | None = None,
    description: str = "Lançamento",
) -> LaunchSnapshot:
    return LaunchSnapshot(
        launch_id=uuid4(),
        description=description,
        launch_type=launch_type,
        amount=Decimal(amount),
        launch_date=launch_date,
        status=status,
        payment_method=payment_method,
        category_id=category_id,
    )


def extract(
    extract_date: date,
    value: str | Decimal,
    account: PaymentMethod = PaymentMethod.BBJ,
    *,
    observation: str = "",
    is_active: bool = True,
) -> ExtractSnapshot:
    return ExtractSnapshot(
        extract_id=uuid4(),
        account=account,
        extract_date=extract_date,
        value=Decimal(value),
        observation=observation,
        operator_name="Operador",
        is_active=is_active,
    )
