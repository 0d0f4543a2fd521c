"""
Closed catalog enumerations.

Products, sale statuses, payment methods (which double as bank accounts in
the trial balance), launch types and launch payment statuses.  Each enum
has a static display table with the Portuguese labels printed on reports.

Declaration order is significant: ``ordinal()`` is the position of a member
in its enum and is used as the deterministic tie-breaker in rankings.

Parsing a raw value never falls back to an "other" bucket; unknown values
raise ``UnknownEnumValueError`` at the boundary.
"""

from __future__ import annotations

from enum import Enum
from typing import TypeVar

from ceramics_kernel.exceptions import UnknownEnumValueError


class ProductType(str, Enum):
    """Products manufactured by the factory, sold by the milheiro."""

    BRICK1_6 = "brick1_6"
    BRICK2_6 = "brick2_6"
    BRICK1_8 = "brick1_8"
    BRICK2_8 = "brick2_8"
    BRICK8_G = "brick8_g"
    BRICK6_DOUBLE = "brick6_double"
    BLOCK9 = "block9"
    BLOCK9_DOUBLE = "block9_double"
    BANDS6 = "bands6"
    BANDS8 = "bands8"
    BANDS9 = "bands9"
    ROOF_TILE1 = "roof_tile1"
    ROOF_TILE2 = "roof_tile2"
    SLABS = "slabs"
    GRILL_BRICKS = "grill_bricks"
    CALDEADO6 = "caldeado6"
    CALDEADO8 = "caldeado8"
    CALDEADO9 = "caldeado9"


class SaleStatus(str, Enum):
    """Lifecycle status of a sale."""

    PENDING = "pending"
    PARTIALLY_PAID = "partially_paid"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    DONATION = "donation"


class PaymentMethod(str, Enum):
    """How money moved; each method is also a bank/cash account."""

    CASH = "cash"
    CXPJ = "cxpj"
    BBJ = "bbj"
    BBJN = "bbjn"
    CHEQUE = "cheque"
    BRADESCO_PJ = "bradesco_pj"
    CXJ = "cxj"
    AUTOMATIC_DEBIT = "automatic_debit"


class LaunchType(str, Enum):
    """Direction of a financial launch; amounts are stored unsigned."""

    INCOME = "income"
    EXPENSE = "expense"


class PaymentStatus(str, Enum):
    """Settlement status of a financial launch."""

    PENDING = "pending"
    PAID = "paid"


PRODUCT_DESCRIPTIONS: dict[ProductType, str] = {
    ProductType.BRICK1_6: "Tijolos de 1ª 06 Furos",
    ProductType.BRICK2_6: "Tijolos de 2ª 06 Furos",
    ProductType.BRICK1_8: "Tijolos de 1ª 08 Furos",
    ProductType.BRICK2_8: "Tijolos de 2ª 08 Furos",
    ProductType.BRICK8_G: "Tijolos de 08 Furos G",
    ProductType.BRICK6_DOUBLE: "Tijolo de 6 furos Duplo",
    ProductType.BLOCK9: "Blocos de 9 Furos",
    ProductType.BLOCK9_DOUBLE: "Blocos de 9 Furos Duplo",
    ProductType.BANDS6: "Bandas 6 furos",
    ProductType.BANDS8: "Bandas 8 furos",
    ProductType.BANDS9: "Bandas 9 furos",
    ProductType.ROOF_TILE1: "Telhas de 1ª",
    ProductType.ROOF_TILE2: "Telhas de 2ª",
    ProductType.SLABS: "Lajotas",
    ProductType.GRILL_BRICKS: "Tijolos para churrasqueira",
    ProductType.CALDEADO6: "Caldeado 6 furos",
    ProductType.CALDEADO8: "Caldeado 8 furos",
    ProductType.CALDEADO9: "Caldeado 9 furos",
}

SALE_STATUS_DESCRIPTIONS: dict[SaleStatus, str] = {
    SaleStatus.PENDING: "Pendente",
    SaleStatus.PARTIALLY_PAID: "Pago parcialmente",
    SaleStatus.CONFIRMED: "Confirmado",
    SaleStatus.CANCELLED: "Cancelado",
    SaleStatus.DONATION: "Doação",
}

PAYMENT_METHOD_DESCRIPTIONS: dict[PaymentMethod, str] = {
    PaymentMethod.CASH: "Dinheiro",
    PaymentMethod.CXPJ: "CXPJ",
    PaymentMethod.BBJ: "BBJ",
    PaymentMethod.BBJN: "BBJN",
    PaymentMethod.CHEQUE: "CHEQUE",
    PaymentMethod.BRADESCO_PJ: "BradescoPJ",
    PaymentMethod.CXJ: "CXJ",
    PaymentMethod.AUTOMATIC_DEBIT: "Débito Automático",
}

LAUNCH_TYPE_DESCRIPTIONS: dict[LaunchType, str] = {
    LaunchType.INCOME: "Entrada",
    LaunchType.EXPENSE: "Saída",
}

PAYMENT_STATUS_DESCRIPTIONS: dict[PaymentStatus, str] = {
    PaymentStatus.PENDING: "Pendente",
    PaymentStatus.PAID: "Pago",
}

_DESCRIPTIONS: dict[type[Enum], dict] = {
    ProductType: PRODUCT_DESCRIPTIONS,
    SaleStatus: SALE_STATUS_DESCRIPTIONS,
    PaymentMethod: PAYMENT_METHOD_DESCRIPTIONS,
    LaunchType: LAUNCH_TYPE_DESCRIPTIONS,
    PaymentStatus: PAYMENT_STATUS_DESCRIPTIONS,
}

E = TypeVar("E", bound=Enum)


def describe(member: Enum) -> str:
    """Display label for any catalog member."""
    return _DESCRIPTIONS[type(member)][member]


def ordinal(member: Enum) -> int:
    """Zero-based declaration position of ``member`` within its enum."""
    return list(type(member)).index(member)


def parse_enum(enum_cls: type[E], raw: object) -> E:
    """
    Convert a raw stored value to an enum member.

    Accepts an existing member, its ``value``, or its ``name``
    (case-insensitive).

    Raises:
        UnknownEnumValueError: if ``raw`` names no member of ``enum_cls``.
    """
    if isinstance(raw, enum_cls):
        return raw
    if isinstance(raw, str):
        key = raw.strip()
        try:
            return enum_cls(key.lower())
        except ValueError:
            member = enum_cls.__members__.get(key.upper())
            if member is not None:
                return member
    raise UnknownEnumValueError(enum_cls.__name__, raw)
