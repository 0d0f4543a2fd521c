"""
Sale, SaleItem and SalePayment ORM models.

Enum-valued columns are stored as their string ``value``; selectors parse
them back strictly so a corrupt row surfaces as UnknownEnumValueError
instead of being silently bucketed.
"""

from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ceramics_kernel.db.base import TrackedBase, UUIDString


class Sale(TrackedBase):
    """
    A sales note.

    Guarantees:
        - total_net = max(0, total_gross - discount), maintained by the
          write path; the analytics core reads it as stored.
        - Soft-deleted sales have is_active = False and are never reported.
    """

    __tablename__ = "sales"

    __table_args__ = (
        Index("idx_sale_date", "sale_date"),
        Index("idx_sale_status", "status"),
        Index("idx_sale_active", "is_active"),
    )

    note_number: Mapped[int] = mapped_column(Integer, nullable=False)
    sale_date: Mapped[date] = mapped_column(nullable=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False)

    customer_name: Mapped[str] = mapped_column(String(200), default="", nullable=False)
    city: Mapped[str] = mapped_column(String(100), default="", nullable=False)
    state: Mapped[str] = mapped_column(String(2), default="", nullable=False)

    total_gross: Mapped[Decimal] = mapped_column(
        Numeric(18, 2), default=Decimal("0"), nullable=False
    )
    discount: Mapped[Decimal] = mapped_column(
        Numeric(18, 2), default=Decimal("0"), nullable=False
    )
    total_net: Mapped[Decimal] = mapped_column(
        Numeric(18, 2), default=Decimal("0"), nullable=False
    )

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    items: Mapped[list["SaleItem"]] = relationship(
        back_populates="sale",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    payments: Mapped[list["SalePayment"]] = relationship(
        back_populates="sale",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Sale #{self.note_number} {self.sale_date} {self.status}>"


class SaleItem(TrackedBase):
    """One product line.  quantity is in milheiros (thousands of pieces)."""

    __tablename__ = "sale_items"

    sale_id: Mapped[UUID] = mapped_column(
        UUIDString(), ForeignKey("sales.id"), nullable=False, index=True
    )
    product: Mapped[str] = mapped_column(String(32), nullable=False)
    quantity: Mapped[Decimal] = mapped_column(Numeric(18, 3), nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    subtotal: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    breaks: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    sale: Mapped[Sale] = relationship(back_populates="items")


class SalePayment(TrackedBase):
    """Money received against a sale.  Does not create a financial launch."""

    __tablename__ = "sale_payments"

    sale_id: Mapped[UUID] = mapped_column(
        UUIDString(), ForeignKey("sales.id"), nullable=False, index=True
    )
    payment_method: Mapped[str] = mapped_column(String(32), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    payment_date: Mapped[date | None] = mapped_column(nullable=True)

    sale: Mapped[Sale] = relationship(back_populates="payments")
