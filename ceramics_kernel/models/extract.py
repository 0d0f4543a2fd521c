"""BankExtract ORM model -- one manually entered bank statement line."""

from datetime import date
from decimal import Decimal

from sqlalchemy import Boolean, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from ceramics_kernel.db.base import TrackedBase


class BankExtract(TrackedBase):
    """
    A signed reconciliation line against one account.

    Guarantees:
        - value keeps its sign: positive is money in, negative money out.
    """

    __tablename__ = "bank_extracts"

    __table_args__ = (
        Index("idx_extract_date", "extract_date"),
        Index("idx_extract_account", "account"),
    )

    account: Mapped[str] = mapped_column(String(32), nullable=False)
    extract_date: Mapped[date] = mapped_column(nullable=False)
    value: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    observation: Mapped[str] = mapped_column(String(1000), default="", nullable=False)
    operator_name: Mapped[str] = mapped_column(String(200), default="", nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
