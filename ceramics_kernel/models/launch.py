"""
FinancialLaunch, LaunchCategory and LaunchCategoryGroup ORM models.

A launch is a single ledger entry.  Its amount is stored unsigned; the
launch_type (income / expense) supplies the sign.
"""

from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from ceramics_kernel.db.base import TrackedBase, UUIDString


class LaunchCategoryGroup(TrackedBase):
    """Rollup bucket for categories on the trial balance."""

    __tablename__ = "launch_category_groups"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)


class LaunchCategory(TrackedBase):
    """Expense or income category, optionally belonging to a group."""

    __tablename__ = "launch_categories"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    group_id: Mapped[UUID | None] = mapped_column(
        UUIDString(), ForeignKey("launch_category_groups.id"), nullable=True
    )
    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)


class FinancialLaunch(TrackedBase):
    """
    A ledger entry.

    Guarantees:
        - amount >= 0; sign is implied by launch_type.
        - Only status = paid launches contribute to the trial balance.
    """

    __tablename__ = "financial_launches"

    __table_args__ = (
        Index("idx_launch_date", "launch_date"),
        Index("idx_launch_type_status", "launch_type", "status"),
    )

    description: Mapped[str] = mapped_column(String(200), default="", nullable=False)
    launch_type: Mapped[str] = mapped_column(String(32), nullable=False)
    amount: Mapped[Decimal] = mapped_column(
        Numeric(18, 2), default=Decimal("0"), nullable=False
    )
    launch_date: Mapped[date] = mapped_column(nullable=False)
    due_date: Mapped[date | None] = mapped_column(nullable=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False)
    payment_method: Mapped[str] = mapped_column(String(32), nullable=False)
    category_id: Mapped[UUID | None] = mapped_column(
        UUIDString(), ForeignKey("launch_categories.id"), nullable=True
    )

    def __repr__(self) -> str:
        return f"<FinancialLaunch {self.launch_type} {self.amount} {self.launch_date}>"
