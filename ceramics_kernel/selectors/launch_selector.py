"""
Module: ceramics_kernel.selectors.launch_selector
Responsibility: Read-only queries over financial launches and the
    category / category-group catalog used by the trial balance.
Architecture position: Kernel > Selectors.
"""

from sqlalchemy import select

from ceramics_kernel.domain.catalog import (
    LaunchType,
    PaymentMethod,
    PaymentStatus,
    parse_enum,
)
from ceramics_kernel.domain.snapshots import (
    CategoryGroupSnapshot,
    CategorySnapshot,
    LaunchSnapshot,
)
from ceramics_kernel.models.launch import (
    FinancialLaunch,
    LaunchCategory,
    LaunchCategoryGroup,
)
from ceramics_kernel.selectors.base import BaseSelector
from ceramics_kernel.selectors.ports import LaunchFilter


class LaunchSelector(BaseSelector[FinancialLaunch]):
    """
    Selector for launches and their categorization.

    Guarantees:
        - Launch dates are filtered inclusively on both ends.
        - Soft-deleted categories and groups are left out unless the
          caller asks for them with ``include_deleted=True``.
    """

    def list_launches(self, criteria: LaunchFilter) -> list[LaunchSnapshot]:
        stmt = select(FinancialLaunch)
        if criteria.start is not None:
            stmt = stmt.where(FinancialLaunch.launch_date >= criteria.start)
        if criteria.end is not None:
            stmt = stmt.where(FinancialLaunch.launch_date <= criteria.end)
        if criteria.launch_type is not None:
            stmt = stmt.where(FinancialLaunch.launch_type == criteria.launch_type.value)
        if criteria.status is not None:
            stmt = stmt.where(FinancialLaunch.status == criteria.status.value)
        if criteria.payment_method is not None:
            stmt = stmt.where(
                FinancialLaunch.payment_method == criteria.payment_method.value
            )
        stmt = stmt.order_by(FinancialLaunch.launch_date, FinancialLaunch.id)

        return [
            LaunchSnapshot(
                launch_id=row.id,
                description=row.description or "",
                launch_type=parse_enum(LaunchType, row.launch_type),
                amount=row.amount,
                launch_date=row.launch_date,
                status=parse_enum(PaymentStatus, row.status),
                payment_method=parse_enum(PaymentMethod, row.payment_method),
                category_id=row.category_id,
                due_date=row.due_date,
            )
            for row in self.session.scalars(stmt)
        ]

    def list_categories(self, include_deleted: bool = False) -> list[CategorySnapshot]:
        stmt = select(LaunchCategory).order_by(LaunchCategory.name)
        if not include_deleted:
            stmt = stmt.where(LaunchCategory.is_deleted.is_(False))
        return [
            CategorySnapshot(category_id=row.id, name=row.name, group_id=row.group_id)
            for row in self.session.scalars(stmt)
        ]

    def list_category_groups(
        self, include_deleted: bool = False,
    ) -> list[CategoryGroupSnapshot]:
        stmt = select(LaunchCategoryGroup).order_by(LaunchCategoryGroup.name)
        if not include_deleted:
            stmt = stmt.where(LaunchCategoryGroup.is_deleted.is_(False))
        return [
            CategoryGroupSnapshot(group_id=row.id, name=row.name)
            for row in self.session.scalars(stmt)
        ]
