"""Read-only queries over bank extracts, newest first."""

from sqlalchemy import select

from ceramics_kernel.domain.catalog import PaymentMethod, parse_enum
from ceramics_kernel.domain.snapshots import ExtractSnapshot
from ceramics_kernel.models.extract import BankExtract
from ceramics_kernel.selectors.base import BaseSelector
from ceramics_kernel.selectors.ports import ExtractFilter


class ExtractSelector(BaseSelector[BankExtract]):
    """Selector for manually entered bank extract lines."""

    def list_extracts(self, criteria: ExtractFilter) -> list[ExtractSnapshot]:
        stmt = select(BankExtract)
        if criteria.active_only:
            stmt = stmt.where(BankExtract.is_active.is_(True))
        if criteria.start is not None:
            stmt = stmt.where(BankExtract.extract_date >= criteria.start)
        if criteria.end is not None:
            stmt = stmt.where(BankExtract.extract_date <= criteria.end)
        if criteria.account is not None:
            stmt = stmt.where(BankExtract.account == criteria.account.value)
        stmt = stmt.order_by(BankExtract.extract_date.desc(), BankExtract.id)

        return [
            ExtractSnapshot(
                extract_id=row.id,
                account=parse_enum(PaymentMethod, row.account),
                extract_date=row.extract_date,
                value=row.value,
                observation=row.observation or "",
                operator_name=row.operator_name or "",
                is_active=row.is_active,
            )
            for row in self.session.scalars(stmt)
        ]
