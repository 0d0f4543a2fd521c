"""
Module: ceramics_kernel.selectors.sql_source
Responsibility: SQLAlchemy-backed implementation of the ``ReportingSource``
    port, composed from the individual selectors.
Architecture position: Kernel > Selectors.

Failure modes:
    - Driver and connection failures (``sqlalchemy.exc.DBAPIError``) are
      re-raised as RepositoryUnavailableError, chained to the original.
      Callers may retry the whole request; the source never retries.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TypeVar

from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session

from ceramics_kernel.db.engine import read_snapshot
from ceramics_kernel.domain.snapshots import (
    CategoryGroupSnapshot,
    CategorySnapshot,
    ExtractSnapshot,
    LaunchSnapshot,
    SaleSnapshot,
)
from ceramics_kernel.exceptions import RepositoryUnavailableError
from ceramics_kernel.logging_config import get_logger
from ceramics_kernel.selectors.extract_selector import ExtractSelector
from ceramics_kernel.selectors.launch_selector import LaunchSelector
from ceramics_kernel.selectors.ports import ExtractFilter, LaunchFilter, SaleFilter
from ceramics_kernel.selectors.sales_selector import SalesSelector

logger = get_logger("selectors.sql_source")

T = TypeVar("T")


class SqlReportingSource:
    """
    ReportingSource over a caller-owned SQLAlchemy session.

    Guarantees:
        - Every list_* call returns frozen snapshots, never ORM instances.
        - The category catalog includes soft-deleted rows; paid launches
          keep pointing at them after a delete.
        - ``snapshot()`` wraps the enclosed reads in one read-only
          transaction (see ``read_snapshot``).
    """

    def __init__(self, session: Session):
        self._session = session
        self._sales = SalesSelector(session)
        self._launches = LaunchSelector(session)
        self._extracts = ExtractSelector(session)

    @contextmanager
    def snapshot(self) -> Iterator[Session]:
        with read_snapshot(self._session) as session:
            yield session

    def _guard(self, operation: str, query: Callable[[], T]) -> T:
        try:
            return query()
        except DBAPIError as exc:
            logger.error(
                "repository_query_failed",
                extra={"operation": operation},
                exc_info=True,
            )
            raise RepositoryUnavailableError(operation, str(exc.orig)) from exc

    def list_sales(self, criteria: SaleFilter) -> list[SaleSnapshot]:
        return self._guard("list_sales", lambda: self._sales.list_sales(criteria))

    def list_financial_launches(self, criteria: LaunchFilter) -> list[LaunchSnapshot]:
        return self._guard(
            "list_financial_launches",
            lambda: self._launches.list_launches(criteria),
        )

    def list_bank_extracts(self, criteria: ExtractFilter) -> list[ExtractSnapshot]:
        return self._guard(
            "list_bank_extracts",
            lambda: self._extracts.list_extracts(criteria),
        )

    def list_categories(self) -> list[CategorySnapshot]:
        return self._guard(
            "list_categories",
            lambda: self._launches.list_categories(include_deleted=True),
        )

    def list_category_groups(self) -> list[CategoryGroupSnapshot]:
        return self._guard(
            "list_category_groups",
            lambda: self._launches.list_category_groups(include_deleted=True),
        )
