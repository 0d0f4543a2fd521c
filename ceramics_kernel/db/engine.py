"""
Module: ceramics_kernel.db.engine
Responsibility: SQLAlchemy engine initialization, session factory management,
    and the read-only snapshot scope used by every report.
Architecture position: Kernel > DB.  May import from db/base.py.  MUST NOT
    import from selectors/, domain/, or outer layers (create_tables imports
    the models package to register tables).

Invariants enforced:
    - One report, one snapshot: read_snapshot() wraps all reads of a report
      in a single transaction that is always rolled back.  On PostgreSQL the
      transaction is REPEATABLE READ, READ ONLY so that every query observes
      the same committed state.
    - SQLite (tests, local tooling) uses a StaticPool for in-memory URLs so
      all sessions share one connection.

Failure modes:
    - RuntimeError if get_engine/get_session called before
      init_engine_from_url().
"""

import atexit
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from ceramics_kernel.logging_config import get_logger

logger = get_logger("db.engine")

_engine: Engine | None = None
_SessionFactory: sessionmaker[Session] | None = None


def init_engine_from_url(
    database_url: str,
    echo: bool = False,
    pool_size: int = 5,
    max_overflow: int = 5,
    pool_pre_ping: bool = True,
    pool_recycle: int = 1800,
) -> Engine:
    """
    Initialize the SQLAlchemy engine from a database URL.

    Postconditions: Module-level _engine and _SessionFactory are initialized.
        A second call replaces the first.

    Args:
        database_url: PostgreSQL or SQLite connection URL.
        echo: If True, log all SQL statements.
        pool_size: Number of pooled connections (PostgreSQL only).
        max_overflow: Max connections beyond pool_size (PostgreSQL only).
        pool_pre_ping: If True, test connections before use.
        pool_recycle: Seconds after which a connection is recycled.

    Returns:
        SQLAlchemy Engine instance.
    """
    global _engine, _SessionFactory

    if _engine is not None:
        _engine.dispose()

    if database_url.startswith("sqlite"):
        dialect = "sqlite"
        kwargs: dict = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url or database_url.rstrip("/") == "sqlite:":
            kwargs["poolclass"] = StaticPool
        _engine = create_engine(database_url, echo=echo, **kwargs)
    else:
        dialect = "postgresql"
        _engine = create_engine(
            database_url,
            echo=echo,
            poolclass=QueuePool,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=pool_pre_ping,
            pool_recycle=pool_recycle,
        )

    _SessionFactory = sessionmaker(bind=_engine, expire_on_commit=False)

    logger.info(
        "engine_initialized",
        extra={"dialect": dialect, "echo": echo},
    )
    return _engine


def get_engine() -> Engine:
    """
    Get the current engine instance.

    Raises:
        RuntimeError: If engine has not been initialized.
    """
    if _engine is None:
        raise RuntimeError("Engine not initialized. Call init_engine_from_url() first.")
    return _engine


def get_session() -> Session:
    """
    Get a new session instance.

    Raises:
        RuntimeError: If engine has not been initialized.
    """
    if _SessionFactory is None:
        raise RuntimeError("Engine not initialized. Call init_engine_from_url() first.")
    return _SessionFactory()


@contextmanager
def read_snapshot(session: Session) -> Generator[Session, None, None]:
    """
    Run a block of reads against one consistent, read-only view.

    If the session is idle a new transaction is opened (REPEATABLE READ,
    READ ONLY on PostgreSQL) and rolled back on exit.  If the caller already
    holds a transaction, it is reused as-is and left untouched.
    """
    owns_transaction = not session.in_transaction()
    if owns_transaction:
        if session.get_bind().dialect.name == "postgresql":
            session.connection(
                execution_options={"isolation_level": "REPEATABLE READ"}
            )
            session.execute(text("SET TRANSACTION READ ONLY"))
        else:
            session.connection()
    logger.debug(
        "read_snapshot_opened",
        extra={"owns_transaction": owns_transaction},
    )
    try:
        yield session
    finally:
        if owns_transaction:
            session.rollback()


def create_tables() -> None:
    """Create all tables defined in ceramics_kernel.models."""
    import ceramics_kernel.models  # noqa: F401
    from ceramics_kernel.db.base import Base

    Base.metadata.create_all(get_engine())


def drop_tables() -> None:
    """Drop all tables. Use with caution - primarily for testing."""
    import ceramics_kernel.models  # noqa: F401
    from ceramics_kernel.db.base import Base

    Base.metadata.drop_all(get_engine())


def reset_engine() -> None:
    """
    Reset the engine and session factory.

    Useful for test cleanup.
    """
    global _engine, _SessionFactory

    if _engine is not None:
        _engine.dispose()
        _engine = None

    _SessionFactory = None


def _atexit_dispose():
    """Dispose the engine on process exit to release pooled connections."""
    if _engine is not None:
        _engine.dispose()


atexit.register(_atexit_dispose)
