"""Database layer - engine, base classes, types."""

from ceramics_kernel.db.base import UUID, Base, TrackedBase, UUIDString
from ceramics_kernel.db.engine import (
    create_tables,
    get_engine,
    get_session,
    read_snapshot,
)
from ceramics_kernel.db.types import ZERO, round_money

__all__ = [
    "get_engine",
    "get_session",
    "create_tables",
    "read_snapshot",
    "Base",
    "TrackedBase",
    "UUIDString",
    "UUID",
    "ZERO",
    "round_money",
]
