"""Database layer - engine, base classes."""

from dues_kernel.db.base import UUID, Base, UUIDString
from dues_kernel.db.engine import (
    create_tables,
    get_engine,
    get_session,
    init_engine_from_url,
    reset_engine,
)

__all__ = [
    "init_engine_from_url",
    "get_engine",
    "get_session",
    "create_tables",
    "reset_engine",
    "Base",
    "UUIDString",
    "UUID",
]
