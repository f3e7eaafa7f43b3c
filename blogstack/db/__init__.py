"""Core application modules."""

from blogstack.db.database import (
    async_session_maker,
    check_db,
    close_db,
    engine,
    get_session,
    init_db,
    transaction,
)

__all__ = [
    "engine",
    "async_session_maker",
    "get_session",
    "init_db",
    "check_db",
    "close_db",
    "transaction",
]
