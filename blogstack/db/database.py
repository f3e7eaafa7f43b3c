"""Database engine and session management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from blogstack.configs import settings
from blogstack.errors.database import DatabaseInitializationError
from blogstack.monitoring.logging import get_logger

logger = get_logger(__name__)

STATEMENT_TIMEOUT_MS = 30000


def engine_kwargs(database_url: str) -> dict[str, Any]:
    """
    Build engine options for the configured backend.

    SQLite (local runs, tests) gets no pool sizing; PostgreSQL gets the pool
    settings and server-side statement and lock timeouts.
    """
    if database_url.startswith("sqlite"):
        return {"echo": settings.DATABASE_ECHO}

    return {
        "echo": settings.DATABASE_ECHO,
        "pool_size": settings.POOL_SIZE,
        "max_overflow": settings.MAX_OVERFLOW,
        "pool_timeout": settings.POOL_TIMEOUT,
        "pool_recycle": settings.POOL_RECYCLE,
        "pool_pre_ping": True,
        "connect_args": {
            "command_timeout": STATEMENT_TIMEOUT_MS / 1000,
            "server_settings": {
                "statement_timeout": str(STATEMENT_TIMEOUT_MS),
                "lock_timeout": str(STATEMENT_TIMEOUT_MS),
            },
        },
    }


def _configure_engine_events(engine: AsyncEngine) -> None:
    """Configure connection pool events for monitoring."""

    @event.listens_for(engine.sync_engine, "connect")
    def on_connect(dbapi_connection: object, connection_record: object) -> None:
        logger.debug("New database connection established")

    @event.listens_for(engine.sync_engine, "checkout")
    def on_checkout(
        dbapi_connection: object,
        connection_record: object,
        connection_proxy: object,
    ) -> None:
        logger.debug("Connection checked out from pool")


engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL,
    **engine_kwargs(settings.DATABASE_URL),
)

if settings.DEBUG:
    _configure_engine_events(engine)

async_session_maker: async_sessionmaker[SQLModelAsyncSession] = async_sessionmaker(
    engine,
    class_=SQLModelAsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def get_session() -> AsyncGenerator[AsyncSession]:
    """
    Dependency for getting async database sessions.

    Yields:
        AsyncSession: Database session
    """
    async with transaction() as session:
        yield session


@asynccontextmanager
async def transaction() -> AsyncGenerator[AsyncSession]:
    """
    Context manager for explicit transaction management.

    Commits on successful exit, rolls back on exception.

    Yields:
        AsyncSession: Database session within a transaction
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            logger.exception("Transaction error")
            raise
        finally:
            await session.close()


async def init_db() -> None:
    """
    Create all tables defined in SQLModel models.

    Called on application startup; the schema is not versioned.

    Raises:
        DatabaseInitializationError: If the tables cannot be created
    """
    try:
        async with engine.begin() as conn:
            # Import all models to ensure they are registered
            from blogstack.models import BlogDB, EntryDB, EntryTagLink, TagDB, UserDB  # noqa: F401, PLC0415

            await conn.run_sync(SQLModel.metadata.create_all)
    except (SQLAlchemyError, OSError) as e:
        logger.exception("Database initialization failed")
        raise DatabaseInitializationError from e
    logger.info("Database initialized successfully!")


async def check_db() -> bool:
    """Return True when the database answers a trivial query."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError):
        logger.exception("Database health check failed")
        return False
    return True


async def close_db() -> None:
    """Dispose of the engine's connection pool."""
    await engine.dispose()
    logger.info("Database connections closed")
