# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os

# Settings are read when blogstack is first imported
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ELASTICSEARCH_ENABLED"] = "false"
os.environ["SEARCH_STRICT_MIRROR"] = "false"
os.environ["CLIENT_APP_NAME"] = "blogstackApp"
os.environ["SECRET_KEY"] = "test-secret-key"

from collections.abc import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402
from sqlmodel.ext.asyncio.session import AsyncSession  # noqa: E402

from blogstack.models import UserDB  # noqa: E402


@pytest.fixture
async def session() -> AsyncGenerator[AsyncSession]:
    """Session on a fresh in-memory SQLite database."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record) -> None:  # noqa: ANN001, ARG001
        # SQLite leaves foreign keys unchecked unless asked, per connection
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with maker() as db_session:
        yield db_session

    await engine.dispose()


@pytest.fixture
async def users(session: AsyncSession) -> dict[str, UserDB]:
    records = {
        "admin": UserDB(login="admin", email="admin@localhost"),
        "user": UserDB(login="user", email="user@localhost"),
    }
    session.add_all(records.values())
    await session.commit()
    return records
