# tests/routes/conftest.py
"""Pytest fixtures for route tests."""

from collections.abc import AsyncGenerator, Generator
from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from blogstack.dependencies import (
    get_blog_repository,
    get_blog_search_repository,
    get_current_user,
    get_entry_repository,
    get_entry_search_repository,
)
from blogstack.main import app
from blogstack.managers.token_manager import create_access_token
from blogstack.models import BlogDB, EntryDB, TagDB, UserDB


@pytest.fixture
def sample_user() -> UserDB:
    """Create a sample user for testing."""
    return UserDB(id=1, login="user", email="user@example.com")


@pytest.fixture
def sample_access_token(sample_user: UserDB) -> str:
    """Create a sample access token for testing."""
    return create_access_token(
        user_id=sample_user.id,
        login=sample_user.login,
        expires_delta=timedelta(minutes=30),
    )


@pytest.fixture
def auth_headers(sample_access_token: str) -> dict[str, str]:
    """Create auth headers with a valid access token."""
    return {"Authorization": f"Bearer {sample_access_token}"}


@pytest.fixture
def sample_blog(sample_user: UserDB) -> BlogDB:
    blog = BlogDB(id=1, name="Jhipster Blog", handle="jhipster", user_id=sample_user.id)
    blog.user = sample_user
    return blog


@pytest.fixture
def sample_entry(sample_blog: BlogDB) -> EntryDB:
    entry = EntryDB(
        id=1,
        title="Welcome",
        content="First post",
        date=datetime(2026, 1, 5, 10, 0, tzinfo=UTC),
        blog_id=sample_blog.id,
    )
    entry.blog = sample_blog
    entry.tags = [TagDB(id=1, name="jhipster")]
    return entry


@pytest.fixture
def blog_repo() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def entry_repo() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def blog_search() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def entry_search() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def call_order(
    blog_repo: AsyncMock,
    entry_repo: AsyncMock,
    blog_search: AsyncMock,
    entry_search: AsyncMock,
) -> MagicMock:
    """Parent mock recording store and index calls in the order they happen."""
    manager = MagicMock()
    manager.attach_mock(blog_repo, "blog_repo")
    manager.attach_mock(entry_repo, "entry_repo")
    manager.attach_mock(blog_search, "blog_search")
    manager.attach_mock(entry_search, "entry_search")
    return manager


@pytest.fixture(autouse=True)
def overrides(
    sample_user: UserDB,
    blog_repo: AsyncMock,
    entry_repo: AsyncMock,
    blog_search: AsyncMock,
    entry_search: AsyncMock,
) -> Generator[None]:
    app.dependency_overrides[get_current_user] = lambda: sample_user
    app.dependency_overrides[get_blog_repository] = lambda: blog_repo
    app.dependency_overrides[get_entry_repository] = lambda: entry_repo
    app.dependency_overrides[get_blog_search_repository] = lambda: blog_search
    app.dependency_overrides[get_entry_search_repository] = lambda: entry_search

    yield

    app.dependency_overrides = {}


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for testing."""
    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app),
    ) as ac:
        yield ac
