# tests/search/conftest.py
"""Fixtures for search-index repository tests."""

from datetime import UTC, datetime

import pytest

from blogstack.models import BlogDB, EntryDB, TagDB, UserDB


@pytest.fixture
def owner() -> UserDB:
    return UserDB(id=1, login="admin", email="admin@example.com")


@pytest.fixture
def blogs(owner: UserDB) -> list[BlogDB]:
    records = [
        BlogDB(id=1, name="Jhipster Blog", handle="jhipster", user_id=owner.id),
        BlogDB(id=2, name="Spring Notes", handle="spring", user_id=owner.id),
        BlogDB(id=3, name="Kitchen Diary", handle="cooking", user_id=owner.id),
    ]
    for blog in records:
        blog.user = owner
    return records


@pytest.fixture
def entries(blogs: list[BlogDB]) -> list[EntryDB]:
    records = []
    for index, (title, tag) in enumerate(
        [
            ("Getting started with JHipster", "jhipster"),
            ("Spring Boot tips", "spring"),
            ("Spring cleaning recipes", "cooking"),
        ],
        start=1,
    ):
        entry = EntryDB(
            id=index,
            title=title,
            content=f"Body of entry {index}",
            date=datetime(2026, 1, index, tzinfo=UTC),
            blog_id=blogs[index - 1].id,
        )
        entry.blog = blogs[index - 1]
        entry.tags = [TagDB(id=index, name=tag)]
        records.append(entry)
    return records
