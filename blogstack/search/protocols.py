"""Protocol definitions for search-index repository implementations."""

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from blogstack.models import BlogDB, EntryDB
from blogstack.schemas import BlogResponse, EntryResponse
from blogstack.utils.pagination import Page, Pageable


@runtime_checkable
class BlogSearchRepositoryProtocol(Protocol):
    """
    Search-index replica of blogs.

    Both the Elasticsearch and the in-memory repositories conform to this
    protocol. Documents are keyed by blog ID.
    """

    async def ensure_index(self) -> None:
        """Create the index if it does not exist yet."""
        ...

    async def save(self, blog: BlogDB) -> None:
        """Index (insert or replace) one blog."""
        ...

    async def delete(self, blog_id: int) -> None:
        """Remove one blog; a missing document is not an error."""
        ...

    async def search(self, query: str) -> list[BlogResponse]:
        """Run a free-text query and return every match."""
        ...

    async def delete_all(self) -> None:
        """Remove every document from the index."""
        ...

    async def bulk_index(self, blogs: Iterable[BlogDB]) -> int:
        """Index many blogs, returning how many were written."""
        ...


@runtime_checkable
class EntrySearchRepositoryProtocol(Protocol):
    """Search-index replica of entries, keyed by entry ID."""

    async def ensure_index(self) -> None:
        """Create the index if it does not exist yet."""
        ...

    async def save(self, entry: EntryDB) -> None:
        """Index (insert or replace) one entry."""
        ...

    async def delete(self, entry_id: int) -> None:
        """Remove one entry; a missing document is not an error."""
        ...

    async def search(self, query: str, pageable: Pageable) -> Page[EntryResponse]:
        """Run a free-text query and return one page of matches."""
        ...

    async def delete_all(self) -> None:
        """Remove every document from the index."""
        ...

    async def bulk_index(self, entries: Iterable[EntryDB]) -> int:
        """Index many entries, returning how many were written."""
        ...
