"""
Rebuild the search indexes from the store-of-record.

Usage:
    python -m blogstack.search.reindex

Clears both indexes and bulk indexes every blog and entry. This is the repair
path for index writes that failed after the store write succeeded.
"""

from asyncio import run as asyncio_run

from blogstack.db.database import close_db, transaction
from blogstack.monitoring.logging import configure_structlog, get_logger
from blogstack.repositories import BlogRepository, EntryRepository
from blogstack.search import SearchBackend, create_search_backend

logger = get_logger(__name__)


async def reindex(backend: SearchBackend) -> dict[str, int]:
    """
    Replace the content of both indexes with the current store content.

    Returns:
        dict[str, int]: Number of documents indexed per entity
    """
    await backend.ensure_indexes()

    async with transaction() as session:
        blogs = await BlogRepository(session).find_all()
        entries = await EntryRepository(session).find_all()

    await backend.blogs.delete_all()
    blog_count = await backend.blogs.bulk_index(blogs)

    await backend.entries.delete_all()
    entry_count = await backend.entries.bulk_index(entries)

    logger.info(f"Reindexed {blog_count} blogs and {entry_count} entries")
    return {"blog": blog_count, "entry": entry_count}


async def main() -> None:
    configure_structlog()
    backend = create_search_backend()
    try:
        await reindex(backend)
    finally:
        await backend.close()
        await close_db()


if __name__ == "__main__":
    asyncio_run(main())
