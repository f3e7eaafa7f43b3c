"""
Search-index mirror writes.

The store-of-record write has already been committed when a mirror write
runs; nothing here rolls it back.
"""

from collections.abc import Awaitable

from blogstack.configs import settings
from blogstack.errors.search import SearchIndexError
from blogstack.monitoring.logging import get_logger
from blogstack.monitoring.prometheus import record_mirror_failure

logger = get_logger(__name__)


async def mirror_write(entity: str, operation: str, record_id: int, write: Awaitable[None]) -> None:
    """
    Await a search-index write that follows a committed store write.

    A failed write is counted and logged. With ``SEARCH_STRICT_MIRROR`` the
    error propagates and the client receives 503; otherwise the request
    completes and the index stays stale until the next reindex.

    Args:
        entity: Entity name, e.g. ``blog``
        operation: ``save`` or ``delete``
        record_id: ID of the record just written to the store
        write: The pending search repository call

    Raises:
        SearchIndexError: Only when strict mirroring is enabled
    """
    try:
        await write
    except SearchIndexError as e:
        record_mirror_failure(entity, operation)
        logger.error(
            "Search index out of sync with store",
            entity=entity,
            operation=operation,
            record_id=record_id,
            error=e.detail,
        )
        if settings.SEARCH_STRICT_MIRROR:
            raise
