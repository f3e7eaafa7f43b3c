"""
Search-index replica of blogs and entries.

``create_search_backend`` picks Elasticsearch when it is enabled and the
in-memory index otherwise; the resulting ``SearchBackend`` lives on
``app.state.search`` for the lifetime of the application.
"""

from dataclasses import dataclass
from typing import Literal

from elasticsearch import AsyncElasticsearch

from blogstack.configs import Settings, settings
from blogstack.monitoring.logging import get_logger
from blogstack.search.client import ElasticsearchClient
from blogstack.search.elasticsearch import (
    ElasticBlogSearchRepository,
    ElasticEntrySearchRepository,
)
from blogstack.search.memory import MemoryBlogSearchRepository, MemoryEntrySearchRepository
from blogstack.search.mirror import mirror_write
from blogstack.search.protocols import (
    BlogSearchRepositoryProtocol,
    EntrySearchRepositoryProtocol,
)

logger = get_logger(__name__)


@dataclass
class SearchBackend:
    blogs: BlogSearchRepositoryProtocol
    entries: EntrySearchRepositoryProtocol
    client: AsyncElasticsearch | None = None

    async def ensure_indexes(self) -> None:
        await self.blogs.ensure_index()
        await self.entries.ensure_index()

    @property
    def name(self) -> Literal["elasticsearch", "memory"]:
        return "memory" if self.client is None else "elasticsearch"

    async def is_healthy(self) -> bool:
        if self.client is None:
            return True
        return await ElasticsearchClient.is_healthy()

    async def close(self) -> None:
        if self.client is not None:
            await ElasticsearchClient.close()
            self.client = None


def create_search_backend(config: Settings = settings) -> SearchBackend:
    """
    Build the search repositories for the configured backend.

    Raises:
        SearchConfigurationError: If Elasticsearch is enabled without a URL
    """
    if config.ELASTICSEARCH_ENABLED:
        es = ElasticsearchClient.get_instance(config)
        logger.info(f"Search backend: Elasticsearch at {config.ELASTICSEARCH_URL}")
        return SearchBackend(
            blogs=ElasticBlogSearchRepository(es, config.SEARCH_INDEX_PREFIX),
            entries=ElasticEntrySearchRepository(es, config.SEARCH_INDEX_PREFIX),
            client=es,
        )

    logger.info("Search backend: in-memory (Elasticsearch disabled)")
    return SearchBackend(
        blogs=MemoryBlogSearchRepository(),
        entries=MemoryEntrySearchRepository(),
    )


__all__ = [
    "BlogSearchRepositoryProtocol",
    "ElasticBlogSearchRepository",
    "ElasticEntrySearchRepository",
    "ElasticsearchClient",
    "EntrySearchRepositoryProtocol",
    "MemoryBlogSearchRepository",
    "MemoryEntrySearchRepository",
    "SearchBackend",
    "create_search_backend",
    "mirror_write",
]
