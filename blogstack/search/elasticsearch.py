"""
Elasticsearch search-index repositories.

Free-text queries are passed verbatim to a ``query_string`` query; the query
syntax is entirely Elasticsearch's.
"""

from collections.abc import Iterable
from typing import Any, ClassVar

from elasticsearch import (
    ApiError,
    AsyncElasticsearch,
    BadRequestError,
    NotFoundError,
    TransportError,
)
from elasticsearch.helpers import BulkIndexError, async_bulk
from starlette.status import HTTP_400_BAD_REQUEST

from blogstack.configs import BLOG_ENTITY, ENTRY_ENTITY, settings
from blogstack.errors.search import SearchIndexError
from blogstack.models import BlogDB, EntryDB
from blogstack.monitoring.logging import get_logger
from blogstack.schemas import BlogResponse, EntryResponse
from blogstack.search.documents import (
    BLOG_MAPPINGS,
    ENTRY_MAPPINGS,
    blog_document,
    entry_document,
)
from blogstack.utils.pagination import Order, Page, Pageable

logger = get_logger(__name__)

# Elasticsearch default index.max_result_window, the limit on from + size
MAX_UNPAGED_RESULTS = 10_000

BACKEND_ERRORS = (ApiError, TransportError)


class BaseESRepository:
    """
    Common index management and document operations.

    Child classes must define:
    - ENTITY: entity name, also the index name after the configured prefix
    - MAPPINGS: index mappings

    and may define SORT_FIELDS, mapping sortable properties to index fields.
    """

    ENTITY: ClassVar[str]
    MAPPINGS: ClassVar[dict[str, Any]]
    SORT_FIELDS: ClassVar[dict[str, str]] = {}

    def __init__(self, es: AsyncElasticsearch, prefix: str | None = None) -> None:
        self.es = es
        self.index_name = f"{settings.SEARCH_INDEX_PREFIX if prefix is None else prefix}{self.ENTITY}"

    async def ensure_index(self) -> None:
        try:
            if await self.es.indices.exists(index=self.index_name):
                return
            await self.es.indices.create(index=self.index_name, mappings=self.MAPPINGS)
            logger.info(f"Created index: {self.index_name}")
        except BadRequestError as e:
            # Another worker created it between exists() and create()
            if e.error != "resource_already_exists_exception":
                raise SearchIndexError(detail=f"Failed to create index {self.index_name}: {e}") from e
        except BACKEND_ERRORS as e:
            raise SearchIndexError(detail=f"Failed to create index {self.index_name}: {e}") from e

    async def index_document(self, doc_id: int, document: dict[str, Any]) -> None:
        try:
            await self.es.index(
                index=self.index_name,
                id=str(doc_id),
                document=document,
                refresh="wait_for",
            )
            logger.debug(f"Indexed document in {self.index_name}: {doc_id}")
        except BACKEND_ERRORS as e:
            raise SearchIndexError(detail=f"Failed to index {self.ENTITY} {doc_id}: {e}") from e

    async def delete(self, doc_id: int) -> None:
        try:
            await self.es.delete(index=self.index_name, id=str(doc_id), refresh="wait_for")
            logger.debug(f"Deleted document from {self.index_name}: {doc_id}")
        except NotFoundError:
            logger.warning(f"Document not found for deletion in {self.index_name}: {doc_id}")
        except BACKEND_ERRORS as e:
            raise SearchIndexError(detail=f"Failed to delete {self.ENTITY} {doc_id}: {e}") from e

    async def delete_all(self) -> None:
        try:
            await self.es.delete_by_query(
                index=self.index_name,
                query={"match_all": {}},
                refresh=True,
                conflicts="proceed",
            )
            logger.info(f"Cleared index: {self.index_name}")
        except NotFoundError:
            logger.info(f"Index {self.index_name} does not exist, nothing to clear")
        except BACKEND_ERRORS as e:
            raise SearchIndexError(detail=f"Failed to clear index {self.index_name}: {e}") from e

    async def bulk_documents(self, documents: Iterable[dict[str, Any]]) -> int:
        actions = (
            {"_index": self.index_name, "_id": str(doc["id"]), "_source": doc} for doc in documents
        )
        try:
            success, _ = await async_bulk(self.es, actions, refresh="wait_for")
        except BulkIndexError as e:
            raise SearchIndexError(
                detail=f"Bulk indexing {self.index_name} failed for {len(e.errors)} documents",
            ) from e
        except BACKEND_ERRORS as e:
            raise SearchIndexError(detail=f"Bulk indexing {self.index_name} failed: {e}") from e
        logger.info(f"Bulk indexed {success} documents into {self.index_name}")
        return success

    async def query_string(
        self,
        query: str,
        *,
        offset: int = 0,
        size: int = MAX_UNPAGED_RESULTS,
        sort: Iterable[Order] = (),
    ) -> tuple[list[dict[str, Any]], int]:
        """
        Run a ``query_string`` query.

        Hits come back by relevance unless ``sort`` is given.

        Returns:
            tuple: Source documents of the hits and the total hit count

        Raises:
            SearchIndexError: 400 for a page past the result window or a query
                Elasticsearch cannot parse, 503 when the backend is unavailable
        """
        if offset + size > MAX_UNPAGED_RESULTS:
            raise SearchIndexError(
                detail=f"Result window too large: from {offset} + size {size} exceeds {MAX_UNPAGED_RESULTS}",
                status_code=HTTP_400_BAD_REQUEST,
            )

        params: dict[str, Any] = {}
        if sort_clause := [
            {self.SORT_FIELDS.get(order.name, order.name): {"order": order.direction}} for order in sort
        ]:
            params["sort"] = sort_clause

        try:
            response = await self.es.search(
                index=self.index_name,
                query={"query_string": {"query": query}},
                from_=offset,
                size=size,
                track_total_hits=True,
                **params,
            )
        except BadRequestError as e:
            raise SearchIndexError(
                detail=f"Invalid search query: {query}",
                status_code=HTTP_400_BAD_REQUEST,
            ) from e
        except NotFoundError:
            logger.warning(f"Search on missing index {self.index_name}")
            return [], 0
        except BACKEND_ERRORS as e:
            raise SearchIndexError(detail=f"Search on {self.index_name} failed: {e}") from e

        hits = response["hits"]
        total = hits["total"]["value"] if isinstance(hits["total"], dict) else hits["total"]
        return [hit["_source"] for hit in hits["hits"]], total


class ElasticBlogSearchRepository(BaseESRepository):
    ENTITY = BLOG_ENTITY
    MAPPINGS = BLOG_MAPPINGS

    async def save(self, blog: BlogDB) -> None:
        await self.index_document(blog.id, blog_document(blog))

    async def search(self, query: str) -> list[BlogResponse]:
        documents, _ = await self.query_string(query)
        return [BlogResponse.model_validate(doc) for doc in documents]

    async def bulk_index(self, blogs: Iterable[BlogDB]) -> int:
        return await self.bulk_documents(blog_document(blog) for blog in blogs)


class ElasticEntrySearchRepository(BaseESRepository):
    ENTITY = ENTRY_ENTITY
    MAPPINGS = ENTRY_MAPPINGS
    # title is analysed text; its keyword subfield sorts
    SORT_FIELDS = {"id": "id", "title": "title.keyword", "date": "date"}

    async def save(self, entry: EntryDB) -> None:
        await self.index_document(entry.id, entry_document(entry))

    async def search(self, query: str, pageable: Pageable) -> Page[EntryResponse]:
        documents, total = await self.query_string(
            query,
            offset=pageable.offset,
            size=pageable.size,
            sort=pageable.sort,
        )
        content = [EntryResponse.model_validate(doc) for doc in documents]
        return Page.of(content, pageable, total)

    async def bulk_index(self, entries: Iterable[EntryDB]) -> int:
        return await self.bulk_documents(entry_document(entry) for entry in entries)
