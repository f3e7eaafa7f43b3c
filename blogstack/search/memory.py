"""In-memory search index for fallback when Elasticsearch is not enabled."""

from asyncio import Lock
from collections.abc import Iterable
from operator import itemgetter
from re import compile as re_compile
from typing import Any, ClassVar

from blogstack.configs import BLOG_ENTITY, ENTRY_ENTITY
from blogstack.models import BlogDB, EntryDB
from blogstack.monitoring.logging import get_logger
from blogstack.schemas import BlogResponse, EntryResponse
from blogstack.search.documents import blog_document, entry_document
from blogstack.utils.pagination import Order, Page, Pageable

logger = get_logger(__name__)

WORD = re_compile(r"\w+")


def _flatten(value: Any) -> list[str]:
    """Collect every scalar in a document as lower-cased text."""
    if isinstance(value, dict):
        return [text for item in value.values() for text in _flatten(item)]
    if isinstance(value, list):
        return [text for item in value for text in _flatten(item)]
    if value is None:
        return []
    return [str(value).lower()]


def _field_values(document: dict[str, Any], path: str) -> list[str]:
    """Resolve a dotted field path such as ``blog.handle``."""
    value: Any = document
    for part in path.split("."):
        if isinstance(value, list):
            value = [item.get(part) for item in value if isinstance(item, dict)]
        elif isinstance(value, dict):
            value = value.get(part)
        else:
            return []
    return _flatten(value)


def _words(values: list[str]) -> set[str]:
    return {word for value in values for word in WORD.findall(value)}


def _term_matches(term: str, values: list[str]) -> bool:
    words = _words(values)
    if term.endswith("*"):
        prefix = term[:-1]
        return any(word.startswith(prefix) for word in words)
    return term in words or term in values


def score(document: dict[str, Any], query: str) -> int:
    """
    Count the query terms a document matches.

    A small subset of query-string syntax is understood: whitespace separated
    terms combined with OR, ``field:term`` to restrict a term to one field,
    and a trailing ``*`` for prefix matching. An empty query or ``*`` matches
    every document.

    Returns:
        int: Number of matched terms, 0 if the document does not match
    """
    terms = query.lower().split()
    if not terms or terms == ["*"]:
        return 1

    everything = _flatten(document)
    matched = 0
    for term in terms:
        field, sep, needle = term.partition(":")
        if sep and needle:
            if _term_matches(needle, _field_values(document, field)):
                matched += 1
        elif _term_matches(term, everything):
            matched += 1
    return matched


def sort_documents(documents: list[dict[str, Any]], orders: Iterable[Order]) -> list[dict[str, Any]]:
    """Order documents by top-level properties, first key most significant; missing values sort last."""
    for order in reversed(tuple(orders)):
        present = [doc for doc in documents if doc.get(order.name) is not None]
        missing = [doc for doc in documents if doc.get(order.name) is None]
        present.sort(key=itemgetter(order.name), reverse=order.descending)
        documents = present + missing
    return documents


class MemorySearchRepository:
    """
    Dictionary-backed index, keyed by entity ID.

    Thread-safe via ``asyncio.Lock``; documents are stored in the same shape
    the Elasticsearch repositories index.
    """

    ENTITY: ClassVar[str]

    def __init__(self) -> None:
        self._documents: dict[int, dict[str, Any]] = {}
        self._lock = Lock()

    async def ensure_index(self) -> None:
        logger.debug(f"In-memory {self.ENTITY} index ready")

    async def put(self, doc_id: int, document: dict[str, Any]) -> None:
        async with self._lock:
            self._documents[doc_id] = document

    async def delete(self, doc_id: int) -> None:
        async with self._lock:
            if self._documents.pop(doc_id, None) is None:
                logger.warning(f"Document not found for deletion in {self.ENTITY}: {doc_id}")

    async def delete_all(self) -> None:
        async with self._lock:
            self._documents.clear()

    async def put_many(self, documents: Iterable[dict[str, Any]]) -> int:
        count = 0
        async with self._lock:
            for document in documents:
                self._documents[document["id"]] = document
                count += 1
        return count

    async def matches(self, query: str) -> list[dict[str, Any]]:
        """Return matching documents, best match first and then by ID."""
        async with self._lock:
            scored = [(score(doc, query), doc_id, doc) for doc_id, doc in self._documents.items()]
        scored = [item for item in scored if item[0] > 0]
        scored.sort(key=lambda item: (-item[0], item[1]))
        return [doc for _, _, doc in scored]

    def __len__(self) -> int:
        return len(self._documents)


class MemoryBlogSearchRepository(MemorySearchRepository):
    ENTITY = BLOG_ENTITY

    async def save(self, blog: BlogDB) -> None:
        await self.put(blog.id, blog_document(blog))

    async def search(self, query: str) -> list[BlogResponse]:
        return [BlogResponse.model_validate(doc) for doc in await self.matches(query)]

    async def bulk_index(self, blogs: Iterable[BlogDB]) -> int:
        return await self.put_many(blog_document(blog) for blog in blogs)


class MemoryEntrySearchRepository(MemorySearchRepository):
    ENTITY = ENTRY_ENTITY

    async def save(self, entry: EntryDB) -> None:
        await self.put(entry.id, entry_document(entry))

    async def search(self, query: str, pageable: Pageable) -> Page[EntryResponse]:
        documents = sort_documents(await self.matches(query), pageable.sort)
        window = documents[pageable.offset : pageable.offset + pageable.size]
        content = [EntryResponse.model_validate(doc) for doc in window]
        return Page.of(content, pageable, len(documents))

    async def bulk_index(self, entries: Iterable[EntryDB]) -> int:
        return await self.put_many(entry_document(entry) for entry in entries)
