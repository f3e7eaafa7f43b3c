"""
Pagination primitives and HTTP pagination headers.

List endpoints return a bare JSON array. The total count and the navigation
links travel in the ``X-Total-Count`` and ``Link`` headers, so a client can page
through results without an envelope.

Examples
--------
>>> page = Page(content=[1, 2], number=0, size=2, total_elements=5)
>>> generate_pagination_headers(page, "/api/entries")["Link"]
'</api/entries?page=1&size=2>; rel="next",</api/entries?page=2&size=2>; rel="last",</api/entries?page=0&size=2>; rel="first"'
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from math import ceil
from typing import Generic, TypeVar
from urllib.parse import quote_plus, urlencode

TOTAL_COUNT_HEADER = "X-Total-Count"
LINK_HEADER = "Link"
SORT_DIRECTIONS = ("asc", "desc")


@dataclass(frozen=True)
class Order:
    """One sort key: a property name and its direction."""

    name: str
    descending: bool = False

    @property
    def direction(self) -> str:
        return "desc" if self.descending else "asc"


def parse_sort(values: Iterable[str]) -> tuple[Order, ...]:
    """
    Parse ``sort`` query values of the form ``property(,property)*(,asc|desc)``.

    The direction applies to every property in the same value and defaults to
    ascending. Blank parts are ignored.

    Examples
    --------
    >>> parse_sort(["date,desc", "title"])
    (Order(name='date', descending=True), Order(name='title', descending=False))
    """
    orders: list[Order] = []
    for value in values:
        parts = [part.strip() for part in value.split(",") if part.strip()]
        descending = False
        if parts and parts[-1].lower() in SORT_DIRECTIONS:
            descending = parts.pop().lower() == "desc"
        orders.extend(Order(name, descending) for name in parts)
    return tuple(orders)


@dataclass(frozen=True)
class Pageable:
    """
    Zero-based page request.

    Parameters
    ----------
    page : int
        Page number, starting at 0.
    size : int
        Page size.
    sort : tuple[Order, ...]
        Requested sort keys, most significant first.
    """

    page: int = 0
    size: int = 20
    sort: tuple[Order, ...] = ()

    @property
    def offset(self) -> int:
        return self.page * self.size

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One slice of a larger result set."""

    content: list[T] = field(default_factory=list)
    number: int = 0
    size: int = 20
    total_elements: int = 0

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 1
        return ceil(self.total_elements / self.size)

    @classmethod
    def of(cls, content: list[T], pageable: Pageable, total_elements: int) -> "Page[T]":
        return cls(
            content=content,
            number=pageable.page,
            size=pageable.size,
            total_elements=total_elements,
        )


def _generate_uri(base_url: str, page: int, size: int) -> str:
    return f"{base_url}?{urlencode({'page': page, 'size': size})}"


def _build_link(page: Page, base_url: str, suffix: str = "") -> str:
    links: list[str] = []
    if page.number + 1 < page.total_pages:
        links.append(f'<{_generate_uri(base_url, page.number + 1, page.size)}{suffix}>; rel="next"')
    if page.number > 0:
        links.append(f'<{_generate_uri(base_url, page.number - 1, page.size)}{suffix}>; rel="prev"')

    last_page = page.total_pages - 1 if page.total_pages > 0 else 0
    links.append(f'<{_generate_uri(base_url, last_page, page.size)}{suffix}>; rel="last"')
    links.append(f'<{_generate_uri(base_url, 0, page.size)}{suffix}>; rel="first"')
    return ",".join(links)


def generate_pagination_headers(page: Page, base_url: str) -> dict[str, str]:
    """
    Build ``X-Total-Count`` and ``Link`` headers for a page of results.

    Parameters
    ----------
    page : Page
        The page being returned.
    base_url : str
        Path of the list endpoint, e.g. ``/api/entries``.

    Returns
    -------
    dict[str, str]
        Headers to merge into the response.
    """
    return {
        TOTAL_COUNT_HEADER: str(page.total_elements),
        LINK_HEADER: _build_link(page, base_url),
    }


def encode_query(query: str) -> str:
    """Form-encode a search query: ``*`` stays literal and ``~`` is escaped."""
    return quote_plus(query, safe="*").replace("~", "%7E")


def generate_search_pagination_headers(query: str, page: Page, base_url: str) -> dict[str, str]:
    """Same as `generate_pagination_headers`, with ``&query=`` on every link."""
    return {
        TOTAL_COUNT_HEADER: str(page.total_elements),
        LINK_HEADER: _build_link(page, base_url, suffix=f"&query={encode_query(query)}"),
    }
