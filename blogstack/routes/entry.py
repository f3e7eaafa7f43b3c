# blogstack/routes/entry.py

"""
Entry Routes.

REST resource for blog entries. Writes go to the store first and are then
mirrored to the search index. Listing and search are paginated; the total
count and navigation links are returned in the ``X-Total-Count`` and ``Link``
headers.
"""

from typing import Annotated

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_200_OK, HTTP_201_CREATED, HTTP_404_NOT_FOUND

from blogstack.configs import API_PREFIX, ENTRY_ENTITY
from blogstack.decorators import timed
from blogstack.dependencies import (
    EntryPageableDep,
    EntryRepoDep,
    EntrySearchDep,
    UserDBDep,
    get_current_user,
)
from blogstack.errors import BadRequestAlertError
from blogstack.models import EntryDB
from blogstack.monitoring.logging import get_logger
from blogstack.schemas import EntryRequest, EntryResponse
from blogstack.search import mirror_write
from blogstack.utils import (
    create_entity_creation_alert,
    create_entity_deletion_alert,
    create_entity_update_alert,
    generate_pagination_headers,
    generate_search_pagination_headers,
)

router = APIRouter(tags=["📰 Entries"], dependencies=[Depends(get_current_user)])

logger = get_logger(__name__)

ENTRIES_URL = f"{API_PREFIX}/entries"
SEARCH_ENTRIES_URL = f"{API_PREFIX}/_search/entries"

ENTRY_EXAMPLE = {
    "id": 1,
    "title": "Welcome to my blog",
    "content": "First post!",
    "date": "2026-01-05T10:00:00Z",
    "blog": {"id": 1, "name": "Jhipster Blog", "handle": "jhipster"},
    "tags": [{"id": 1, "name": "jhipster"}],
}

PAGINATION_HEADERS = {
    "X-Total-Count": {"description": "Total number of matching entries"},
    "Link": {"description": "RFC 5988 navigation links (next, prev, last, first)"},
}

EntryBody = Annotated[
    EntryRequest,
    Body(
        examples=[
            {
                "title": "Welcome to my blog",
                "content": "First post!",
                "date": "2026-01-05T10:00:00Z",
                "blogId": 1,
                "tags": ["jhipster"],
            },
        ],
    ),
]


def db_entry_to_response(db_entry: EntryDB) -> EntryResponse:
    """Convert a `EntryDB` instance (blog and tags loaded) to `EntryResponse`."""
    return EntryResponse.model_validate(db_entry, from_attributes=True)


def _json(model: EntryResponse) -> dict:
    return model.model_dump(mode="json")


async def _create_entry(
    entry: EntryRequest,
    repo: EntryRepoDep,
    search: EntrySearchDep,
) -> ORJSONResponse:
    db_entry = await repo.save(entry)
    await mirror_write(ENTRY_ENTITY, "save", db_entry.id, search.save(db_entry))

    headers = {
        "Location": f"{ENTRIES_URL}/{db_entry.id}",
        **create_entity_creation_alert(ENTRY_ENTITY, str(db_entry.id)),
    }
    return ORJSONResponse(
        content=_json(db_entry_to_response(db_entry)),
        status_code=HTTP_201_CREATED,
        headers=headers,
    )


@router.post(
    "/entries",
    response_class=ORJSONResponse,
    response_model=EntryResponse,
    status_code=HTTP_201_CREATED,
    summary="Create a new entry",
    description="Create an entry in an existing blog and index it for search.",
    responses={
        201: {"content": {"application/json": {"example": ENTRY_EXAMPLE}}},
        400: {
            "description": "Bad request",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "A new entry cannot already have an ID",
                        "entity_name": "entry",
                        "error_key": "idexists",
                        "message": "error.idexists",
                    },
                },
            },
        },
    },
    operation_id="entries_create",
)
@timed("POST /api/entries")
async def create_entry(
    entry: EntryBody,
    repo: EntryRepoDep,
    search: EntrySearchDep,
) -> ORJSONResponse:
    """
    Create a new entry.

    Parameters
    ----------
    entry : EntryRequest
        Entry payload, must not carry an ID.
    repo : EntryRepository
        Repository dependency.
    search : EntrySearchRepositoryProtocol
        Search-index dependency.

    Returns
    -------
    ORJSONResponse
        201 with the created entry, a ``Location`` header and alert headers.

    Raises
    ------
    BadRequestAlertError
        If the payload already has an ID.
    IntegrityViolationError
        If the referenced blog does not exist.
    """
    logger.debug(f"REST request to save Entry: {entry.title}")
    if entry.id is not None:
        raise BadRequestAlertError(
            "A new entry cannot already have an ID",
            ENTRY_ENTITY,
            "idexists",
        )
    return await _create_entry(entry, repo, search)


@router.put(
    "/entries",
    response_class=ORJSONResponse,
    response_model=EntryResponse,
    summary="Update an entry",
    description="Overwrite an existing entry. A payload without ID creates a new entry instead.",
    responses={
        200: {"content": {"application/json": {"example": ENTRY_EXAMPLE}}},
        201: {"description": "Created, the payload had no ID"},
        404: {
            "description": "Not found",
            "content": {"application/json": {"example": {"detail": "Entry with ID 1 not found"}}},
        },
    },
    operation_id="entries_update",
)
@timed("PUT /api/entries")
async def update_entry(
    entry: EntryBody,
    repo: EntryRepoDep,
    search: EntrySearchDep,
) -> ORJSONResponse:
    """
    Update an existing entry.

    Parameters
    ----------
    entry : EntryRequest
        Entry payload.
    repo : EntryRepository
        Repository dependency.
    search : EntrySearchRepositoryProtocol
        Search-index dependency.

    Returns
    -------
    ORJSONResponse
        200 with the updated entry and alert headers, or the create response.

    Raises
    ------
    RecordNotFoundError
        If no entry has the given ID.
    """
    logger.debug(f"REST request to update Entry: {entry.id}")
    if entry.id is None:
        return await _create_entry(entry, repo, search)

    db_entry = await repo.save(entry)
    await mirror_write(ENTRY_ENTITY, "save", db_entry.id, search.save(db_entry))

    return ORJSONResponse(
        content=_json(db_entry_to_response(db_entry)),
        status_code=HTTP_200_OK,
        headers=create_entity_update_alert(ENTRY_ENTITY, str(db_entry.id)),
    )


@router.get(
    "/entries",
    response_class=ORJSONResponse,
    response_model=list[EntryResponse],
    summary="List the current user's entries",
    description="Entries of the blogs owned by the current user, newest first; `sort` keys break ties.",
    responses={
        200: {
            "headers": PAGINATION_HEADERS,
            "content": {"application/json": {"example": [ENTRY_EXAMPLE]}},
        },
    },
    operation_id="entries_list",
)
@timed("GET /api/entries")
async def get_all_entries(
    repo: EntryRepoDep,
    pageable: EntryPageableDep,
    current_user: UserDBDep,
) -> ORJSONResponse:
    """
    Get a page of the current user's entries.

    Parameters
    ----------
    repo : EntryRepository
        Repository dependency.
    pageable : Pageable
        Requested page (``page``, ``size`` and repeatable ``sort`` query
        parameters). Sort keys apply after the date ordering.
    current_user : UserDB
        Current principal.

    Returns
    -------
    ORJSONResponse
        The page content with pagination headers.
    """
    logger.debug(f"REST request to get a page of Entries: {pageable}")
    page = await repo.find_by_blog_user_login_order_by_date_desc(current_user.login, pageable)
    return ORJSONResponse(
        content=[_json(db_entry_to_response(entry)) for entry in page.content],
        headers=generate_pagination_headers(page, ENTRIES_URL),
    )


@router.get(
    "/entries/{entry_id}",
    response_class=ORJSONResponse,
    response_model=EntryResponse,
    summary="Get entry by ID",
    description="Retrieve an entry with its blog and tags.",
    responses={
        200: {"content": {"application/json": {"example": ENTRY_EXAMPLE}}},
        404: {
            "description": "Not found",
            "content": {"application/json": {"example": {"detail": "Entry with ID 1 not found"}}},
        },
    },
    operation_id="entries_get_by_id",
)
@timed("GET /api/entries/{id}")
async def get_entry(entry_id: int, repo: EntryRepoDep) -> EntryResponse:
    logger.debug(f"REST request to get Entry: {entry_id}")
    db_entry = await repo.find_one_with_eager_relationships(entry_id)
    if not db_entry:
        raise HTTPException(
            status_code=HTTP_404_NOT_FOUND,
            detail=f"Entry with ID {entry_id} not found",
        )
    return db_entry_to_response(db_entry)


@router.delete(
    "/entries/{entry_id}",
    summary="Delete an entry",
    description="Delete an entry from the store, then from the search index.",
    responses={
        200: {"description": "Deleted"},
        404: {
            "description": "Not found",
            "content": {"application/json": {"example": {"detail": "Entry with ID 1 not found"}}},
        },
    },
    operation_id="entries_delete",
)
@timed("DELETE /api/entries/{id}")
async def delete_entry(entry_id: int, repo: EntryRepoDep, search: EntrySearchDep) -> Response:
    logger.debug(f"REST request to delete Entry: {entry_id}")
    if not await repo.delete(entry_id):
        raise HTTPException(
            status_code=HTTP_404_NOT_FOUND,
            detail=f"Entry with ID {entry_id} not found",
        )
    await mirror_write(ENTRY_ENTITY, "delete", entry_id, search.delete(entry_id))

    return Response(
        status_code=HTTP_200_OK,
        headers=create_entity_deletion_alert(ENTRY_ENTITY, str(entry_id)),
    )


@router.get(
    "/_search/entries",
    response_class=ORJSONResponse,
    response_model=list[EntryResponse],
    summary="Search entries",
    description="Run a query-string search against the entry index, by relevance unless `sort` is given.",
    responses={
        200: {
            "headers": PAGINATION_HEADERS,
            "content": {"application/json": {"example": [ENTRY_EXAMPLE]}},
        },
    },
    operation_id="entries_search",
)
@timed("GET /api/_search/entries")
async def search_entries(
    query: Annotated[str, Query(description="Query-string search expression")],
    search: EntrySearchDep,
    pageable: EntryPageableDep,
) -> ORJSONResponse:
    """
    Search entries.

    Parameters
    ----------
    query : str
        Query-string expression, passed through to the search backend.
    search : EntrySearchRepositoryProtocol
        Search-index dependency.
    pageable : Pageable
        Requested page. Without ``sort`` hits come back by relevance.

    Returns
    -------
    ORJSONResponse
        The page content with pagination headers whose links keep ``query``.
    """
    logger.debug(f"REST request to search for a page of Entries for query {query}")
    page = await search.search(query, pageable)
    return ORJSONResponse(
        content=[_json(entry) for entry in page.content],
        headers=generate_search_pagination_headers(query, page, SEARCH_ENTRIES_URL),
    )
