# blogstack/routes/blog.py

"""
Blog Routes.

REST resource for blogs. Every write goes to the store first and is then
mirrored to the search index; searches read the index only.

Summary
-------
Endpoints include:
  - Create blog
  - Update blog (creates when the payload has no ID)
  - List the current user's blogs
  - Get blog by id
  - Delete blog
  - Search blogs

Dependencies
------------
  - `BlogRepoDep`: Store-of-record repository bound to the request session.
  - `BlogSearchDep`: Search-index repository created at startup.
  - `UserDBDep`: Current principal, required on every endpoint.
"""

from typing import Annotated

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_200_OK, HTTP_201_CREATED, HTTP_404_NOT_FOUND

from blogstack.configs import API_PREFIX, BLOG_ENTITY
from blogstack.decorators import timed
from blogstack.dependencies import BlogRepoDep, BlogSearchDep, UserDBDep, get_current_user
from blogstack.errors import BadRequestAlertError
from blogstack.models import BlogDB
from blogstack.monitoring.logging import get_logger
from blogstack.schemas import BlogRequest, BlogResponse
from blogstack.search import mirror_write
from blogstack.utils import (
    create_entity_creation_alert,
    create_entity_deletion_alert,
    create_entity_update_alert,
)

router = APIRouter(tags=["📝 Blogs"], dependencies=[Depends(get_current_user)])

logger = get_logger(__name__)

BLOG_EXAMPLE = {
    "id": 1,
    "name": "Jhipster Blog",
    "handle": "jhipster",
    "user": {"id": 1, "login": "admin"},
}

BlogBody = Annotated[
    BlogRequest,
    Body(
        examples=[{"name": "Jhipster Blog", "handle": "jhipster"}],
    ),
]


def db_blog_to_response(db_blog: BlogDB) -> BlogResponse:
    """
    Convert a `BlogDB` instance (owner loaded) to `BlogResponse`.

    Parameters
    ----------
    db_blog : BlogDB
        Database blog entity.

    Returns
    -------
    BlogResponse
        Validated response model.
    """
    return BlogResponse.model_validate(db_blog, from_attributes=True)


def _json(model: BlogResponse) -> dict:
    return model.model_dump(mode="json")


async def _create_blog(
    blog: BlogRequest,
    repo: BlogRepoDep,
    search: BlogSearchDep,
    current_user: UserDBDep,
) -> ORJSONResponse:
    db_blog = await repo.save(blog, owner_id=current_user.id)
    await mirror_write(BLOG_ENTITY, "save", db_blog.id, search.save(db_blog))

    headers = {
        "Location": f"{API_PREFIX}/blogs/{db_blog.id}",
        **create_entity_creation_alert(BLOG_ENTITY, str(db_blog.id)),
    }
    return ORJSONResponse(
        content=_json(db_blog_to_response(db_blog)),
        status_code=HTTP_201_CREATED,
        headers=headers,
    )


@router.post(
    "/blogs",
    response_class=ORJSONResponse,
    response_model=BlogResponse,
    status_code=HTTP_201_CREATED,
    summary="Create a new blog",
    description="Create a blog owned by the current user and index it for search.",
    responses={
        201: {"content": {"application/json": {"example": BLOG_EXAMPLE}}},
        400: {
            "description": "Bad request",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "A new blog cannot already have an ID",
                        "entity_name": "blog",
                        "error_key": "idexists",
                        "message": "error.idexists",
                    },
                },
            },
        },
    },
    operation_id="blogs_create",
)
@timed("POST /api/blogs")
async def create_blog(
    blog: BlogBody,
    repo: BlogRepoDep,
    search: BlogSearchDep,
    current_user: UserDBDep,
) -> ORJSONResponse:
    """
    Create a new blog.

    Parameters
    ----------
    blog : BlogRequest
        Blog payload, must not carry an ID.
    repo : BlogRepository
        Repository dependency.
    search : BlogSearchRepositoryProtocol
        Search-index dependency.
    current_user : UserDB
        Owner of the new blog.

    Returns
    -------
    ORJSONResponse
        201 with the created blog, a ``Location`` header and alert headers.

    Raises
    ------
    BadRequestAlertError
        If the payload already has an ID.
    """
    logger.debug(f"REST request to save Blog: {blog.name}")
    if blog.id is not None:
        raise BadRequestAlertError(
            "A new blog cannot already have an ID",
            BLOG_ENTITY,
            "idexists",
        )
    return await _create_blog(blog, repo, search, current_user)


@router.put(
    "/blogs",
    response_class=ORJSONResponse,
    response_model=BlogResponse,
    summary="Update a blog",
    description="Overwrite an existing blog. A payload without ID creates a new blog instead.",
    responses={
        200: {"content": {"application/json": {"example": BLOG_EXAMPLE}}},
        201: {"description": "Created, the payload had no ID"},
        404: {
            "description": "Not found",
            "content": {"application/json": {"example": {"detail": "Blog with ID 1 not found"}}},
        },
    },
    operation_id="blogs_update",
)
@timed("PUT /api/blogs")
async def update_blog(
    blog: BlogBody,
    repo: BlogRepoDep,
    search: BlogSearchDep,
    current_user: UserDBDep,
) -> ORJSONResponse:
    """
    Update an existing blog.

    Parameters
    ----------
    blog : BlogRequest
        Blog payload.
    repo : BlogRepository
        Repository dependency.
    search : BlogSearchRepositoryProtocol
        Search-index dependency.
    current_user : UserDB
        Current principal, owner when the payload is created.

    Returns
    -------
    ORJSONResponse
        200 with the updated blog and alert headers, or the create response.

    Raises
    ------
    RecordNotFoundError
        If no blog has the given ID.
    """
    logger.debug(f"REST request to update Blog: {blog.id}")
    if blog.id is None:
        return await _create_blog(blog, repo, search, current_user)

    db_blog = await repo.save(blog)
    await mirror_write(BLOG_ENTITY, "save", db_blog.id, search.save(db_blog))

    return ORJSONResponse(
        content=_json(db_blog_to_response(db_blog)),
        status_code=HTTP_200_OK,
        headers=create_entity_update_alert(BLOG_ENTITY, str(db_blog.id)),
    )


@router.get(
    "/blogs",
    response_class=ORJSONResponse,
    response_model=list[BlogResponse],
    summary="List the current user's blogs",
    description="Return every blog owned by the current user. Not paginated.",
    responses={200: {"content": {"application/json": {"example": [BLOG_EXAMPLE]}}}},
    operation_id="blogs_list",
)
@timed("GET /api/blogs")
async def get_all_blogs(repo: BlogRepoDep, current_user: UserDBDep) -> list[BlogResponse]:
    logger.debug("REST request to get all Blogs")
    blogs = await repo.find_by_user_is_current_user(current_user.login)
    return [db_blog_to_response(blog) for blog in blogs]


@router.get(
    "/blogs/{blog_id}",
    response_class=ORJSONResponse,
    response_model=BlogResponse,
    summary="Get blog by ID",
    description="Retrieve a blog by its ID.",
    responses={
        200: {"content": {"application/json": {"example": BLOG_EXAMPLE}}},
        404: {
            "description": "Not found",
            "content": {"application/json": {"example": {"detail": "Blog with ID 1 not found"}}},
        },
    },
    operation_id="blogs_get_by_id",
)
@timed("GET /api/blogs/{id}")
async def get_blog(blog_id: int, repo: BlogRepoDep) -> BlogResponse:
    """
    Get blog by ID.

    Raises
    ------
    HTTPException
        If blog not found.
    """
    logger.debug(f"REST request to get Blog: {blog_id}")
    db_blog = await repo.find_one(blog_id)
    if not db_blog:
        raise HTTPException(
            status_code=HTTP_404_NOT_FOUND,
            detail=f"Blog with ID {blog_id} not found",
        )
    return db_blog_to_response(db_blog)


@router.delete(
    "/blogs/{blog_id}",
    summary="Delete a blog",
    description="Delete a blog from the store, then from the search index.",
    responses={
        200: {"description": "Deleted"},
        400: {"description": "Blog still has entries"},
        404: {
            "description": "Not found",
            "content": {"application/json": {"example": {"detail": "Blog with ID 1 not found"}}},
        },
    },
    operation_id="blogs_delete",
)
@timed("DELETE /api/blogs/{id}")
async def delete_blog(blog_id: int, repo: BlogRepoDep, search: BlogSearchDep) -> Response:
    """
    Delete a blog.

    The index is left untouched when the store has no such blog.

    Raises
    ------
    HTTPException
        If blog not found.
    """
    logger.debug(f"REST request to delete Blog: {blog_id}")
    if not await repo.delete(blog_id):
        raise HTTPException(
            status_code=HTTP_404_NOT_FOUND,
            detail=f"Blog with ID {blog_id} not found",
        )
    await mirror_write(BLOG_ENTITY, "delete", blog_id, search.delete(blog_id))

    return Response(
        status_code=HTTP_200_OK,
        headers=create_entity_deletion_alert(BLOG_ENTITY, str(blog_id)),
    )


@router.get(
    "/_search/blogs",
    response_class=ORJSONResponse,
    response_model=list[BlogResponse],
    summary="Search blogs",
    description="Run a query-string search against the blog index. Not paginated.",
    responses={200: {"content": {"application/json": {"example": [BLOG_EXAMPLE]}}}},
    operation_id="blogs_search",
)
@timed("GET /api/_search/blogs")
async def search_blogs(
    query: Annotated[str, Query(description="Query-string search expression")],
    search: BlogSearchDep,
) -> list[BlogResponse]:
    logger.debug(f"REST request to search Blogs for query {query}")
    return await search.search(query)
