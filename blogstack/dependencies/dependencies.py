# blogstack/dependencies/dependencies.py

"""Application dependencies: sessions, repositories, search and the current user."""

from typing import Annotated

from fastapi import Depends, HTTPException, Query, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_401_UNAUTHORIZED

from blogstack.configs import ENTRY_ENTITY, settings
from blogstack.db import get_session
from blogstack.errors import BadRequestAlertError
from blogstack.managers.token_manager import decode_access_token
from blogstack.models import UserDB
from blogstack.repositories import BlogRepository, EntryRepository, UserRepository
from blogstack.schemas.entry import ENTRY_SORT_PROPERTIES
from blogstack.search import (
    BlogSearchRepositoryProtocol,
    EntrySearchRepositoryProtocol,
    SearchBackend,
)
from blogstack.utils.pagination import Pageable, parse_sort

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/authenticate")

SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_user_repository(session: SessionDep) -> UserRepository:
    """
    Resolve the `UserRepository` dependency.

    Parameters
    ----------
    session : AsyncSession
        Database session.

    Returns
    -------
    UserRepository
        Repository instance bound to the session.
    """
    return UserRepository(session)


UserRepoDep = Annotated[UserRepository, Depends(get_user_repository)]


async def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)],
    user_repo: UserRepoDep,
) -> UserDB:
    """
    Get the current principal from the bearer token.

    The token's subject is the user's login; the user must exist in the store.

    Parameters
    ----------
    token : str
        Bearer token.
    user_repo : UserRepository
        User repository bound to the request session.

    Returns
    -------
    UserDB
        Current authenticated user.

    Raises
    ------
    HTTPException
        401 if the token is invalid or the user is unknown.
    """
    token_data = decode_access_token(token)
    if not token_data:
        raise HTTPException(
            status_code=HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = await user_repo.get_by_login(token_data.login)
    if not user:
        raise HTTPException(
            status_code=HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user


UserDBDep = Annotated[UserDB, Depends(get_current_user)]


def get_blog_repository(session: SessionDep) -> BlogRepository:
    """
    Resolve the `BlogRepository` dependency.

    Parameters
    ----------
    session : AsyncSession
        Database session.

    Returns
    -------
    BlogRepository
        Repository instance bound to the session.
    """
    return BlogRepository(session)


BlogRepoDep = Annotated[BlogRepository, Depends(get_blog_repository)]


def get_entry_repository(session: SessionDep) -> EntryRepository:
    return EntryRepository(session)


EntryRepoDep = Annotated[EntryRepository, Depends(get_entry_repository)]


def get_search_backend(request: Request) -> SearchBackend:
    """Dependency to get the search backend created at startup."""
    return request.app.state.search


def get_blog_search_repository(request: Request) -> BlogSearchRepositoryProtocol:
    return get_search_backend(request).blogs


def get_entry_search_repository(request: Request) -> EntrySearchRepositoryProtocol:
    return get_search_backend(request).entries


BlogSearchDep = Annotated[BlogSearchRepositoryProtocol, Depends(get_blog_search_repository)]
EntrySearchDep = Annotated[EntrySearchRepositoryProtocol, Depends(get_entry_search_repository)]


def get_pageable(
    page: Annotated[int, Query(ge=0, description="Zero-based page index")] = 0,
    size: Annotated[
        int,
        Query(ge=1, le=settings.MAX_PAGE_SIZE, description="Page size"),
    ] = settings.DEFAULT_PAGE_SIZE,
    sort: Annotated[
        list[str] | None,
        Query(description="Sort key as `property(,asc|desc)`, repeatable"),
    ] = None,
) -> Pageable:
    """
    Dependency to construct a `Pageable` from query parameters.

    Returns
    -------
    Pageable
        Requested page and sort keys.
    """
    return Pageable(page=page, size=size, sort=parse_sort(sort or []))


def get_entry_pageable(pageable: Annotated[Pageable, Depends(get_pageable)]) -> Pageable:
    """
    Dependency for entry pages; only known entry properties can be sorted on.

    Raises
    ------
    BadRequestAlertError
        If a sort key names an unknown property.
    """
    for order in pageable.sort:
        if order.name not in ENTRY_SORT_PROPERTIES:
            raise BadRequestAlertError(
                f"Cannot sort entries by '{order.name}'",
                ENTRY_ENTITY,
                "sortinvalid",
            )
    return pageable


EntryPageableDep = Annotated[Pageable, Depends(get_entry_pageable)]
