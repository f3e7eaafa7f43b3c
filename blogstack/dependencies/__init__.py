# blogstack/dependencies/__init__.py

from blogstack.dependencies.dependencies import (
    BlogRepoDep,
    BlogSearchDep,
    EntryPageableDep,
    EntryRepoDep,
    EntrySearchDep,
    SessionDep,
    UserDBDep,
    UserRepoDep,
    get_blog_repository,
    get_blog_search_repository,
    get_current_user,
    get_entry_pageable,
    get_entry_repository,
    get_entry_search_repository,
    get_pageable,
    get_search_backend,
    get_user_repository,
)

__all__ = [
    "BlogRepoDep",
    "BlogSearchDep",
    "EntryPageableDep",
    "EntryRepoDep",
    "EntrySearchDep",
    "SessionDep",
    "UserDBDep",
    "UserRepoDep",
    "get_blog_repository",
    "get_blog_search_repository",
    "get_current_user",
    "get_entry_pageable",
    "get_entry_repository",
    "get_entry_search_repository",
    "get_pageable",
    "get_search_backend",
    "get_user_repository",
]
