from blogstack.configs.settings import (
    API_PREFIX,
    BLOG_ENTITY,
    ENTRY_ENTITY,
    Settings,
    settings,
)

__all__ = [
    "API_PREFIX",
    "BLOG_ENTITY",
    "ENTRY_ENTITY",
    "Settings",
    "settings",
]
