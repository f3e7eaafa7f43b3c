from blogstack.routes.blog import router as blog_router
from blogstack.routes.entry import router as entry_router

__all__ = [
    "blog_router",
    "entry_router",
]
