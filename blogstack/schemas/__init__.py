from blogstack.schemas.auth import TokenData
from blogstack.schemas.blog import BlogRequest, BlogResponse, BlogSummary
from blogstack.schemas.entry import EntryRequest, EntryResponse, TagSchema
from blogstack.schemas.health import HealthCheckResponse, ServicesStatus
from blogstack.schemas.user import UserSummary

__all__ = [
    "BlogRequest",
    "BlogResponse",
    "BlogSummary",
    "EntryRequest",
    "EntryResponse",
    "HealthCheckResponse",
    "ServicesStatus",
    "TagSchema",
    "TokenData",
    "UserSummary",
]
