"""Repository layer for store-of-record operations."""

from blogstack.repositories.blog import BlogRepository
from blogstack.repositories.entry import EntryRepository
from blogstack.repositories.user import UserRepository

__all__ = ["UserRepository", "BlogRepository", "EntryRepository"]
