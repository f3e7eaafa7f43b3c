"""Database models for the application."""

from blogstack.models.blog import BlogDB
from blogstack.models.entry import EntryDB, EntryTagLink, TagDB
from blogstack.models.user import UserDB

__all__ = ["UserDB", "BlogDB", "EntryDB", "EntryTagLink", "TagDB"]
