"""
Conversion between store records and search documents.

A search document has the same shape as the API response for the entity, so
search hits can be returned without going back to the store.
"""

from typing import Any

from blogstack.models import BlogDB, EntryDB
from blogstack.schemas import BlogResponse, EntryResponse

BLOG_MAPPINGS: dict[str, Any] = {
    "properties": {
        "id": {"type": "long"},
        "name": {"type": "text", "fields": {"keyword": {"type": "keyword"}}},
        "handle": {"type": "keyword"},
        "user": {
            "properties": {
                "id": {"type": "long"},
                "login": {"type": "keyword"},
            },
        },
    },
}

ENTRY_MAPPINGS: dict[str, Any] = {
    "properties": {
        "id": {"type": "long"},
        "title": {"type": "text", "fields": {"keyword": {"type": "keyword"}}},
        "content": {"type": "text"},
        "date": {"type": "date"},
        "blog": {
            "properties": {
                "id": {"type": "long"},
                "name": {"type": "text"},
                "handle": {"type": "keyword"},
            },
        },
        "tags": {
            "properties": {
                "id": {"type": "long"},
                "name": {"type": "keyword"},
            },
        },
    },
}


def blog_document(blog: BlogDB) -> dict[str, Any]:
    """Build the index document for a blog (owner must be loaded)."""
    return BlogResponse.model_validate(blog, from_attributes=True).model_dump(mode="json")


def entry_document(entry: EntryDB) -> dict[str, Any]:
    """Build the index document for an entry (blog and tags must be loaded)."""
    return EntryResponse.model_validate(entry, from_attributes=True).model_dump(mode="json")
