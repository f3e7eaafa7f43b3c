"""
Blog schemas.

A single request schema serves both ``POST`` and ``PUT``: whether ``id`` is
present decides between the create and update paths.
"""

from pydantic import BaseModel, ConfigDict, Field

from blogstack.schemas.user import UserSummary


class BlogRequest(BaseModel):
    """Blog payload for create and update requests."""

    model_config = ConfigDict(populate_by_name=True)

    id: int | None = Field(
        default=None,
        description="Blog ID, must be absent on create",
    )
    name: str = Field(
        ...,
        min_length=3,
        max_length=255,
        description="Blog name",
        examples=["Jhipster Blog"],
    )
    handle: str = Field(
        ...,
        min_length=2,
        max_length=255,
        description="Blog handle",
        examples=["jhipster"],
    )


class BlogResponse(BaseModel):
    """Blog as returned by the API and stored in the search index."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int
    name: str
    handle: str
    user: UserSummary | None = None


class BlogSummary(BaseModel):
    """Blog reference embedded in entry responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    handle: str
