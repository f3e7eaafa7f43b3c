"""Entry schemas."""

from datetime import datetime

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, field_validator

from blogstack.schemas.blog import BlogSummary


class TagSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


# Properties accepted in the `sort` query parameter of the entry list and search
ENTRY_SORT_PROPERTIES: frozenset[str] = frozenset({"id", "title", "date"})


class EntryRequest(BaseModel):
    """Entry payload for create and update requests."""

    model_config = ConfigDict(populate_by_name=True)

    id: int | None = Field(
        default=None,
        description="Entry ID, must be absent on create",
    )
    title: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Entry title",
        examples=["Welcome to my blog"],
    )
    content: str = Field(
        ...,
        min_length=1,
        description="Entry content",
    )
    date: AwareDatetime = Field(
        ...,
        description="Publication date, must carry a UTC offset",
        examples=["2026-01-05T10:00:00Z"],
    )
    blog_id: int = Field(
        ...,
        alias="blogId",
        description="ID of the blog the entry belongs to",
    )
    tags: list[str] = Field(
        default=[],
        max_length=20,
        description="Tag names; unknown names are created",
        examples=[["jhipster", "spring"]],
    )

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, tags: list[str]) -> list[str]:
        """Strip tag names and drop blanks and duplicates, keeping order."""
        seen: dict[str, None] = {}
        for tag in tags:
            if (name := tag.strip()) and len(name) >= 2:
                seen.setdefault(name, None)
            elif name:
                mssg = f"Tag '{name}' must be at least 2 characters"
                raise ValueError(mssg)
        return list(seen)


class EntryResponse(BaseModel):
    """Entry as returned by the API and stored in the search index."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int
    title: str
    content: str
    date: datetime
    blog: BlogSummary | None = None
    tags: list[TagSchema] = []
