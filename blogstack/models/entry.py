"""Entry and Tag database models using SQLModel."""

from datetime import datetime
from typing import TYPE_CHECKING, Optional, cast

from sqlalchemy import DateTime, Text
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, ForeignKey, Relationship, SQLModel, String

if TYPE_CHECKING:
    from blogstack.models.blog import BlogDB


class EntryTagLink(SQLModel, table=True):
    """Association table between entries and tags."""

    __tablename__ = cast("declared_attr[str]", "entry_tag")

    entry_id: int | None = Field(
        default=None,
        foreign_key="entries.id",
        primary_key=True,
        ondelete="CASCADE",
    )
    tag_id: int | None = Field(
        default=None,
        foreign_key="tags.id",
        primary_key=True,
        ondelete="CASCADE",
    )


class TagDB(SQLModel, table=True):
    """Tag database model."""

    __tablename__ = cast("declared_attr[str]", "tags")

    id: int | None = Field(default=None, primary_key=True, description="Tag ID")
    name: str = Field(
        sa_column=Column(String(100), unique=True, nullable=False, index=True),
        description="Tag name (unique)",
    )


class EntryDB(SQLModel, table=True):
    """
    Entry database model.

    An entry belongs to a blog, and transitively to that blog's user.
    Entries are listed newest first by ``date``.
    """

    __tablename__ = cast("declared_attr[str]", "entries")

    id: int | None = Field(default=None, primary_key=True, description="Entry ID")

    title: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Entry title",
    )
    content: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Entry content",
    )
    date: datetime = Field(
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
        description="Publication date",
    )

    blog_id: int = Field(
        sa_column=Column(
            "blog_id",
            ForeignKey("blogs.id"),
            nullable=False,
            index=True,
        ),
        description="Blog ID (foreign key to blogs.id)",
    )

    blog: Optional["BlogDB"] = Relationship()
    tags: list[TagDB] = Relationship(link_model=EntryTagLink)
