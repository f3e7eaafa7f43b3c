"""Blog database model using SQLModel."""

from typing import TYPE_CHECKING, Optional, cast

from pydantic import ConfigDict
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, ForeignKey, Relationship, SQLModel, String

if TYPE_CHECKING:
    from blogstack.models.user import UserDB


class BlogDB(SQLModel, table=True):
    """
    Blog database model.

    A blog belongs to exactly one user, the principal that created it.
    """

    __tablename__ = cast("declared_attr[str]", "blogs")

    # Assigned by the store on first save
    id: int | None = Field(default=None, primary_key=True, description="Blog ID")

    name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Blog name",
    )
    handle: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Blog handle",
    )

    user_id: int = Field(
        sa_column=Column(
            "user_id",
            ForeignKey("users.id"),
            nullable=False,
            index=True,
        ),
        description="Owner ID (foreign key to users.id)",
    )

    user: Optional["UserDB"] = Relationship()

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"id": 1, "name": "Jhipster Blog", "handle": "jhipster", "user_id": 3},
        },
    )
