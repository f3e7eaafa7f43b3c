"""User database model using SQLModel."""

from datetime import UTC, datetime
from typing import cast

from pydantic import ConfigDict
from sqlalchemy import DateTime
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String


class UserDB(SQLModel, table=True):
    """
    User database model.

    Users are provisioned outside this service; the backend only reads them
    to resolve the current principal and to own blogs.
    """

    __tablename__ = cast("declared_attr[str]", "users")

    id: int | None = Field(default=None, primary_key=True, description="User ID")

    login: str = Field(
        sa_column=Column(String(50), unique=True, nullable=False, index=True),
        description="Login (unique)",
    )
    email: str | None = Field(
        default=None,
        sa_column=Column(String(254), unique=True),
        description="Email address",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC).replace(microsecond=0),
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Creation timestamp",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"id": 3, "login": "user", "email": "user@localhost"},
        },
    )
