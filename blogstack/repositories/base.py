"""Base repository for store-of-record operations."""

from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.interfaces import LoaderOption
from sqlmodel import SQLModel

from blogstack.errors.database import (
    DatabaseConnectionError,
    DuplicateEntryError,
    IntegrityViolationError,
)

ModelT = TypeVar("ModelT", bound=SQLModel)


class BaseRepository(Generic[ModelT]):
    """
    Base repository implementing common CRUD operations.

    Writes go through `_persist`, which commits before returning: the store is
    the system of record and its write must be durable before anything is
    mirrored elsewhere.

    Attributes:
        model: The SQLModel database model type.
        id_field: The name of the primary key field (default: "id").
        eager_options: Loader options applied whenever a record is returned
            to a caller that will serialize it.
    """

    model: type[ModelT]
    id_field: str = "id"
    eager_options: Sequence[LoaderOption] = ()

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def find_one(self, record_id: int) -> ModelT | None:
        """
        Get a record by its ID.

        Args:
            record_id: Record ID

        Returns:
            ModelT | None: Record if found, None otherwise
        """
        id_column = getattr(self.model, self.id_field)
        statement = select(self.model).where(id_column == record_id).options(*self.eager_options)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def find_all(self) -> list[ModelT]:
        """Get all records ordered by ID."""
        id_column = getattr(self.model, self.id_field)
        statement = select(self.model).options(*self.eager_options).order_by(id_column)
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def delete(self, record_id: int) -> bool:
        """
        Delete a record by ID and commit.

        Args:
            record_id: Record ID

        Returns:
            bool: True if record was deleted, False if not found
        """
        record = await self.find_one(record_id)
        if not record:
            return False

        await self.session.delete(record)
        await self._commit()
        return True

    async def _persist(self, record: ModelT) -> ModelT:
        """
        Add a record, commit, and reload it with its eager relationships.

        Args:
            record: Record to add

        Returns:
            ModelT: Reloaded record

        Raises:
            DuplicateEntryError: If a unique constraint is violated
            IntegrityViolationError: For other constraint violations
            DatabaseConnectionError: For other database errors
        """
        self.session.add(record)
        await self._commit()
        return await self._reload(record)

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            error_msg = str(e.orig) if e.orig else str(e)
            if "unique" in error_msg.lower() or "duplicate" in error_msg.lower():
                raise DuplicateEntryError(detail=error_msg) from e
            raise IntegrityViolationError(detail=f"Database integrity error: {error_msg}") from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise DatabaseConnectionError(detail=f"Failed to save record: {e}") from e

    async def _reload(self, record: ModelT) -> ModelT:
        record_id: Any = getattr(record, self.id_field)
        id_column = getattr(self.model, self.id_field)
        statement = (
            select(self.model)
            .where(id_column == record_id)
            .options(*self.eager_options)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(statement)
        return result.scalar_one()
