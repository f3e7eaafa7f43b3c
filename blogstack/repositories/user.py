"""User repository for database operations."""

from sqlalchemy import select

from blogstack.models.user import UserDB
from blogstack.repositories.base import BaseRepository


class UserRepository(BaseRepository[UserDB]):
    """Read access to users, used to resolve the current principal."""

    model = UserDB

    async def get_by_login(self, login: str) -> UserDB | None:
        """
        Get user by login.

        Args:
            login: User login

        Returns:
            UserDB | None: User if found, None otherwise
        """
        result = await self.session.execute(
            select(UserDB).where(UserDB.login == login),
        )
        return result.scalar_one_or_none()
