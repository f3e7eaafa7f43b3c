"""Blog repository for database operations."""

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from blogstack.errors.database import RecordNotFoundError
from blogstack.models.blog import BlogDB
from blogstack.models.user import UserDB
from blogstack.monitoring.logging import get_logger
from blogstack.repositories.base import BaseRepository
from blogstack.schemas.blog import BlogRequest

logger = get_logger(__name__)


class BlogRepository(BaseRepository[BlogDB]):
    """
    Repository for Blog database operations.

    Every returned blog has its owner loaded so it can be serialized and
    mirrored to the search index without further queries.
    """

    model = BlogDB
    eager_options = (selectinload(BlogDB.user),)

    async def save(self, blog: BlogRequest, owner_id: int | None = None) -> BlogDB:
        """
        Insert a new blog or overwrite an existing one.

        Args:
            blog: Blog payload; ``id`` selects the update path
            owner_id: Owner for new blogs (the current principal)

        Returns:
            BlogDB: Saved blog with its owner loaded

        Raises:
            RecordNotFoundError: If ``blog.id`` is set but unknown to the store
        """
        if blog.id is None:
            if owner_id is None:
                mssg = "A new blog needs an owner"
                raise ValueError(mssg)
            db_blog = BlogDB(name=blog.name, handle=blog.handle, user_id=owner_id)
        else:
            found = await self.find_one(blog.id)
            if not found:
                raise RecordNotFoundError(detail=f"Blog with ID {blog.id} not found")
            db_blog = found
            db_blog.name = blog.name
            db_blog.handle = blog.handle

        saved = await self._persist(db_blog)
        logger.debug(f"Saved blog {saved.id}")
        return saved

    async def find_by_user_is_current_user(self, login: str) -> list[BlogDB]:
        """
        Get the blogs owned by the user with the given login.

        Args:
            login: Login of the current principal

        Returns:
            list[BlogDB]: Blogs owned by that user, ordered by ID
        """
        query = (
            select(BlogDB)
            .join(UserDB, BlogDB.user_id == UserDB.id)
            .where(UserDB.login == login)
            .options(*self.eager_options)
            .order_by(BlogDB.id)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())
