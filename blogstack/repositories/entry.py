"""Entry repository for database operations."""

from sqlalchemy import asc, desc, func, select
from sqlalchemy.orm import selectinload

from blogstack.errors.database import IntegrityViolationError, RecordNotFoundError
from blogstack.models.blog import BlogDB
from blogstack.models.entry import EntryDB, TagDB
from blogstack.models.user import UserDB
from blogstack.monitoring.logging import get_logger
from blogstack.repositories.base import BaseRepository
from blogstack.schemas.entry import EntryRequest
from blogstack.utils.pagination import Page, Pageable

logger = get_logger(__name__)

SORT_COLUMNS = {
    "id": EntryDB.id,
    "title": EntryDB.title,
    "date": EntryDB.date,
}


class EntryRepository(BaseRepository[EntryDB]):
    """
    Repository for Entry database operations.

    Entries are always loaded together with their blog and tags; the tag
    collection has to be present before an entry is updated or deleted so the
    association rows can be maintained inside the async session.
    """

    model = EntryDB
    eager_options = (
        selectinload(EntryDB.blog),
        selectinload(EntryDB.tags),
    )

    async def save(self, entry: EntryRequest) -> EntryDB:
        """
        Insert a new entry or overwrite an existing one.

        Args:
            entry: Entry payload; ``id`` selects the update path

        Returns:
            EntryDB: Saved entry with blog and tags loaded

        Raises:
            RecordNotFoundError: If ``entry.id`` is set but unknown to the store
            IntegrityViolationError: If the referenced blog does not exist
        """
        blog = await self.session.get(BlogDB, entry.blog_id)
        if blog is None:
            raise IntegrityViolationError(detail=f"Blog with ID {entry.blog_id} not found")

        if entry.id is None:
            db_entry = EntryDB(
                title=entry.title,
                content=entry.content,
                date=entry.date,
                blog_id=entry.blog_id,
                blog=blog,
            )
        else:
            found = await self.find_one_with_eager_relationships(entry.id)
            if not found:
                raise RecordNotFoundError(detail=f"Entry with ID {entry.id} not found")
            db_entry = found
            db_entry.title = entry.title
            db_entry.content = entry.content
            db_entry.date = entry.date
            # Keep the loaded relationship in step with blog_id
            db_entry.blog_id = entry.blog_id
            db_entry.blog = blog

        db_entry.tags = await self._resolve_tags(entry.tags)

        saved = await self._persist(db_entry)
        logger.debug(f"Saved entry {saved.id}")
        return saved

    async def find_one_with_eager_relationships(self, entry_id: int) -> EntryDB | None:
        """
        Get an entry with its blog and tags loaded.

        Args:
            entry_id: Entry ID

        Returns:
            EntryDB | None: Entry if found, None otherwise
        """
        result = await self.session.execute(
            select(EntryDB).where(EntryDB.id == entry_id).options(*self.eager_options),
        )
        return result.scalar_one_or_none()

    async def find_by_blog_user_login_order_by_date_desc(
        self,
        login: str,
        pageable: Pageable,
    ) -> Page[EntryDB]:
        """
        Get a page of the entries whose blog belongs to the given login.

        Entries are ordered newest first. Requested sort keys apply to entries
        with the same ``date``; remaining ties fall back to the highest ID so
        pages are stable.

        Args:
            login: Login of the current principal
            pageable: Requested page and extra sort keys

        Returns:
            Page[EntryDB]: The requested page and the total count
        """
        owned = (
            select(EntryDB)
            .join(BlogDB, EntryDB.blog_id == BlogDB.id)
            .join(UserDB, BlogDB.user_id == UserDB.id)
            .where(UserDB.login == login)
        )

        total = await self.session.execute(
            select(func.count()).select_from(owned.subquery()),
        )
        query = (
            owned.options(*self.eager_options)
            .order_by(
                desc(EntryDB.date),
                *(
                    desc(SORT_COLUMNS[order.name]) if order.descending else asc(SORT_COLUMNS[order.name])
                    for order in pageable.sort
                ),
                desc(EntryDB.id),
            )
            .offset(pageable.offset)
            .limit(pageable.size)
        )
        result = await self.session.execute(query)

        return Page.of(list(result.scalars().all()), pageable, total.scalar() or 0)

    async def _resolve_tags(self, names: list[str]) -> list[TagDB]:
        """Load tags by name, creating the ones the store does not know yet."""
        if not names:
            return []

        result = await self.session.execute(select(TagDB).where(TagDB.name.in_(names)))
        known = {tag.name: tag for tag in result.scalars().all()}

        tags: list[TagDB] = []
        for name in names:
            tag = known.get(name)
            if tag is None:
                tag = TagDB(name=name)
                self.session.add(tag)
                logger.debug(f"Creating tag {name}")
            tags.append(tag)
        return tags
