"""Entry store: one rating per user per calendar day."""
import logging
from datetime import date, datetime, UTC
from typing import Any, Optional

from sqlalchemy import select, func, and_, exists

from dayrate.models.entry import Entry
from dayrate.models.rating import Rating
from dayrate.models.review_assignment import ReviewAssignment
from dayrate.models.user import User
from dayrate.repositories.base import RepositoryBase, dialect_insert
from dayrate.utils.stats import normalize_db_average

logger = logging.getLogger(__name__)


class EntryRepository(RepositoryBase):
    """Queries and upserts over the ``entries`` table."""

    async def find_by_user_and_date(self, user_id: int, day: date) -> Optional[Entry]:
        result = await self.db.execute(
            select(Entry).where(and_(Entry.user_id == user_id, Entry.date == day))
        )
        return result.scalar_one_or_none()

    async def upsert(
        self,
        user_id: int,
        day: date,
        rating: int,
        comment: Optional[str],
        tags: list[str],
        gif_url: Optional[str] = None,
    ) -> tuple[Entry, bool]:
        """Create or replace the entry for ``(user_id, day)``.

        Returns:
            The stored entry and ``True`` when an existing row was updated.
        """
        existing = await self.find_by_user_and_date(user_id, day)
        values = {
            "rating": rating,
            "comment": comment,
            "tags": list(tags),
            "gif_url": gif_url,
            "updated_at": datetime.now(UTC),
        }

        stmt = dialect_insert(self.db, Entry).values(user_id=user_id, date=day, **values)
        stmt = stmt.on_conflict_do_update(index_elements=["user_id", "date"], set_=values)
        await self.db.execute(stmt)

        entry = await self.find_by_user_and_date(user_id, day)
        if entry is None:
            raise RuntimeError(f"Entry for {user_id=} {day=} could not be loaded after upsert")
        await self.db.refresh(entry)
        return entry, existing is not None

    async def list_dates_by_user(self, user_id: int) -> list[date]:
        """All entry dates of a user, oldest first."""
        result = await self.db.execute(
            select(Entry.date).where(Entry.user_id == user_id).order_by(Entry.date.asc())
        )
        return list(result.scalars().all())

    async def list_by_date_with_authors(self, day: date) -> list[dict[str, Any]]:
        """Entries of a day joined with their author, highest rating first."""
        result = await self.db.execute(
            select(Entry, User.username)
            .join(User, User.user_id == Entry.user_id)
            .where(Entry.date == day)
            .order_by(Entry.rating.desc(), Entry.created_at.asc())
        )
        return [
            {
                "user_id": entry.user_id,
                "username": username,
                "date": entry.date,
                "rating": entry.rating,
                "comment": entry.comment,
                "tags": list(entry.tags or []),
                "gif_url": entry.gif_url,
            }
            for entry, username in result.all()
        ]

    async def find_unassigned_author(self, reviewer_id: int, day: date) -> Optional[int]:
        """Pick a random author of ``day`` who is not the reviewer and not yet a reviewee."""
        already_assigned = exists().where(
            and_(
                ReviewAssignment.reviewee_id == Entry.user_id,
                ReviewAssignment.date == day,
            )
        )
        result = await self.db.execute(
            select(Entry.user_id)
            .where(
                and_(
                    Entry.date == day,
                    Entry.user_id != reviewer_id,
                    ~already_assigned,
                )
            )
            .order_by(func.random())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def get_last_by_user(self, user_id: int) -> Optional[Entry]:
        result = await self.db.execute(
            select(Entry).where(Entry.user_id == user_id).order_by(Entry.date.desc()).limit(1)
        )
        return result.scalar_one_or_none()

    async def count_by_user(self, user_id: int) -> int:
        result = await self.db.execute(select(func.count(Entry.entry_id)).where(Entry.user_id == user_id))
        return result.scalar_one() or 0

    async def get_average_by_user_and_range(self, user_id: int, start: date, end: date) -> Optional[float]:
        result = await self.db.execute(
            select(func.avg(Entry.rating)).where(
                and_(Entry.user_id == user_id, Entry.date >= start, Entry.date <= end)
            )
        )
        return normalize_db_average(result.scalar_one_or_none())

    async def list_by_user_and_range(self, user_id: int, start: date, end: date) -> list[Entry]:
        result = await self.db.execute(
            select(Entry)
            .where(and_(Entry.user_id == user_id, Entry.date >= start, Entry.date <= end))
            .order_by(Entry.date.asc())
        )
        return list(result.scalars().all())

    async def leaderboard_by_average(
        self, start: Optional[date] = None, end: Optional[date] = None, limit: int = 10
    ) -> list[dict[str, Any]]:
        """Users ranked by average rating, optionally within a date range."""
        query = (
            select(
                User.user_id,
                User.username,
                func.avg(Entry.rating).label("avg_rating"),
                func.count(Entry.entry_id).label("entry_count"),
            )
            .join(User, User.user_id == Entry.user_id)
            .group_by(User.user_id, User.username)
        )
        if start is not None:
            query = query.where(Entry.date >= start)
        if end is not None:
            query = query.where(Entry.date <= end)
        query = query.order_by(func.avg(Entry.rating).desc(), func.count(Entry.entry_id).desc()).limit(limit)
        return self._leaderboard_rows(await self.db.execute(query))

    async def leaderboard_by_participation(self, limit: int = 10) -> list[dict[str, Any]]:
        query = (
            select(
                User.user_id,
                User.username,
                func.avg(Entry.rating).label("avg_rating"),
                func.count(Entry.entry_id).label("entry_count"),
            )
            .join(User, User.user_id == Entry.user_id)
            .group_by(User.user_id, User.username)
            .order_by(func.count(Entry.entry_id).desc(), func.avg(Entry.rating).desc())
            .limit(limit)
        )
        return self._leaderboard_rows(await self.db.execute(query))

    async def count_ratings_by_date(self, day: date) -> int:
        result = await self.db.execute(select(func.count(Rating.rating_id)).where(Rating.date == day))
        return result.scalar_one() or 0

    @staticmethod
    def _leaderboard_rows(result) -> list[dict[str, Any]]:
        return [
            {
                "user_id": row.user_id,
                "username": row.username,
                "avg_rating": normalize_db_average(row.avg_rating) or 0,
                "entry_count": row.entry_count or 0,
            }
            for row in result.all()
        ]
