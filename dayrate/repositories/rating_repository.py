"""Rating store."""
from datetime import date
from typing import Optional

from sqlalchemy import select, func, and_

from dayrate.models.rating import Rating
from dayrate.repositories.base import RepositoryBase


class RatingRepository(RepositoryBase):
    """Queries and inserts over the ``ratings`` table."""

    async def get_for_reviewer(self, from_user_id: int, day: date) -> Optional[Rating]:
        result = await self.db.execute(
            select(Rating).where(and_(Rating.from_user_id == from_user_id, Rating.date == day))
        )
        return result.scalar_one_or_none()

    async def has_rated_for_date(self, from_user_id: int, day: date) -> bool:
        return await self.get_for_reviewer(from_user_id, day) is not None

    async def create(self, from_user_id: int, to_user_id: int, day: date, rating: int) -> Rating:
        """Stage a rating; the ``(from_user_id, date)`` constraint fires on flush."""
        record = Rating(from_user_id=from_user_id, to_user_id=to_user_id, date=day, rating=rating)
        self.db.add(record)
        await self.db.flush()
        return record

    async def count_by_user(self, from_user_id: int) -> int:
        result = await self.db.execute(
            select(func.count(Rating.rating_id)).where(Rating.from_user_id == from_user_id)
        )
        return result.scalar_one() or 0

    async def count_by_date(self, day: date) -> int:
        result = await self.db.execute(select(func.count(Rating.rating_id)).where(Rating.date == day))
        return result.scalar_one() or 0
