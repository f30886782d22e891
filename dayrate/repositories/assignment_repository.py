"""Assignment store: exclusive reviewer to reviewee pairings per day."""
import logging
from datetime import date
from typing import Optional

from sqlalchemy import select, and_
from sqlalchemy.exc import IntegrityError

from dayrate.models.review_assignment import ReviewAssignment
from dayrate.repositories.base import RepositoryBase, dialect_insert

logger = logging.getLogger(__name__)


class AssignmentRepository(RepositoryBase):
    """Queries and constraint-protected inserts over ``review_assignments``."""

    async def get_for_reviewer(self, reviewer_id: int, day: date) -> Optional[ReviewAssignment]:
        result = await self.db.execute(
            select(ReviewAssignment).where(
                and_(ReviewAssignment.reviewer_id == reviewer_id, ReviewAssignment.date == day)
            )
        )
        return result.scalar_one_or_none()

    async def create(self, reviewer_id: int, reviewee_id: int, day: date) -> bool:
        """Insert an assignment unless either side is already taken for ``day``.

        Returns:
            ``True`` when this call inserted the row, ``False`` when a
            uniqueness constraint on the reviewer or the reviewee rejected it.
        """
        stmt = dialect_insert(self.db, ReviewAssignment).values(
            reviewer_id=reviewer_id,
            reviewee_id=reviewee_id,
            date=day,
        ).on_conflict_do_nothing()

        try:
            result = await self.db.execute(stmt)
        except IntegrityError as exc:
            logger.warning(f"Integrity error while assigning {reviewer_id=} -> {reviewee_id=} on {day}: {exc}")
            await self.db.rollback()
            return False

        return getattr(result, "rowcount", 0) == 1

    async def list_by_date(self, day: date) -> list[ReviewAssignment]:
        result = await self.db.execute(
            select(ReviewAssignment).where(ReviewAssignment.date == day).order_by(ReviewAssignment.assignment_id)
        )
        return list(result.scalars().all())
