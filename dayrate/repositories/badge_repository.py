"""Badge store with idempotent awards."""
import logging
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from dayrate.models.badge import UserBadge
from dayrate.repositories.base import RepositoryBase, dialect_insert

logger = logging.getLogger(__name__)


class BadgeRepository(RepositoryBase):
    """Queries and ``ON CONFLICT DO NOTHING`` inserts over ``user_badges``."""

    async def award(self, user_id: int, badge_type: str, metadata: Optional[dict[str, Any]] = None) -> bool:
        """Insert the badge if the user does not own it yet.

        Returns:
            ``True`` only for the call that actually created the row.
        """
        stmt = dialect_insert(self.db, UserBadge).values(
            user_id=user_id,
            badge_type=badge_type,
            badge_metadata=metadata,
        ).on_conflict_do_nothing(index_elements=["user_id", "badge_type"])

        try:
            result = await self.db.execute(stmt)
        except IntegrityError as exc:
            logger.warning(f"Integrity error while awarding {badge_type=} to {user_id=}: {exc}")
            await self.db.rollback()
            return False

        return getattr(result, "rowcount", 0) == 1

    async def get_by_user(self, user_id: int) -> list[UserBadge]:
        result = await self.db.execute(
            select(UserBadge).where(UserBadge.user_id == user_id).order_by(UserBadge.earned_at.desc())
        )
        return list(result.scalars().all())
