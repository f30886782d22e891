"""Badge service: evaluates achievement rules and awards badges exactly once."""
import logging
from datetime import date, datetime, UTC
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from dayrate.config import get_settings
from dayrate.models.enums import BadgeType, BadgeCategory
from dayrate.repositories import BadgeRepository, RatingRepository, GuessRepository
from dayrate.utils.stats import percent_of
from dayrate.utils.streaks import StreakInfo

logger = logging.getLogger(__name__)


# Badge configuration mapping
BADGE_CONFIGS = {
    BadgeType.STREAK_7: {
        "name": "Seven in a row",
        "description": "Post an entry 7 days in a row",
        "icon": "🔥",
        "category": BadgeCategory.STREAK,
        "target": 7,
    },
    BadgeType.STREAK_30: {
        "name": "Perfect month",
        "description": "Post an entry 30 days in a row",
        "icon": "🏆",
        "category": BadgeCategory.STREAK,
        "target": 30,
    },
    BadgeType.PERFECT_20: {
        "name": "20/20",
        "description": "Rate your own day a perfect 20",
        "icon": "⭐",
        "category": BadgeCategory.QUALITY,
        "target": None,
    },
    BadgeType.REVIEWER_100: {
        "name": "Reviewer",
        "description": "Give 100 ratings",
        "icon": "📝",
        "category": BadgeCategory.MILESTONE,
        "target": 100,
    },
    BadgeType.DETECTIVE_10: {
        "name": "Detective",
        "description": "Guess the right author 10 times",
        "icon": "🔍",
        "category": BadgeCategory.DETECTIVE,
        "target": 10,
    },
    BadgeType.DETECTIVE_STREAK_5: {
        "name": "Sherlock",
        "description": "Guess the right author 5 times in a row",
        "icon": "🕵️",
        "category": BadgeCategory.DETECTIVE,
        "target": 5,
    },
    BadgeType.TOP_1_MONTHLY: {
        "name": "Top 1",
        "description": "Finish first on the monthly leaderboard",
        "icon": "🥇",
        "category": BadgeCategory.RANKING,
        "target": None,
    },
}

PROGRESS_BADGES: List[BadgeType] = [
    BadgeType.STREAK_7,
    BadgeType.STREAK_30,
    BadgeType.REVIEWER_100,
    BadgeType.DETECTIVE_10,
    BadgeType.DETECTIVE_STREAK_5,
]


def badge_definition(badge_type: BadgeType) -> Dict[str, Any]:
    config = BADGE_CONFIGS[badge_type]
    return {
        "id": badge_type.value,
        "name": config["name"],
        "description": config["description"],
        "icon": config["icon"],
        "category": config["category"].value,
        "target": config["target"],
    }


class BadgeService:
    """Service for evaluating and awarding badges.

    Every rule goes straight to an idempotent insert guarded by the
    ``(user_id, badge_type)`` unique constraint, so concurrent evaluations of
    the same signal award a badge at most once and never raise.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.badges = BadgeRepository(db)
        self.ratings = RatingRepository(db)
        self.guesses = GuessRepository(db)

    def get_badge_definitions(self) -> Dict[str, Dict[str, Any]]:
        return {badge_type.value: badge_definition(badge_type) for badge_type in BADGE_CONFIGS}

    async def get_user_badges(self, user_id: int) -> List[Dict[str, Any]]:
        """Badges earned by a user with their definitions, newest first."""
        earned = await self.badges.get_by_user(user_id)
        results = []
        for badge in earned:
            try:
                badge_type = BadgeType(badge.badge_type)
            except ValueError:
                logger.warning(f"Skipping unknown badge type {badge.badge_type=} for {user_id=}")
                continue
            results.append({
                **badge_definition(badge_type),
                "earned_at": badge.earned_at,
                "metadata": dict(badge.badge_metadata or {}),
            })
        return results

    async def _award(self, user_id: int, badge_type: BadgeType, metadata: Optional[Dict[str, Any]]) -> bool:
        awarded = await self.badges.award(user_id, badge_type.value, metadata)
        await self.db.commit()
        if awarded:
            logger.info(f"Badge awarded: {badge_type.value} {user_id=} {metadata=}")
        else:
            logger.debug(f"Badge {badge_type.value} already owned by {user_id=}")
        return awarded

    async def check_streak_badges(self, user_id: int, current_streak: int) -> List[str]:
        """Award participation streak badges reached by ``current_streak``."""
        awarded = []
        for badge_type in (BadgeType.STREAK_7, BadgeType.STREAK_30):
            if current_streak >= BADGE_CONFIGS[badge_type]["target"]:
                if await self._award(user_id, badge_type, {"streak": current_streak}):
                    awarded.append(badge_type.value)
        return awarded

    async def check_rating_badge(self, user_id: int, rating: int, on_date: Optional[date] = None) -> List[str]:
        """Award ``perfect_20`` for a perfect self-rating."""
        if rating != get_settings().rating_max:
            return []
        on_date = on_date or datetime.now(UTC).date()
        if await self._award(user_id, BadgeType.PERFECT_20, {"first_perfect_date": on_date.isoformat()}):
            return [BadgeType.PERFECT_20.value]
        return []

    async def check_reviewer_badge(self, user_id: int) -> List[str]:
        total_ratings = await self.ratings.count_by_user(user_id)
        if total_ratings < BADGE_CONFIGS[BadgeType.REVIEWER_100]["target"]:
            return []
        if await self._award(user_id, BadgeType.REVIEWER_100, {"total_ratings": total_ratings}):
            return [BadgeType.REVIEWER_100.value]
        return []

    async def check_detective_badges(self, user_id: int, detective_streak: int) -> List[str]:
        """Award badges for cumulative and consecutive correct author guesses."""
        awarded = []

        correct_guesses = await self.guesses.count_correct(user_id)
        if correct_guesses >= BADGE_CONFIGS[BadgeType.DETECTIVE_10]["target"]:
            if await self._award(user_id, BadgeType.DETECTIVE_10, {"correct_guesses": correct_guesses}):
                awarded.append(BadgeType.DETECTIVE_10.value)

        if detective_streak >= BADGE_CONFIGS[BadgeType.DETECTIVE_STREAK_5]["target"]:
            if await self._award(user_id, BadgeType.DETECTIVE_STREAK_5, {"streak": detective_streak}):
                awarded.append(BadgeType.DETECTIVE_STREAK_5.value)

        return awarded

    async def check_top1_badge(self, user_id: int, month: str) -> List[str]:
        if await self._award(user_id, BadgeType.TOP_1_MONTHLY, {"month": month}):
            return [BadgeType.TOP_1_MONTHLY.value]
        return []

    async def check_all_badges_after_entry(
        self, user_id: int, rating: int, streak: StreakInfo, on_date: Optional[date] = None
    ) -> List[str]:
        """Evaluate the badges an entry author can earn by saving an entry."""
        awarded = await self.check_streak_badges(user_id, streak.current_streak)
        awarded.extend(await self.check_rating_badge(user_id, rating, on_date))
        return awarded

    async def check_all_badges_after_rating(self, user_id: int, detective_streak: int) -> List[str]:
        """Evaluate the badges a reviewer can earn by rating and guessing."""
        awarded = await self.check_reviewer_badge(user_id)
        awarded.extend(await self.check_detective_badges(user_id, detective_streak))
        return awarded

    async def get_badge_progress(
        self, user_id: int, current_streak: int, detective_streak: int = 0
    ) -> Dict[str, Dict[str, int]]:
        """Progress towards every threshold badge."""
        signals = {
            BadgeType.STREAK_7: current_streak,
            BadgeType.STREAK_30: current_streak,
            BadgeType.REVIEWER_100: await self.ratings.count_by_user(user_id),
            BadgeType.DETECTIVE_10: await self.guesses.count_correct(user_id),
            BadgeType.DETECTIVE_STREAK_5: detective_streak,
        }

        progress = {}
        for badge_type in PROGRESS_BADGES:
            target = BADGE_CONFIGS[badge_type]["target"]
            value = max(0, signals[badge_type])
            progress[badge_type.value] = {
                "current": min(value, target),
                "target": target,
                "percent": percent_of(value, target),
            }
        return progress
