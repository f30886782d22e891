"""Statistics service for user dashboards, daily recaps and leaderboards."""
import logging
from datetime import date, datetime, UTC
from typing import Any, Callable, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from dayrate.config import get_settings
from dayrate.repositories import EntryRepository, GuessRepository, RatingRepository
from dayrate.services.badge_service import BadgeService
from dayrate.services.user_service import UserService
from dayrate.utils.datetime_helpers import (
    format_month,
    get_month_range,
    get_today,
    is_valid_month_format,
    parse_date,
)
from dayrate.utils.exceptions import ValidationError
from dayrate.utils.stats import calculate_recap_stats
from dayrate.utils.streaks import calculate_streak, current_correct_run, longest_correct_run

logger = logging.getLogger(__name__)


def _entry_summary(entry) -> Optional[Dict[str, Any]]:
    if entry is None:
        return None
    return {
        "date": entry.date,
        "rating": entry.rating,
        "comment": entry.comment,
        "tags": list(entry.tags or []),
    }


class StatsService:
    """Read-only aggregates over entries, ratings and guesses."""

    def __init__(
        self,
        db: AsyncSession,
        badge_service: Optional[BadgeService] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.db = db
        self.settings = get_settings()
        self.entries = EntryRepository(db)
        self.ratings = RatingRepository(db)
        self.guesses = GuessRepository(db)
        self.users = UserService(db)
        self.badge_service = badge_service or BadgeService(db)
        self._clock = clock or (lambda: datetime.now(UTC))

    def today(self) -> date:
        return get_today(self._clock(), self.settings.tzinfo)

    async def _user_stats(self, user_id: int, month: Optional[str]) -> Dict[str, Any]:
        today = self.today()
        month_start, month_end = get_month_range(month, today)

        dates = await self.entries.list_dates_by_user(user_id)
        streak = calculate_streak(dates, today)
        month_entries = await self.entries.list_by_user_and_range(user_id, month_start, month_end)

        return {
            "today": today,
            "month_start": month_start,
            "month_end": month_end,
            "last_entry": _entry_summary(await self.entries.get_last_by_user(user_id)),
            "today_entry": _entry_summary(await self.entries.find_by_user_and_date(user_id, today)),
            "participation_count": await self.entries.count_by_user(user_id),
            "current_month_avg": await self.entries.get_average_by_user_and_range(user_id, month_start, month_end),
            "month_entries": [{"date": e.date, "rating": e.rating} for e in month_entries],
            "streak": {
                "current_streak": streak.current_streak,
                "longest_streak": streak.longest_streak,
                "last_entry_date": streak.last_entry_date,
            },
        }

    async def get_my_stats(self, user_id: int, month: Optional[str] = None) -> Dict[str, Any]:
        """Stats for the caller, including badges and badge progress."""
        await self.users.get_user(user_id)
        stats = await self._user_stats(user_id, month)

        outcomes = await self.guesses.list_author_outcomes(user_id, newest_first=True)
        stats["badges"] = await self.badge_service.get_user_badges(user_id)
        stats["badge_progress"] = await self.badge_service.get_badge_progress(
            user_id,
            stats["streak"]["current_streak"],
            detective_streak=current_correct_run(outcomes),
        )
        return stats

    async def get_user_stats(self, user_id: int, month: Optional[str] = None) -> Dict[str, Any]:
        """Public stats for another user (no badge progress)."""
        user = await self.users.get_user(user_id)
        stats = await self._user_stats(user_id, month)
        stats["user"] = {"user_id": user.user_id, "username": user.username}
        stats["badges"] = await self.badge_service.get_user_badges(user_id)
        return stats

    async def get_recap(self, recap_date=None) -> Dict[str, Any]:
        """Daily recap used by the bot: participation, average and top 3."""
        if recap_date is None:
            day = self.today()
        else:
            day = parse_date(recap_date)
            if day is None:
                raise ValidationError("date must use the YYYY-MM-DD format")

        entries = await self.entries.list_by_date_with_authors(day)
        ratings_count = await self.entries.count_ratings_by_date(day)
        stats = calculate_recap_stats(entries, ratings_count)

        logger.debug(f"Recap computed {day=} participants={stats['participant_count']}")
        return {
            "date": day,
            **stats,
            "entries": [
                {
                    "username": e["username"],
                    "rating": e["rating"],
                    "comment": e["comment"],
                    "tags": e["tags"],
                }
                for e in entries
            ],
        }

    async def get_leaderboard(self, month: Optional[str] = None, limit: int = 10) -> Dict[str, Any]:
        month_start, month_end = get_month_range(month, self.today())
        return {
            "month_start": month_start,
            "month_end": month_end,
            "monthly": await self.entries.leaderboard_by_average(month_start, month_end, limit=limit),
            "all_time": await self.entries.leaderboard_by_average(limit=limit),
            "top_participants": await self.entries.leaderboard_by_participation(limit=limit),
        }

    async def get_guess_stats(self, user_id: int) -> Dict[str, Any]:
        await self.users.get_user(user_id)
        stats = await self.guesses.get_stats(user_id)
        newest_first = await self.guesses.list_author_outcomes(user_id, newest_first=True)
        stats["current_streak"] = current_correct_run(newest_first)
        stats["longest_streak"] = longest_correct_run(reversed(newest_first))
        return stats

    async def get_detective_leaderboard(self, limit: int = 10) -> list[Dict[str, Any]]:
        return await self.guesses.get_leaderboard(limit=limit)

    async def award_monthly_champion(self, month: str) -> Dict[str, Any]:
        """Award ``top_1_monthly`` to the best average of a finished month.

        Returns:
            Dict with month, the winner's user_id (or ``None``) and whether
            the badge was newly awarded
        """
        if not is_valid_month_format(month):
            raise ValidationError("month must use the YYYY-MM format")

        month_start, month_end = get_month_range(month)
        if format_month(month_start) != month:
            raise ValidationError("month must use the YYYY-MM format")
        if month_end >= self.today():
            raise ValidationError("The month is not over yet")

        ranking = await self.entries.leaderboard_by_average(month_start, month_end, limit=1)
        if not ranking:
            return {"month": month, "user_id": None, "awarded": False}

        winner_id = ranking[0]["user_id"]
        awarded = await self.badge_service.check_top1_badge(winner_id, month)
        logger.info(f"Monthly champion {month=} {winner_id=} awarded={bool(awarded)}")
        return {"month": month, "user_id": winner_id, "awarded": bool(awarded)}
