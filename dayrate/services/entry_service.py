"""Entry service: daily entries, review assignment and the guessing game.

Per (user, day) the review flow moves ``NoAssignment -> Assigned -> Rated``.
Reviews always target yesterday's entries, with "yesterday" computed from
wall-clock time in the configured calendar on every call.
"""
import logging
from datetime import date, datetime, UTC
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from dayrate.config import get_settings
from dayrate.models.review_assignment import ReviewAssignment
from dayrate.repositories import (
    AssignmentRepository,
    EntryRepository,
    GuessRepository,
    RatingRepository,
)
from dayrate.services.badge_service import BadgeService
from dayrate.services.guess_scoring import score_guess
from dayrate.services.tag_catalog import validate_tags
from dayrate.services.user_service import UserService
from dayrate.services.validators import (
    validate_comment,
    validate_gif_url,
    validate_rating,
    validate_review_date,
)
from dayrate.utils.datetime_helpers import get_today, get_yesterday
from dayrate.utils.exceptions import ConflictError, ValidationError
from dayrate.utils.streaks import StreakInfo, calculate_streak, current_correct_run

logger = logging.getLogger(__name__)

DONE: Dict[str, Any] = {"done": True}


class EntryService:
    """Orchestrates entries, assignments, ratings, guesses and badge checks."""

    def __init__(
        self,
        db: AsyncSession,
        badge_service: Optional[BadgeService] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize entry service.

        Args:
            db: Database session
            badge_service: Badge evaluator (defaults to one bound to ``db``)
            clock: Returns the current instant; injectable for tests
        """
        self.db = db
        self.settings = get_settings()
        self.entries = EntryRepository(db)
        self.assignments = AssignmentRepository(db)
        self.ratings = RatingRepository(db)
        self.guesses = GuessRepository(db)
        self.users = UserService(db)
        self.badge_service = badge_service or BadgeService(db)
        self._clock = clock or (lambda: datetime.now(UTC))

    def today(self) -> date:
        return get_today(self._clock(), self.settings.tzinfo)

    def yesterday(self) -> date:
        return get_yesterday(self._clock(), self.settings.tzinfo)

    async def get_streak(self, user_id: int) -> StreakInfo:
        """Recompute a user's participation streak from their full entry history."""
        dates = await self.entries.list_dates_by_user(user_id)
        return calculate_streak(dates, self.today())

    async def get_detective_streak(self, user_id: int) -> int:
        """Consecutive correct author guesses, counted from the most recent one."""
        outcomes = await self.guesses.list_author_outcomes(user_id, newest_first=True)
        return current_correct_run(outcomes)

    # ------------------------------------------------------------------
    # Entries
    # ------------------------------------------------------------------

    async def save_entry(
        self,
        user_id: int,
        rating: int,
        comment: Optional[str] = None,
        tags: Optional[List[str]] = None,
        gif_url: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Create or replace today's entry for the user.

        Returns:
            Dict with is_update, new_badges and the recomputed streak
        """
        await self.users.get_user(user_id)
        rating = validate_rating(rating)
        comment = validate_comment(comment)
        tags = validate_tags(tags)
        gif_url = validate_gif_url(gif_url)

        today = self.today()
        try:
            entry, is_update = await self.entries.upsert(user_id, today, rating, comment, tags, gif_url)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        if is_update:
            logger.debug(f"Entry updated {user_id=} {today=} {rating=}")
        else:
            logger.info(f"Entry created {user_id=} {today=} {rating=}")

        streak = await self.get_streak(user_id)
        new_badges = await self.badge_service.check_all_badges_after_entry(user_id, entry.rating, streak, today)

        return {
            "is_update": is_update,
            "new_badges": new_badges,
            "streak": streak,
        }

    async def get_today_entry(self, user_id: int) -> Dict[str, Any]:
        entry = await self.entries.find_by_user_and_date(user_id, self.today())
        if entry is None:
            return {"exists": False}
        return {
            "exists": True,
            "date": entry.date,
            "rating": entry.rating,
            "comment": entry.comment,
            "tags": list(entry.tags or []),
            "gif_url": entry.gif_url,
        }

    # ------------------------------------------------------------------
    # Review assignment
    # ------------------------------------------------------------------

    async def get_next_review(self, user_id: int) -> Dict[str, Any]:
        """Return yesterday's entry the user must review, assigning one if needed.

        The reviewee's identity beyond their numeric id, and their own rating,
        are withheld. ``{"done": True}`` means there is nothing to review:
        either the user already rated, or no eligible entry is left.
        """
        await self.users.get_user(user_id)
        yesterday = self.yesterday()

        if await self.ratings.has_rated_for_date(user_id, yesterday):
            logger.debug(f"Review already done {user_id=} {yesterday=}")
            return dict(DONE)

        assignment = await self._get_or_create_assignment(user_id, yesterday)
        if assignment is None:
            return dict(DONE)

        entry = await self.entries.find_by_user_and_date(assignment.reviewee_id, yesterday)
        if entry is None:
            logger.error(f"Assigned entry missing {assignment=}")
            return dict(DONE)

        return {
            "done": False,
            "reviewed_user_id": entry.user_id,
            "date": entry.date,
            "comment": entry.comment,
            "tags": list(entry.tags or []),
            "gif_url": entry.gif_url,
        }

    async def _get_or_create_assignment(self, reviewer_id: int, day: date) -> Optional[ReviewAssignment]:
        """Reuse the reviewer's assignment for ``day`` or claim an unassigned entry.

        The unique constraints on ``(reviewer_id, date)`` and
        ``(reviewee_id, date)`` are the only synchronization: a losing insert
        re-reads the reviewer's assignment and, if another reviewer took the
        candidate instead, tries again with a fresh candidate.
        """
        max_attempts = self.settings.assignment_max_attempts
        for attempt in range(1, max_attempts + 1):
            existing = await self.assignments.get_for_reviewer(reviewer_id, day)
            if existing is not None:
                logger.debug(f"Reusing assignment {reviewer_id=} -> {existing.reviewee_id=} {day=}")
                return existing

            reviewee_id = await self.entries.find_unassigned_author(reviewer_id, day)
            if reviewee_id is None:
                logger.info(f"No entry left to assign {reviewer_id=} {day=}")
                return None

            try:
                created = await self.assignments.create(reviewer_id, reviewee_id, day)
                await self.db.commit()
            except Exception:
                await self.db.rollback()
                raise

            if created:
                logger.info(f"Assignment created {reviewer_id=} -> {reviewee_id=} {day=}")
                return await self.assignments.get_for_reviewer(reviewer_id, day)

            logger.warning(
                f"Assignment conflict {reviewer_id=} -> {reviewee_id=} {day=} "
                f"(attempt {attempt}/{max_attempts})"
            )

        existing = await self.assignments.get_for_reviewer(reviewer_id, day)
        if existing is not None:
            return existing
        raise ConflictError("Could not assign a review right now, please try again")

    # ------------------------------------------------------------------
    # Ratings and guesses
    # ------------------------------------------------------------------

    async def save_rating(
        self,
        from_user_id: int,
        to_user_id: int,
        review_date,
        rating: int,
        guessed_user_id: Optional[int] = None,
        guessed_rating: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Record the reviewer's rating of their assigned entry, plus an optional guess.

        Returns:
            Dict with new_badges (the reviewer's), guess_result (``None`` when
            no guess was recorded) and the reviewer's detective_streak

        Raises:
            ValidationError: wrong date, out-of-range values, already rated,
                or the target is not the assigned reviewee
            NotFoundError: a referenced user does not exist
        """
        day = validate_review_date(review_date, self.yesterday())
        rating = validate_rating(rating)
        if guessed_rating is not None:
            guessed_rating = validate_rating(guessed_rating, field="guessed_rating")

        await self.users.get_user(from_user_id)
        if await self.ratings.has_rated_for_date(from_user_id, day):
            raise ValidationError("You have already rated an entry today")

        await self.users.get_user(to_user_id)
        if guessed_user_id is not None:
            await self.users.get_user(guessed_user_id)

        assignment = await self.assignments.get_for_reviewer(from_user_id, day)
        if assignment is None or assignment.reviewee_id != to_user_id:
            raise ValidationError("This entry was not assigned to you")

        try:
            await self.ratings.create(from_user_id, to_user_id, day, rating)
            await self.db.commit()
        except IntegrityError as exc:
            await self.db.rollback()
            logger.warning(f"Duplicate rating rejected by constraint {from_user_id=} {day=}: {exc}")
            raise ValidationError("You have already rated an entry today") from exc
        except Exception:
            await self.db.rollback()
            raise

        logger.info(f"Rating saved {from_user_id=} {to_user_id=} {day=} {rating=}")

        guess_result = None
        if guessed_user_id is not None or guessed_rating is not None:
            guess_result = await self._record_guess(from_user_id, to_user_id, day, guessed_user_id, guessed_rating)

        detective_streak = await self.get_detective_streak(from_user_id)
        new_badges = await self.badge_service.check_all_badges_after_rating(from_user_id, detective_streak)

        reviewee_streak = await self.get_streak(to_user_id)
        reviewee_badges = await self.badge_service.check_streak_badges(to_user_id, reviewee_streak.current_streak)
        if reviewee_badges:
            logger.info(f"Reviewee earned badges {to_user_id=} {reviewee_badges=}")

        return {
            "new_badges": new_badges,
            "guess_result": guess_result,
            "detective_streak": detective_streak,
        }

    async def _record_guess(
        self,
        guesser_id: int,
        entry_user_id: int,
        day: date,
        guessed_user_id: Optional[int],
        guessed_rating: Optional[int],
    ) -> Optional[Dict[str, Any]]:
        """Persist the guess once per (guesser, day); failures never undo the rating."""
        try:
            entry = await self.entries.find_by_user_and_date(entry_user_id, day)
            actual_rating = entry.rating if entry is not None else None
            scored = score_guess(
                entry_user_id,
                actual_rating,
                guessed_user_id=guessed_user_id,
                guessed_rating=guessed_rating,
                tolerance=self.settings.guess_rating_tolerance,
            )
            created = await self.guesses.create_once(guesser_id, day, **scored)
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            logger.exception(f"Failed to record guess {guesser_id=} {day=}; rating kept")
            return None

        if not created:
            logger.warning(f"Guess already recorded {guesser_id=} {day=}; ignoring resubmission")
            return None

        logger.info(
            f"Guess recorded {guesser_id=} {day=} is_correct={scored['is_correct']} "
            f"rating_exact={scored['rating_exact']}"
        )
        return {
            "is_correct": scored["is_correct"],
            "rating_correct": scored["rating_correct"],
            "rating_exact": scored["rating_exact"],
            "actual_user_id": entry_user_id,
            "actual_rating": actual_rating,
        }
