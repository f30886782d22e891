"""Guess store for the author / rating guessing game."""
import logging
from datetime import date
from typing import Any

from sqlalchemy import select, func, and_, case

from dayrate.models.guess import Guess
from dayrate.models.user import User
from dayrate.repositories.base import RepositoryBase, dialect_insert
from dayrate.utils.stats import round_one_decimal

logger = logging.getLogger(__name__)


class GuessRepository(RepositoryBase):
    """Queries and write-once inserts over the ``guesses`` table."""

    async def create_once(self, guesser_id: int, day: date, **values: Any) -> bool:
        """Insert the guess for ``(guesser_id, day)`` unless one already exists.

        Returns:
            ``True`` if the row was written by this call.
        """
        stmt = dialect_insert(self.db, Guess).values(
            guesser_id=guesser_id, date=day, **values
        ).on_conflict_do_nothing(index_elements=["guesser_id", "date"])
        result = await self.db.execute(stmt)
        return getattr(result, "rowcount", 0) == 1

    async def list_author_outcomes(self, guesser_id: int, newest_first: bool = True) -> list[bool]:
        """Correctness of every author guess, ordered by date."""
        order = Guess.date.desc() if newest_first else Guess.date.asc()
        result = await self.db.execute(
            select(Guess.is_correct)
            .where(and_(Guess.guesser_id == guesser_id, Guess.is_correct.is_not(None)))
            .order_by(order)
        )
        return [bool(value) for value in result.scalars().all()]

    async def count_correct(self, guesser_id: int) -> int:
        result = await self.db.execute(
            select(func.count(Guess.guess_id)).where(
                and_(Guess.guesser_id == guesser_id, Guess.is_correct.is_(True))
            )
        )
        return result.scalar_one() or 0

    async def get_stats(self, guesser_id: int) -> dict[str, int]:
        result = await self.db.execute(
            select(
                func.count(Guess.is_correct).label("total"),
                func.sum(case((Guess.is_correct.is_(True), 1), else_=0)).label("correct"),
                func.sum(case((Guess.rating_exact.is_(True), 1), else_=0)).label("exact"),
                func.sum(case((Guess.rating_correct.is_(True), 1), else_=0)).label("close"),
                func.count(Guess.guessed_rating).label("rating_total"),
            ).where(Guess.guesser_id == guesser_id)
        )
        row = result.one()
        total = row.total or 0
        correct = row.correct or 0
        return {
            "total_guesses": total,
            "correct_guesses": correct,
            "accuracy": round(correct / total * 100) if total else 0,
            "rating_guesses": row.rating_total or 0,
            "exact_rating_guesses": row.exact or 0,
            "close_rating_guesses": row.close or 0,
        }

    async def get_leaderboard(self, limit: int = 10, min_guesses: int = 1) -> list[dict[str, Any]]:
        correct = func.sum(case((Guess.is_correct.is_(True), 1), else_=0))
        total = func.count(Guess.is_correct)
        result = await self.db.execute(
            select(
                Guess.guesser_id,
                User.username,
                total.label("total"),
                correct.label("correct"),
            )
            .join(User, User.user_id == Guess.guesser_id)
            .where(Guess.is_correct.is_not(None))
            .group_by(Guess.guesser_id, User.username)
            .having(total >= min_guesses)
        )
        rows = [
            {
                "user_id": row.guesser_id,
                "username": row.username,
                "total_guesses": row.total,
                "correct_guesses": row.correct or 0,
                "accuracy": round_one_decimal((row.correct or 0) / row.total * 100),
            }
            for row in result.all()
        ]
        rows.sort(key=lambda r: (-r["accuracy"], -r["correct_guesses"], r["username"]))
        return rows[:limit]
