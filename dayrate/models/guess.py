"""Guessing game model."""
from sqlalchemy import Column, Integer, Boolean, Date, DateTime, ForeignKey, UniqueConstraint, Index
from datetime import datetime, UTC

from dayrate.database import Base


class Guess(Base):
    """A reviewer's guess of who wrote the reviewed entry and/or its rating.

    Correctness flags are computed when the row is written. Author fields are
    null when only the rating was guessed, and rating fields are null when
    only the author was guessed.
    """
    __tablename__ = "guesses"

    guess_id = Column(Integer, primary_key=True, autoincrement=True)
    guesser_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)
    entry_user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)
    date = Column(Date, nullable=False)

    # Author guess
    guessed_user_id = Column(Integer, ForeignKey("users.user_id", ondelete="SET NULL"), nullable=True)
    is_correct = Column(Boolean, nullable=True)

    # Rating guess
    guessed_rating = Column(Integer, nullable=True)
    actual_rating = Column(Integer, nullable=True)
    rating_correct = Column(Boolean, nullable=True)  # Within tolerance
    rating_exact = Column(Boolean, nullable=True)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (
        UniqueConstraint("guesser_id", "date", name="uq_guesses_guesser_date"),
        Index("ix_guesses_guesser_date", "guesser_id", "date"),
    )

    def __repr__(self):
        return (f"<Guess(guesser_id={self.guesser_id}, date={self.date}, is_correct={self.is_correct}, "
                f"rating_exact={self.rating_exact})>")
