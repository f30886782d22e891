"""Peer rating model."""
from sqlalchemy import Column, Integer, Date, DateTime, ForeignKey, UniqueConstraint, CheckConstraint, Index
from datetime import datetime, UTC

from dayrate.database import Base


class Rating(Base):
    """A reviewer's rating of the entry they were assigned for a day."""
    __tablename__ = "ratings"

    rating_id = Column(Integer, primary_key=True, autoincrement=True)
    from_user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)
    to_user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)
    date = Column(Date, nullable=False)
    rating = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (
        UniqueConstraint("from_user_id", "date", name="uq_ratings_from_user_date"),
        CheckConstraint("rating >= 0 AND rating <= 20", name="ck_ratings_rating_range"),
        Index("ix_ratings_date", "date"),
    )

    def __repr__(self):
        return (f"<Rating(from_user_id={self.from_user_id}, to_user_id={self.to_user_id}, "
                f"date={self.date}, rating={self.rating})>")
