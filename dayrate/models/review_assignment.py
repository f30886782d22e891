"""Reviewer to reviewee assignment model."""
from sqlalchemy import Column, Integer, Date, DateTime, ForeignKey, UniqueConstraint, CheckConstraint
from datetime import datetime, UTC

from dayrate.database import Base


class ReviewAssignment(Base):
    """Exclusive pairing of one reviewer with one reviewee for a day.

    Both sides are unique per day, so the assignments of a day form a
    matching. Rows are never updated or deleted.
    """
    __tablename__ = "review_assignments"

    assignment_id = Column(Integer, primary_key=True, autoincrement=True)
    reviewer_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)
    reviewee_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)
    date = Column(Date, nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (
        UniqueConstraint("reviewer_id", "date", name="uq_review_assignments_reviewer_date"),
        UniqueConstraint("reviewee_id", "date", name="uq_review_assignments_reviewee_date"),
        CheckConstraint("reviewer_id <> reviewee_id", name="ck_review_assignments_not_self"),
    )

    def __repr__(self):
        return (f"<ReviewAssignment(reviewer_id={self.reviewer_id}, reviewee_id={self.reviewee_id}, "
                f"date={self.date})>")
