"""Daily entry model."""
from sqlalchemy import (
    Column,
    Integer,
    String,
    Date,
    DateTime,
    ForeignKey,
    JSON,
    CheckConstraint,
    UniqueConstraint,
    Index,
)
from sqlalchemy.orm import relationship
from datetime import datetime, UTC

from dayrate.database import Base


class Entry(Base):
    """One rating and comment per user per calendar day."""
    __tablename__ = "entries"

    entry_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)
    date = Column(Date, nullable=False)
    rating = Column(Integer, nullable=False)
    comment = Column(String(1000), nullable=True)
    tags = Column(JSON, nullable=False, default=list)  # List of Tag values
    gif_url = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False, onupdate=lambda: datetime.now(UTC)
    )

    # Relationships
    user = relationship("User", back_populates="entries")

    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_entries_user_date"),
        CheckConstraint("rating >= 0 AND rating <= 20", name="ck_entries_rating_range"),
        Index("ix_entries_date", "date"),
    )

    def __repr__(self):
        return f"<Entry(entry_id={self.entry_id}, user_id={self.user_id}, date={self.date}, rating={self.rating})>"
