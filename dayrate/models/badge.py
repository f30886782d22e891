"""Achievement badge model."""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON, UniqueConstraint
from sqlalchemy.ext.mutable import MutableDict
from sqlalchemy.orm import relationship
from datetime import datetime, UTC

from dayrate.database import Base


class UserBadge(Base):
    """A badge earned by a user. One row per (user, badge type), never revoked."""
    __tablename__ = "user_badges"

    badge_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    badge_type = Column(String(50), nullable=False)
    badge_metadata = Column(MutableDict.as_mutable(JSON), nullable=True)
    earned_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    user = relationship("User", back_populates="badges")

    __table_args__ = (
        UniqueConstraint("user_id", "badge_type", name="uq_user_badges_user_type"),
    )

    def __repr__(self):
        return f"<UserBadge(user_id={self.user_id}, badge_type={self.badge_type})>"
