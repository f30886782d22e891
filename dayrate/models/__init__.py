"""Database models."""
from dayrate.models.user import User
from dayrate.models.entry import Entry
from dayrate.models.review_assignment import ReviewAssignment
from dayrate.models.rating import Rating
from dayrate.models.guess import Guess
from dayrate.models.badge import UserBadge
from dayrate.models.enums import Tag, TagCategory, BadgeType, BadgeCategory

__all__ = [
    "User",
    "Entry",
    "ReviewAssignment",
    "Rating",
    "Guess",
    "UserBadge",
    "Tag",
    "TagCategory",
    "BadgeType",
    "BadgeCategory",
]
