"""Data access layer. Repositories stage changes; services own commits."""
from dayrate.repositories.entry_repository import EntryRepository
from dayrate.repositories.assignment_repository import AssignmentRepository
from dayrate.repositories.rating_repository import RatingRepository
from dayrate.repositories.guess_repository import GuessRepository
from dayrate.repositories.badge_repository import BadgeRepository

__all__ = [
    "EntryRepository",
    "AssignmentRepository",
    "RatingRepository",
    "GuessRepository",
    "BadgeRepository",
]
