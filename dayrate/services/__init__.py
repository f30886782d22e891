from dayrate.services.user_service import UserService
from dayrate.services.badge_service import BadgeService, BADGE_CONFIGS
from dayrate.services.entry_service import EntryService
from dayrate.services.stats_service import StatsService
from dayrate.services.guess_scoring import score_guess
from dayrate.services.tag_catalog import validate_tags, tags_by_category

__all__ = [
    "UserService",
    "BadgeService",
    "BADGE_CONFIGS",
    "EntryService",
    "StatsService",
    "score_guess",
    "validate_tags",
    "tags_by_category",
]
