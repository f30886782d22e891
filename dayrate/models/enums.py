"""Closed enumerations persisted as plain strings."""
from enum import Enum


class TagCategory(str, Enum):
    """Day-factor tag categories."""
    WORK = "work"
    SOCIAL = "social"
    HEALTH = "health"
    PERSONAL = "personal"
    EXTERNAL = "external"


class Tag(str, Enum):
    """Day-factor tags a user may attach to an entry."""
    # Work
    PRODUCTIVE = "productive"
    USEFUL_MEETING = "useful_meeting"
    PROJECT_PROGRESS = "project_progress"
    RECOGNITION = "recognition"
    OVERLOAD = "overload"
    USELESS_MEETING = "useless_meeting"
    WORK_CONFLICT = "work_conflict"
    DEADLINE = "deadline"

    # Social
    GOOD_EXCHANGES = "good_exchanges"
    PARTY = "party"
    FAMILY_TIME = "family_time"
    NEW_CONTACTS = "new_contacts"
    SOCIAL_CONFLICT = "social_conflict"
    LONELINESS = "loneliness"
    MISUNDERSTANDING = "misunderstanding"

    # Health
    SPORT = "sport"
    GOOD_SLEEP = "good_sleep"
    ENERGY = "energy"
    SICK = "sick"
    TIRED = "tired"
    BAD_SLEEP = "bad_sleep"
    PAIN = "pain"

    # Personal
    HOBBY = "hobby"
    ACCOMPLISHMENT = "accomplishment"
    RELAXATION = "relaxation"
    GOOD_NEWS = "good_news"
    PROCRASTINATION = "procrastination"
    ANXIETY = "anxiety"
    BAD_NEWS = "bad_news"

    # External
    GOOD_WEATHER = "good_weather"
    WEEKEND = "weekend"
    BAD_WEATHER = "bad_weather"
    TRANSPORT_ISSUES = "transport_issues"
    UNEXPECTED = "unexpected"


class BadgeType(str, Enum):
    """Achievement badge identifiers."""
    STREAK_7 = "streak_7"
    STREAK_30 = "streak_30"
    PERFECT_20 = "perfect_20"
    REVIEWER_100 = "reviewer_100"
    DETECTIVE_10 = "detective_10"
    DETECTIVE_STREAK_5 = "detective_streak_5"
    TOP_1_MONTHLY = "top_1_monthly"


class BadgeCategory(str, Enum):
    """Badge category enumeration."""
    STREAK = "streak"
    QUALITY = "quality"
    MILESTONE = "milestone"
    DETECTIVE = "detective"
    RANKING = "ranking"
