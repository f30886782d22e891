"""Utilities module - calendar, statistics and streak helpers."""
from dayrate.utils.datetime_helpers import ensure_utc, get_today, get_yesterday, get_month_range
from dayrate.utils.streaks import StreakInfo, calculate_streak

__all__ = [
    "ensure_utc",
    "get_today",
    "get_yesterday",
    "get_month_range",
    "StreakInfo",
    "calculate_streak",
]
