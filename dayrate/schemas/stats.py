"""Statistics and leaderboard Pydantic schemas."""
import datetime as dt
from typing import Optional

from dayrate.schemas.base import BaseSchema
from dayrate.schemas.badge import BadgeResponse, BadgeProgress
from dayrate.schemas.entry import StreakSchema


class EntrySummary(BaseSchema):
    date: dt.date
    rating: int
    comment: Optional[str] = None
    tags: list[str] = []


class MonthEntry(BaseSchema):
    date: dt.date
    rating: int


class MyStatsResponse(BaseSchema):
    today: dt.date
    month_start: dt.date
    month_end: dt.date
    last_entry: Optional[EntrySummary] = None
    today_entry: Optional[EntrySummary] = None
    participation_count: int
    current_month_avg: Optional[float] = None
    month_entries: list[MonthEntry]
    streak: StreakSchema
    badges: list[BadgeResponse]
    badge_progress: dict[str, BadgeProgress]


class LeaderboardRow(BaseSchema):
    user_id: int
    username: str
    avg_rating: float
    entry_count: int


class LeaderboardResponse(BaseSchema):
    month_start: dt.date
    month_end: dt.date
    monthly: list[LeaderboardRow]
    all_time: list[LeaderboardRow]
    top_participants: list[LeaderboardRow]


class GuessStatsResponse(BaseSchema):
    total_guesses: int
    correct_guesses: int
    accuracy: int
    rating_guesses: int
    exact_rating_guesses: int
    close_rating_guesses: int
    current_streak: int
    longest_streak: int


class DetectiveRow(BaseSchema):
    user_id: int
    username: str
    total_guesses: int
    correct_guesses: int
    accuracy: float


class RecapEntry(BaseSchema):
    username: str
    rating: int
    comment: Optional[str] = None
    tags: list[str] = []


class RecapResponse(BaseSchema):
    date: dt.date
    participant_count: int
    avg_rating: float
    top3: list[RecapEntry]
    ratings_given: int
    entries: list[RecapEntry]


class MonthlyChampionResponse(BaseSchema):
    month: str
    user_id: Optional[int] = None
    awarded: bool
