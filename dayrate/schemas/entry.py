"""Entry, review and rating Pydantic schemas."""
import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field

from dayrate.schemas.base import BaseSchema


class StreakSchema(BaseSchema):
    current_streak: int
    longest_streak: int
    last_entry_date: Optional[dt.date] = None


class SaveEntryRequest(BaseModel):
    """Save today's entry."""
    rating: int = Field(..., strict=True, description="Self rating of the day")
    comment: Optional[str] = Field(default=None, description="Free text about the day")
    tags: list[str] = Field(default_factory=list, description="Day-factor tag identifiers")
    gif_url: Optional[str] = Field(default=None, description="Optional GIF attachment URL")


class SaveEntryResponse(BaseSchema):
    is_update: bool
    new_badges: list[str]
    streak: StreakSchema


class TodayEntryResponse(BaseSchema):
    exists: bool
    date: Optional[dt.date] = None
    rating: Optional[int] = None
    comment: Optional[str] = None
    tags: list[str] = []
    gif_url: Optional[str] = None


class NextReviewResponse(BaseSchema):
    """Entry to review. Author name and self rating are never included."""
    done: bool
    reviewed_user_id: Optional[int] = None
    date: Optional[dt.date] = None
    comment: Optional[str] = None
    tags: list[str] = []
    gif_url: Optional[str] = None


class SaveRatingRequest(BaseModel):
    """Rate the assigned entry and optionally guess its author and score."""
    to_user_id: int = Field(..., strict=True)
    date: str = Field(..., description="Review date, YYYY-MM-DD (must be yesterday)")
    rating: int = Field(..., strict=True)
    guessed_user_id: Optional[int] = Field(default=None, strict=True)
    guessed_rating: Optional[int] = Field(default=None, strict=True)


class GuessResult(BaseSchema):
    is_correct: Optional[bool] = None
    rating_correct: Optional[bool] = None
    rating_exact: Optional[bool] = None
    actual_user_id: int
    actual_rating: Optional[int] = None


class SaveRatingResponse(BaseSchema):
    new_badges: list[str]
    guess_result: Optional[GuessResult] = None
    detective_streak: int
