"""Badge Pydantic schemas."""
from datetime import datetime
from typing import Any, Dict, Optional

from dayrate.schemas.base import BaseSchema


class BadgeResponse(BaseSchema):
    id: str
    name: str
    description: str
    icon: str
    category: str
    target: Optional[int] = None
    earned_at: datetime
    metadata: Dict[str, Any] = {}


class BadgeListResponse(BaseSchema):
    badges: list[BadgeResponse]


class BadgeProgress(BaseSchema):
    current: int
    target: int
    percent: int


class BadgeProgressResponse(BaseSchema):
    current_streak: int
    progress: Dict[str, BadgeProgress]
