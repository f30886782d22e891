"""Statistics and leaderboard API router."""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from dayrate.database import get_db
from dayrate.dependencies import get_current_user
from dayrate.models.user import User
from dayrate.schemas.stats import (
    DetectiveRow,
    GuessStatsResponse,
    LeaderboardResponse,
    MyStatsResponse,
)
from dayrate.services import StatsService

router = APIRouter()


@router.get("/stats/me", response_model=MyStatsResponse)
async def get_my_stats(
        month: Optional[str] = Query(default=None, description="YYYY-MM, defaults to the current month"),
        user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
):
    return await StatsService(db).get_my_stats(user.user_id, month)


@router.get("/stats/guesses", response_model=GuessStatsResponse)
async def get_guess_stats(
        user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
):
    return await StatsService(db).get_guess_stats(user.user_id)


@router.get("/stats/users/{user_id}")
async def get_user_stats(
        user_id: int,
        month: Optional[str] = Query(default=None),
        user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
):
    """Public stats of another participant."""
    return await StatsService(db).get_user_stats(user_id, month)


@router.get("/leaderboard", response_model=LeaderboardResponse)
async def get_leaderboard(
        month: Optional[str] = Query(default=None),
        limit: int = Query(default=10, ge=1, le=100),
        user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
):
    return await StatsService(db).get_leaderboard(month, limit)


@router.get("/leaderboard/detectives", response_model=list[DetectiveRow])
async def get_detective_leaderboard(
        limit: int = Query(default=10, ge=1, le=100),
        user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
):
    return await StatsService(db).get_detective_leaderboard(limit)
