"""Routes used by the chat bot adapter (shared-key authentication)."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from dayrate.database import get_db
from dayrate.dependencies import create_access_token, require_bot_key
from dayrate.schemas.stats import MonthlyChampionResponse, RecapResponse
from dayrate.services import StatsService, UserService

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_bot_key)])


class RegisterUserRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)
    discord_id: Optional[str] = Field(default=None, max_length=50)


class MonthlyChampionRequest(BaseModel):
    month: str = Field(..., description="Finished month, YYYY-MM")


@router.get("/bot/recap", response_model=RecapResponse)
async def get_recap(
        date: Optional[str] = Query(default=None, description="YYYY-MM-DD, defaults to today"),
        db: AsyncSession = Depends(get_db),
):
    """Daily recap: participation, average rating and top 3."""
    return await StatsService(db).get_recap(date)


@router.post("/bot/users")
async def register_user(request: RegisterUserRequest, db: AsyncSession = Depends(get_db)):
    """Register a participant and hand back a bearer token for them."""
    user = await UserService(db).create_user(request.username, discord_id=request.discord_id)
    return {
        "user_id": user.user_id,
        "username": user.username,
        "access_token": create_access_token(user.user_id),
        "token_type": "bearer",
    }


@router.post("/bot/monthly-champion", response_model=MonthlyChampionResponse)
async def award_monthly_champion(request: MonthlyChampionRequest, db: AsyncSession = Depends(get_db)):
    return await StatsService(db).award_monthly_champion(request.month)


@router.post("/bot/users/{user_id}/token")
async def issue_user_token(user_id: int, db: AsyncSession = Depends(get_db)):
    """Bearer token for an existing participant."""
    user = await UserService(db).get_user(user_id)
    return {
        "user_id": user.user_id,
        "access_token": create_access_token(user.user_id),
        "token_type": "bearer",
    }
