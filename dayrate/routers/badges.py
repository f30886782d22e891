"""Badge API router."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from dayrate.database import get_db
from dayrate.dependencies import get_current_user
from dayrate.models.user import User
from dayrate.schemas.badge import BadgeListResponse, BadgeProgressResponse
from dayrate.services import BadgeService, EntryService

router = APIRouter()


@router.get("/badges", response_model=BadgeListResponse)
async def get_badges(
        user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
):
    badges = await BadgeService(db).get_user_badges(user.user_id)
    return BadgeListResponse(badges=badges)


@router.get("/badges/definitions")
async def get_badge_definitions(db: AsyncSession = Depends(get_db)):
    return BadgeService(db).get_badge_definitions()


@router.get("/badges/progress", response_model=BadgeProgressResponse)
async def get_badge_progress(
        user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
):
    """Progress towards the streak, reviewer and detective badges."""
    entry_service = EntryService(db)
    streak = await entry_service.get_streak(user.user_id)
    detective_streak = await entry_service.get_detective_streak(user.user_id)
    progress = await entry_service.badge_service.get_badge_progress(
        user.user_id, streak.current_streak, detective_streak=detective_streak
    )
    return BadgeProgressResponse(current_streak=streak.current_streak, progress=progress)
