"""Entries, review and rating API router."""
import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from dayrate.database import get_db
from dayrate.dependencies import get_current_user
from dayrate.models.user import User
from dayrate.schemas.entry import (
    NextReviewResponse,
    SaveEntryRequest,
    SaveEntryResponse,
    SaveRatingRequest,
    SaveRatingResponse,
    TodayEntryResponse,
)
from dayrate.services import EntryService, tags_by_category

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/entries", response_model=SaveEntryResponse)
async def save_entry(
        request: SaveEntryRequest,
        user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
):
    """Create or replace today's entry."""
    result = await EntryService(db).save_entry(
        user.user_id,
        request.rating,
        comment=request.comment,
        tags=request.tags,
        gif_url=request.gif_url,
    )
    return SaveEntryResponse(
        is_update=result["is_update"],
        new_badges=result["new_badges"],
        streak=asdict(result["streak"]),
    )


@router.get("/entries/today", response_model=TodayEntryResponse)
async def get_today_entry(
        user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
):
    return await EntryService(db).get_today_entry(user.user_id)


@router.get("/entries/tags")
async def list_tags():
    """Tag catalogue grouped by category."""
    return tags_by_category()


@router.get("/review/next", response_model=NextReviewResponse)
async def get_next_review(
        user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
):
    """Yesterday's entry assigned to the caller, without its author name or rating."""
    return await EntryService(db).get_next_review(user.user_id)


@router.post("/ratings", response_model=SaveRatingResponse)
async def save_rating(
        request: SaveRatingRequest,
        user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
):
    """Rate the assigned entry, optionally guessing its author and self rating."""
    return await EntryService(db).save_rating(
        user.user_id,
        request.to_user_id,
        request.date,
        request.rating,
        guessed_user_id=request.guessed_user_id,
        guessed_rating=request.guessed_rating,
    )
