"""Tests for badge rules and idempotent awards."""
import pytest

from dayrate.models.badge import UserBadge
from dayrate.services import BadgeService
from sqlalchemy import func, select


@pytest.mark.asyncio
async def test_streak_badges_awarded_once(db_session, user_factory):
    user = await user_factory()
    service = BadgeService(db_session)

    assert await service.check_streak_badges(user.user_id, 7) == ["streak_7"]
    assert await service.check_streak_badges(user.user_id, 8) == []
    assert await service.check_streak_badges(user.user_id, 30) == ["streak_30"]

    count = await db_session.execute(
        select(func.count()).select_from(UserBadge).where(UserBadge.user_id == user.user_id)
    )
    assert count.scalar_one() == 2


@pytest.mark.asyncio
async def test_short_streak_awards_nothing(db_session, user_factory):
    user = await user_factory()

    assert await BadgeService(db_session).check_streak_badges(user.user_id, 6) == []


@pytest.mark.asyncio
async def test_perfect_rating_badge(db_session, user_factory):
    user = await user_factory()
    service = BadgeService(db_session)

    assert await service.check_rating_badge(user.user_id, 19) == []
    assert await service.check_rating_badge(user.user_id, 20) == ["perfect_20"]
    assert await service.check_rating_badge(user.user_id, 20) == []


@pytest.mark.asyncio
async def test_detective_streak_badge(db_session, user_factory):
    user = await user_factory()
    service = BadgeService(db_session)

    assert await service.check_detective_badges(user.user_id, 4) == []
    assert await service.check_detective_badges(user.user_id, 5) == ["detective_streak_5"]


@pytest.mark.asyncio
async def test_top1_badge_is_unique_per_user(db_session, user_factory):
    user = await user_factory()
    service = BadgeService(db_session)

    assert await service.check_top1_badge(user.user_id, "2024-01") == ["top_1_monthly"]
    assert await service.check_top1_badge(user.user_id, "2024-02") == []

    badges = await service.get_user_badges(user.user_id)
    assert badges[0]["metadata"] == {"month": "2024-01"}
    assert badges[0]["category"] == "ranking"


@pytest.mark.asyncio
async def test_badge_progress(db_session, user_factory):
    user = await user_factory()

    progress = await BadgeService(db_session).get_badge_progress(user.user_id, 3, detective_streak=6)

    assert progress["streak_7"] == {"current": 3, "target": 7, "percent": 43}
    assert progress["streak_30"] == {"current": 3, "target": 30, "percent": 10}
    assert progress["reviewer_100"] == {"current": 0, "target": 100, "percent": 0}
    assert progress["detective_streak_5"] == {"current": 5, "target": 5, "percent": 100}
    assert "perfect_20" not in progress


def test_definitions_cover_every_badge():
    definitions = BadgeService(None).get_badge_definitions()

    assert set(definitions) == {
        "streak_7", "streak_30", "perfect_20", "reviewer_100",
        "detective_10", "detective_streak_5", "top_1_monthly",
    }
