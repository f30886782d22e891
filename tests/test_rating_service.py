"""Tests for ratings and the guessing game."""
from datetime import date

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from dayrate.models.guess import Guess
from dayrate.models.rating import Rating
from dayrate.models.review_assignment import ReviewAssignment
from dayrate.services import EntryService
from dayrate.utils.exceptions import NotFoundError, ValidationError

YESTERDAY = date(2024, 3, 14)


@pytest.fixture
def service(db_session, clock_at):
    return EntryService(db_session, clock=clock_at(2024, 3, 15))


async def _assigned_pair(service, user_factory, entry_factory, rating=14):
    reviewer = await user_factory()
    author = await user_factory()
    await entry_factory(author, YESTERDAY, rating=rating)
    review = await service.get_next_review(reviewer.user_id)
    assert review["reviewed_user_id"] == author.user_id
    return reviewer, author


async def _count(db_session, model):
    return (await db_session.execute(select(func.count()).select_from(model))).scalar_one()


@pytest.mark.asyncio
async def test_rating_without_guess(service, db_session, user_factory, entry_factory):
    reviewer, author = await _assigned_pair(service, user_factory, entry_factory)

    result = await service.save_rating(reviewer.user_id, author.user_id, "2024-03-14", 12)

    assert result == {"new_badges": [], "guess_result": None, "detective_streak": 0}
    stored = await service.ratings.get_for_reviewer(reviewer.user_id, YESTERDAY)
    assert stored.to_user_id == author.user_id
    assert stored.rating == 12
    assert await _count(db_session, Guess) == 0


@pytest.mark.asyncio
async def test_rating_with_correct_guesses(service, user_factory, entry_factory):
    reviewer, author = await _assigned_pair(service, user_factory, entry_factory, rating=14)

    result = await service.save_rating(
        reviewer.user_id, author.user_id, "2024-03-14", 12,
        guessed_user_id=author.user_id, guessed_rating=15,
    )

    assert result["guess_result"] == {
        "is_correct": True,
        "rating_correct": True,
        "rating_exact": False,
        "actual_user_id": author.user_id,
        "actual_rating": 14,
    }
    assert result["detective_streak"] == 1


@pytest.mark.asyncio
async def test_wrong_author_guess(service, user_factory, entry_factory):
    reviewer, author = await _assigned_pair(service, user_factory, entry_factory)
    bystander = await user_factory()

    result = await service.save_rating(
        reviewer.user_id, author.user_id, "2024-03-14", 12, guessed_user_id=bystander.user_id,
    )

    assert result["guess_result"]["is_correct"] is False
    assert result["guess_result"]["rating_correct"] is None
    assert result["detective_streak"] == 0


@pytest.mark.asyncio
async def test_rating_must_target_yesterday(service, user_factory, entry_factory):
    reviewer, author = await _assigned_pair(service, user_factory, entry_factory)

    with pytest.raises(ValidationError, match="only rate entries from yesterday"):
        await service.save_rating(reviewer.user_id, author.user_id, "2024-03-15", 12)
    with pytest.raises(ValidationError, match="only rate entries from yesterday"):
        await service.save_rating(reviewer.user_id, author.user_id, "2024-03-13", 12)


@pytest.mark.asyncio
@pytest.mark.parametrize("rating", [-1, 21, 3.5])
async def test_rating_bounds(service, user_factory, entry_factory, rating):
    reviewer, author = await _assigned_pair(service, user_factory, entry_factory)

    with pytest.raises(ValidationError):
        await service.save_rating(reviewer.user_id, author.user_id, "2024-03-14", rating)


@pytest.mark.asyncio
async def test_rating_must_match_assignment(service, user_factory, entry_factory):
    reviewer, author = await _assigned_pair(service, user_factory, entry_factory)
    other = await user_factory()
    await entry_factory(other, YESTERDAY)

    with pytest.raises(ValidationError, match="not assigned to you"):
        await service.save_rating(reviewer.user_id, other.user_id, "2024-03-14", 12)


@pytest.mark.asyncio
async def test_rating_without_assignment(service, user_factory, entry_factory):
    reviewer = await user_factory()
    author = await user_factory()
    await entry_factory(author, YESTERDAY)

    with pytest.raises(ValidationError, match="not assigned to you"):
        await service.save_rating(reviewer.user_id, author.user_id, "2024-03-14", 12)


@pytest.mark.asyncio
async def test_second_rating_is_rejected(service, db_session, user_factory, entry_factory):
    reviewer, author = await _assigned_pair(service, user_factory, entry_factory)
    await service.save_rating(reviewer.user_id, author.user_id, "2024-03-14", 12)

    with pytest.raises(ValidationError, match="already rated"):
        await service.save_rating(reviewer.user_id, author.user_id, "2024-03-14", 18)

    assert await _count(db_session, Rating) == 1


@pytest.mark.asyncio
async def test_unknown_target_user(service, user_factory, entry_factory):
    reviewer, _ = await _assigned_pair(service, user_factory, entry_factory)

    with pytest.raises(NotFoundError):
        await service.save_rating(reviewer.user_id, 999999, "2024-03-14", 12)


@pytest.mark.asyncio
async def test_guess_failure_keeps_rating(service, db_session, user_factory, entry_factory):
    reviewer, author = await _assigned_pair(service, user_factory, entry_factory)
    # The session rollback expires loaded users
    reviewer_id, author_id = reviewer.user_id, author.user_id

    async def broken_create_once(guesser_id, day, **values):
        raise OperationalError("INSERT INTO guesses", {}, Exception("disk I/O error"))

    service.guesses.create_once = broken_create_once

    result = await service.save_rating(
        reviewer_id, author_id, "2024-03-14", 12, guessed_user_id=author_id,
    )

    assert result["guess_result"] is None
    assert await service.ratings.has_rated_for_date(reviewer_id, YESTERDAY)
    assert await _count(db_session, Guess) == 0


@pytest.mark.asyncio
async def test_repeat_rating_checked_before_user_lookups(service, user_factory, entry_factory):
    reviewer, author = await _assigned_pair(service, user_factory, entry_factory)
    await service.save_rating(reviewer.user_id, author.user_id, "2024-03-14", 12)

    with pytest.raises(ValidationError, match="already rated"):
        await service.save_rating(
            reviewer.user_id, author.user_id, "2024-03-14", 18, guessed_user_id=999999,
        )
    with pytest.raises(ValidationError, match="already rated"):
        await service.save_rating(reviewer.user_id, 999999, "2024-03-14", 18)


@pytest.mark.asyncio
async def test_three_user_round(db_session, user_factory, entry_factory, clock_at):
    """Three users post on day 1; on day 2 each reviews a different entry."""
    first, second, third = [await user_factory() for _ in range(3)]
    ratings = {}
    for rating, user in zip((8, 13, 19), (first, second, third)):
        await entry_factory(user, YESTERDAY, rating=rating)
        ratings[user.user_id] = rating

    # Two pairings fixed up front leave the first user's entry for the third
    db_session.add_all([
        ReviewAssignment(reviewer_id=first.user_id, reviewee_id=second.user_id, date=YESTERDAY),
        ReviewAssignment(reviewer_id=second.user_id, reviewee_id=third.user_id, date=YESTERDAY),
    ])
    await db_session.commit()
    expected = {
        first.user_id: second.user_id,
        second.user_id: third.user_id,
        third.user_id: first.user_id,
    }

    service = EntryService(db_session, clock=clock_at(2024, 3, 15))
    for reviewer_id in (third.user_id, first.user_id, second.user_id):
        review = await service.get_next_review(reviewer_id)
        target = review["reviewed_user_id"]
        assert target == expected[reviewer_id]

        result = await service.save_rating(
            reviewer_id, target, "2024-03-14", 10,
            guessed_user_id=target, guessed_rating=ratings[target],
        )
        assert result["guess_result"]["is_correct"] is True
        assert result["guess_result"]["rating_exact"] is True
        assert await service.get_next_review(reviewer_id) == {"done": True}

    assert await service.ratings.count_by_date(YESTERDAY) == 3
