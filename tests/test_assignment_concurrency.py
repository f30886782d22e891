"""Assignment races between independent database sessions."""
import asyncio
from datetime import date

import pytest

from dayrate.repositories import AssignmentRepository
from dayrate.services import EntryService

YESTERDAY = date(2024, 3, 14)


async def _next_review(session_factory, clock_at, user_id):
    async with session_factory() as session:
        service = EntryService(session, clock=clock_at(2024, 3, 15))
        return await service.get_next_review(user_id)


async def _assignments(session_factory):
    async with session_factory() as session:
        return await AssignmentRepository(session).list_by_date(YESTERDAY)


@pytest.mark.asyncio
async def test_same_reviewer_in_two_sessions_gets_one_assignment(
    session_factory, clock_at, user_factory, entry_factory
):
    reviewer = await user_factory()
    authors = [await user_factory() for _ in range(3)]
    for author in authors:
        await entry_factory(author, YESTERDAY)
    reviewer_id = reviewer.user_id

    first, second = await asyncio.gather(
        _next_review(session_factory, clock_at, reviewer_id),
        _next_review(session_factory, clock_at, reviewer_id),
    )

    assert first["done"] is False
    assert first == second
    rows = await _assignments(session_factory)
    assert len(rows) == 1
    assert rows[0].reviewer_id == reviewer_id
    assert rows[0].reviewee_id == first["reviewed_user_id"]


@pytest.mark.asyncio
async def test_two_reviewers_race_for_the_last_entry(
    session_factory, clock_at, user_factory, entry_factory
):
    author = await user_factory()
    await entry_factory(author, YESTERDAY)
    reviewer_ids = [(await user_factory()).user_id for _ in range(2)]
    author_id = author.user_id

    results = await asyncio.gather(
        *(_next_review(session_factory, clock_at, reviewer_id) for reviewer_id in reviewer_ids)
    )

    winners = [result for result in results if not result["done"]]
    assert len(winners) == 1
    assert winners[0]["reviewed_user_id"] == author_id
    assert {"done": True} in results
    rows = await _assignments(session_factory)
    assert len(rows) == 1
    assert rows[0].reviewee_id == author_id
