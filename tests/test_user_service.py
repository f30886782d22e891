"""Tests for the user directory."""
import pytest

from dayrate.services import UserService
from dayrate.utils.exceptions import NotFoundError, ValidationError


@pytest.mark.asyncio
async def test_create_and_lookup_user(db_session):
    service = UserService(db_session)

    user = await service.create_user("  alice  ", discord_id="1234")

    assert user.username == "alice"
    assert (await service.get_user(user.user_id)).discord_id == "1234"
    assert (await service.find_by_username("alice")).user_id == user.user_id
    assert [u.username for u in await service.list_users()] == ["alice"]


@pytest.mark.asyncio
async def test_duplicate_username_is_rejected(db_session):
    service = UserService(db_session)
    await service.create_user("bob")

    with pytest.raises(ValidationError, match="already taken"):
        await service.create_user("bob")


@pytest.mark.asyncio
async def test_blank_username_and_missing_user(db_session):
    service = UserService(db_session)

    with pytest.raises(ValidationError):
        await service.create_user("   ")
    with pytest.raises(NotFoundError):
        await service.get_user(31337)
