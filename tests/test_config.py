"""Tests for settings validation."""
import pytest
from pydantic import ValidationError

from dayrate.config import Settings


def test_default_rating_bounds_are_accepted():
    settings = Settings()
    assert (settings.rating_min, settings.rating_max) == (0, 20)


@pytest.mark.parametrize("bounds", [{"rating_max": 10}, {"rating_min": 1}, {"rating_min": 5, "rating_max": 30}])
def test_rating_bounds_must_match_database_constraints(bounds):
    with pytest.raises(ValidationError, match="fixed at 0..20"):
        Settings(**bounds)


def test_unknown_timezone_is_rejected():
    with pytest.raises(ValidationError, match="Unknown timezone"):
        Settings(timezone="Mars/Olympus_Mons")


def test_postgres_url_uses_asyncpg():
    settings = Settings(database_url="postgresql://user:pw@db.example.com:5432/dayrate")
    assert settings.database_url.startswith("postgresql+asyncpg://")
