"""Pytest configuration and fixtures."""
import os
from datetime import datetime, UTC
from pathlib import Path
from uuid import uuid4

import pytest
from alembic import command
from alembic.config import Config as AlembicConfig
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

# Ensure the application uses a dedicated SQLite database during tests
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["TIMEZONE"] = "UTC"
os.environ["BOT_API_KEY"] = "test-bot-key"

from dayrate.config import get_settings
from dayrate.database import Base


BASE_DIR = Path(__file__).resolve().parent.parent
TEST_DB_PATH = BASE_DIR / "test.db"
settings = get_settings()


def fixed_clock(year: int, month: int, day: int, hour: int = 12):
    """Clock returning a fixed instant, for services that compute today/yesterday."""
    instant = datetime(year, month, day, hour, tzinfo=UTC)
    return lambda: instant


@pytest.fixture(scope="session", autouse=True)
def apply_migrations():
    """Apply database migrations against the test database."""
    if TEST_DB_PATH.exists():
        try:
            TEST_DB_PATH.unlink()
        except PermissionError:
            pass  # Migrations run against the existing file

    alembic_cfg = AlembicConfig(str(BASE_DIR / "alembic.ini"))
    alembic_cfg.set_main_option("sqlalchemy.url", settings.database_url)
    command.upgrade(alembic_cfg, "head")

    yield

    if TEST_DB_PATH.exists():
        try:
            TEST_DB_PATH.unlink()
        except PermissionError:
            # On Windows the file may still be in use; cleaned up next run
            pass


@pytest.fixture
async def test_engine():
    """Create test database engine using the same database as migrations."""
    engine = create_async_engine(
        settings.database_url,
        echo=False,
        pool_pre_ping=True,
    )

    yield engine

    # Leave every test with empty tables
    async with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            await conn.execute(delete(table))
    await engine.dispose()


@pytest.fixture
async def db_session(test_engine):
    """Create test database session."""
    async_session = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()
        await session.close()


@pytest.fixture
async def session_factory(test_engine):
    """Session maker for tests that need several independent sessions."""
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_app(test_engine):
    """Create test app with database override."""
    from dayrate.main import app
    from dayrate.database import get_db

    async def override_get_db():
        async_session = async_sessionmaker(
            test_engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        async with async_session() as session:
            try:
                yield session
            finally:
                await session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def user_factory(db_session):
    """Factory for creating test users with unique usernames."""
    from dayrate.services import UserService

    user_service = UserService(db_session)

    async def _create_user(username: str | None = None, discord_id: str | None = None):
        if username is None:
            username = f"user{uuid4().hex[:8]}"
        return await user_service.create_user(username, discord_id=discord_id)

    return _create_user


@pytest.fixture
async def entry_factory(db_session):
    """Insert an entry directly for a given day."""
    from dayrate.models.entry import Entry

    async def _create_entry(user, day, rating: int = 10, comment: str | None = None, tags=None):
        entry = Entry(
            user_id=user.user_id,
            date=day,
            rating=rating,
            comment=comment,
            tags=list(tags or []),
        )
        db_session.add(entry)
        await db_session.commit()
        await db_session.refresh(entry)
        return entry

    return _create_entry


@pytest.fixture
def clock_at():
    """Build a fixed clock: ``clock_at(2024, 3, 15)``."""
    return fixed_clock
