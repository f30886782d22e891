"""Database connection and session management."""
import logging
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from dayrate.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

# Determine if we need SSL (for hosted databases)
connect_args = {}
needs_ssl = "sqlite" not in settings.database_url and settings.environment == "production"

if needs_ssl:
    connect_args["ssl"] = "require"
    logger.debug("SSL connection enabled (ssl=require)")

engine_kwargs = {
    "echo": False,
    "future": True,
    "connect_args": connect_args,
    "pool_pre_ping": True,
}

if "sqlite" not in settings.database_url:
    # SQLite uses a static pool; sizing only applies to server databases
    engine_kwargs["pool_size"] = max(1, settings.db_pool_size)
    engine_kwargs["max_overflow"] = max(0, settings.db_max_overflow)
    engine_kwargs["pool_recycle"] = 3600

try:
    engine = create_async_engine(settings.database_url, **engine_kwargs)
    logger.debug("Database engine created successfully")
except Exception as e:
    logger.error(f"Failed to create database engine: {e}")
    raise

# Session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)

# Base class for models
Base = declarative_base()


# Dependency for FastAPI
async def get_db():
    """FastAPI dependency to get database session."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()
