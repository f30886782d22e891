"""Application configuration management."""
from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from sqlalchemy.engine.url import make_url, URL
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import logging

SQLITE_LOCAL_URL = "sqlite+aiosqlite:///./dayrate.db"
DEFAULT_SECRET_KEY = "dev-secret-key-change-in-production"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = SQLITE_LOCAL_URL
    db_pool_size: int = 5
    db_max_overflow: int = 10

    # Application
    frontend_url: str = "http://localhost:5173"
    environment: str = "development"
    secret_key: str = DEFAULT_SECRET_KEY
    jwt_algorithm: str = "HS256"
    bot_api_key: str = ""  # Shared secret for the Discord bot adapter

    # Calendar used for "today" / "yesterday" cutover
    timezone: str = "UTC"

    # Entry rules
    rating_min: int = 0
    rating_max: int = 20
    comment_max_length: int = 1000
    gif_url_max_length: int = 500
    max_tags_per_entry: int = 10

    # Guessing game
    guess_rating_tolerance: int = 1  # Points of slack for a "close" rating guess

    # Review assignment
    assignment_max_attempts: int = 2  # First attempt plus one retry after a uniqueness conflict

    @model_validator(mode="after")
    def validate_all_config(self):
        """Validate security and calendar configuration and normalize Postgres URLs."""
        logger = logging.getLogger(__name__)

        if self.environment == "production":
            if self.secret_key == DEFAULT_SECRET_KEY:
                raise ValueError("secret_key must be changed from default value in production")

        if self.jwt_algorithm not in ["HS256", "HS384", "HS512"]:
            raise ValueError(f"Unsupported JWT algorithm: {self.jwt_algorithm}. Use HS256, HS384, or HS512.")

        if (self.rating_min, self.rating_max) != (0, 20):
            raise ValueError("rating bounds are fixed at 0..20 by the database check constraints")

        if self.guess_rating_tolerance < 0:
            raise ValueError("guess_rating_tolerance cannot be negative")

        if self.assignment_max_attempts < 1:
            raise ValueError("assignment_max_attempts must be at least 1")

        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {self.timezone}") from exc

        url = self.database_url
        if not url:
            logger.warning("Empty DATABASE_URL, using SQLite fallback")
            self.database_url = SQLITE_LOCAL_URL
            return self

        parsed: Optional[URL] = None
        try:
            parsed = make_url(url)
        except Exception as e:  # pragma: no cover - defensive fallback
            logger.error(f"Failed to parse DATABASE_URL: {e}")
            self.database_url = SQLITE_LOCAL_URL
            return self

        drivername = parsed.drivername
        if drivername.startswith("postgres") and "+asyncpg" not in drivername:
            old_drivername = drivername
            parsed = parsed.set(drivername="postgresql+asyncpg")
            logger.info(f"Driver normalized: {old_drivername} -> {parsed.drivername}")

        # Use render_as_string to properly re-encode special characters in password
        self.database_url = parsed.render_as_string(hide_password=False)
        return self

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
