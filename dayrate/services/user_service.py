"""User directory lookups."""
import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from dayrate.models.user import User
from dayrate.utils.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class UserService:
    """Resolve and create journal participants."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user(self, user_id: int) -> User:
        """Return the user or raise ``NotFoundError``."""
        user = await self.db.get(User, user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        return user

    async def find_by_username(self, username: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def list_users(self) -> list[User]:
        result = await self.db.execute(select(User).order_by(User.username.asc()))
        return list(result.scalars().all())

    async def create_user(self, username: str, discord_id: Optional[str] = None) -> User:
        username = (username or "").strip()
        if not username:
            raise ValidationError("username is required")

        user = User(username=username, discord_id=discord_id)
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError as exc:
            await self.db.rollback()
            raise ValidationError(f"Username {username} is already taken") from exc

        await self.db.refresh(user)
        logger.info(f"Created user {user.user_id=} {username=}")
        return user
