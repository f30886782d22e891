"""FastAPI dependencies."""
import hmac
import logging

import jwt
from fastapi import Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from dayrate.config import get_settings
from dayrate.database import get_db
from dayrate.models.user import User
from dayrate.services.user_service import UserService
from dayrate.utils.exceptions import NotFoundError

logger = logging.getLogger(__name__)


def create_access_token(user_id: int) -> str:
    """Sign a bearer token whose ``sub`` is the user id."""
    settings = get_settings()
    return jwt.encode({"sub": str(user_id)}, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> int:
    settings = get_settings()
    payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    subject = payload.get("sub")
    if subject is None:
        raise jwt.InvalidTokenError("missing sub claim")
    return int(subject)


async def get_current_user(
        authorization: str | None = Header(default=None, alias="Authorization"),
        db: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the authenticated user from the ``Authorization: Bearer`` header."""
    if not authorization:
        raise HTTPException(status_code=401, detail="missing_credentials")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise HTTPException(status_code=401, detail="invalid_authorization_header")

    try:
        user_id = decode_access_token(token)
    except jwt.ExpiredSignatureError as exc:
        raise HTTPException(status_code=401, detail="token_expired") from exc
    except (jwt.InvalidTokenError, ValueError) as exc:
        raise HTTPException(status_code=401, detail="invalid_token") from exc

    try:
        user = await UserService(db).get_user(user_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=401, detail="invalid_token") from exc

    logger.debug(f"Authenticated user via JWT: {user.user_id}")
    return user


async def require_bot_key(
        x_bot_key: str | None = Header(default=None, alias="X-Bot-Key"),
) -> None:
    """Guard for routes called by the chat bot adapter."""
    expected = get_settings().bot_api_key
    if not expected:
        logger.error("Bot route called but BOT_API_KEY is not configured")
        raise HTTPException(status_code=503, detail="bot_access_disabled")
    if not x_bot_key or not hmac.compare_digest(x_bot_key, expected):
        logger.warning("Rejected bot request with invalid X-Bot-Key")
        raise HTTPException(status_code=403, detail="invalid_bot_key")
