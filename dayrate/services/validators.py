"""Input validation shared by the entry and rating flows.

Every check raises ``ValidationError`` before anything is written.
"""
from datetime import date
from typing import Optional
from urllib.parse import urlparse

from dayrate.config import get_settings
from dayrate.utils.datetime_helpers import parse_date
from dayrate.utils.exceptions import ValidationError


def validate_rating(value, field: str = "rating") -> int:
    """Return ``value`` if it is an integer inside the configured bounds."""
    settings = get_settings()
    # bool is an int subclass; True must not pass as 1
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field} must be an integer")
    if not settings.rating_min <= value <= settings.rating_max:
        raise ValidationError(f"{field} must be between {settings.rating_min} and {settings.rating_max}")
    return value


def validate_comment(value: Optional[str]) -> Optional[str]:
    """Strip the comment; empty comments are stored as ``None``."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError("comment must be a string")
    value = value.strip()
    if not value:
        return None
    max_length = get_settings().comment_max_length
    if len(value) > max_length:
        raise ValidationError(f"comment must be at most {max_length} characters")
    return value


def validate_gif_url(value: Optional[str]) -> Optional[str]:
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValidationError("gif_url must be a string")
    value = value.strip()
    if len(value) > get_settings().gif_url_max_length:
        raise ValidationError("gif_url is too long")
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValidationError("gif_url must be an http(s) URL")
    return value


def validate_review_date(value, expected: date) -> date:
    """Parse the submitted review date and require it to be ``expected``."""
    day = parse_date(value)
    if day is None:
        raise ValidationError("date must use the YYYY-MM-DD format")
    if day != expected:
        raise ValidationError("You can only rate entries from yesterday")
    return day
