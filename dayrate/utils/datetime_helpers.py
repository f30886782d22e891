"""Datetime and calendar helpers.

"Today" and "yesterday" are computed from wall-clock time in the configured
calendar timezone on every call; nothing is cached between requests.
"""
import re
from calendar import monthrange
from datetime import date, datetime, timedelta, UTC
from typing import Optional
from zoneinfo import ZoneInfo

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_MONTH_RE = re.compile(r"^\d{4}-\d{2}$")


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Ensure datetime is timezone-aware in UTC.

    Datetimes read back from SQLite are naive but should be treated as UTC.

    Example:
        >>> naive_dt = datetime(2025, 1, 1, 12, 0, 0)
        >>> ensure_utc(naive_dt).tzinfo == UTC
        True

        >>> ensure_utc(None) is None
        True
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def _calendar_tz(tz: Optional[ZoneInfo]) -> ZoneInfo:
    if tz is not None:
        return tz
    from dayrate.config import get_settings
    return get_settings().tzinfo


def get_today(now: Optional[datetime] = None, tz: Optional[ZoneInfo] = None) -> date:
    """Return today's date in the calendar timezone.

    Args:
        now: Reference instant (defaults to the current time). Naive values are
            treated as UTC.
        tz: Calendar timezone (defaults to the configured one).
    """
    calendar_tz = _calendar_tz(tz)
    if now is None:
        now = datetime.now(UTC)
    return ensure_utc(now).astimezone(calendar_tz).date()


def get_yesterday(now: Optional[datetime] = None, tz: Optional[ZoneInfo] = None) -> date:
    """Return yesterday's date in the calendar timezone."""
    return get_today(now, tz) - timedelta(days=1)


def get_month_range(month: Optional[str] = None, today: Optional[date] = None) -> tuple[date, date]:
    """Return the first and last day of a ``YYYY-MM`` month.

    Falls back to the month containing ``today`` when ``month`` is missing or
    malformed.
    """
    if month and is_valid_month_format(month):
        year, month_number = int(month[:4]), int(month[5:7])
        if not 1 <= month_number <= 12:
            year, month_number = None, None
    else:
        year, month_number = None, None

    if year is None:
        reference = today or get_today()
        year, month_number = reference.year, reference.month

    last_day = monthrange(year, month_number)[1]
    return date(year, month_number, 1), date(year, month_number, last_day)


def format_month(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}"


def is_valid_date_format(value) -> bool:
    """Check that a value is a ``YYYY-MM-DD`` string naming a real calendar day."""
    if not value or not isinstance(value, str) or not _DATE_RE.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def is_valid_month_format(value) -> bool:
    """Check that a value is a ``YYYY-MM`` string."""
    if not value or not isinstance(value, str):
        return False
    return bool(_MONTH_RE.match(value))


def parse_date(value) -> Optional[date]:
    """Coerce a date, datetime or ISO string into a ``date``; ``None`` if impossible."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        candidate = value.split("T")[0]
        if is_valid_date_format(candidate):
            return date.fromisoformat(candidate)
    return None
