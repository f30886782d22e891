"""Tests for datetime helper utilities."""
from datetime import UTC, date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from dayrate.utils.datetime_helpers import (
    ensure_utc,
    format_month,
    get_month_range,
    get_today,
    get_yesterday,
    is_valid_date_format,
    is_valid_month_format,
    parse_date,
)


def test_ensure_utc_none_returns_none():
    """The helper should gracefully handle ``None`` inputs."""

    assert ensure_utc(None) is None


def test_ensure_utc_attaches_timezone_to_naive_datetime():
    """Naive datetimes should be marked as UTC without adjusting the clock."""

    naive = datetime(2024, 5, 1, 12, 30, 0)

    result = ensure_utc(naive)

    assert result.tzinfo is UTC
    assert result.replace(tzinfo=None) == naive


def test_ensure_utc_converts_from_other_timezones_to_utc():
    """Timezone-aware datetimes not already UTC should be converted."""

    eastern = timezone(timedelta(hours=-4))
    aware = datetime(2024, 5, 1, 8, 0, tzinfo=eastern)

    result = ensure_utc(aware)

    assert result.tzinfo is UTC
    assert result.hour == 12


def test_today_and_yesterday_follow_calendar_timezone():
    """Late evening UTC is already tomorrow in Paris."""
    instant = datetime(2024, 3, 14, 23, 30, tzinfo=UTC)

    assert get_today(instant, ZoneInfo("UTC")) == date(2024, 3, 14)
    assert get_today(instant, ZoneInfo("Europe/Paris")) == date(2024, 3, 15)
    assert get_yesterday(instant, ZoneInfo("Europe/Paris")) == date(2024, 3, 14)


def test_yesterday_crosses_month_and_year_boundaries():
    assert get_yesterday(datetime(2024, 3, 1, 9, tzinfo=UTC), ZoneInfo("UTC")) == date(2024, 2, 29)
    assert get_yesterday(datetime(2025, 1, 1, 9, tzinfo=UTC), ZoneInfo("UTC")) == date(2024, 12, 31)


def test_get_month_range_for_explicit_month():
    assert get_month_range("2024-02") == (date(2024, 2, 1), date(2024, 2, 29))
    assert get_month_range("2023-02") == (date(2023, 2, 1), date(2023, 2, 28))
    assert get_month_range("2024-12") == (date(2024, 12, 1), date(2024, 12, 31))


def test_get_month_range_falls_back_to_current_month():
    today = date(2024, 6, 18)

    assert get_month_range(None, today) == (date(2024, 6, 1), date(2024, 6, 30))
    assert get_month_range("June", today) == (date(2024, 6, 1), date(2024, 6, 30))
    assert get_month_range("2024-13", today) == (date(2024, 6, 1), date(2024, 6, 30))


def test_format_validators():
    assert is_valid_date_format("2024-02-29")
    assert not is_valid_date_format("2023-02-29")
    assert not is_valid_date_format("2024-2-9")
    assert not is_valid_date_format(None)
    assert is_valid_month_format("2024-01")
    assert not is_valid_month_format("2024-1")
    assert format_month(date(2024, 1, 31)) == "2024-01"


def test_parse_date_accepts_dates_datetimes_and_iso_strings():
    assert parse_date(date(2024, 1, 2)) == date(2024, 1, 2)
    assert parse_date(datetime(2024, 1, 2, 10, 0)) == date(2024, 1, 2)
    assert parse_date("2024-01-02") == date(2024, 1, 2)
    assert parse_date("2024-01-02T08:00:00Z") == date(2024, 1, 2)
    assert parse_date("yesterday") is None
    assert parse_date(20240102) is None
