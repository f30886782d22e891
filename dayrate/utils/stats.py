"""Pure statistics helpers used by the recap and leaderboard endpoints."""
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable, Mapping, Optional


def round_one_decimal(value: float) -> float:
    """Round half-up to one decimal place (``2.25`` -> ``2.3``)."""
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _rating_of(entry: Any) -> int:
    if isinstance(entry, Mapping):
        return entry.get("rating") or 0
    return getattr(entry, "rating", 0) or 0


def calculate_average(entries: Optional[Iterable[Any]]) -> float:
    """Average rating of the entries, rounded to one decimal, ``0`` when empty."""
    ratings = [_rating_of(entry) for entry in entries or []]
    if not ratings:
        return 0
    return round_one_decimal(sum(ratings) / len(ratings))


def get_top_n(entries: Optional[list[Mapping[str, Any]]], n: int = 3) -> list[dict[str, Any]]:
    """Return the first ``n`` entries (already sorted by rating descending)."""
    if not entries:
        return []
    return [
        {
            "username": entry.get("username"),
            "rating": entry.get("rating"),
            "comment": entry.get("comment") or None,
            "tags": list(entry.get("tags") or []),
        }
        for entry in entries[:n]
    ]


def calculate_recap_stats(entries: Optional[list[Mapping[str, Any]]], ratings_count: int = 0) -> dict[str, Any]:
    """Summarize a day's entries for the daily recap."""
    return {
        "participant_count": len(entries or []),
        "avg_rating": calculate_average(entries),
        "top3": get_top_n(entries, 3),
        "ratings_given": ratings_count,
    }


def normalize_db_average(value) -> Optional[float]:
    """Round a raw SQL ``AVG`` result, keeping ``None`` for empty sets."""
    if value is None:
        return None
    return round_one_decimal(float(value))


def percent_of(current: int, target: int) -> int:
    """Progress percentage capped at 100."""
    if target <= 0:
        return 100
    ratio = Decimal(current * 100) / Decimal(target)
    return min(100, int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP)))
