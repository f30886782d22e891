"""Streak calculations.

Participation streaks count consecutive calendar days with an entry. Detective
streaks count consecutive correct author guesses, newest first.
"""
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional, Sequence

from dayrate.utils.datetime_helpers import parse_date


@dataclass(frozen=True)
class StreakInfo:
    """Derived participation streak, never stored."""

    current_streak: int = 0
    longest_streak: int = 0
    last_entry_date: Optional[date] = None


def calculate_streak(entry_dates: Iterable, today: date) -> StreakInfo:
    """Compute current and longest streaks from a user's entry dates.

    Args:
        entry_dates: Entry dates in ascending order (``date`` objects or
            ``YYYY-MM-DD`` strings).
        today: Reference day in the calendar timezone.

    The current streak counts backwards from ``today``; a missing entry today
    does not break a streak that reaches yesterday.
    """
    dates = [d for d in (parse_date(value) for value in entry_dates) if d is not None]
    if not dates:
        return StreakInfo()

    longest = 0
    run = 0
    previous: Optional[date] = None
    for day in dates:
        if previous is not None and day == previous:
            continue
        if previous is not None and day - previous == timedelta(days=1):
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        previous = day

    seen = set(dates)
    cursor = today if today in seen else today - timedelta(days=1)
    current = 0
    while cursor in seen:
        current += 1
        cursor -= timedelta(days=1)

    return StreakInfo(current_streak=current, longest_streak=longest, last_entry_date=dates[-1])


def current_correct_run(outcomes_newest_first: Sequence[bool]) -> int:
    """Length of the leading run of ``True`` values."""
    run = 0
    for outcome in outcomes_newest_first:
        if not outcome:
            break
        run += 1
    return run


def longest_correct_run(outcomes_oldest_first: Iterable[bool]) -> int:
    longest = 0
    run = 0
    for outcome in outcomes_oldest_first:
        run = run + 1 if outcome else 0
        longest = max(longest, run)
    return longest
