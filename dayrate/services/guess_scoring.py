"""Scoring for the double guessing game (author and rating)."""
from typing import Any, Optional


def score_guess(
    actual_user_id: int,
    actual_rating: Optional[int],
    guessed_user_id: Optional[int] = None,
    guessed_rating: Optional[int] = None,
    tolerance: int = 1,
) -> dict[str, Any]:
    """Compute correctness flags for a guess.

    A field that was not guessed keeps ``None`` flags so "not guessed" and
    "guessed wrong" stay distinguishable.
    """
    is_correct = None
    if guessed_user_id is not None:
        is_correct = guessed_user_id == actual_user_id

    rating_correct = None
    rating_exact = None
    if guessed_rating is not None and actual_rating is not None:
        difference = abs(guessed_rating - actual_rating)
        rating_exact = difference == 0
        rating_correct = difference <= tolerance

    return {
        "entry_user_id": actual_user_id,
        "guessed_user_id": guessed_user_id,
        "is_correct": is_correct,
        "guessed_rating": guessed_rating,
        "actual_rating": actual_rating if guessed_rating is not None else None,
        "rating_correct": rating_correct,
        "rating_exact": rating_exact,
    }
