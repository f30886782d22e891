"""Tests for guessing game scoring."""
from dayrate.services.guess_scoring import score_guess


def test_correct_author_and_exact_rating():
    result = score_guess(7, 14, guessed_user_id=7, guessed_rating=14)

    assert result["is_correct"] is True
    assert result["rating_exact"] is True
    assert result["rating_correct"] is True
    assert result["actual_rating"] == 14


def test_wrong_author_close_rating():
    result = score_guess(7, 14, guessed_user_id=3, guessed_rating=15, tolerance=1)

    assert result["is_correct"] is False
    assert result["rating_exact"] is False
    assert result["rating_correct"] is True


def test_rating_outside_tolerance():
    result = score_guess(7, 14, guessed_rating=11, tolerance=1)

    assert result["rating_correct"] is False
    assert result["rating_exact"] is False


def test_unguessed_fields_stay_none():
    author_only = score_guess(7, 14, guessed_user_id=7)
    rating_only = score_guess(7, 14, guessed_rating=2)

    assert author_only["rating_correct"] is None
    assert author_only["rating_exact"] is None
    assert author_only["actual_rating"] is None
    assert rating_only["is_correct"] is None
    assert rating_only["guessed_user_id"] is None
    assert rating_only["entry_user_id"] == 7
