"""Tests for recap statistics helpers."""
from dayrate.utils.stats import (
    calculate_average,
    calculate_recap_stats,
    get_top_n,
    normalize_db_average,
    percent_of,
    round_one_decimal,
)


def _entries(*ratings):
    return [
        {"username": f"user{i}", "rating": rating, "comment": f"day {i}", "tags": ["sport"]}
        for i, rating in enumerate(ratings)
    ]


def test_average_of_empty_list_is_zero():
    assert calculate_average([]) == 0
    assert calculate_average(None) == 0


def test_average_is_rounded_to_one_decimal():
    assert calculate_average(_entries(10, 15, 12)) == 12.3
    assert calculate_average(_entries(1, 2)) == 1.5
    assert calculate_average(_entries(20)) == 20


def test_round_one_decimal_rounds_half_up():
    assert round_one_decimal(2.25) == 2.3
    assert round_one_decimal(2.35) == 2.4
    assert round_one_decimal(12.0) == 12.0


def test_top_n_keeps_order_and_limits():
    top = get_top_n(_entries(18, 15, 12, 9), 3)

    assert [row["rating"] for row in top] == [18, 15, 12]
    assert top[0] == {"username": "user0", "rating": 18, "comment": "day 0", "tags": ["sport"]}
    assert get_top_n([], 3) == []


def test_top_n_with_fewer_entries():
    assert len(get_top_n(_entries(5), 3)) == 1


def test_recap_stats():
    stats = calculate_recap_stats(_entries(18, 15, 12, 9), ratings_count=3)

    assert stats["participant_count"] == 4
    assert stats["avg_rating"] == 13.5
    assert len(stats["top3"]) == 3
    assert stats["ratings_given"] == 3


def test_recap_stats_empty_day():
    stats = calculate_recap_stats([])

    assert stats == {"participant_count": 0, "avg_rating": 0, "top3": [], "ratings_given": 0}


def test_normalize_db_average_and_percent():
    assert normalize_db_average(None) is None
    assert normalize_db_average(13.333333) == 13.3
    assert percent_of(3, 7) == 43
    assert percent_of(1, 2) == 50
    assert percent_of(45, 30) == 100
