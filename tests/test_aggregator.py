"""
Tests for the sentiment distribution
"""
import pytest

from src.tweet_analysis.aggregator import aggregate
from src.tweet_analysis.schemas import SentimentResult


def results(*scores):
    return [SentimentResult(id=str(i), sentiment_score=s) for i, s in enumerate(scores)]


def test_empty_input_gives_zero_buckets():
    summary = aggregate([])

    assert summary == {score: {"count": 0, "percentage": 0} for score in range(1, 6)}


def test_three_way_split():
    summary = aggregate(results(5, 1, 3))

    assert summary[1] == {"count": 1, "percentage": 33.33}
    assert summary[3] == {"count": 1, "percentage": 33.33}
    assert summary[5] == {"count": 1, "percentage": 33.33}
    assert summary[2] == {"count": 0, "percentage": 0}
    assert summary[4] == {"count": 0, "percentage": 0}


def test_out_of_range_scores_excluded_but_counted_in_divisor():
    summary = aggregate(results(5, 5, 0, 7))

    assert sum(bucket["count"] for bucket in summary.values()) == 2
    assert summary[5]["percentage"] == 50.0


@pytest.mark.parametrize("scores", [
    (1,),
    (1, 2, 3, 4, 5),
    (2, 2, 4),
    (1, 1, 1, 2, 3, 3, 5),
    tuple(range(1, 6)) * 20 + (3,),
])
def test_valid_scores_fill_buckets_and_sum_to_100(scores):
    summary = aggregate(results(*scores))

    assert sum(bucket["count"] for bucket in summary.values()) == len(scores)
    assert sum(bucket["percentage"] for bucket in summary.values()) == pytest.approx(100.0, abs=0.05)
