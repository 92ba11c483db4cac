"""
Folds per-tweet sentiment scores into a 5-bucket distribution
"""

from typing import Dict, Sequence

from .schemas import SentimentResult

SCORES = (1, 2, 3, 4, 5)

SentimentDistribution = Dict[int, Dict[str, float]]


def aggregate(results: Sequence[SentimentResult]) -> SentimentDistribution:
    """
    Count scores per bucket and convert to percentages

    Out-of-range scores are left out of the buckets but still count toward
    the divisor, which is the number of results the model returned.

    Returns:
        {score: {"count": int, "percentage": float}} for scores 1..5
    """
    summary: SentimentDistribution = {score: {"count": 0, "percentage": 0} for score in SCORES}

    actual_count = len(results)
    if actual_count == 0:
        return summary

    for item in results:
        if item.sentiment_score in summary:
            summary[item.sentiment_score]["count"] += 1

    for bucket in summary.values():
        bucket["percentage"] = round(bucket["count"] / actual_count * 100, 2)

    return summary
