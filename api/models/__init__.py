"""Pydantic models for API responses"""
from .analysis import (
    SentimentAnalysisResponse,
    SentimentBucket,
    SentimentItem,
    TrendsResponse,
    TrendItem,
    InsightsResponse,
    SummaryResponse,
    ErrorResponse
)

__all__ = [
    "SentimentAnalysisResponse",
    "SentimentBucket",
    "SentimentItem",
    "TrendsResponse",
    "TrendItem",
    "InsightsResponse",
    "SummaryResponse",
    "ErrorResponse"
]
