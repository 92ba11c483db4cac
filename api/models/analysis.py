"""
Pydantic models for analysis API responses
"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class SentimentBucket(BaseModel):
    """Count and share of one sentiment score"""
    count: int = Field(..., ge=0, description="Tweets with this score")
    percentage: float = Field(..., description="Share of all returned results, rounded to 2 decimals")


class SentimentItem(BaseModel):
    """A tweet score as returned by the model"""
    id: str = Field(..., description="Tweet ID from the CSV")
    sentiment_score: int = Field(..., description="1=Strongly Negative ... 5=Strongly Positive")


class SentimentAnalysisResponse(BaseModel):
    """Response for multi-tweet sentiment analysis"""
    count: int = Field(..., description="Number of results the model returned")
    summary: Dict[int, SentimentBucket] = Field(..., description="Distribution keyed by score 1-5")
    results: List[SentimentItem] = Field(..., description="Raw per-tweet results")


class TrendItem(BaseModel):
    title: str = Field(..., description="Concise trend title")
    description: str = Field(..., description="Explanation of the trend")


class TrendsResponse(BaseModel):
    """Response for trend analysis"""
    trends: List[TrendItem] = Field(..., description="Identified trends, in requested language")


class InsightsResponse(BaseModel):
    """Response for insight generation"""
    insights: List[str] = Field(..., description="Insights, in requested language")


class SummaryResponse(BaseModel):
    """Response for summary generation"""
    summary: str = Field(..., description="Summary, in requested language")


class ErrorResponse(BaseModel):
    """Error payload for failed analysis requests"""
    error: str = Field(..., description="Human-readable error message")
    details: Optional[Any] = Field(None, description="Diagnostic details")
    raw_output: Optional[str] = Field(None, description="Unparsed model output, for decode failures")
