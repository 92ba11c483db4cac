"""
Analysis endpoints - sentiment, trends, insights and summary over the tweet CSV
"""
from fastapi import APIRouter, Depends, Query
from typing import Optional

from ..dependencies import get_analysis_service
from ..models.analysis import (
    ErrorResponse,
    InsightsResponse,
    SentimentAnalysisResponse,
    SummaryResponse,
    TrendsResponse,
)
from ..services.analysis_service import AnalysisService

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Model output or input unusable"},
    404: {"model": ErrorResponse, "description": "CSV source not found"},
    500: {"model": ErrorResponse, "description": "LLM provider unavailable"},
}

LANG_QUERY = Query(None, description="Target language, e.g. hindi. English or empty skips translation.")


@router.get(
    "/analyze-multiple-tweets-sentiment",
    response_model=SentimentAnalysisResponse,
    responses=ERROR_RESPONSES,
)
def analyze_multiple_tweets_sentiment(service: AnalysisService = Depends(get_analysis_service)):
    """
    Score each sampled tweet from 1 (strongly negative) to 5 (strongly positive).

    Returns the raw per-tweet scores and a 5-bucket count/percentage summary.
    """
    return service.analyze_sentiment()


@router.get("/analyze-trends", response_model=TrendsResponse, responses=ERROR_RESPONSES)
def analyze_trends(
    lang: Optional[str] = LANG_QUERY,
    service: AnalysisService = Depends(get_analysis_service)
):
    """Identify 2-3 significant trends, optionally translated."""
    return service.analyze_trends(lang)


@router.get("/generate-insights", response_model=InsightsResponse, responses=ERROR_RESPONSES)
def generate_insights(
    lang: Optional[str] = LANG_QUERY,
    service: AnalysisService = Depends(get_analysis_service)
):
    """Generate insights from the sampled tweets, optionally translated."""
    return service.generate_insights(lang)


@router.get("/generate-summary", response_model=SummaryResponse, responses=ERROR_RESPONSES)
def generate_summary(
    lang: Optional[str] = LANG_QUERY,
    service: AnalysisService = Depends(get_analysis_service)
):
    """Generate a short summary of key findings, optionally translated."""
    return service.generate_summary(lang)
