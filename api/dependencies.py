"""
FastAPI dependency providers

The LLM client and translator are built once at startup (see main.lifespan)
and shared by every request through app.state.
"""
from fastapi import Request

from src.tweet_analysis.schemas import TaskKind

from .config import settings
from .services.analysis_service import AnalysisService


def get_analysis_service(request: Request) -> AnalysisService:
    """Request-scoped orchestrator wired to the process-wide collaborators"""
    state = request.app.state
    return AnalysisService(
        client=state.llm_client,
        translator=state.translator,
        csv_path=settings.CSV_PATH,
        start_index=settings.SAMPLE_START_INDEX,
        max_rows=settings.SAMPLE_MAX_ROWS,
        temperatures={
            TaskKind.CLASSIFY: settings.CLASSIFY_TEMPERATURE,
            TaskKind.TRENDS: settings.TRENDS_TEMPERATURE,
            TaskKind.INSIGHTS: settings.INSIGHTS_TEMPERATURE,
            TaskKind.SUMMARY: settings.SUMMARY_TEMPERATURE,
        },
    )
