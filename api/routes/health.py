"""
Health check endpoints
"""
from fastapi import APIRouter
import time

from ..config import settings

router = APIRouter()

# Track startup time
_startup_time = time.time()


@router.get("/health")
async def health_check():
    """
    Basic health check endpoint.
    Returns service status and uptime.
    """
    return {
        "status": "healthy",
        "version": "1.0.0",
        "uptime_seconds": round(time.time() - _startup_time, 2)
    }


@router.get("/health/ready")
async def readiness_check():
    """
    Readiness check for container orchestration.
    Verifies the API key is configured and the CSV source is present.
    """
    checks = {
        "api_key": bool(settings.GEMINI_API_KEY),
        "csv_source": settings.csv_exists()
    }

    problems = []
    if not checks["api_key"]:
        problems.append("GEMINI_API_KEY is not set")
    if not checks["csv_source"]:
        problems.append(f"CSV source not found: {settings.CSV_PATH}")

    return {
        "ready": all(checks.values()),
        "checks": checks,
        "problems": problems,
        "model": settings.LLM_MODEL,
        "csv_path": settings.CSV_PATH,
        "sample_window": [settings.SAMPLE_START_INDEX, settings.SAMPLE_START_INDEX + settings.SAMPLE_MAX_ROWS]
    }


@router.get("/health/live")
async def liveness_check():
    """
    Liveness check - simple ping to verify service is running.
    """
    return {"alive": True}
