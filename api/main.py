"""
Tweet Insights API - Main FastAPI Application
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging

from src.tweet_analysis.exceptions import AnalysisError
from src.tweet_analysis.llm_client import GeminiClient
from src.tweet_analysis.translator import Translator

from .config import settings
from .routes import analysis, health


# API Description for Swagger UI
API_DESCRIPTION = """
## Tweet Insights API

Samples a window of tweets from a CSV and uses Gemini to classify sentiment,
extract trends, generate insights and summarise findings.

---

### Endpoints

| Endpoint | Returns |
|----------|---------|
| `/analyze-multiple-tweets-sentiment` | Per-tweet scores (1-5) and a score distribution |
| `/analyze-trends?lang=hindi` | 2-3 trends with descriptions |
| `/generate-insights?lang=marathi` | List of insights |
| `/generate-summary?lang=gujarati` | Short summary |

`lang` is optional. Translation is best-effort: a failed translation returns the English text.

---

### Errors

| Status | Cause |
|--------|-------|
| `404` | CSV source not found |
| `400` | Empty CSV, malformed or empty model output, rejected schema, prompt too large |
| `500` | LLM provider unreachable, unauthorised or over quota |
"""

ENDPOINTS = {
    "analyze-multiple-tweets-sentiment": "Analyze sentiment of multiple tweets",
    "analyze-trends": "Analyze trends (optional lang parameter)",
    "generate-insights": "Generate insights (optional lang parameter)",
    "generate-summary": "Generate summary (optional lang parameter)",
}

# Setup logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown"""
    # Startup
    logger.info("Starting Tweet Insights API...")

    # Check for API key
    if not settings.GEMINI_API_KEY:
        logger.warning("GEMINI_API_KEY not set - LLM calls will fail")

    if not settings.csv_exists():
        logger.warning(f"CSV source not found: {settings.CSV_PATH}")

    # Shared collaborators, built once per process
    app.state.llm_client = GeminiClient(
        api_key=settings.GEMINI_API_KEY,
        model=settings.LLM_MODEL,
        api_base=settings.LLM_API_BASE,
        timeout=settings.LLM_TIMEOUT_SECONDS,
        max_retries=settings.LLM_MAX_RETRIES,
    )
    app.state.translator = Translator(
        app.state.llm_client,
        temperature=settings.TRANSLATION_TEMPERATURE,
        max_workers=settings.TRANSLATION_MAX_WORKERS,
    )
    logger.info(f"LLM client ready: {settings.LLM_MODEL}")
    logger.info(f"Sampling rows [{settings.SAMPLE_START_INDEX}, {settings.SAMPLE_START_INDEX + settings.SAMPLE_MAX_ROWS}) of {settings.CSV_PATH}")

    yield

    # Shutdown
    logger.info("Shutting down Tweet Insights API...")


app = FastAPI(
    title="Tweet Insights API",
    description=API_DESCRIPTION,
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router, prefix=settings.API_PREFIX, tags=["Health"])
app.include_router(analysis.router, prefix=settings.API_PREFIX, tags=["Analysis"])


@app.exception_handler(AnalysisError)
async def analysis_error_handler(request: Request, exc: AnalysisError):
    """Turn pipeline errors into JSON error responses"""
    logger.error(f"{request.url.path} failed with {type(exc).__name__}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.get("/")
async def root():
    """Root endpoint with API info"""
    return {
        "name": "Tweet Insights API",
        "version": "1.0.0",
        "description": "LLM-powered sentiment, trends, insights and summaries for tweet CSVs",
        "docs": "/docs",
        "health": f"{settings.API_PREFIX}/health",
        "endpoints": {
            f"{settings.API_PREFIX}/{path}": description
            for path, description in ENDPOINTS.items()
        }
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
