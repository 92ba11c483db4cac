"""
Application configuration from environment variables
"""
from pydantic import Field
from pydantic_settings import BaseSettings
from typing import List, Optional
from pathlib import Path


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # API Keys
    GEMINI_API_KEY: str = ""

    # LLM Settings
    LLM_MODEL: str = "gemini-2.5-flash"
    LLM_API_BASE: str = "https://generativelanguage.googleapis.com/v1beta"
    LLM_TIMEOUT_SECONDS: float = Field(120, gt=0)
    LLM_MAX_RETRIES: int = Field(0, ge=0)

    # Tabular source
    CSV_PATH: str = "./India.csv"
    SAMPLE_START_INDEX: int = Field(0, ge=0)
    SAMPLE_MAX_ROWS: int = Field(100, ge=0)

    # Sampling temperatures (None = provider default)
    CLASSIFY_TEMPERATURE: Optional[float] = Field(0.3, ge=0, le=1)
    TRENDS_TEMPERATURE: Optional[float] = Field(0.1, ge=0, le=1)
    INSIGHTS_TEMPERATURE: Optional[float] = Field(None, ge=0, le=1)
    SUMMARY_TEMPERATURE: Optional[float] = Field(None, ge=0, le=1)

    # Translation
    TRANSLATION_TEMPERATURE: float = Field(0.1, ge=0, le=1)
    TRANSLATION_MAX_WORKERS: int = Field(8, ge=1)

    # HTTP
    API_PREFIX: str = "/api"
    CORS_ORIGINS: List[str] = ["*"]

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    def csv_exists(self) -> bool:
        """Whether the configured CSV source is present"""
        return Path(self.CSV_PATH).exists()


# Global settings instance
settings = Settings()
