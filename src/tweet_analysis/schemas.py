"""
Output schemas for structured generation

Each task has a JSON schema (sent to the model as a constraint) and a
pydantic model (used to validate what comes back).
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Type

from pydantic import BaseModel, Field


class TaskKind(str, Enum):
    """Analysis tasks supported by the pipeline"""
    CLASSIFY = "classify"
    TRENDS = "trends"
    INSIGHTS = "insights"
    SUMMARY = "summary"


class SentimentResult(BaseModel):
    """A single scored tweet"""
    id: str = Field(..., description="The original ID of the tweet")
    sentiment_score: int = Field(..., description="1=Strongly Negative, 5=Strongly Positive")


class SentimentBatch(BaseModel):
    sentiments: List[SentimentResult]


class Trend(BaseModel):
    title: str
    description: str


class TrendList(BaseModel):
    trends: List[Trend]


class InsightList(BaseModel):
    insights: List[str]


class Summary(BaseModel):
    summary: str


@dataclass(frozen=True)
class OutputSchema:
    """Expected shape of a structured LLM response"""
    name: str
    json_schema: Dict[str, Any] = field(hash=False)
    model: Type[BaseModel]


def sentiment_schema(row_count: int) -> OutputSchema:
    """
    Schema for the classification task

    Args:
        row_count: Number of tweets submitted, repeated in the array description
    """
    return OutputSchema(
        name="sentiments",
        json_schema={
            "type": "object",
            "properties": {
                "sentiments": {
                    "type": "array",
                    "description": f"A list of {row_count} sentiment score results.",
                    "items": {
                        "type": "object",
                        "properties": {
                            "id": {"type": "string", "description": "The original ID of the tweet."},
                            "sentiment_score": {
                                "type": "integer",
                                "description": "The classified sentiment score (1=Strongly Negative, 5=Strongly Positive).",
                                "minimum": 1,
                                "maximum": 5,
                            },
                        },
                        "required": ["id", "sentiment_score"],
                    },
                },
            },
            "required": ["sentiments"],
            "additionalProperties": False,
        },
        model=SentimentBatch,
    )


TRENDS_SCHEMA = OutputSchema(
    name="trends",
    json_schema={
        "type": "object",
        "properties": {
            "trends": {
                "type": "array",
                "description": "A list of key trends identified in the data.",
                "items": {
                    "type": "object",
                    "properties": {
                        "title": {"type": "string", "description": "A concise title for the trend."},
                        "description": {"type": "string", "description": "A detailed explanation of the trend."},
                    },
                    "required": ["title", "description"],
                },
            },
        },
        "required": ["trends"],
    },
    model=TrendList,
)

INSIGHTS_SCHEMA = OutputSchema(
    name="insights",
    json_schema={
        "type": "object",
        "properties": {
            "insights": {"type": "array", "items": {"type": "string"}},
        },
        "required": ["insights"],
    },
    model=InsightList,
)

SUMMARY_SCHEMA = OutputSchema(
    name="summary",
    json_schema={
        "type": "object",
        "properties": {
            "summary": {"type": "string"},
        },
        "required": ["summary"],
    },
    model=Summary,
)
