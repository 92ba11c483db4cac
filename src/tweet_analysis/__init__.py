"""
Tweet analysis - LLM-backed sentiment, trends, insights and summaries

Flow: sample CSV window -> build prompt -> generate -> decode -> aggregate/translate
"""

from .aggregator import aggregate
from .exceptions import (
    AnalysisError,
    EmptyResponse,
    GenerationError,
    MalformedOutput,
    PromptTooLarge,
    SchemaRejected,
    SourceEmpty,
    SourceError,
    SourceNotFound,
    SourceUnreadable,
    UpstreamUnavailable,
)
from .llm_client import GeminiClient
from .prompt_builder import PromptDocument, build_prompt, estimate_tokens
from .response_decoder import decode
from .sampler import CSVSampler, SampleWindow, row_id, row_text
from .schemas import OutputSchema, SentimentResult, TaskKind, Trend
from .translator import Translator

__all__ = [
    # Pipeline stages
    'CSVSampler',
    'SampleWindow',
    'row_id',
    'row_text',
    'build_prompt',
    'estimate_tokens',
    'PromptDocument',
    'GeminiClient',
    'decode',
    'aggregate',
    'Translator',
    # Schemas
    'OutputSchema',
    'SentimentResult',
    'TaskKind',
    'Trend',
    # Errors
    'AnalysisError',
    'SourceError',
    'SourceNotFound',
    'SourceEmpty',
    'SourceUnreadable',
    'GenerationError',
    'UpstreamUnavailable',
    'EmptyResponse',
    'SchemaRejected',
    'PromptTooLarge',
    'MalformedOutput',
]
