"""
Custom exceptions for the tweet analysis pipeline

Each class carries the HTTP status code the API layer answers with.
"""
from typing import Any, Optional


class AnalysisError(Exception):
    """Base exception for analysis pipeline errors"""
    status_code = 500

    def __init__(self, message: str, details: Optional[Any] = None, raw_output: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.raw_output = raw_output

    def to_dict(self) -> dict:
        """Error payload, excluding empty fields"""
        payload = {"error": self.message}
        if self.details is not None:
            payload["details"] = self.details
        if self.raw_output is not None:
            payload["raw_output"] = self.raw_output
        return payload


class SourceError(AnalysisError):
    """Raised when the tabular source cannot be sampled"""
    pass


class SourceNotFound(SourceError):
    """Raised when the CSV file does not exist"""
    status_code = 404


class SourceEmpty(SourceError):
    """Raised when the CSV file contains no data rows"""
    status_code = 400


class SourceUnreadable(SourceError):
    """Raised when the CSV file cannot be decoded or parsed"""
    status_code = 400


class GenerationError(AnalysisError):
    """Raised when the LLM call fails"""
    pass


class UpstreamUnavailable(GenerationError):
    """Raised on transport, auth, quota or timeout failures from the provider"""
    status_code = 500


class EmptyResponse(GenerationError):
    """Raised when the provider returns no text"""
    status_code = 400


class SchemaRejected(GenerationError):
    """Raised when the provider rejects the response schema itself"""
    status_code = 400


class PromptTooLarge(GenerationError):
    """Raised when the prompt exceeds the model's input token limit"""
    status_code = 400


class MalformedOutput(AnalysisError):
    """Raised when LLM output does not parse as the expected structure"""
    status_code = 400
