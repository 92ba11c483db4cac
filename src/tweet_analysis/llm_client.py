"""
Gemini REST client for schema-constrained generation

All provider specifics stay in this module: callers see generate() and the
exception classes from .exceptions.
"""

import json
import logging
import re
import time
from typing import Any, Dict, Optional

import requests
from requests.exceptions import ChunkedEncodingError, ConnectionError, Timeout

from .exceptions import (
    EmptyResponse,
    PromptTooLarge,
    SchemaRejected,
    UpstreamUnavailable,
)
from .schemas import OutputSchema

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
RETRY_DELAY_BASE = 2  # seconds (exponential backoff: 2s, 4s, 8s)
RETRYABLE_EXCEPTIONS = (
    ChunkedEncodingError,  # Response ended prematurely
    ConnectionError,       # Network connectivity issues
    Timeout,               # Request took too long
)

# ```json {...}``` or ```json\n{...}``` with no separate closing line
SHORT_FENCE_RX = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.S)

# JSON-Schema keywords the provider's response schema dialect understands
SUPPORTED_SCHEMA_KEYS = {
    "type", "format", "description", "nullable", "enum", "properties",
    "required", "items", "minItems", "maxItems", "minimum", "maximum",
}


def to_provider_schema(schema: Dict[str, Any]) -> Dict[str, Any]:
    """Convert a JSON schema to the provider dialect (upper-case types, no unsupported keys)"""
    converted = {}
    for key, value in schema.items():
        if key not in SUPPORTED_SCHEMA_KEYS:
            continue
        if key == "type":
            converted[key] = value.upper()
        elif key == "properties":
            converted[key] = {name: to_provider_schema(sub) for name, sub in value.items()}
        elif key == "items":
            converted[key] = to_provider_schema(value)
        else:
            converted[key] = value
    return converted


def strip_code_fence(content: str) -> str:
    """Remove a surrounding ```json ... ``` block if present"""
    content = content.strip()
    if not content.startswith("```"):
        return content

    lines = content.split("\n")
    if len(lines) <= 2:
        # Fence opened and closed on the same or adjacent lines
        match = SHORT_FENCE_RX.match(content)
        return match.group(1) if match else content

    start_idx = 1
    end_idx = len(lines) - 1
    while start_idx < len(lines) and (lines[start_idx].strip() == '' or lines[start_idx].strip().startswith('```') or lines[start_idx].strip() == 'json'):
        start_idx += 1
    while end_idx > 0 and (lines[end_idx].strip() == '' or lines[end_idx].strip().startswith('```')):
        end_idx -= 1
    return "\n".join(lines[start_idx:end_idx + 1])


class GeminiClient:
    """Client for the Gemini generateContent API"""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        api_base: str = DEFAULT_API_BASE,
        timeout: float = 120,
        max_retries: int = 0,
    ):
        """
        Args:
            api_key: Gemini API key
            model: Model identifier
            api_base: REST base URL
            timeout: Seconds before a call is abandoned
            max_retries: Extra attempts on transient transport errors
        """
        self.api_key = api_key
        self.model = model
        self.endpoint = f"{api_base.rstrip('/')}/models/{model}:generateContent"
        self.timeout = timeout
        self.max_retries = max_retries

    def generate(
        self,
        prompt: str,
        schema: Optional[OutputSchema] = None,
        temperature: Optional[float] = None,
    ) -> str:
        """
        Submit a prompt and return the model's text

        Args:
            prompt: Full prompt text
            schema: Expected output shape; when given the model is asked for JSON
            temperature: Sampling temperature, provider default when None

        Returns:
            Raw response text (not validated against the schema)

        Raises:
            UpstreamUnavailable, EmptyResponse, SchemaRejected, PromptTooLarge
        """
        logger.info(f"Calling LLM: {self.model}")
        logger.info(f"Prompt size: {len(prompt)} characters ({len(prompt.split())} words)")

        payload = self._build_payload(prompt, schema, temperature)
        start_time = time.time()
        response = self._post(payload)
        elapsed_time = time.time() - start_time
        logger.info(f"API response received in {elapsed_time:.2f} seconds")

        if response.status_code >= 400:
            raise self._classify_http_error(response)

        try:
            result = response.json()
        except ValueError as e:
            raise UpstreamUnavailable(
                "Invalid JSON response from LLM API",
                details=str(e),
            )

        raw_text = self._extract_text(result)
        content = strip_code_fence(raw_text)
        if not content:
            logger.error(f"LLM returned empty response: {json.dumps(result)[:500]}")
            raise EmptyResponse("LLM returned empty response.", raw_output=raw_text)

        usage = result.get("usageMetadata")
        if usage:
            logger.info(
                f"Token usage - Prompt: {usage.get('promptTokenCount', 'N/A')}, "
                f"Completion: {usage.get('candidatesTokenCount', 'N/A')}, "
                f"Total: {usage.get('totalTokenCount', 'N/A')}"
            )

        logger.info(f"✅ Received {len(content)} characters")
        return content

    def _build_payload(
        self,
        prompt: str,
        schema: Optional[OutputSchema],
        temperature: Optional[float],
    ) -> Dict[str, Any]:
        generation_config: Dict[str, Any] = {}
        if temperature is not None:
            generation_config["temperature"] = temperature
        if schema is not None:
            generation_config["responseMimeType"] = "application/json"
            generation_config["responseSchema"] = to_provider_schema(schema.json_schema)

        payload: Dict[str, Any] = {"contents": [{"parts": [{"text": prompt}]}]}
        if generation_config:
            payload["generationConfig"] = generation_config
        return payload

    def _post(self, payload: Dict[str, Any]) -> requests.Response:
        """POST with retries on transient transport errors"""
        headers = {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json",
        }

        for attempt in range(self.max_retries + 1):
            try:
                return requests.post(
                    self.endpoint,
                    headers=headers,
                    json=payload,
                    timeout=self.timeout,
                )
            except RETRYABLE_EXCEPTIONS as e:
                if attempt < self.max_retries:
                    delay = RETRY_DELAY_BASE * (2 ** attempt)
                    logger.warning(f"⚠️ Retryable error on attempt {attempt + 1}/{self.max_retries + 1}: {type(e).__name__}: {e}")
                    logger.warning(f"Retrying in {delay} seconds...")
                    time.sleep(delay)
                else:
                    logger.error(f"❌ LLM API unreachable after {attempt + 1} attempt(s): {e}")
                    raise UpstreamUnavailable(
                        f"LLM API call failed after {attempt + 1} attempt(s)",
                        details=str(e),
                    )
            except requests.exceptions.RequestException as e:
                logger.error(f"❌ LLM API request failed: {e}")
                raise UpstreamUnavailable("LLM API call failed", details=str(e))

    def _classify_http_error(self, response: requests.Response) -> Exception:
        """Map a provider error response onto the pipeline's error classes"""
        try:
            body = response.json()
        except ValueError:
            body = None

        error = body.get("error") if isinstance(body, dict) else None
        if isinstance(error, dict) and error.get("message"):
            message = error["message"]
        else:
            message = response.text[:1000]

        logger.error(f"❌ HTTP error from LLM API ({response.status_code}): {message[:1000]}")

        if response.status_code == 400:
            lowered = message.lower()
            if "token" in lowered and ("exceed" in lowered or "limit" in lowered):
                return PromptTooLarge(
                    "Input too large for model. Try a smaller CSV or increase sampling limit.",
                    details=message,
                )
            if "schema" in lowered:
                return SchemaRejected("Schema validation failed, check config.", details=message)

        return UpstreamUnavailable(
            f"LLM API HTTP error ({response.status_code})",
            details=message,
        )

    @staticmethod
    def _extract_text(result: Dict[str, Any]) -> str:
        """Concatenate the text parts of the first candidate"""
        candidates = result.get("candidates") or []
        if not candidates:
            return ""
        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(part.get("text", "") for part in parts)
