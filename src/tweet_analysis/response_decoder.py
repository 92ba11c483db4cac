"""
Parses raw LLM text into the structure a task expects
"""

import json
import logging

from pydantic import BaseModel, ValidationError

from .exceptions import MalformedOutput
from .schemas import OutputSchema

logger = logging.getLogger(__name__)


def decode(raw_text: str, schema: OutputSchema) -> BaseModel:
    """
    Parse and validate LLM output

    No repair is attempted: anything that is not valid JSON of the right
    shape is rejected with the raw text attached.

    Raises:
        MalformedOutput: raw_text is not JSON or does not match schema.model
    """
    try:
        data = json.loads(raw_text)
    except json.JSONDecodeError as e:
        logger.error(f"LLM returned invalid JSON for {schema.name}: {e}")
        logger.error(f"Content preview (first 500 chars): {raw_text[:500]}")
        raise MalformedOutput(
            "LLM returned invalid JSON format. Check raw output.",
            details=str(e),
            raw_output=raw_text,
        )

    try:
        return schema.model.model_validate(data)
    except ValidationError as e:
        logger.error(f"LLM output does not match {schema.name} schema: {e.error_count()} errors")
        raise MalformedOutput(
            f"LLM output does not match the expected '{schema.name}' structure.",
            details=e.errors(include_url=False, include_context=False),
            raw_output=raw_text,
        )
