"""
Prompt construction for each analysis task

Rendering is deterministic: the same task and window always produce the
same document.
"""

import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from .sampler import Row, SampleWindow, row_id, row_text
from .schemas import (
    INSIGHTS_SCHEMA,
    SUMMARY_SCHEMA,
    TRENDS_SCHEMA,
    OutputSchema,
    TaskKind,
    sentiment_schema,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PromptDocument:
    """A rendered prompt plus the schema its answer must follow"""
    task: TaskKind
    text: str
    schema: OutputSchema


@dataclass(frozen=True)
class TaskSpec:
    """How a task renders rows and what it expects back"""
    kind: TaskKind
    render_row: Callable[[Row], str]
    instruction: str
    schema_for: Callable[[int], OutputSchema]


def render_id_text(row: Row) -> str:
    return f"ID: {row_id(row)} | TEXT: {row_text(row)}"


def render_values(row: Row) -> str:
    return ",".join(str(v) for v in row.values())


def estimate_tokens(text: str) -> int:
    """Rough token count: ~4 characters per token plus room for the answer"""
    return math.ceil(len(text) / 4) + 500


CLASSIFY_INSTRUCTION = """**Role:** You are a **proud Indian** and a multilingual sentiment analysis expert. Your classification must reflect an informed, nuanced perspective focused on **national interest, cultural pride, and constructive commentary**.
**CRITICAL CONSTRAINT: Do not return all 3s. The score distribution must reflect genuine positive and negative sentiment based on the rules and examples provided.**

Analyze the sentiment for each of the {count} tweets provided below, regardless of the language.

**Classification Rules (5-Point Scale):** You must classify the sentiment using a numerical score from 1 to 5.

- **5 (STRONGLY POSITIVE):** Clear excitement, strong support, emphatic praise, or clear national pride/celebration.
- **4 (SLIGHTLY POSITIVE):** Expresses mild approval, light optimism, satisfaction, or a subtle celebration.
- **3 (NEUTRAL/INDETERMINATE): STRICTLY USE ONLY IF:** The tweet is a simple, non-editorialized announcement or purely data-driven factual statement. If you sense any trace of approval, dissatisfaction, or implied political/cultural stance, DO NOT use 3.
- **2 (SLIGHTLY NEGATIVE):** Expresses mild concern, constructive criticism, or minor dissatisfaction.
- **1 (STRONGLY NEGATIVE):** Clear outrage, strong condemnation, significant fear, or deep pessimism.

**FEW-SHOT EXAMPLES (MUST FOLLOW THIS SCORING LOGIC):**
ID: X1 | TEXT: The inauguration of the new highway is a major step forward for connectivity! -> SCORE: 5
ID: X2 | TEXT: The new tax policy seems a bit confusing, will it affect small businesses? -> SCORE: 2
ID: X3 | TEXT: Today, PM Modi met with global leaders at the G20 summit in Delhi. -> SCORE: 3
ID: X4 | TEXT: Very disappointing to see the poor sanitation in my city's public park. Needs urgent attention. -> SCORE: 1
ID: X5 | TEXT: Feeling good about the upcoming reforms; a step in the right direction. -> SCORE: 4

Return ONLY a single JSON object containing an array of results, one per tweet ({count} in total). The output must adhere strictly to the provided JSON Schema.

**Example JSON Structure (MUST be followed):**
{{
  "sentiments": [
    {{ "id": "X1", "sentiment_score": 5 }},
    {{ "id": "X2", "sentiment_score": 2 }}
  ]
}}

Tweet Data (ID | TEXT):
---
{rows}
---"""

TRENDS_INSTRUCTION = """Analyze the trends in the following tweeter CSV data:

{rows}

Identify 2-3 significant trends. Return the trends with their description in ENGLISH ONLY in the following JSON format:

{{
  "trends": [
    {{ "title": "Trend Title 1", "description": "Detailed description of the first trend." }},
    {{ "title": "Trend Title 2", "description": "Detailed description of the second trend." }}
  ]
}}"""

INSIGHTS_INSTRUCTION = """Generate insights from the following tweeter CSV data:

{rows}

Write the insights in ENGLISH ONLY and return them in the following JSON format:

{{
  "insights": ["Insight 1: Notable trend or observation.", "Insight 2: Any shift in data or unusual pattern."]
}}"""

SUMMARY_INSTRUCTION = """Generate a short summary of the key findings from the following tweeter CSV data:

{rows}

Write the summary in ENGLISH ONLY and return it in the following JSON format:

{{
  "summary": "Short overall summary of key findings from the data."
}}"""


TASK_SPECS: Dict[TaskKind, TaskSpec] = {
    TaskKind.CLASSIFY: TaskSpec(TaskKind.CLASSIFY, render_id_text, CLASSIFY_INSTRUCTION, sentiment_schema),
    TaskKind.TRENDS: TaskSpec(TaskKind.TRENDS, render_values, TRENDS_INSTRUCTION, lambda _: TRENDS_SCHEMA),
    TaskKind.INSIGHTS: TaskSpec(TaskKind.INSIGHTS, render_values, INSIGHTS_INSTRUCTION, lambda _: INSIGHTS_SCHEMA),
    TaskKind.SUMMARY: TaskSpec(TaskKind.SUMMARY, render_values, SUMMARY_INSTRUCTION, lambda _: SUMMARY_SCHEMA),
}


def build_prompt(task: TaskKind, window: SampleWindow, task_spec: Optional[TaskSpec] = None) -> PromptDocument:
    """
    Render the instruction document for a task over a sample window

    Args:
        task: Which analysis to request
        window: Rows to embed, in window order
        task_spec: Override for the registered TaskSpec

    Returns:
        PromptDocument with the prompt text and the expected output schema
    """
    task_spec = task_spec or TASK_SPECS[task]
    rows = "\n".join(task_spec.render_row(row) for row in window.rows)
    text = task_spec.instruction.format(count=window.count, rows=rows)

    logger.info(
        f"Built {task.value} prompt: {window.count} rows, {len(text)} characters "
        f"(~{estimate_tokens(text)} tokens)"
    )

    return PromptDocument(task=task, text=text, schema=task_spec.schema_for(window.count))
