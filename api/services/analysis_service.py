"""
Analysis orchestrator - runs one task end to end for a request

Sample CSV -> build prompt -> LLM -> decode -> aggregate / translate
"""
import logging
from typing import Any, Dict, Optional

from src.tweet_analysis.aggregator import aggregate
from src.tweet_analysis.llm_client import GeminiClient
from src.tweet_analysis.prompt_builder import build_prompt
from src.tweet_analysis.response_decoder import decode
from src.tweet_analysis.sampler import CSVSampler, SampleWindow, row_id
from src.tweet_analysis.schemas import TaskKind
from src.tweet_analysis.translator import Translator, needs_translation

logger = logging.getLogger(__name__)


class AnalysisService:
    """Composes the pipeline stages for each endpoint"""

    def __init__(
        self,
        client: GeminiClient,
        translator: Translator,
        csv_path: str,
        start_index: int = 0,
        max_rows: int = 100,
        temperatures: Optional[Dict[TaskKind, Optional[float]]] = None,
        sampler: Optional[CSVSampler] = None,
    ):
        self.client = client
        self.translator = translator
        self.csv_path = csv_path
        self.start_index = start_index
        self.max_rows = max_rows
        self.temperatures = temperatures or {}
        self.sampler = sampler or CSVSampler()

    def _sample(self) -> SampleWindow:
        _, window = self.sampler.sample(self.csv_path, self.start_index, self.max_rows)
        return window

    def _run(self, task: TaskKind, window: SampleWindow):
        """Prompt, generate and decode one task over the window"""
        document = build_prompt(task, window)
        raw_text = self.client.generate(
            document.text,
            schema=document.schema,
            temperature=self.temperatures.get(task),
        )
        return decode(raw_text, document.schema)

    def analyze_sentiment(self) -> Dict[str, Any]:
        """Score every sampled tweet and summarise the score distribution"""
        window = self._sample()
        if window.count == 0:
            logger.warning("Sample window is empty, skipping sentiment analysis")
            return {"count": 0, "summary": aggregate([]), "results": []}

        batch = self._run(TaskKind.CLASSIFY, window)
        sentiments = batch.sentiments

        if len(sentiments) != window.count:
            submitted = {row_id(row) for row in window.rows}
            scored = {item.id for item in sentiments}
            logger.warning(
                f"Model scored {len(sentiments)} of {window.count} tweets "
                f"({len(submitted - scored)} ids unscored, {len(scored - submitted)} unknown ids)"
            )

        return {
            "count": len(sentiments),
            "summary": aggregate(sentiments),
            "results": [item.model_dump() for item in sentiments],
        }

    def analyze_trends(self, lang: Optional[str] = None) -> Dict[str, Any]:
        """Extract 2-3 trends, translated in place when lang is not English"""
        window = self._sample()
        if window.count == 0:
            logger.warning("Sample window is empty, skipping trend analysis")
            return {"trends": []}

        trends = [trend.model_dump() for trend in self._run(TaskKind.TRENDS, window).trends]

        if needs_translation(lang):
            fields = [text for trend in trends for text in (trend["title"], trend["description"])]
            translated = self.translator.translate_many(fields, lang)
            trends = [
                {"title": translated[2 * i], "description": translated[2 * i + 1]}
                for i in range(len(trends))
            ]

        return {"trends": trends}

    def generate_insights(self, lang: Optional[str] = None) -> Dict[str, Any]:
        """Free-text insights, translated when lang is not English"""
        window = self._sample()
        if window.count == 0:
            logger.warning("Sample window is empty, skipping insight generation")
            return {"insights": []}

        insights = self._run(TaskKind.INSIGHTS, window).insights
        if needs_translation(lang):
            insights = self.translator.translate_many(insights, lang)

        return {"insights": insights}

    def generate_summary(self, lang: Optional[str] = None) -> Dict[str, Any]:
        """Short summary, translated when lang is not English"""
        window = self._sample()
        if window.count == 0:
            logger.warning("Sample window is empty, skipping summary generation")
            return {"summary": ""}

        summary = self._run(TaskKind.SUMMARY, window).summary
        if needs_translation(lang):
            summary = self.translator.translate(summary, lang)

        return {"summary": summary}
