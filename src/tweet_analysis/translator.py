"""
Best-effort translation of model output

A failed translation returns the original text; it never fails the request.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from .llm_client import GeminiClient

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "english"

TRANSLATION_PROMPT = "Translate the following text into {language}. Return ONLY the translated text. Text to translate: {text}"


def needs_translation(target_language: Optional[str]) -> bool:
    """True unless the language is missing or English"""
    return bool(target_language) and target_language.strip().lower() != DEFAULT_LANGUAGE


class Translator:
    """Translates strings one at a time through the generation client"""

    def __init__(self, client: GeminiClient, temperature: float = 0.1, max_workers: int = 8):
        """
        Args:
            client: Generation client shared with the analysis tasks
            temperature: Sampling temperature for translation calls
            max_workers: Upper bound on concurrent translation calls in a batch
        """
        self.client = client
        self.temperature = temperature
        self.max_workers = max_workers

    def translate(self, text: str, target_language: Optional[str]) -> str:
        """Translate one string, falling back to the original on any failure"""
        if not text or not needs_translation(target_language):
            return text

        prompt = TRANSLATION_PROMPT.format(language=target_language, text=text)
        try:
            translated = self.client.generate(prompt, temperature=self.temperature).strip()
        except Exception as e:
            logger.warning(f"Translation to {target_language} failed, keeping original text: {e}")
            return text

        if not translated:
            logger.warning(f"Translation to {target_language} came back empty, keeping original text")
            return text
        return translated

    def translate_many(self, texts: Sequence[str], target_language: Optional[str]) -> List[str]:
        """Translate a batch concurrently, preserving input order"""
        if not texts or not needs_translation(target_language):
            return list(texts)

        workers = max(1, min(self.max_workers, len(texts)))
        logger.info(f"Translating {len(texts)} strings into {target_language} ({workers} workers)")

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="translator") as executor:
            return list(executor.map(lambda t: self.translate(t, target_language), texts))
