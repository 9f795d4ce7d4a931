"""Gemini Translation Service - Implements translation via Google Gemini API."""

import asyncio
import logging
from typing import Any, Optional

import google.genai as genai
from google.genai import types

from hosted_translation.core import (
    LanguagePair,
    Translation,
    TranslationInput,
    TranslationUnavailable,
    language_name,
)
from hosted_translation.services.translation.translation_service import TranslationService

logger = logging.getLogger(__name__)


class GeminiTranslationService(TranslationService):
    """
    Translation service using Google Gemini API.

    Optimized for speed and consistency with lower temperature settings.
    Rate-limited requests are retried with exponential backoff.
    """

    MODEL_NAME = "gemini-2.0-flash"
    MAX_RETRIES = 3
    INITIAL_RETRY_DELAY = 2.0

    TRANSLATION_PROMPT = """Translate the following {source} text to natural, idiomatic {target}.
Preserve the tone and nuance of the original.
Only output the translation, nothing else.

{source} text:
{text}"""

    def __init__(self, api_key: Optional[str] = None, client: Optional[Any] = None):
        """
        Args:
            api_key: Gemini API key; required unless ``client`` is given.
            client: Pre-built ``google.genai.Client`` (tests inject a fake).
        """
        if client is None:
            if not api_key:
                raise ValueError("Gemini API key has not been configured.")
            client = genai.Client(api_key=api_key)
        self._client = client

    async def translate(self, input: TranslationInput, language_pair: LanguagePair) -> Translation:
        prompt = self.TRANSLATION_PROMPT.format(
            source=language_name(language_pair.source),
            target=language_name(language_pair.target),
            text=input.value,
        )

        retry_delay = self.INITIAL_RETRY_DELAY
        attempt = 0
        while True:
            attempt += 1
            try:
                response = await self._client.aio.models.generate_content(
                    model=self.MODEL_NAME,
                    contents=prompt,
                    config=types.GenerateContentConfig(
                        temperature=0.3,
                        top_p=0.95,
                        top_k=40,
                        max_output_tokens=1024,
                    ),
                )
                break
            except Exception as e:
                if not _is_rate_limit(e) or attempt >= self.MAX_RETRIES:
                    raise
                logger.warning(
                    "Rate limit detected (attempt %d/%d). Retrying in %.0f seconds...",
                    attempt,
                    self.MAX_RETRIES,
                    retry_delay,
                )
                await asyncio.sleep(retry_delay)
                retry_delay *= 2

        output = (response.text or "").strip()
        if not output:
            raise TranslationUnavailable("Empty response from API.", language_pair=language_pair.string)
        if output == input.value:
            raise TranslationUnavailable(
                "Translation output is identical to its input.",
                language_pair=language_pair.string,
            )

        return Translation(input=input, output=output, language_pair=language_pair)


def _is_rate_limit(error: Exception) -> bool:
    error_msg = str(error).lower()
    return "429" in error_msg or "resource_exhausted" in error_msg or "quota" in error_msg or "rate_limit" in error_msg
