"""
Gemini Enhancement Service - AI post-editing of machine translations.

A raw translation is sent to Gemini with instructions to fix grammar without
changing meaning. The rewrite only replaces the original when it passes
``evaluate_enhancement``; accepted outputs are prefixed with ENHANCEMENT_TOKEN.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

import google.genai as genai
from google.genai import types

from hosted_translation.core import (
    ENHANCEMENT_TOKEN,
    EnhancementError,
    NetworkingError,
    Translation,
    ValidationRejected,
    language_name,
)
from hosted_translation.core.text_normalization import normalize_for_comparison
from hosted_translation.services.enhancement.enhancement_configuration import EnhancementConfiguration
from hosted_translation.services.enhancement.language_recognition import LanguageRecognizer
from hosted_translation.services.networking import OperationExecutor

logger = logging.getLogger(__name__)

MAXIMUM_ENHANCEABLE_LENGTH = 200
TARGET_LANGUAGE_CONFIDENCE_THRESHOLD = 0.8

SYSTEM_INSTRUCTION = (
    "You are a translation post-editor. "
    "Task: Fix grammatical issues in the provided translation WITHOUT changing meaning. "
    "Keep names, numbers, punctuation and formatting intact unless they are grammatically wrong. "
    "Output ONLY the corrected translation text, with no quotes, notes or explanations. "
    "If there is nothing wrong with the translation, return the original translation output. "
    "If anything goes wrong or you are uncertain, return the original translation output."
)


@dataclass
class EnhancementOutcome:
    """
    Result of an enhancement attempt.

    Exactly one field is set: ``translation`` when the rewrite was accepted,
    ``rejection`` when it was judged unsafe (non-fatal), ``error`` otherwise.
    """

    translation: Optional[Translation] = None
    rejection: Optional[ValidationRejected] = None
    error: Optional[NetworkingError] = None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @property
    def is_accepted(self) -> bool:
        return self.translation is not None


def evaluate_enhancement(
    original: str,
    enhanced: str,
    target_language: str,
    recognizer: LanguageRecognizer,
) -> Optional[ValidationRejected]:
    """
    Decide whether an enhanced output may replace the original.

    Rules are applied in order and the first failing one wins.

    Returns:
        None if the enhancement is accepted, else the rejection.
    """
    if normalize_for_comparison(enhanced) == normalize_for_comparison(original):
        return ValidationRejected("enhanced output is identical to the original")

    if len(enhanced) < len(original):
        return ValidationRejected("enhanced output is shorter than the original")

    # A model that stops mid-sentence tends to echo the start of the original
    words = enhanced.split(" ")
    first_half = " ".join(words[: len(words) // 2 + 1])
    if len(original) != len(enhanced) and original.startswith(first_half):
        return ValidationRejected("enhanced output repeats a truncated original")

    enhanced_confidence = recognizer.match_confidence(enhanced, target_language)
    if enhanced_confidence <= TARGET_LANGUAGE_CONFIDENCE_THRESHOLD:
        return ValidationRejected(
            "enhanced output is not confidently in the target language",
            confidence=enhanced_confidence,
        )

    original_confidence = recognizer.match_confidence(original, target_language)
    if enhanced_confidence < original_confidence:
        return ValidationRejected(
            "enhanced output matches the target language less than the original",
            original_confidence=original_confidence,
            enhanced_confidence=enhanced_confidence,
        )

    original_last_word = original.split(" ")[-1]
    enhanced_last_word = enhanced.split(" ")[-1]
    if recognizer.match_confidence(enhanced_last_word, target_language) < recognizer.match_confidence(
        original_last_word, target_language
    ):
        return ValidationRejected("enhanced output ends in a word less likely to be in the target language")

    return None


class GeminiEnhancementService:
    """Post-edits translations with Gemini and validates the rewrite."""

    def __init__(
        self,
        executor: OperationExecutor,
        recognizer: LanguageRecognizer,
        api_key: Optional[str] = None,
        client: Optional[Any] = None,
    ):
        """
        Args:
            executor: Runs the Gemini call behind the network gate and timeout.
            recognizer: Scores target-language confidence for the acceptance rules.
            api_key: Gemini API key. Without it (and without ``client``) every
                enhancement that reaches the network step fails.
            client: Pre-built ``google.genai.Client`` (tests inject a fake).
        """
        self.executor = executor
        self.recognizer = recognizer
        if client is None and api_key:
            client = genai.Client(api_key=api_key)
        self._client = client

    async def enhance(
        self,
        translation: Translation,
        configuration: Optional[EnhancementConfiguration] = None,
    ) -> EnhancementOutcome:
        configuration = configuration or EnhancementConfiguration()

        rejection = disqualify(translation)
        if rejection is not None:
            logger.debug("Skipping enhancement: %s", rejection.reason)
            return EnhancementOutcome(rejection=rejection)

        if self._client is None:
            return EnhancementOutcome(error=EnhancementError("Gemini API key has not been configured."))

        path = f"models/{configuration.model.value}:generateContent"
        result = await self.executor.execute(
            lambda: self._generate(translation, configuration),
            path=path,
        )
        if result.is_error:
            return EnhancementOutcome(error=result.error)

        enhanced = result.value
        rejection = evaluate_enhancement(
            translation.output,
            enhanced,
            translation.language_pair.target,
            self.recognizer,
        )
        if rejection is not None:
            logger.warning("Enhanced translation rejected: %s", rejection.reason)
            return EnhancementOutcome(rejection=rejection)

        logger.info("Accepted enhanced translation for %s.", translation.language_pair)
        return EnhancementOutcome(
            translation=Translation(
                input=translation.input,
                output=f"{ENHANCEMENT_TOKEN}{enhanced}",
                language_pair=translation.language_pair,
            )
        )

    async def _generate(self, translation: Translation, configuration: EnhancementConfiguration) -> str:
        response = await self._client.aio.models.generate_content(
            model=configuration.model.value,
            contents=[types.Content(role="user", parts=[types.Part(text=build_prompt(translation, configuration))])],
            config=types.GenerateContentConfig(
                system_instruction=SYSTEM_INSTRUCTION,
                max_output_tokens=configuration.maximum_output_tokens,
                temperature=configuration.temperature,
            ),
        )

        candidates = response.candidates or []
        if not candidates:
            raise EnhancementError("No candidates returned in response.")
        if len(candidates) > 1:
            logger.debug("Received %d candidates; using the first.", len(candidates))

        content = candidates[0].content
        parts = (content.parts if content is not None else None) or []
        text = "".join(part.text for part in parts if part.text).strip()
        if not text:
            raise EnhancementError("Response was empty.")
        return text


def disqualify(translation: Translation) -> Optional[ValidationRejected]:
    """Checks that need no network call. Returns None if the translation is eligible."""
    if translation.is_ai_enhanced:
        return ValidationRejected("translation is already enhanced")
    if translation.echoes_input:
        return ValidationRejected("translation output equals its input")
    if translation.language_pair.is_idempotent:
        return ValidationRejected("language pair is idempotent")
    if ENHANCEMENT_TOKEN in translation.input.value or ENHANCEMENT_TOKEN in translation.output:
        return ValidationRejected("translation contains the enhancement token")
    if len(translation.output) > MAXIMUM_ENHANCEABLE_LENGTH:
        return ValidationRejected("translation output is too long to enhance")
    return None


def build_prompt(translation: Translation, configuration: EnhancementConfiguration) -> str:
    pair = translation.language_pair
    prompt = (
        f"Original input (in {language_name(pair.source)}): '{translation.input.value}'\n"
        f"Target language: {language_name(pair.target)}"
    )
    if configuration.additional_context:
        prompt += f"\nAdditional context: {configuration.additional_context}"
    return prompt + f"\n\nRaw translation:\n{translation.output}"
