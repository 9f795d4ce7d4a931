"""Enhancement services - AI post-editing and its acceptance rules."""

from hosted_translation.services.enhancement.enhancement_configuration import EnhancementConfiguration, GeminiModel
from hosted_translation.services.enhancement.gemini_enhancement_service import (
    EnhancementOutcome,
    GeminiEnhancementService,
    evaluate_enhancement,
)
from hosted_translation.services.enhancement.language_recognition import LangdetectRecognizer, LanguageRecognizer

__all__ = [
    "EnhancementConfiguration",
    "EnhancementOutcome",
    "GeminiEnhancementService",
    "GeminiModel",
    "LangdetectRecognizer",
    "LanguageRecognizer",
    "evaluate_enhancement",
]
