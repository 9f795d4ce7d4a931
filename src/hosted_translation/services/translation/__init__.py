"""Translation services - machine translation and the hosted archive around it."""

from hosted_translation.services.translation.gemini_translation_service import GeminiTranslationService
from hosted_translation.services.translation.hosted_translation_archiver import (
    ArchivedTranslation,
    HostedTranslationArchiver,
    LookupStatus,
)
from hosted_translation.services.translation.hosted_translation_service import HostedTranslationService
from hosted_translation.services.translation.translation_service import TranslationService

__all__ = [
    "ArchivedTranslation",
    "GeminiTranslationService",
    "HostedTranslationArchiver",
    "HostedTranslationService",
    "LookupStatus",
    "TranslationService",
]
