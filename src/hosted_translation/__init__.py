"""
Hosted Translation - a caching, archiving translation layer.

This package provides:
- A content-addressed hosted archive of translations
- Derivation of new translations from two archived hops
- Gated, timed-out remote operations with a TTL cache
- Optional Gemini post-editing guarded by acceptance heuristics
"""

__version__ = "0.1.0"

# Make key components available at package level
from hosted_translation.core import LanguagePair, Result, Translation, TranslationInput, TranslationReference
from hosted_translation.services import HostedTranslationService

__all__ = [
    "HostedTranslationService",
    "LanguagePair",
    "Result",
    "Translation",
    "TranslationInput",
    "TranslationReference",
]
