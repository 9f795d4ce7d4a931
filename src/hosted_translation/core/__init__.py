"""Domain layer - pure entities and codecs for hosted translations."""

from .cache_entry import CacheEntry, CacheStrategy, cache_expiry_milliseconds
from .errors import (
    AccessDisabledError,
    DecodingFailed,
    DerivationFailed,
    EnhancementError,
    InvalidTranslationError,
    NetworkingError,
    NoValueExists,
    OfflineError,
    OperationTimeoutError,
    RemoteError,
    Result,
    TranslationUnavailable,
    TypeMismatch,
    ValidationRejected,
)
from .language_pair import LanguagePair, language_name
from .network_environment import NetworkEnvironment, prepend_environment, translations_path
from .text_normalization import ENHANCEMENT_TOKEN, sanitize
from .translation import Translation, TranslationInput
from .translation_reference import (
    ArchivedReference,
    IdempotentReference,
    TranslationReference,
    content_hash,
    decode,
    encode,
    reference_for_hash,
)
from .translation_snapshot import EMPTY_SNAPSHOT, TranslationSnapshot

__all__ = [
    "AccessDisabledError",
    "ArchivedReference",
    "CacheEntry",
    "CacheStrategy",
    "DecodingFailed",
    "DerivationFailed",
    "EMPTY_SNAPSHOT",
    "ENHANCEMENT_TOKEN",
    "EnhancementError",
    "IdempotentReference",
    "InvalidTranslationError",
    "LanguagePair",
    "NetworkEnvironment",
    "NetworkingError",
    "NoValueExists",
    "OfflineError",
    "OperationTimeoutError",
    "RemoteError",
    "Result",
    "Translation",
    "TranslationInput",
    "TranslationReference",
    "TranslationSnapshot",
    "TranslationUnavailable",
    "TypeMismatch",
    "ValidationRejected",
    "cache_expiry_milliseconds",
    "content_hash",
    "decode",
    "encode",
    "language_name",
    "prepend_environment",
    "reference_for_hash",
    "sanitize",
    "translations_path",
]
