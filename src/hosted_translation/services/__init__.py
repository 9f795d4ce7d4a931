"""Services layer - business logic and external integrations."""

from hosted_translation.services.settings_manager import NetworkConfig, SettingsManager

# Caching services
from hosted_translation.services.caching import CacheStore, InMemoryTranslationArchive, LocalTranslationArchive

# Networking services
from hosted_translation.services.networking import (
    ActivityCounter,
    ActivityIndicator,
    CompletionLatch,
    Database,
    NetworkStatus,
    OperationExecutor,
)

# Enhancement services
from hosted_translation.services.enhancement import (
    EnhancementConfiguration,
    EnhancementOutcome,
    GeminiEnhancementService,
    GeminiModel,
    LangdetectRecognizer,
    LanguageRecognizer,
    evaluate_enhancement,
)

# Translation services
from hosted_translation.services.translation import (
    ArchivedTranslation,
    GeminiTranslationService,
    HostedTranslationArchiver,
    HostedTranslationService,
    LookupStatus,
    TranslationService,
)

__all__ = [
    "ActivityCounter",
    "ActivityIndicator",
    "ArchivedTranslation",
    "CacheStore",
    "CompletionLatch",
    "Database",
    "EnhancementConfiguration",
    "EnhancementOutcome",
    "GeminiEnhancementService",
    "GeminiModel",
    "GeminiTranslationService",
    "HostedTranslationArchiver",
    "HostedTranslationService",
    "InMemoryTranslationArchive",
    "LangdetectRecognizer",
    "LanguageRecognizer",
    "LocalTranslationArchive",
    "LookupStatus",
    "NetworkConfig",
    "NetworkStatus",
    "OperationExecutor",
    "SettingsManager",
    "TranslationService",
    "evaluate_enhancement",
]
