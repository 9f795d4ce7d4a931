"""Caching services - TTL cache store and local translation archives."""

from hosted_translation.services.caching.cache_store import CacheStore
from hosted_translation.services.caching.translation_archive import LocalTranslationArchive
from hosted_translation.services.caching.in_memory_translation_archive import InMemoryTranslationArchive

__all__ = [
    "CacheStore",
    "LocalTranslationArchive",
    "InMemoryTranslationArchive",
]
