"""TTL cache of remote values keyed by (environment-prefixed) path."""

import logging
import threading
from typing import Any, Callable, Dict, List, Optional

from hosted_translation.core import CacheEntry

logger = logging.getLogger(__name__)


class CacheStore:
    """
    Thread-safe TTL cache.

    A single lock guards the whole map, so a ``clear`` and a concurrent ``get``
    serialize but never interleave. Entries are immutable and replaced wholesale.
    """

    def __init__(self):
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value, evicting it if expired or None."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.is_expired() or entry.value is None:
                del self._entries[key]
                return None

        logger.debug("Returning stored value for data at path %r.", key)
        return entry.value

    def put(self, key: str, value: Any, ttl_ms: float) -> None:
        with self._lock:
            self._entries[key] = CacheEntry(value=value, ttl_ms=ttl_ms)

    def remove(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries = {}

    def filter(self, is_included: Callable[[str, CacheEntry], bool]) -> None:
        """Keep only the entries for which ``is_included(key, entry)`` holds."""
        with self._lock:
            self._entries = {
                key: entry for key, entry in self._entries.items() if is_included(key, entry)
            }

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._entries.keys())

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
