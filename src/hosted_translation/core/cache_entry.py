"""Cache entry entity and cache strategy."""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

MINIMUM_TTL_MS = 100


class CacheStrategy(Enum):
    """How a read reconciles the cache with the remote store."""

    DISREGARD_CACHE = "disregard_cache"
    RETURN_CACHE_FIRST = "return_cache_first"
    RETURN_CACHE_ON_FAILURE = "return_cache_on_failure"


def _now_ms() -> float:
    return time.monotonic() * 1000


@dataclass(frozen=True)
class CacheEntry:
    """An immutable cached value with a creation time and a TTL in milliseconds."""

    value: Any
    ttl_ms: float
    created_at_ms: float = field(default_factory=_now_ms)

    def is_expired(self, now_ms: Optional[float] = None) -> bool:
        now_ms = _now_ms() if now_ms is None else now_ms
        return (now_ms - self.created_at_ms) > self.ttl_ms


def cache_expiry_milliseconds(start_seconds: float, now_seconds: Optional[float] = None) -> int:
    """
    TTL for a value fetched by a round trip that began at ``start_seconds``
    (a ``time.monotonic()`` reading).

    Latency below 100ms gets 100ms added so the entry outlives the next read.
    """
    now_seconds = time.monotonic() if now_seconds is None else now_seconds
    milliseconds = int(abs(now_seconds - start_seconds) * 1000)
    if milliseconds < MINIMUM_TTL_MS:
        return MINIMUM_TTL_MS + milliseconds
    return milliseconds
