"""Cache-coherent facade over the remote document store."""

import logging
import time
from typing import Any, Awaitable, Callable, Mapping, Optional

from hosted_translation.core import (
    CacheStrategy,
    NetworkEnvironment,
    NoValueExists,
    RemoteError,
    Result,
    TypeMismatch,
    cache_expiry_milliseconds,
    prepend_environment,
)
from hosted_translation.io import RemoteStore, is_encodable
from hosted_translation.services.caching import CacheStore
from hosted_translation.services.networking.operation_executor import OperationExecutor

logger = logging.getLogger(__name__)


class Database:
    """
    Reads and writes hosted values through the operation executor.

    Every path is prefixed with the network environment (``dev``/``stage``/
    ``prod``) unless ``prepend_environment=False``; the prefixed path is also the
    cache key. Successful reads are cached with a TTL derived from the round
    trip's latency.
    """

    def __init__(
        self,
        store: RemoteStore,
        executor: OperationExecutor,
        cache: CacheStore,
        environment: NetworkEnvironment = NetworkEnvironment.PRODUCTION,
    ):
        self.store = store
        self.executor = executor
        self.cache = cache
        self.environment = environment
        self._global_cache_strategy: Optional[CacheStrategy] = None

    @property
    def global_cache_strategy(self) -> Optional[CacheStrategy]:
        return self._global_cache_strategy

    def set_global_cache_strategy(self, strategy: Optional[CacheStrategy]) -> None:
        """Override the cache strategy of every read. Pass None to revert."""
        self._global_cache_strategy = strategy

    def resolve_path(self, path: str, prepend: bool = True) -> str:
        return prepend_environment(path, self.environment) if prepend else path.strip("/")

    async def get_values(
        self,
        path: str,
        prepend_environment: bool = True,
        cache_strategy: CacheStrategy = CacheStrategy.RETURN_CACHE_FIRST,
        timeout: Optional[float] = None,
    ) -> Result[Any]:
        """
        Get the hosted value (or subtree) at ``path``.

        Returns:
            Result with the value, or NoValueExists when nothing is hosted there.
        """
        path = self.resolve_path(path, prepend_environment)
        return await self._read(path, cache_strategy, timeout, lambda: self.store.get(path))

    async def query_values(
        self,
        path: str,
        limit: int = 10,
        from_end: bool = False,
        prepend_environment: bool = True,
        cache_strategy: CacheStrategy = CacheStrategy.RETURN_CACHE_FIRST,
        timeout: Optional[float] = None,
    ) -> Result[Any]:
        """Get at most ``limit`` children of the mapping at ``path``."""
        path = self.resolve_path(path, prepend_environment)
        return await self._read(
            path,
            cache_strategy,
            timeout,
            lambda: self.store.query(path, limit, from_end=from_end),
        )

    async def value_exists(self, path: str, prepend_environment: bool = True, timeout: Optional[float] = None) -> Result[bool]:
        path = self.resolve_path(path, prepend_environment)
        return await self.executor.execute(lambda: self.store.exists(path), timeout, path=path)

    async def set_value(
        self,
        key: str,
        value: Any,
        prepend_environment: bool = True,
        timeout: Optional[float] = None,
    ) -> Result[None]:
        key = self.resolve_path(key, prepend_environment)
        if not is_encodable(value):
            return Result.failure(
                TypeMismatch("Serialized values must be dicts, lists, strings, numbers or None.", path=key)
            )

        async def operation() -> None:
            logger.debug("Setting value for key %r.", key)
            started = time.monotonic()
            await self.store.set(key, value)
            if value is None:
                self.cache.remove(key)
            else:
                self.cache.put(key, value, cache_expiry_milliseconds(started))

        return await self.executor.execute(operation, timeout, path=key)

    async def update_child_values(
        self,
        key: str,
        data: Mapping[str, Any],
        prepend_environment: bool = True,
        timeout: Optional[float] = None,
    ) -> Result[None]:
        """Merge ``data`` into the mapping at ``key``; None values delete children."""
        key = self.resolve_path(key, prepend_environment)
        if not is_encodable(dict(data)):
            return Result.failure(
                TypeMismatch("Serialized values must be dicts, lists, strings, numbers or None.", path=key)
            )

        async def operation() -> None:
            logger.debug("Updating child values for key %r with %d children.", key, len(data))
            started = time.monotonic()
            await self.store.update(key, data)
            ttl = cache_expiry_milliseconds(started)
            self.cache.remove(key)
            for child, value in data.items():
                child_key = f"{key}/{child}"
                if value is None:
                    self.cache.remove(child_key)
                else:
                    self.cache.put(child_key, value, ttl)

        return await self.executor.execute(operation, timeout, path=key)

    async def delete_value(self, key: str, prepend_environment: bool = True, timeout: Optional[float] = None) -> Result[None]:
        return await self.set_value(key, None, prepend_environment=prepend_environment, timeout=timeout)

    async def _read(
        self,
        path: str,
        cache_strategy: CacheStrategy,
        timeout: Optional[float],
        fetch: Callable[[], Awaitable[Any]],
    ) -> Result[Any]:
        strategy = self._global_cache_strategy or cache_strategy

        gate_error = self.executor.gate_error(path)
        if gate_error is not None:
            return Result.failure(gate_error)

        if strategy is CacheStrategy.RETURN_CACHE_FIRST:
            cached = self.cache.get(path)
            if cached is not None:
                return Result.success(cached)

        async def operation() -> Any:
            logger.debug("Getting values at path %r.", path)
            started = time.monotonic()
            value = await fetch()
            if _is_empty(value):
                raise NoValueExists(path=path)
            self.cache.put(path, value, cache_expiry_milliseconds(started))
            return value

        result = await self.executor.execute(operation, timeout, path=path)

        if strategy is CacheStrategy.RETURN_CACHE_ON_FAILURE and result.is_failure_of(NoValueExists, RemoteError):
            cached = self.cache.get(path)
            if cached is not None:
                logger.debug("Falling back to cached value for path %r.", path)
                return Result.success(cached)

        return result


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, (dict, list)) and not value)
