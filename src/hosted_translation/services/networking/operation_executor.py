"""
Operation executor - gates, times out and signals every outbound remote call.

The real call is raced against a timer. A ``CompletionLatch`` lets exactly one
of them reach the caller; the loser is dropped. When the timer wins the real
call is not cancelled: it finishes in the background and its result is
discarded.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Set, TypeVar

from hosted_translation.core import (
    AccessDisabledError,
    NetworkingError,
    OfflineError,
    OperationTimeoutError,
    RemoteError,
    Result,
)
from hosted_translation.services.networking.activity_indicator import ActivityIndicator
from hosted_translation.services.networking.network_status import NetworkStatus

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TIMEOUT_SECONDS = 10.0


class CompletionLatch:
    """
    Single-completion guard.

    ``try_complete`` returns True exactly once. Callbacks all run on the event
    loop thread, so check-and-set needs no lock.
    """

    def __init__(self, on_complete: Optional[Callable[[], None]] = None):
        self._completed = False
        self._on_complete = on_complete

    @property
    def is_completed(self) -> bool:
        return self._completed

    def try_complete(self) -> bool:
        if self._completed:
            return False
        self._completed = True
        if self._on_complete is not None:
            self._on_complete()
        return True


class OperationExecutor:
    """Runs remote operations behind the online/read-write gate with a timeout."""

    def __init__(
        self,
        status: NetworkStatus,
        activity_indicator: ActivityIndicator,
        default_timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self.status = status
        self.activity_indicator = activity_indicator
        self.default_timeout = default_timeout
        self._background_tasks: Set[asyncio.Task] = set()

    @property
    def pending_operations(self) -> int:
        """Dispatched calls that have not finished, including abandoned ones."""
        return len(self._background_tasks)

    def gate_error(self, path: Optional[str] = None) -> Optional[NetworkingError]:
        """The error that would short-circuit a call right now, if any."""
        metadata = _metadata(path)
        if not self.status.is_read_write_enabled:
            return AccessDisabledError(**metadata)
        if not self.status.is_online:
            return OfflineError(**metadata)
        return None

    async def execute(
        self,
        operation: Callable[[], Awaitable[T]],
        timeout: Optional[float] = None,
        path: Optional[str] = None,
    ) -> Result[T]:
        """
        Run ``operation`` and return its value or a typed failure.

        Args:
            operation: Zero-argument coroutine function performing the remote call.
            timeout: Seconds before ``OperationTimeoutError``; defaults to ``default_timeout``.
            path: Remote path, attached to any error as metadata.

        Returns:
            Result with the operation's value, or one of OfflineError,
            AccessDisabledError, OperationTimeoutError, RemoteError, or the
            NetworkingError the operation raised.
        """
        gate_error = self.gate_error(path)
        if gate_error is not None:
            return Result.failure(gate_error)

        timeout = self.default_timeout if timeout is None else timeout
        metadata = _metadata(path)
        loop = asyncio.get_running_loop()
        completion: asyncio.Future = loop.create_future()
        latch = CompletionLatch(on_complete=self.activity_indicator.hide)

        def complete(result: Result) -> bool:
            if not latch.try_complete():
                return False
            if not completion.done():
                completion.set_result(result)
            return True

        def on_timeout() -> None:
            if complete(Result.failure(OperationTimeoutError(timeout=timeout, **metadata))):
                logger.warning("Operation timed out after %.2fs (path=%r).", timeout, path)

        def on_finished(task: asyncio.Task) -> None:
            self._background_tasks.discard(task)
            timer.cancel()
            if task.cancelled():
                result: Result = Result.failure(RemoteError(asyncio.CancelledError(), **metadata))
            else:
                result = task.result()
            if not complete(result):
                logger.debug("Discarding late result for path %r.", path)

        self.activity_indicator.show()
        timer = loop.call_later(timeout, on_timeout)
        task = loop.create_task(self._run(operation, metadata))
        self._background_tasks.add(task)
        task.add_done_callback(on_finished)

        return await completion

    async def _run(self, operation: Callable[[], Awaitable[T]], metadata: Dict[str, Any]) -> Result[T]:
        try:
            return Result.success(await operation())
        except NetworkingError as error:
            return Result.failure(error.with_params(**metadata))
        except Exception as error:
            logger.debug("Remote operation raised %s: %s", type(error).__name__, error)
            return Result.failure(RemoteError(error, **metadata))


def _metadata(path: Optional[str]) -> Dict[str, Any]:
    return {"path": path} if path else {}
