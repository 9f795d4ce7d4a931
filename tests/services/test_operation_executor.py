"""Unit tests for OperationExecutor and CompletionLatch."""

import asyncio
import random
from unittest.mock import MagicMock

import pytest

from hosted_translation.core import (
    AccessDisabledError,
    NoValueExists,
    OfflineError,
    OperationTimeoutError,
    RemoteError,
)
from hosted_translation.services import ActivityIndicator, CompletionLatch, NetworkStatus, OperationExecutor


@pytest.fixture
def indicator():
    return MagicMock(spec=ActivityIndicator)


@pytest.fixture
def mock_executor(status, indicator):
    return OperationExecutor(status, indicator, default_timeout=1.0)


class TestCompletionLatch:
    """Tests for the single-completion guard."""

    def test_completes_exactly_once(self):
        on_complete = MagicMock()
        latch = CompletionLatch(on_complete)

        assert latch.try_complete()
        assert not latch.try_complete()
        assert latch.is_completed
        on_complete.assert_called_once()


class TestGate:
    """Tests for the online/read-write gate."""

    def test_access_disabled_short_circuits(self, status, indicator, mock_executor):
        status.disable_read_write()
        operation = MagicMock()

        result = asyncio.run(mock_executor.execute(operation, path="prod/a"))

        assert result.is_failure_of(AccessDisabledError)
        assert result.error.metadata["path"] == "prod/a"
        operation.assert_not_called()
        indicator.show.assert_not_called()

    def test_offline_short_circuits(self, status, indicator, mock_executor):
        status.set_online(False)

        result = asyncio.run(mock_executor.execute(MagicMock()))

        assert result.is_failure_of(OfflineError)
        indicator.show.assert_not_called()

    def test_access_disabled_checked_before_online(self, status, mock_executor):
        status.set_online(False)
        status.disable_read_write()

        assert isinstance(mock_executor.gate_error(), AccessDisabledError)

    def test_online_probe_is_consulted(self, indicator):
        executor = OperationExecutor(NetworkStatus(online_probe=lambda: False), indicator)

        assert isinstance(executor.gate_error(), OfflineError)


class TestExecute:
    """Tests for result classification and activity signalling."""

    def test_returns_operation_value(self, indicator, mock_executor):
        async def operation():
            return "value"

        result = asyncio.run(mock_executor.execute(operation))

        assert result.value == "value"
        indicator.show.assert_called_once()
        indicator.hide.assert_called_once()

    def test_networking_error_passes_through(self, mock_executor):
        async def operation():
            raise NoValueExists()

        result = asyncio.run(mock_executor.execute(operation, path="prod/a"))

        assert result.is_failure_of(NoValueExists)
        assert result.error.metadata == {"path": "prod/a"}

    def test_other_exceptions_become_remote_errors(self, mock_executor):
        cause = ConnectionResetError("reset by peer")

        async def operation():
            raise cause

        result = asyncio.run(mock_executor.execute(operation, path="prod/a"))

        assert result.is_failure_of(RemoteError)
        assert result.error.cause is cause
        assert result.error.metadata["path"] == "prod/a"


class TestTimeout:
    """Tests for the timer side of the completion race."""

    def test_timeout_returns_timeout_error(self, indicator, mock_executor):
        async def operation():
            await asyncio.sleep(0.5)
            return "late"

        async def scenario():
            result = await mock_executor.execute(operation, timeout=0.02, path="prod/slow")
            # Drain the abandoned call so the loop closes cleanly.
            await asyncio.sleep(0.6)
            return result

        result = asyncio.run(scenario())

        assert result.is_failure_of(OperationTimeoutError)
        assert result.error.metadata == {"timeout": 0.02, "path": "prod/slow"}
        indicator.hide.assert_called_once()

    def test_timed_out_call_keeps_running_in_background(self, mock_executor):
        finished = []

        async def operation():
            await asyncio.sleep(0.1)
            finished.append(True)
            return "late"

        async def scenario():
            result = await mock_executor.execute(operation, timeout=0.01)
            pending_after_timeout = mock_executor.pending_operations
            await asyncio.sleep(0.2)
            return result, pending_after_timeout

        result, pending_after_timeout = asyncio.run(scenario())

        assert result.is_failure_of(OperationTimeoutError)
        assert pending_after_timeout == 1
        assert finished == [True]
        assert mock_executor.pending_operations == 0

    def test_completion_fires_once_under_random_races(self, status):
        """Timer and real call resolve within a millisecond of each other."""
        rng = random.Random(7)
        indicator = MagicMock(spec=ActivityIndicator)
        executor = OperationExecutor(status, indicator)
        rounds = 200

        async def race(delay):
            async def operation():
                await asyncio.sleep(delay)
                return "done"

            return await executor.execute(operation, timeout=0.005)

        async def scenario():
            results = await asyncio.gather(
                *(race(0.005 + rng.uniform(-0.001, 0.001)) for _ in range(rounds))
            )
            await asyncio.sleep(0.05)
            return results

        results = asyncio.run(scenario())

        assert len(results) == rounds
        assert all(r.value == "done" or r.is_failure_of(OperationTimeoutError) for r in results)
        assert indicator.show.call_count == rounds
        assert indicator.hide.call_count == rounds
        assert executor.pending_operations == 0
