"""Networking services - gated, timed, cache-coherent remote operations."""

from hosted_translation.services.networking.activity_indicator import ActivityCounter, ActivityIndicator
from hosted_translation.services.networking.network_status import NetworkStatus
from hosted_translation.services.networking.operation_executor import CompletionLatch, OperationExecutor
from hosted_translation.services.networking.database import Database

__all__ = [
    "ActivityCounter",
    "ActivityIndicator",
    "CompletionLatch",
    "Database",
    "NetworkStatus",
    "OperationExecutor",
]
