"""Error taxonomy and the Result type returned across the package boundary."""

from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, TypeVar

T = TypeVar("T")


class NetworkingError(Exception):
    """
    Base class for every typed failure surfaced by this package.

    Carries a human readable message plus a metadata dict (path, language pair,
    hosting key...) appended as the failure travels up the call chain.
    """

    default_message = "A networking error occurred."

    def __init__(self, message: Optional[str] = None, **metadata: Any):
        self.message = message or self.default_message
        self.metadata: Dict[str, Any] = dict(metadata)
        super().__init__(self.message)

    def with_params(self, **metadata: Any) -> "NetworkingError":
        """Append metadata in place and return self for chaining."""
        for key, value in metadata.items():
            self.metadata.setdefault(key, value)
        return self

    def __str__(self) -> str:
        if not self.metadata:
            return self.message
        params = ", ".join(f"{key}={value!r}" for key, value in sorted(self.metadata.items()))
        return f"{self.message} [{params}]"


class OfflineError(NetworkingError):
    default_message = "Internet connection is offline."


class AccessDisabledError(NetworkingError):
    default_message = "Read/write access to the network is disabled."


class OperationTimeoutError(NetworkingError):
    default_message = "The operation timed out."


class RemoteError(NetworkingError):
    """Wraps an exception raised by the underlying remote call."""

    def __init__(self, cause: BaseException, message: Optional[str] = None, **metadata: Any):
        self.cause = cause
        super().__init__(message or f"Remote operation failed: {cause}", **metadata)


class DecodingFailed(NetworkingError):
    default_message = "Decoding failed."


class TypeMismatch(NetworkingError):
    default_message = "Failed to typecast values."


class NoValueExists(NetworkingError):
    default_message = "No value exists at the specified key path."


class DerivationFailed(NetworkingError):
    default_message = "Failed to derive translation from existing data."


class InvalidTranslationError(NetworkingError):
    default_message = "Translation data fails validation."


class TranslationUnavailable(NetworkingError):
    """The translator could not produce a distinct output for the input."""

    default_message = "No translation is available for the given input."


class EnhancementError(NetworkingError):
    default_message = "Translation enhancement failed."


class ValidationRejected(NetworkingError):
    """Non-fatal: the enhanced output was judged unsafe to substitute."""

    default_message = "Enhanced translation rejected."

    def __init__(self, reason: str, **metadata: Any):
        self.reason = reason
        super().__init__(f"Enhanced translation rejected: {reason}", **metadata)


@dataclass
class Result(Generic[T]):
    """Either a value or a typed failure."""

    value: Optional[T] = None
    error: Optional[NetworkingError] = None

    @property
    def is_error(self) -> bool:
        """True if the operation failed."""
        return self.error is not None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: NetworkingError) -> "Result[T]":
        return cls(error=error)

    def is_failure_of(self, *error_types: type) -> bool:
        """True if this result failed with any of the given error classes."""
        return self.error is not None and isinstance(self.error, error_types)
