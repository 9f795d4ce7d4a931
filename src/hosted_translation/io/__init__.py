"""I/O layer - access to the remote document store."""

from .remote_store import InMemoryRemoteStore, JsonFileRemoteStore, RemoteStore, is_encodable

__all__ = ["RemoteStore", "InMemoryRemoteStore", "JsonFileRemoteStore", "is_encodable"]
