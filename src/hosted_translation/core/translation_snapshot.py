"""Point-in-time copy of the hosted translation corpus used for derivation."""

import time
from dataclasses import dataclass, field
from typing import Dict, Optional

SnapshotData = Dict[str, Dict[str, str]]


@dataclass(frozen=True, eq=False)
class TranslationSnapshot:
    """
    ``data`` maps a language pair string to ``{input hash: encoded value}``.

    Equality compares key-set shape, creation time and TTL, never the values,
    which is enough to tell whether a rebuild replaced the snapshot.
    """

    data: SnapshotData
    ttl_seconds: float
    created_at: float = field(default_factory=time.monotonic)

    @property
    def is_expired(self) -> bool:
        return (time.monotonic() - self.created_at) > self.ttl_seconds

    @property
    def is_empty(self) -> bool:
        return not self.data

    def record(self, language_pair_string: str, input_hash: str) -> Optional[str]:
        records = self.data.get(language_pair_string)
        if not isinstance(records, dict):
            return None
        value = records.get(input_hash)
        return value if isinstance(value, str) else None

    def _shape(self):
        return {
            key: frozenset(value.keys()) if isinstance(value, dict) else frozenset()
            for key, value in self.data.items()
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TranslationSnapshot):
            return NotImplemented
        return (
            self._shape() == other._shape()
            and self.created_at == other.created_at
            and self.ttl_seconds == other.ttl_seconds
        )

    def __hash__(self) -> int:
        return hash((frozenset(self.data.keys()), self.created_at, self.ttl_seconds))


EMPTY_SNAPSHOT = TranslationSnapshot(data={}, ttl_seconds=0, created_at=0.0)
