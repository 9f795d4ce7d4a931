"""Remote document store abstraction - path-addressed tree of JSON-like values."""

import asyncio
import copy
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)

ENCODABLE_SCALARS = (str, int, float, bool)


def is_encodable(value: Any) -> bool:
    """True for values the remote store can persist (nested dicts/lists of scalars or None)."""
    if value is None or isinstance(value, ENCODABLE_SCALARS):
        return True
    if isinstance(value, (list, tuple)):
        return all(is_encodable(item) for item in value)
    if isinstance(value, Mapping):
        return all(isinstance(key, str) and is_encodable(item) for key, item in value.items())
    return False


class RemoteStore(ABC):
    """
    Abstract interface for the managed backend's document database.

    Paths are slash-separated (``"prod/translations/en-fr/<hash>"``). Reads of a
    missing path return None. Implementations raise on transport failures; the
    operation executor wraps those into typed errors.
    """

    @abstractmethod
    async def get(self, path: str) -> Optional[Any]:
        """Return the value (or subtree) at ``path``, or None if absent."""
        pass

    @abstractmethod
    async def query(self, path: str, limit: int, from_end: bool = False) -> Optional[Dict[str, Any]]:
        """
        Return at most ``limit`` children of the mapping at ``path``.

        Args:
            path: Path of a mapping node.
            limit: Maximum number of children.
            from_end: Take the last children by key order instead of the first.
        """
        pass

    @abstractmethod
    async def set(self, path: str, value: Any) -> None:
        """Overwrite the value at ``path``. Setting None deletes it."""
        pass

    @abstractmethod
    async def update(self, path: str, children: Mapping[str, Any]) -> None:
        """Merge ``children`` into the mapping at ``path``; None values delete a child."""
        pass

    async def delete(self, path: str) -> None:
        await self.set(path, None)

    async def exists(self, path: str) -> bool:
        return (await self.get(path)) is not None


class InMemoryRemoteStore(RemoteStore):
    """
    Process-local remote store.

    Used for testing and offline development. ``latency`` adds an artificial
    delay to every call.
    """

    def __init__(self, data: Optional[Dict[str, Any]] = None, latency: float = 0.0):
        self._root: Dict[str, Any] = copy.deepcopy(data) if data else {}
        self.latency = latency
        self.calls: list[tuple[str, str]] = []

    async def get(self, path: str) -> Optional[Any]:
        await self._simulate("get", path)
        node = self._resolve(path)
        return copy.deepcopy(node) if node is not None else None

    async def query(self, path: str, limit: int, from_end: bool = False) -> Optional[Dict[str, Any]]:
        await self._simulate("query", path)
        node = self._resolve(path)
        if not isinstance(node, dict) or not node:
            return None
        keys = sorted(node.keys())
        selected = keys[-limit:] if from_end else keys[:limit]
        return {key: copy.deepcopy(node[key]) for key in selected}

    async def set(self, path: str, value: Any) -> None:
        await self._simulate("set", path)
        self._write(path, copy.deepcopy(value))

    async def update(self, path: str, children: Mapping[str, Any]) -> None:
        await self._simulate("update", path)
        for key, value in children.items():
            self._write(f"{path.strip('/')}/{key}", copy.deepcopy(value))

    def _simulate(self, operation: str, path: str):
        self.calls.append((operation, path))
        return asyncio.sleep(self.latency)

    @staticmethod
    def _components(path: str) -> list[str]:
        return [component for component in path.split("/") if component]

    def _resolve(self, path: str) -> Optional[Any]:
        node: Any = self._root
        for component in self._components(path):
            if not isinstance(node, dict) or component not in node:
                return None
            node = node[component]
        return node

    def _write(self, path: str, value: Any) -> None:
        components = self._components(path)
        if not components:
            self._root = value if isinstance(value, dict) else {}
            return

        node = self._root
        parents = []
        for component in components[:-1]:
            child = node.get(component)
            if not isinstance(child, dict):
                if value is None:
                    return
                child = {}
                node[component] = child
            parents.append((node, component))
            node = child

        if value is None:
            node.pop(components[-1], None)
            # Prune emptied parents so an empty subtree reads as absent.
            while parents and not node:
                parent, key = parents.pop()
                parent.pop(key, None)
                node = parent
        else:
            node[components[-1]] = value


class JsonFileRemoteStore(InMemoryRemoteStore):
    """
    In-memory remote store persisted to a JSON file.

    The file is read once on construction and rewritten after every write,
    so a hosted archive survives between command-line runs.
    """

    def __init__(self, path: Path, latency: float = 0.0):
        self.path = Path(path)
        super().__init__(self._load(), latency=latency)

    async def set(self, path: str, value: Any) -> None:
        await super().set(path, value)
        self._save()

    async def update(self, path: str, children: Mapping[str, Any]) -> None:
        await super().update(path, children)
        self._save()

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Error reading store file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Store file %s does not hold an object; starting empty.", self.path)
            return {}
        return data

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self._root, indent=2, ensure_ascii=False), encoding="utf-8")
