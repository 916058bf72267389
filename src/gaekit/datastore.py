"""
Entity-backed property store

A PropertyStore is a dictionary-like view over the properties of one named
entity of a fixed kind. Entities live in an EntityBackend; MemoryBackend
keeps them in process memory.
"""

import copy
import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import MutableMapping
from typing import Any, Dict, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

KIND = "GAEKit::Datastore"

# Strings at least this long are stored as LongText
LONG_TEXT_THRESHOLD = 500


class LongText(str):
    """Marks a string for long-text (unindexed) storage"""

    @property
    def value(self) -> str:
        return str(self)


def to_storage(value: Any) -> Any:
    """Wrap long strings as LongText before writing."""
    if isinstance(value, str) and not isinstance(value, LongText) and len(value) >= LONG_TEXT_THRESHOLD:
        return LongText(value)
    return value


def from_storage(value: Any) -> Any:
    """Unwrap stored values: LongText to str, sequences to lists."""
    if isinstance(value, LongText):
        return value.value
    if isinstance(value, (list, tuple)):
        return list(value)
    return value


class EntityBackend(ABC):
    """Storage for entities addressed by (kind, name)"""

    @abstractmethod
    def get(self, kind: str, name: str) -> Optional[Dict[str, Any]]:
        """Return the entity's properties, or None if it does not exist."""

    @abstractmethod
    def put(self, kind: str, name: str, properties: Dict[str, Any]) -> None:
        """Create or replace an entity."""

    @abstractmethod
    def query(self, kind: str) -> Iterator[Tuple[str, Dict[str, Any]]]:
        """Iterate over (name, properties) for every entity of a kind."""


class MemoryBackend(EntityBackend):
    """In-process entity backend"""

    def __init__(self):
        self._entities: Dict[Tuple[str, str], Dict[str, Any]] = {}
        self._lock = threading.Lock()

    def get(self, kind: str, name: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            entity = self._entities.get((kind, name))
            return copy.deepcopy(entity) if entity is not None else None

    def put(self, kind: str, name: str, properties: Dict[str, Any]) -> None:
        with self._lock:
            self._entities[(kind, name)] = copy.deepcopy(properties)

    def query(self, kind: str) -> Iterator[Tuple[str, Dict[str, Any]]]:
        with self._lock:
            snapshot = [
                (name, copy.deepcopy(properties))
                for (entity_kind, name), properties in self._entities.items()
                if entity_kind == kind
            ]
        return iter(snapshot)


class PropertyStore(MutableMapping):
    """
    Dictionary-like access to the properties of one entity

    A missing entity reads as empty. Every write loads the entity, applies
    the change and stores it back. Keys are converted with str().
    """

    def __init__(self, name: str, backend: EntityBackend, kind: str = KIND):
        self.name = name
        self.backend = backend
        self.kind = kind

    def _load(self) -> Dict[str, Any]:
        return self.backend.get(self.kind, self.name) or {}

    def _save(self, properties: Dict[str, Any]) -> None:
        self.backend.put(self.kind, self.name, properties)

    def get(self, key: Any, default: Any = None) -> Any:
        properties = self._load()
        if str(key) not in properties:
            return default
        return from_storage(properties[str(key)])

    def put(self, key: Any, value: Any) -> Any:
        properties = self._load()
        properties[str(key)] = to_storage(value)
        self._save(properties)
        logger.debug(f"Stored property {key!r} on {self.kind}/{self.name}")
        return value

    def has_key(self, key: Any) -> bool:
        return str(key) in self._load()

    def delete(self, key: Any) -> None:
        properties = self._load()
        properties.pop(str(key), None)
        self._save(properties)

    def keys(self) -> List[str]:
        return list(self._load().keys())

    def values(self) -> List[Any]:
        return [from_storage(value) for value in self._load().values()]

    def __getitem__(self, key: Any) -> Any:
        properties = self._load()
        if str(key) not in properties:
            raise KeyError(key)
        return from_storage(properties[str(key)])

    def __setitem__(self, key: Any, value: Any) -> None:
        self.put(key, value)

    def __delitem__(self, key: Any) -> None:
        if not self.has_key(key):
            raise KeyError(key)
        self.delete(key)

    def __contains__(self, key: Any) -> bool:
        return self.has_key(key)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._load())

    def __repr__(self) -> str:
        return f"PropertyStore(kind={self.kind!r}, name={self.name!r})"


def dump(backend: EntityBackend, kind: str = KIND) -> Dict[str, Dict[str, Any]]:
    """
    Export every entity of a kind.

    Args:
        backend: Entity backend to read
        kind: Entity kind

    Returns:
        dict: Entity name mapped to its unwrapped properties
    """
    return {
        name: {key: from_storage(value) for key, value in properties.items()}
        for name, properties in backend.query(kind)
    }
