from __future__ import annotations

from abc import ABC, abstractmethod


class AbstractKeyValueStore(ABC):
    """Durable key-value storage. Synchronous from the caller's point of view."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Returns the serialized value stored under key, or None if absent."""
        ...

    @abstractmethod
    def put(self, key: str, value: str) -> None:
        """Stores the serialized value under key, replacing any previous value."""
        ...
