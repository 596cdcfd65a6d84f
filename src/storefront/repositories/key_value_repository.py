# src/storefront/repositories/key_value_repository.py
from __future__ import annotations

from storefront.repositories.base import AbstractKeyValueStore


class InMemoryKeyValueStore(AbstractKeyValueStore):
    """
    In-Memory Key-Value-Store für Tests und kurzlebige Sessions.
    Interface kann gegen die SQLAlchemy-Implementierung ausgetauscht werden.
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._store: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._store.get(key)

    def put(self, key: str, value: str) -> None:
        self._store[key] = value
