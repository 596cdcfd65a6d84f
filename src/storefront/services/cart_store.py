# src/storefront/services/cart_store.py
from __future__ import annotations

import logging
from collections.abc import Callable

from pydantic import TypeAdapter, ValidationError

from storefront.core.metrics import CART_WRITES
from storefront.domain.models import Product
from storefront.repositories.base import AbstractKeyValueStore
from storefront.services.debounce import DebounceTimer

logger = logging.getLogger(__name__)

_IDS_ADAPTER = TypeAdapter(list[int])


def _product_id(product: Product | int) -> int:
    return product.id if isinstance(product, Product) else product


class CartStore:
    """
    Menge der ausgewählten Produkt-IDs mit verzögerter, zusammengefasster
    Persistenz.

    Jede Mutation wirkt sofort im Speicher und (re-)armiert einen Timer;
    erst wenn dieser feuert, wird der dann aktuelle Stand geschrieben.
    Der Speicher ist die Quelle der Wahrheit, der Store wird nur beim
    Start gelesen.
    """

    def __init__(
        self,
        store: AbstractKeyValueStore,
        storage_key: str,
        quiet_period_seconds: float,
    ) -> None:
        self._store = store
        self._key = storage_key
        self._timer = DebounceTimer(quiet_period_seconds)
        # Zuletzt dauerhaft gespeicherter Stand; gleicher Stand => kein Write.
        # None erzwingt den nächsten Write (z.B. nach korrupten Daten).
        self._persisted: frozenset[int] | None = None
        self._ids: set[int] = self._hydrate()
        self._listeners: list[Callable[[], None]] = []

    def _hydrate(self) -> set[int]:
        raw = self._store.get(self._key)
        if raw is None:
            self._persisted = frozenset()
            return set()
        try:
            ids = set(_IDS_ADAPTER.validate_json(raw))
        except ValidationError:
            logger.warning("Ignoring corrupt cart data under key '%s'", self._key, exc_info=True)
            return set()
        self._persisted = frozenset(ids)
        return ids

    def on_change(self, listener: Callable[[], None]) -> None:
        self._listeners.append(listener)

    def add(self, product: Product | int) -> bool:
        """Adds a product id. Returns True if membership changed."""
        product_id = _product_id(product)
        changed = product_id not in self._ids
        # Timer zuerst: ohne laufenden Loop bleibt der Speicher unverändert
        self._timer.arm(self._persist)
        self._ids.add(product_id)
        self._after_mutation(changed)
        return changed

    def remove(self, product: Product | int) -> bool:
        """Removes a product id. Returns True if membership changed."""
        product_id = _product_id(product)
        changed = product_id in self._ids
        self._timer.arm(self._persist)
        self._ids.discard(product_id)
        self._after_mutation(changed)
        return changed

    def contains(self, product: Product | int) -> bool:
        return _product_id(product) in self._ids

    def size(self) -> int:
        return len(self._ids)

    def ids(self) -> tuple[int, ...]:
        return tuple(sorted(self._ids))

    @property
    def pending_write(self) -> bool:
        return self._timer.pending

    def flush(self) -> None:
        """Writes the current set immediately and drops the pending timer."""
        self._timer.cancel()
        self._persist()

    def close(self, flush: bool = False) -> None:
        if flush and self._timer.pending:
            self.flush()
        else:
            self._timer.cancel()

    def _after_mutation(self, changed: bool) -> None:
        if changed:
            for listener in self._listeners:
                listener()

    def _persist(self) -> None:
        snapshot = frozenset(self._ids)
        if snapshot == self._persisted:
            return

        try:
            self._store.put(self._key, _IDS_ADAPTER.dump_json(sorted(snapshot)).decode())
        except Exception:
            # Speicher bleibt maßgeblich; der nächste erfolgreiche Write gleicht ab
            CART_WRITES.labels(status="error").inc()
            self._persisted = None
            logger.exception("Failed to persist cart under key '%s'", self._key)
            return

        CART_WRITES.labels(status="ok").inc()
        self._persisted = snapshot
