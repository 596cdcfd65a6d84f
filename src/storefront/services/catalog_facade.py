# src/storefront/services/catalog_facade.py
from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from storefront.domain.models import (
    CatalogLoadState,
    LoadErrorKind,
    LoadStatus,
    Product,
    SearchMode,
)
from storefront.services.cart_store import CartStore
from storefront.services.catalog_filters import CategoryFilter, search_products
from storefront.services.catalog_loader import CatalogLoader
from storefront.services.search_debouncer import SearchDebouncer

logger = logging.getLogger(__name__)

T = TypeVar("T")

_ERROR_MESSAGES = {
    LoadErrorKind.TRANSPORT: "Could not reach the product catalog.",
    LoadErrorKind.BAD_STATUS: "The product catalog responded with an error.",
    LoadErrorKind.EMPTY_PAYLOAD: "There are no products to show.",
}


def _same_inputs(a: tuple[object, ...], b: tuple[object, ...]) -> bool:
    return len(a) == len(b) and all(x is y or x == y for x, y in zip(a, b, strict=True))


class _Memo(Generic[T]):
    """Caches one computed value, recomputed only when its inputs change."""

    def __init__(self) -> None:
        self._inputs: tuple[object, ...] | None = None
        self._value: T

    def get(self, inputs: tuple[object, ...], compute: Callable[[], T]) -> T:
        if self._inputs is None or not _same_inputs(inputs, self._inputs):
            self._value = compute()
            self._inputs = inputs
        return self._value


@dataclass(frozen=True)
class CatalogActions:
    """Mutation entry points. Built once per facade; identities never change."""

    add_to_cart: Callable[[Product | int], bool]
    remove_from_cart: Callable[[Product | int], bool]
    select_category: Callable[[str], str]
    update_search_query: Callable[[str], None]


class CatalogFacade:
    """
    Single read/mutate surface for presentation code.

    Derived collections are memoized on their actual inputs (catalog,
    selected category, settled query), so repeated reads return the
    identical tuple until one of those inputs changes. Subscribers are
    notified only when observable state actually changed.
    """

    def __init__(
        self,
        loader: CatalogLoader,
        cart: CartStore,
        search: SearchDebouncer,
        category_filter: CategoryFilter | None = None,
        search_min_length: int = 3,
    ) -> None:
        self._loader = loader
        self._cart = cart
        self._search = search
        self._category_filter = category_filter or CategoryFilter()
        self._search_min_length = search_min_length

        self._visible_memo: _Memo[tuple[Product, ...]] = _Memo()
        self._search_memo: _Memo[tuple[Product, ...]] = _Memo()
        self._listeners: list[Callable[[], None]] = []
        self._version = 0

        loader.on_change(self._on_catalog_change)
        search.on_settle(self._on_search_settled)
        cart.on_change(self._notify)

        self.actions = CatalogActions(
            add_to_cart=self.add_to_cart,
            remove_from_cart=self.remove_from_cart,
            select_category=self.select_category,
            update_search_query=self.update_search_query,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def load(self) -> CatalogLoadState:
        return await self._loader.load()

    def reload(self) -> None:
        """Invalidates the loaded catalog; the next load() fetches again."""
        self._loader.invalidate()

    def close(self, flush_cart: bool = True) -> None:
        """Teardown: cancels pending timers, optionally writing the cart first."""
        self._search.close()
        self._cart.close(flush=flush_cart)
        self._listeners.clear()

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------

    @property
    def version(self) -> int:
        """Monotonic counter, bumped once per observable state change."""
        return self._version

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        self._version += 1
        for listener in list(self._listeners):
            listener()

    def _on_catalog_change(self, _state: CatalogLoadState) -> None:
        self._notify()

    def _on_search_settled(self, _settled: str) -> None:
        self._notify()

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def is_loading(self) -> bool:
        return self._loader.state.status == LoadStatus.PENDING

    @property
    def error(self) -> LoadErrorKind | None:
        return self._loader.state.error

    @property
    def error_message(self) -> str | None:
        if self.error is None:
            return None
        return _ERROR_MESSAGES[self.error]

    @property
    def catalog(self) -> tuple[Product, ...]:
        return self._loader.state.data or ()

    @property
    def categories(self) -> tuple[str, ...]:
        if self._loader.state.status != LoadStatus.READY:
            return ()
        return self._loader.categories

    @property
    def selected_category(self) -> str:
        return self._category_filter.selected

    @property
    def search_text(self) -> str:
        return self._search.raw

    @property
    def settled_query(self) -> str:
        return self._search.settled

    @property
    def visible_products(self) -> tuple[Product, ...]:
        catalog = self.catalog
        return self._visible_memo.get(
            (catalog, self._category_filter.selected),
            lambda: self._category_filter.visible(catalog),
        )

    @property
    def search_results(self) -> tuple[Product, ...]:
        candidates = self.visible_products
        settled = self._search.settled
        return self._search_memo.get(
            (candidates, settled),
            lambda: search_products(settled, candidates, self._search_min_length),
        )

    @property
    def display_products(self) -> Sequence[Product]:
        # Nicht-leere Suchtreffer haben Vorrang vor der Kategorie-Ansicht
        results = self.search_results
        return results if results else self.visible_products

    @property
    def search_mode(self) -> SearchMode:
        if len(self._search.settled) < self._search_min_length:
            return SearchMode.IDLE
        return SearchMode.RESULTS if self.search_results else SearchMode.NO_RESULTS

    @property
    def cart_count(self) -> int:
        return self._cart.size()

    def is_in_cart(self, product: Product | int) -> bool:
        return self._cart.contains(product)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_to_cart(self, product: Product | int) -> bool:
        return self._cart.add(product)

    def remove_from_cart(self, product: Product | int) -> bool:
        return self._cart.remove(product)

    def select_category(self, label: str) -> str:
        before = (self._category_filter.selected, self._search.raw, self._search.settled)
        selected = self._category_filter.select(label)
        self._search.reset()
        if before != (selected, self._search.raw, self._search.settled):
            logger.debug("Category selected: %s", selected)
            self._notify()
        return selected

    def update_search_query(self, raw: str) -> None:
        changed = raw != self._search.raw
        self._search.update_query(raw)
        if changed:
            self._notify()
