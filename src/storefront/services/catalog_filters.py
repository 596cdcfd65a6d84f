# src/storefront/services/catalog_filters.py
from __future__ import annotations

from collections.abc import Sequence

from storefront.domain.models import ALL_CATEGORIES, Product


def derive_categories(catalog: Sequence[Product]) -> tuple[str, ...]:
    """Distinct category labels in order of first occurrence."""
    return tuple(dict.fromkeys(product.category for product in catalog))


def search_products(
    settled_query: str, candidates: Sequence[Product], min_length: int = 3
) -> tuple[Product, ...]:
    """
    Case-insensitive substring search over title OR description.
    Below min_length the search is inert and returns nothing.
    """
    if len(settled_query) < min_length:
        return ()

    query_lower = settled_query.lower()
    return tuple(
        p
        for p in candidates
        if query_lower in p.title.lower() or query_lower in p.description.lower()
    )


class CategoryFilter:
    def __init__(self) -> None:
        self._selected = ALL_CATEGORIES

    @property
    def selected(self) -> str:
        return self._selected

    def select(self, label: str) -> str:
        """
        Selects a category and returns the effective selection.
        Selecting the active category again toggles back to "all".
        """
        if label == self._selected:
            label = ALL_CATEGORIES
        self._selected = label
        return self._selected

    def visible(self, catalog: Sequence[Product] | None) -> tuple[Product, ...]:
        if not catalog:
            return ()
        if self._selected == ALL_CATEGORIES:
            return tuple(catalog)
        return tuple(p for p in catalog if p.category == self._selected)
