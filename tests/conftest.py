# tests/conftest.py
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from storefront.core.config import Settings
from storefront.domain.models import Product, Rating
from storefront.domain.ports import CatalogSourcePort
from storefront.repositories.key_value_repository import InMemoryKeyValueStore

# Kurze Ruhephasen, damit Timer-Tests schnell laufen
QUIET = 0.01
SETTLE = 0.05


def make_product(
    product_id: int,
    title: str,
    category: str,
    description: str = "",
    price: str = "9.99",
) -> Product:
    return Product(
        id=product_id,
        title=title,
        description=description,
        category=category,
        price=Decimal(price),
        image=f"https://example.com/{product_id}.jpg",
        rating=Rating(rate=4.2, count=10),
    )


@pytest.fixture
def catalog() -> list[Product]:
    return [
        make_product(
            1,
            "Wireless Headphones Pro",
            "electronics",
            "Noise cancelling over-ear headphones",
            "199.00",
        ),
        make_product(2, "The Pragmatic Programmer", "books", "Classic software engineering book"),
        make_product(
            3,
            "USB-C Charger",
            "electronics",
            "Fast charger, pairs well with wireless headphones",
            "25.00",
        ),
        make_product(4, "Headphones: A History", "books", "The story of wireless headphones"),
        make_product(5, "Smart Watch", "electronics", "Fitness tracking and notifications"),
        make_product(6, "Cotton T-Shirt", "clothing", "Plain white tee"),
    ]


@pytest.fixture
def source(catalog: list[Product]) -> AsyncMock:
    mock_source = AsyncMock(spec=CatalogSourcePort)
    mock_source.fetch_all.return_value = catalog
    return mock_source


@pytest.fixture
def kv_store() -> MagicMock:
    return MagicMock(wraps=InMemoryKeyValueStore())


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        search_debounce_seconds=QUIET,
        cart_persist_debounce_seconds=QUIET,
        storage_url="sqlite:///:memory:",
    )
