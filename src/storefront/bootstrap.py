# src/storefront/bootstrap.py
from __future__ import annotations

import asyncio
import contextlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx

from storefront.adapters.fake_store import FakeStoreAdapter
from storefront.core.config import Settings, get_settings
from storefront.domain.ports import CatalogSourcePort
from storefront.repositories.base import AbstractKeyValueStore
from storefront.repositories.sqlite_key_value_repository import SQLiteKeyValueStore
from storefront.services.cart_store import CartStore
from storefront.services.catalog_facade import CatalogFacade
from storefront.services.catalog_loader import CatalogLoader
from storefront.services.search_debouncer import SearchDebouncer


# Ein Client pro Session (Connection Pooling innerhalb der Session)
def create_http_client(settings: Settings) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        headers={"User-Agent": f"{settings.app_name}/{settings.app_version}"},
        follow_redirects=True,
    )


def create_catalog_source(settings: Settings, client: httpx.AsyncClient) -> CatalogSourcePort:
    return FakeStoreAdapter(
        http_client=client,
        url=settings.catalog_url,
        timeout=settings.catalog_timeout_seconds,
    )


def create_key_value_store(settings: Settings) -> SQLiteKeyValueStore:
    store = SQLiteKeyValueStore(database_url=settings.storage_url)
    store.initialize()
    return store


def create_catalog_facade(
    settings: Settings,
    source: CatalogSourcePort,
    store: AbstractKeyValueStore,
) -> CatalogFacade:
    """Composition root: wires one facade. Consumers receive it explicitly."""
    return CatalogFacade(
        loader=CatalogLoader(source),
        cart=CartStore(
            store,
            storage_key=settings.cart_storage_key,
            quiet_period_seconds=settings.cart_persist_debounce_seconds,
        ),
        search=SearchDebouncer(quiet_period_seconds=settings.search_debounce_seconds),
        search_min_length=settings.search_min_length,
    )


@asynccontextmanager
async def catalog_session(
    settings: Settings | None = None,
    source: CatalogSourcePort | None = None,
    store: AbstractKeyValueStore | None = None,
) -> AsyncGenerator[CatalogFacade, None]:
    """
    Builds a facade, starts the catalog load and tears everything down on exit.
    On exit the cart is flushed so a pending write is not lost.
    """
    settings = settings or get_settings()
    client: httpx.AsyncClient | None = None
    if source is None:
        client = create_http_client(settings)
        source = create_catalog_source(settings, client)
    owned_store: SQLiteKeyValueStore | None = None
    if store is None:
        store = owned_store = create_key_value_store(settings)

    facade = create_catalog_facade(settings, source, store)
    # Startup: Katalog lädt im Hintergrund
    load_task = asyncio.create_task(facade.load())
    try:
        yield facade
    finally:
        # Shutdown: laufenden Request abbrechen, Timer und Client schließen
        if not load_task.done():
            load_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await load_task
        if facade.is_loading:
            facade.reload()
        facade.close(flush_cart=True)
        if owned_store is not None:
            owned_store.close()
        if client is not None:
            await client.aclose()
