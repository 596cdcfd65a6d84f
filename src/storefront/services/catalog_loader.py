# src/storefront/services/catalog_loader.py
from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from storefront.core.metrics import CATALOG_FETCH_COUNT, CATALOG_FETCH_DURATION
from storefront.domain.models import CatalogLoadState, LoadStatus
from storefront.domain.ports import CatalogLoadError, CatalogSourcePort
from storefront.services.catalog_filters import derive_categories

logger = logging.getLogger(__name__)

_PENDING = CatalogLoadState(status=LoadStatus.PENDING)


class CatalogLoader:
    """
    Lädt den Remote-Katalog genau einmal.

    Parallele load()-Aufrufe teilen sich denselben laufenden Request; nach
    Erfolg oder Fehler wird der gespeicherte Zustand zurückgegeben, bis
    invalidate() aufgerufen wird.
    """

    def __init__(self, source: CatalogSourcePort) -> None:
        self._source = source
        self._state = _PENDING
        self._categories: tuple[str, ...] = ()
        self._task: asyncio.Task[CatalogLoadState] | None = None
        self._listeners: list[Callable[[CatalogLoadState], None]] = []

    @property
    def state(self) -> CatalogLoadState:
        return self._state

    @property
    def categories(self) -> tuple[str, ...]:
        return self._categories

    def on_change(self, listener: Callable[[CatalogLoadState], None]) -> None:
        self._listeners.append(listener)

    async def load(self) -> CatalogLoadState:
        while True:
            if self._task is None:
                self._task = asyncio.create_task(self._fetch())
            task = self._task
            try:
                # shield: ein abgebrochener Aufrufer bricht nicht den geteilten Request ab
                return await asyncio.shield(task)
            except asyncio.CancelledError:
                current = asyncio.current_task()
                if task is self._task or (current is not None and current.cancelling()):
                    raise
                # Request wurde durch invalidate() ersetzt: dem neuen Laden folgen
                logger.debug("Catalog load superseded by invalidate(), reloading")

    def invalidate(self) -> None:
        """Drops the cached result so the next load() fetches again."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        self._categories = ()
        self._set_state(_PENDING)

    async def _fetch(self) -> CatalogLoadState:
        try:
            with CATALOG_FETCH_DURATION.time():
                products = await self._source.fetch_all()
        except CatalogLoadError as e:
            CATALOG_FETCH_COUNT.labels(status=e.kind.value).inc()
            logger.warning("Catalog load failed: %s", e)
            state = CatalogLoadState(status=LoadStatus.FAILED, error=e.kind, error_detail=e.detail)
        else:
            CATALOG_FETCH_COUNT.labels(status="ok").inc()
            catalog = tuple(products)
            self._categories = derive_categories(catalog)
            logger.info(
                "Catalog loaded: %d products in %d categories",
                len(catalog),
                len(self._categories),
            )
            state = CatalogLoadState(status=LoadStatus.READY, data=catalog)

        self._set_state(state)
        return state

    def _set_state(self, state: CatalogLoadState) -> None:
        self._state = state
        for listener in self._listeners:
            listener(state)
