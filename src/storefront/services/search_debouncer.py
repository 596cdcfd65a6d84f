# src/storefront/services/search_debouncer.py
from __future__ import annotations

import logging
from collections.abc import Callable

from storefront.core.metrics import SEARCH_SETTLEMENTS
from storefront.services.debounce import DebounceTimer

logger = logging.getLogger(__name__)


class SearchDebouncer:
    """
    Hält den rohen Suchbegriff (sofort aktualisiert) und den "settled"
    Suchbegriff, der erst nach einer vollen Ruhephase nachgezogen wird.
    """

    def __init__(self, quiet_period_seconds: float) -> None:
        self._timer = DebounceTimer(quiet_period_seconds)
        self._raw = ""
        self._settled = ""
        self._listeners: list[Callable[[str], None]] = []

    @property
    def raw(self) -> str:
        return self._raw

    @property
    def settled(self) -> str:
        return self._settled

    @property
    def pending(self) -> bool:
        return self._timer.pending

    def on_settle(self, listener: Callable[[str], None]) -> None:
        self._listeners.append(listener)

    def update_query(self, raw: str) -> None:
        self._timer.arm(self._settle)
        self._raw = raw

    def reset(self) -> None:
        """
        Clears raw and settled query and drops a pending settlement.
        Listeners are not called; the caller owns the change notification.
        """
        self._timer.cancel()
        self._raw = ""
        self._settled = ""

    def close(self) -> None:
        self._timer.cancel()

    def _settle(self) -> None:
        if self._raw == self._settled:
            return
        SEARCH_SETTLEMENTS.inc()
        self._settled = self._raw
        logger.debug("Search query settled to %r", self._settled)
        self._notify()

    def _notify(self) -> None:
        for listener in self._listeners:
            listener(self._settled)
