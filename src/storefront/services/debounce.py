from __future__ import annotations

import asyncio
from collections.abc import Callable


class DebounceTimer:
    """
    Cancellable single-shot timer on the running asyncio loop.

    At most one callback is pending at any time: arming the timer cancels a
    previously armed, not yet fired callback. Callbacks run on the loop
    thread and are therefore serialized with every other state mutation.
    """

    def __init__(self, delay_seconds: float) -> None:
        self.delay = delay_seconds
        self._handle: asyncio.TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def arm(self, callback: Callable[[], None]) -> None:
        loop = asyncio.get_running_loop()
        self.cancel()
        self._handle = loop.call_later(self.delay, self._fire, callback)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, callback: Callable[[], None]) -> None:
        self._handle = None
        callback()
