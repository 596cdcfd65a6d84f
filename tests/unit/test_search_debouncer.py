# tests/unit/test_search_debouncer.py
import asyncio

import pytest
from conftest import QUIET, SETTLE
from prometheus_client import REGISTRY

from storefront.services.debounce import DebounceTimer
from storefront.services.search_debouncer import SearchDebouncer


def _settlements() -> float:
    return REGISTRY.get_sample_value("search_settlements_total") or 0.0


@pytest.mark.asyncio  # type: ignore[misc]
async def test_timer_rearm_cancels_previous_callback() -> None:
    fired: list[str] = []
    timer = DebounceTimer(QUIET)

    timer.arm(lambda: fired.append("first"))
    timer.arm(lambda: fired.append("second"))
    assert timer.pending is True

    await asyncio.sleep(SETTLE)

    assert fired == ["second"]
    assert timer.pending is False


@pytest.mark.asyncio  # type: ignore[misc]
async def test_timer_cancel_drops_callback() -> None:
    fired: list[str] = []
    timer = DebounceTimer(QUIET)

    timer.arm(lambda: fired.append("x"))
    timer.cancel()
    await asyncio.sleep(SETTLE)

    assert fired == []


@pytest.mark.asyncio  # type: ignore[misc]
async def test_raw_updates_immediately_settled_lags() -> None:
    debouncer = SearchDebouncer(QUIET)

    debouncer.update_query("lap")

    assert debouncer.raw == "lap"
    assert debouncer.settled == ""
    await asyncio.sleep(SETTLE)
    assert debouncer.settled == "lap"


@pytest.mark.asyncio  # type: ignore[misc]
async def test_rapid_updates_settle_exactly_once_to_last_value() -> None:
    debouncer = SearchDebouncer(QUIET)
    settled: list[str] = []
    debouncer.on_settle(settled.append)
    initial = _settlements()

    for value in ["w", "wi", "wir", "wire", "wireless"]:
        debouncer.update_query(value)

    await asyncio.sleep(SETTLE)

    assert settled == ["wireless"]
    assert debouncer.settled == "wireless"
    assert _settlements() == initial + 1


@pytest.mark.asyncio  # type: ignore[misc]
async def test_value_must_stay_stable_for_full_quiet_period() -> None:
    debouncer = SearchDebouncer(0.05)

    debouncer.update_query("first")
    await asyncio.sleep(0.02)
    debouncer.update_query("second")
    await asyncio.sleep(0.02)

    # Zeitfenster von "first" wäre abgelaufen, wurde aber neu armiert
    assert debouncer.settled == ""
    await asyncio.sleep(0.1)
    assert debouncer.settled == "second"


@pytest.mark.asyncio  # type: ignore[misc]
async def test_reset_clears_state_and_pending_settlement() -> None:
    debouncer = SearchDebouncer(QUIET)
    debouncer.update_query("books")
    await asyncio.sleep(SETTLE)
    debouncer.update_query("booksh")

    debouncer.reset()
    await asyncio.sleep(SETTLE)

    assert debouncer.raw == ""
    assert debouncer.settled == ""
    assert debouncer.pending is False


@pytest.mark.asyncio  # type: ignore[misc]
async def test_close_prevents_settlement() -> None:
    debouncer = SearchDebouncer(QUIET)
    settled: list[str] = []
    debouncer.on_settle(settled.append)

    debouncer.update_query("shoes")
    debouncer.close()
    await asyncio.sleep(SETTLE)

    assert settled == []
    assert debouncer.settled == ""


@pytest.mark.asyncio  # type: ignore[misc]
async def test_settling_to_unchanged_value_is_not_counted() -> None:
    debouncer = SearchDebouncer(QUIET)
    debouncer.update_query("lamp")
    await asyncio.sleep(SETTLE)
    initial = _settlements()

    debouncer.update_query("lampe")
    debouncer.update_query("lamp")
    await asyncio.sleep(SETTLE)

    assert debouncer.settled == "lamp"
    assert _settlements() == initial


def test_update_outside_event_loop_leaves_query_unchanged() -> None:
    debouncer = SearchDebouncer(QUIET)

    with pytest.raises(RuntimeError):
        debouncer.update_query("desk")

    assert debouncer.raw == ""
