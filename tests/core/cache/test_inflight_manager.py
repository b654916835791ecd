"""Tests for InFlightManager."""

from __future__ import annotations

import asyncio

import pytest

from core.cache.inflight_manager import InFlightManager


@pytest.fixture
async def inflight_manager() -> InFlightManager[str]:
    """Create and initialize InFlightManager."""
    manager: InFlightManager[str] = InFlightManager()
    await manager.component_load()
    return manager


@pytest.mark.asyncio
async def test_mark_inflight_start_returns_none_when_not_initialized() -> None:
    """mark_inflight_start should no-op before component initialization."""
    manager: InFlightManager[str] = InFlightManager()

    result: str | None = await manager.mark_inflight_start("key")

    assert result is None
    assert len(manager) == 0


@pytest.mark.asyncio
async def test_waiter_receives_producer_result(inflight_manager: InFlightManager[str]) -> None:
    key = "te:en:baagunnava"

    first: str | None = await inflight_manager.mark_inflight_start(key)
    assert first is None

    waiter: asyncio.Task[str | None] = asyncio.create_task(inflight_manager.mark_inflight_start(key))
    await asyncio.sleep(0)
    await inflight_manager.store_inflight_result(key, "how are you")

    assert await waiter == "how are you"
    assert len(inflight_manager) == 0


@pytest.mark.asyncio
async def test_mark_inflight_start_timeout_does_not_cancel_shared_future() -> None:
    """Wait timeout should not cancel the producer-owned shared future."""
    manager: InFlightManager[str] = InFlightManager(timeout=0.01)
    await manager.component_load()
    key = "timeout-key"

    first: str | None = await manager.mark_inflight_start(key)
    assert first is None

    shared_future: asyncio.Future[str] = manager._inflight[key]  # noqa: SLF001

    with pytest.raises(TimeoutError):
        await manager.mark_inflight_start(key)

    assert shared_future.cancelled() is False


@pytest.mark.asyncio
async def test_mark_inflight_start_converts_cancelled_future_to_timeout(
    inflight_manager: InFlightManager[str],
) -> None:
    """Cancelled shared future should be converted to TimeoutError for callers."""
    key = "cancel-key"

    first: str | None = await inflight_manager.mark_inflight_start(key)
    assert first is None

    waiter: asyncio.Task[str | None] = asyncio.create_task(inflight_manager.mark_inflight_start(key))
    await asyncio.sleep(0)

    shared_future: asyncio.Future[str] = inflight_manager._inflight[key]  # noqa: SLF001
    shared_future.cancel()

    with pytest.raises(TimeoutError, match="cancelled"):
        await waiter


@pytest.mark.asyncio
async def test_store_inflight_exception_propagates_to_waiter(inflight_manager: InFlightManager[str]) -> None:
    """Stored inflight exception should propagate to waiting callers."""
    key = "exception-key"

    first: str | None = await inflight_manager.mark_inflight_start(key)
    assert first is None

    waiter: asyncio.Task[str | None] = asyncio.create_task(inflight_manager.mark_inflight_start(key))
    await asyncio.sleep(0)

    err = RuntimeError("translation failed")
    await inflight_manager.store_inflight_exception(key, err)

    with pytest.raises(RuntimeError, match="translation failed"):
        await waiter


@pytest.mark.asyncio
async def test_empty_key_is_ignored(inflight_manager: InFlightManager[str]) -> None:
    assert await inflight_manager.mark_inflight_start("") is None
    await inflight_manager.store_inflight_result(None, "ignored")
    await inflight_manager.store_inflight_exception("", RuntimeError("ignored"))

    assert len(inflight_manager) == 0


@pytest.mark.asyncio
async def test_teardown_cancels_pending_futures(inflight_manager: InFlightManager[str]) -> None:
    await inflight_manager.mark_inflight_start("pending")
    shared_future: asyncio.Future[str] = inflight_manager._inflight["pending"]  # noqa: SLF001

    await inflight_manager.component_teardown()

    assert shared_future.cancelled() is True
    assert inflight_manager.is_initialized is False
    assert len(inflight_manager) == 0
