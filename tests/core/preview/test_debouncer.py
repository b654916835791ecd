from __future__ import annotations

import asyncio

import pytest

from core.preview import PreviewDebouncer


def make_job(value: str, delay: float = 0.0, calls: list[str] | None = None):
    async def job() -> str:
        if calls is not None:
            calls.append(value)
        if delay:
            await asyncio.sleep(delay)
        return value

    return lambda: job()


def test_negative_delay_is_clamped() -> None:
    assert PreviewDebouncer(-1.0).delay == 0.0


@pytest.mark.asyncio
async def test_job_runs_after_delay() -> None:
    debouncer = PreviewDebouncer(0.01)
    delivered: list[str] = []

    token = debouncer.submit("box", make_job("preview"), delivered.append)

    assert debouncer.current("box") is token
    assert await token.result() == "preview"
    assert delivered == ["preview"]
    assert len(debouncer) == 0


@pytest.mark.asyncio
async def test_newer_submit_supersedes_pending_job() -> None:
    debouncer = PreviewDebouncer(0.05)
    delivered: list[str] = []
    started: list[str] = []

    first = debouncer.submit("box", make_job("b", calls=started), delivered.append)
    second = debouncer.submit("box", make_job("ba", calls=started), delivered.append)

    assert first.is_cancelled is True
    assert second.sequence > first.sequence
    assert await first.result() is None
    assert await second.result() == "ba"
    assert started == ["ba"]
    assert delivered == ["ba"]


@pytest.mark.asyncio
async def test_running_job_is_not_delivered_once_superseded() -> None:
    debouncer = PreviewDebouncer(0.0)
    delivered: list[str] = []

    first = debouncer.submit("box", make_job("slow", delay=0.2), delivered.append)
    await asyncio.sleep(0.01)
    second = debouncer.submit("box", make_job("fast"), delivered.append)

    assert await first.result() is None
    assert await second.result() == "fast"
    assert delivered == ["fast"]


@pytest.mark.asyncio
async def test_boxes_are_independent() -> None:
    debouncer = PreviewDebouncer(0.01)

    first = debouncer.submit("left", make_job("l"))
    second = debouncer.submit("right", make_job("r"))

    assert len(debouncer) == 2
    assert await first.result() == "l"
    assert await second.result() == "r"


@pytest.mark.asyncio
async def test_cancel() -> None:
    debouncer = PreviewDebouncer(0.05)
    delivered: list[str] = []
    token = debouncer.submit("box", make_job("x"), delivered.append)

    assert debouncer.cancel("box") is True
    assert debouncer.cancel("box") is False
    assert await token.result() is None
    assert delivered == []


@pytest.mark.asyncio
async def test_shutdown_cancels_everything(caplog: pytest.LogCaptureFixture) -> None:
    debouncer = PreviewDebouncer(1.0)
    tokens = [debouncer.submit(box, make_job(box)) for box in ("a", "b", "c")]

    with caplog.at_level("INFO"):
        await debouncer.shutdown()

    assert len(debouncer) == 0
    assert all(token.is_cancelled for token in tokens)
    assert "3 pending previews cancelled" in caplog.text
