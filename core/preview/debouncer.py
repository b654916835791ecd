"""Debounced live previews with explicit cancellation tokens.

Every keystroke submits a preview job for its input box. The job waits for the debounce delay and
then runs; a newer submit for the same box revokes the previous token, so a stale preview is
never delivered.
"""

from __future__ import annotations

import asyncio
import itertools
from typing import TYPE_CHECKING, ClassVar, Generic, TypeVar

from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Awaitable, Callable

__all__: list[str] = ["CancellationToken", "PreviewDebouncer"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

T = TypeVar("T")


class CancellationToken(Generic[T]):
    """Handle of one submitted preview job.

    Attributes:
        box_id (str): Input box the job belongs to.
        sequence (int): Submission number; later submits have larger numbers.
    """

    _counter: ClassVar[itertools.count[int]] = itertools.count(1)

    def __init__(self, box_id: str) -> None:
        self.box_id: str = box_id
        self.sequence: int = next(self._counter)
        self._cancelled: bool = False
        self._task: asyncio.Task[T | None] | None = None

    def __repr__(self) -> str:
        return f"<CancellationToken box={self.box_id!r} seq={self.sequence} cancelled={self._cancelled}>"

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Revoke the token and stop its job if it is still running."""
        self._cancelled = True
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def result(self) -> T | None:
        """Wait for the job; None when it was cancelled or superseded."""
        if self._task is None:
            return None
        try:
            return await asyncio.shield(self._task)
        except asyncio.CancelledError:
            if self._task.cancelled():
                return None
            raise


class PreviewDebouncer:
    """Runs at most one pending preview job per input box.

    Args:
        delay (float): Debounce delay in seconds.
    """

    def __init__(self, delay: float = 0.5) -> None:
        self.delay: float = max(0.0, delay)
        self._current: dict[str, CancellationToken] = {}

    def __len__(self) -> int:
        return len(self._current)

    def current(self, box_id: str) -> CancellationToken | None:
        return self._current.get(box_id)

    def submit(
        self,
        box_id: str,
        coro_factory: Callable[[], Awaitable[T]],
        on_result: Callable[[T], None] | None = None,
    ) -> CancellationToken[T]:
        """Schedule a preview job, revoking the previous one for the same box.

        Must be called with a running event loop.

        Args:
            box_id (str): Input box identifier.
            coro_factory (Callable[[], Awaitable[T]]): Creates the job once the delay has passed.
            on_result (Callable[[T], None] | None): Called with the result if the token is still current.

        Returns:
            CancellationToken[T]: Token of the new job.
        """
        previous: CancellationToken | None = self._current.get(box_id)
        if previous is not None:
            previous.cancel()
            logger.debug("Preview superseded: %r", previous)

        token: CancellationToken[T] = CancellationToken(box_id)
        self._current[box_id] = token
        token._task = asyncio.get_running_loop().create_task(self._run(token, coro_factory, on_result))  # noqa: SLF001
        return token

    async def _run(
        self,
        token: CancellationToken[T],
        coro_factory: Callable[[], Awaitable[T]],
        on_result: Callable[[T], None] | None,
    ) -> T | None:
        try:
            await asyncio.sleep(self.delay)
            if token.is_cancelled:
                return None
            result: T = await coro_factory()
            if token.is_cancelled or self._current.get(token.box_id) is not token:
                logger.debug("Discarding stale preview: %r", token)
                return None
            if on_result is not None:
                on_result(result)
            return result
        finally:
            if self._current.get(token.box_id) is token:
                del self._current[token.box_id]

    def cancel(self, box_id: str) -> bool:
        """Cancel the pending job of a box; returns False when there was none."""
        token: CancellationToken | None = self._current.pop(box_id, None)
        if token is None:
            return False
        token.cancel()
        return True

    async def shutdown(self) -> None:
        """Cancel every pending job and wait for them to finish."""
        tokens: list[CancellationToken] = list(self._current.values())
        self._current.clear()
        for token in tokens:
            token.cancel()
        tasks = [token._task for token in tokens if token._task is not None]  # noqa: SLF001
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("PreviewDebouncer shut down (%d pending previews cancelled)", len(tasks))
