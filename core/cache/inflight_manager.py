"""Coalescing of identical concurrent translation hops."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, ClassVar, Generic, TypeVar

from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging


__all__: list[str] = ["InFlightManager"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

T = TypeVar("T")


class InFlightManager(Generic[T]):
    """Shares one pending result between identical concurrent requests.

    The first caller for a key becomes the producer and must finish with ``store_inflight_result``
    or ``store_inflight_exception``. Later callers for the same key wait on the producer's future.

    Attributes:
        INFLIGHT_TIMEOUT_SEC (float): Default time a waiter blocks on a producer.
    """

    INFLIGHT_TIMEOUT_SEC: ClassVar[float] = 10.0

    def __init__(self, timeout: float | None = None) -> None:
        self._inflight: dict[str, asyncio.Future[T]] = {}
        self._lock: asyncio.Lock = asyncio.Lock()
        self._is_initialized: bool = False
        self.timeout: float = self.INFLIGHT_TIMEOUT_SEC if timeout is None else timeout

    @property
    def is_initialized(self) -> bool:
        return self._is_initialized

    def __len__(self) -> int:
        return len(self._inflight)

    async def component_load(self) -> None:
        self._is_initialized = True
        logger.info("InFlightManager initialized successfully")

    async def component_teardown(self) -> None:
        """Cancel pending futures and clear the in-flight state."""
        self._is_initialized = False
        async with self._lock:
            for fut in self._inflight.values():
                if not fut.done():
                    fut.cancel()
            self._inflight.clear()
        logger.info("InFlightManager torn down and in-flight state cleared")

    async def mark_inflight_start(self, cache_key: str | None) -> T | None:
        """Register the caller as producer, or wait for the current producer.

        Args:
            cache_key (str | None): Cache key of the hop.

        Returns:
            T | None: The producer's result when another request was already in flight, or None when
            the caller was registered as producer (or coalescing is disabled).

        Raises:
            TimeoutError: If waiting for the producer times out or is cancelled.
            Exception: Whatever the producer stored with ``store_inflight_exception``.
        """
        if not self._is_initialized:
            return None

        if not cache_key:
            logger.warning("Attempted to mark in-flight start with empty cache key")
            return None

        async with self._lock:
            if cache_key not in self._inflight:
                loop: asyncio.AbstractEventLoop = asyncio.get_running_loop()
                fut: asyncio.Future[T] = loop.create_future()
                self._inflight[cache_key] = fut
                logger.debug("Marked in-flight start for key: %s", cache_key[:16])
                return None
            fut = self._inflight[cache_key]
            logger.debug("In-flight request detected for key: %s", cache_key[:16])

        try:
            result: T = await asyncio.wait_for(asyncio.shield(fut), timeout=self.timeout)
            logger.debug("Received in-flight result for key: %s", cache_key[:16])
        except TimeoutError:
            logger.warning("In-flight request timeout for key: %s", cache_key[:16])
            await self._forget(cache_key, fut)
            msg: str = f"In-flight request timed out for key: {cache_key[:16]}"
            raise TimeoutError(msg) from None
        except asyncio.CancelledError:
            logger.warning("In-flight request cancelled for key: %s", cache_key[:16])
            await self._forget(cache_key, fut)
            msg = f"In-flight request cancelled for key: {cache_key[:16]}"
            raise TimeoutError(msg) from None
        else:
            return result

    async def _forget(self, cache_key: str, fut: asyncio.Future[T]) -> None:
        async with self._lock:
            if self._inflight.get(cache_key) is fut:
                self._inflight.pop(cache_key, None)

    async def store_inflight_result(self, cache_key: str | None, result: T) -> None:
        """Complete the producer's future with a result and release the key."""
        if not cache_key:
            logger.warning("Attempted to store in-flight result with empty cache key")
            return

        async with self._lock:
            fut: asyncio.Future[T] | None = self._inflight.pop(cache_key, None)
            if fut and not fut.done():
                fut.set_result(result)
                logger.debug("Set in-flight result for key: %s", cache_key[:16])
            else:
                logger.debug("No pending in-flight future for key: %s", cache_key[:16])

    async def store_inflight_exception(self, cache_key: str | None, exc: Exception) -> None:
        """Complete the producer's future with an exception and release the key."""
        if not cache_key:
            logger.warning("Attempted to store in-flight exception with empty cache key")
            return

        async with self._lock:
            fut: asyncio.Future[T] | None = self._inflight.pop(cache_key, None)
            if fut and not fut.done():
                fut.set_exception(exc)
                # Waiters re-raise it; mark it retrieved so an unobserved future does not warn
                fut.exception()
                logger.debug("Set in-flight exception for key: %s", cache_key[:16])
            else:
                logger.debug("No pending in-flight future for key: %s", cache_key[:16])
