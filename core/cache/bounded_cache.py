"""Bounded in-memory cache shared by the translation engine and the phonetic corrector.

Entries are never time-expired. When the bound is exceeded the oldest inserted entry is evicted
(``fifo``) or, with the ``lru`` policy, the least recently read one.
"""

from __future__ import annotations

from collections import OrderedDict
from typing import TYPE_CHECKING, Generic, TypeVar

from models.cache_models import CacheEntry, CachePolicy, CacheStatistics
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

__all__: list[str] = ["BoundedCache"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

V = TypeVar("V")


class BoundedCache(Generic[V]):
    """Size-bounded key/value store.

    Attributes:
        name (str): Label used in log messages.
        max_size (int): Maximum number of entries; values below 1 are raised to 1.
        policy (CachePolicy): Eviction policy.
    """

    def __init__(self, max_size: int, policy: CachePolicy = "fifo", *, name: str = "cache") -> None:
        if policy not in ("fifo", "lru"):
            logger.warning("Unknown cache policy '%s' for %s; falling back to 'fifo'", policy, name)
            policy = "fifo"
        self.name: str = name
        self.max_size: int = max(1, int(max_size))
        self.policy: CachePolicy = policy
        self._entries: OrderedDict[str, CacheEntry[V]] = OrderedDict()
        self._counter: int = 0
        self._hits: int = 0
        self._misses: int = 0
        self._evictions: int = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def get(self, key: str) -> V | None:
        """Return the cached value or None, updating hit / miss counters."""
        entry: CacheEntry[V] | None = self._entries.get(key)
        if entry is None:
            self._misses += 1
            return None
        self._hits += 1
        entry.hit_count += 1
        if self.policy == "lru":
            self._entries.move_to_end(key)
        return entry.value

    def set(self, key: str, value: V) -> None:
        """Store a value and evict while the bound is exceeded.

        Overwriting an existing key keeps its insertion position under FIFO.
        """
        existing: CacheEntry[V] | None = self._entries.get(key)
        if existing is not None:
            existing.value = value
            if self.policy == "lru":
                self._entries.move_to_end(key)
            return

        self._counter += 1
        self._entries[key] = CacheEntry(key=key, value=value, inserted_order=self._counter)
        while len(self._entries) > self.max_size:
            evicted_key, _ = self._entries.popitem(last=False)
            self._evictions += 1
            logger.debug("%s evicted entry: %s", self.name, evicted_key[:32])

    def discard(self, key: str) -> None:
        """Drop one entry if present (used for entries found to be unusable)."""
        if self._entries.pop(key, None) is not None:
            logger.debug("%s discarded entry: %s", self.name, key[:32])

    def clear(self) -> None:
        """Remove every entry and reset the counters."""
        self._entries.clear()
        self._hits = 0
        self._misses = 0
        self._evictions = 0
        logger.debug("%s cleared", self.name)

    def keys(self) -> list[str]:
        """Return the keys in eviction order, next victim first."""
        return list(self._entries)

    def stats(self) -> CacheStatistics:
        return CacheStatistics(
            size=len(self._entries),
            max_size=self.max_size,
            hits=self._hits,
            misses=self._misses,
            evictions=self._evictions,
            policy=self.policy,
        )
