"""Models for the in-memory translation and correction caches.

Defines the cache entry stored per key and the statistics snapshot exposed by the caches.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Literal, TypeVar

__all__: list[str] = ["CacheEntry", "CachePolicy", "CacheStatistics"]

V = TypeVar("V")

type CachePolicy = Literal["fifo", "lru"]


@dataclass
class CacheEntry(Generic[V]):
    """One cached value.

    Attributes:
        key (str): Cache key, e.g. 'te:en:baagunnava'.
        value (V): Cached value.
        inserted_order (int): Monotonic insertion counter, used by FIFO eviction.
        hit_count (int): Number of times the entry was returned.
    """

    key: str
    value: V
    inserted_order: int
    hit_count: int = 0


@dataclass(frozen=True)
class CacheStatistics:
    """Snapshot of cache usage.

    Attributes:
        size (int): Current number of entries.
        max_size (int): Configured bound.
        hits (int): Lookups answered from the cache.
        misses (int): Lookups that found nothing.
        evictions (int): Entries dropped because the bound was exceeded.
        policy (CachePolicy): 'fifo' (oldest inserted first) or 'lru'.
    """

    size: int
    max_size: int
    hits: int = 0
    misses: int = 0
    evictions: int = 0
    policy: CachePolicy = "fifo"

    @property
    def hit_ratio(self) -> float:
        total: int = self.hits + self.misses
        return self.hits / total if total else 0.0
