"""Bounded caches and in-flight request coalescing."""

from __future__ import annotations

from core.cache.bounded_cache import BoundedCache
from core.cache.inflight_manager import InFlightManager

__all__: list[str] = ["BoundedCache", "InFlightManager"]
