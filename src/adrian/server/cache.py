"""
Response Cache
==============

Thread-safe LRU cache for rendered responses with a fixed lifetime.
It is flushed whenever the font index changes.
"""

import logging
import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ..core.models import IndexChange
from ..fonts.index import FontIndex

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    """A cached response body with its expiry."""

    value: Any
    created_at: float
    expires_at: float
    access_count: int = 0

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


@dataclass
class CacheStats:
    """Statistics for response cache performance."""

    hits: int = 0
    misses: int = 0
    evictions: int = 0
    expirations: int = 0
    flushes: int = 0

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        total = self.hits + self.misses
        return (self.hits / total * 100.0) if total > 0 else 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "expirations": self.expirations,
            "flushes": self.flushes,
            "hit_rate_percent": self.hit_rate,
        }


class ResponseCache:
    """LRU cache with a time-to-live, keyed by request path and query."""

    def __init__(
        self,
        lifetime_seconds: float = 300.0,
        max_entries: int = 1024,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.lifetime_seconds = lifetime_seconds
        self.max_entries = max_entries
        self._clock = clock

        self._cache: OrderedDict[str, CacheEntry] = OrderedDict()
        self._lock = threading.RLock()
        self._stats = CacheStats()

        logger.info(
            f"ResponseCache initialized: lifetime={lifetime_seconds}s, max_entries={max_entries}"
        )

    @property
    def enabled(self) -> bool:
        return self.lifetime_seconds > 0

    def get(self, key: str) -> Any | None:
        """Return the cached value, or None on a miss or expiry."""
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                self._stats.misses += 1
                return None

            if entry.is_expired(self._clock()):
                del self._cache[key]
                self._stats.expirations += 1
                self._stats.misses += 1
                return None

            entry.access_count += 1
            self._cache.move_to_end(key)
            self._stats.hits += 1
            return entry.value

    def set(self, key: str, value: Any) -> None:
        """Store a value; evicts least recently used entries when full."""
        if not self.enabled:
            return

        now = self._clock()
        with self._lock:
            self._cache[key] = CacheEntry(
                value=value, created_at=now, expires_at=now + self.lifetime_seconds
            )
            self._cache.move_to_end(key)
            while len(self._cache) > self.max_entries:
                evicted_key, _ = self._cache.popitem(last=False)
                self._stats.evictions += 1
                logger.debug(f"Evicted cached response {evicted_key}")

    def get_or_set(self, key: str, factory: Callable[[], Any]) -> Any:
        """Return the cached value, computing and storing it on a miss."""
        value = self.get(key)
        if value is None:
            value = factory()
            self.set(key, value)
        return value

    def invalidate(self, key: str) -> bool:
        with self._lock:
            return self._cache.pop(key, None) is not None

    def clear(self) -> None:
        """Drop every cached response."""
        with self._lock:
            flushed = len(self._cache)
            self._cache.clear()
            self._stats.flushes += 1

        if flushed:
            logger.debug(f"Response cache flushed: {flushed} entries")

    def on_index_change(self, change: IndexChange) -> None:
        """Index listener: any font change may alter any CSS response."""
        self.clear()

    def attach(self, index: FontIndex) -> None:
        """Flush this cache on every mutation of ``index``."""
        index.add_listener(self.on_index_change)

    def get_stats(self) -> CacheStats:
        """Get cache statistics."""
        with self._lock:
            return CacheStats(
                hits=self._stats.hits,
                misses=self._stats.misses,
                evictions=self._stats.evictions,
                expirations=self._stats.expirations,
                flushes=self._stats.flushes,
            )

    def get_cache_info(self) -> dict[str, Any]:
        """Get cache size and statistics."""
        with self._lock:
            return {
                "total_entries": len(self._cache),
                "max_entries": self.max_entries,
                "lifetime_seconds": self.lifetime_seconds,
                "stats": self._stats.to_dict(),
            }

    def __len__(self) -> int:
        """Get number of cached responses."""
        with self._lock:
            return len(self._cache)
