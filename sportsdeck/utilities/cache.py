"""In-memory TTL cache for catalog reads.

A single freshness watermark is shared by every key: any set() refreshes
the whole store. Readers must check is_valid() before trusting a hit;
get_fresh() does both in one call. An entry older than the TTL is only
ever served while some later write keeps the watermark fresh.

Pass per_key_ttl=True to age every entry on its own fetched_at instead.
"""

import logging
import os
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

CACHE_TTL_SECONDS = float(os.environ.get("SPORTSDECK_CACHE_TTL", 30 * 60))


@dataclass
class CacheEntry:
    """A cached value and the time it was fetched."""

    key: str
    value: Any
    fetched_at: float


def make_cache_key(prefix: str, *parts: object) -> str:
    """Build an operation-namespaced key.

    >>> make_cache_key("league", "English Premier League")
    'league_English Premier League'
    >>> make_cache_key("table", 4328, "2024-2025")
    'table_4328_2024-2025'
    """
    return "_".join([prefix, *(str(p) for p in parts)])


class CacheStore:
    """Keyed store gated by a freshness watermark.

    The clock is injectable so tests can move time without sleeping.
    """

    def __init__(
        self,
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
        per_key_ttl: bool = False,
    ):
        self._ttl = ttl_seconds if ttl_seconds is not None else CACHE_TTL_SECONDS
        self._clock = clock
        self._per_key_ttl = per_key_ttl
        self._entries: dict[str, CacheEntry] = {}
        self._watermark: float | None = None
        self._hits = 0
        self._misses = 0

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def get(self, key: str) -> Any | None:
        """Return the raw cached value, or None. Does not check freshness."""
        entry = self._entries.get(key)
        return entry.value if entry else None

    def set(self, key: str, value: Any) -> None:
        """Store a value and reset the freshness watermark."""
        now = self._clock()
        self._entries[key] = CacheEntry(key=key, value=value, fetched_at=now)
        self._watermark = now

    def is_valid(self) -> bool:
        """True iff the last write happened less than one TTL ago."""
        if self._watermark is None:
            return False
        return self._clock() - self._watermark < self._ttl

    def get_fresh(self, key: str) -> Any | None:
        """Return a cached value only if the store is still fresh.

        An invalid hit is reported exactly like a miss.
        """
        entry = self._entries.get(key)
        if entry is None:
            self._misses += 1
            return None

        if self._per_key_ttl:
            fresh = self._clock() - entry.fetched_at < self._ttl
        else:
            fresh = self.is_valid()

        if not fresh:
            self._misses += 1
            logger.debug("[CACHE] Stale entry treated as miss: %s", key)
            return None

        self._hits += 1
        logger.debug("[CACHE] Hit: %s", key)
        return entry.value

    def entries(self) -> list[CacheEntry]:
        return list(self._entries.values())

    def clear(self) -> None:
        """Drop every entry and the watermark (pull-to-refresh, explicit reset)."""
        count = len(self._entries)
        self._entries.clear()
        self._watermark = None
        logger.info("[CACHE] Cleared %d entries", count)

    def stats(self) -> dict:
        """Cache statistics."""
        age = None
        if self._watermark is not None:
            age = round(self._clock() - self._watermark, 1)
        return {
            "entries": len(self._entries),
            "hits": self._hits,
            "misses": self._misses,
            "is_valid": self.is_valid(),
            "age_seconds": age,
            "ttl_seconds": self._ttl,
            "per_key_ttl": self._per_key_ttl,
        }
