"""
Freshness cache for upstream data.

Time-bounded memoization keyed by request identity. A lookup within the
TTL of the last successful population returns the stored payload; a
lookup after that runs the refresh function and overwrites the entry.

Design rationale:
Both public feeds are rate-limited and slow relative to the dashboard's
polling rate. A short TTL (10 s for flights, 120 s for METARs) bounds
staleness while collapsing many client polls into one upstream call.
Flask serves requests on threads, so refreshes for the same key are
coalesced: while one thread refreshes, others for that key wait and then
reuse its result instead of calling upstream again.

Entries are never evicted; they are superseded in place. The weather map
grows by one entry per distinct airport code requested.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Generic, Hashable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """Payload plus the clock reading of its population."""
    payload: T
    timestamp: float

    def age(self, now: float) -> float:
        return now - self.timestamp


@dataclass(frozen=True)
class CacheLookup(Generic[T]):
    """Result of get_or_refresh_with_status: payload and whether it was a hit."""
    payload: T
    hit: bool


class FreshnessCache(Generic[T]):
    """
    Thread-safe TTL cache with at-most-one in-flight refresh per key.

    Args:
        ttl_seconds: default maximum age of a fresh entry
        name: label used in logs and stats
        clock: monotonic time source, injectable for tests
    """

    def __init__(
        self,
        ttl_seconds: float,
        name: str = 'cache',
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self.name = name
        self._clock = clock

        self._entries: Dict[Hashable, CacheEntry[T]] = {}
        self._refresh_locks: Dict[Hashable, threading.Lock] = {}
        self._lock = threading.RLock()

        # Statistics
        self._hits = 0
        self._misses = 0
        self._refresh_failures = 0

    def _fresh_entry(self, key: Hashable, ttl: float) -> Optional[CacheEntry[T]]:
        entry = self._entries.get(key)
        if entry is not None and entry.age(self._clock()) < ttl:
            return entry
        return None

    def get(self, key: Hashable, ttl: Optional[float] = None) -> Optional[T]:
        """Return the payload if fresh, else None. Never refreshes."""
        ttl = self.ttl_seconds if ttl is None else ttl
        with self._lock:
            entry = self._fresh_entry(key, ttl)
        return entry.payload if entry else None

    def peek(self, key: Hashable) -> Optional[CacheEntry[T]]:
        """Return the stored entry regardless of age."""
        with self._lock:
            return self._entries.get(key)

    def put(self, key: Hashable, payload: T) -> CacheEntry[T]:
        """Store payload, replacing any existing entry."""
        entry = CacheEntry(payload=payload, timestamp=self._clock())
        with self._lock:
            self._entries[key] = entry
        return entry

    def get_or_refresh(
        self,
        key: Hashable,
        ttl: Optional[float],
        refresh_fn: Callable[[], T],
    ) -> T:
        """
        Return the fresh payload for key, refreshing it if needed.

        A ttl of None uses the cache default.

        Exceptions raised by refresh_fn propagate and leave the existing
        entry untouched.
        """
        return self.get_or_refresh_with_status(key, ttl, refresh_fn).payload

    def get_or_refresh_with_status(
        self,
        key: Hashable,
        ttl: Optional[float],
        refresh_fn: Callable[[], T],
    ) -> CacheLookup[T]:
        """Like get_or_refresh, also reporting whether the payload was cached."""
        ttl = self.ttl_seconds if ttl is None else ttl

        with self._lock:
            entry = self._fresh_entry(key, ttl)
            if entry is not None:
                self._hits += 1
                return CacheLookup(payload=entry.payload, hit=True)
            refresh_lock = self._refresh_locks.setdefault(key, threading.Lock())

        with refresh_lock:
            # Another thread may have refreshed while we waited
            with self._lock:
                entry = self._fresh_entry(key, ttl)
                if entry is not None:
                    self._hits += 1
                    return CacheLookup(payload=entry.payload, hit=True)
                self._misses += 1

            started = self._clock()
            try:
                payload = refresh_fn()
            except Exception:
                with self._lock:
                    self._refresh_failures += 1
                raise

            with self._lock:
                self._entries[key] = CacheEntry(payload=payload, timestamp=started)

        logger.debug(f'{self.name}: refreshed {key!r}')
        return CacheLookup(payload=payload, hit=False)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    @property
    def stats(self) -> dict:
        """Get cache statistics."""
        with self._lock:
            lookups = self._hits + self._misses
            return {
                'name': self.name,
                'entries': len(self._entries),
                'ttl_seconds': self.ttl_seconds,
                'hits': self._hits,
                'misses': self._misses,
                'refresh_failures': self._refresh_failures,
                'hit_rate': self._hits / lookups if lookups > 0 else 0,
            }
