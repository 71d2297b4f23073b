"""In-memory result cache with a fixed per-entry TTL and hit/miss statistics."""
import logging
import math
import threading
import time
from typing import Any, Callable, Dict, List, Optional

DEFAULT_TTL_SECONDS = 300  # 5 minutes
DEFAULT_CHECK_PERIOD_SECONDS = 60


class CacheEntry:
    """A cached value and the absolute time (epoch seconds) it expires at."""

    __slots__ = ("value", "expires_at")

    def __init__(self, value: Any, expires_at: float):
        self.value = value
        self.expires_at = expires_at

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at


class ResultCache:
    """
    Key/value store where every entry expires a fixed time after insertion.

    Expired entries are never returned. They are dropped when read, and a
    sweep of the whole map runs at most once per check period. Values are
    returned by reference; callers must not mutate them.

    Hit and miss counters live for the lifetime of the instance and are
    not reset by clear().
    """

    def __init__(
        self,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        check_period_seconds: float = DEFAULT_CHECK_PERIOD_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize the cache.

        Args:
            ttl_seconds: Lifetime of every entry, fixed for this instance
            check_period_seconds: Minimum interval between full expiry sweeps
            clock: Returns the current time in seconds (injectable for tests)
        """
        self.ttl_seconds = ttl_seconds
        self.check_period_seconds = check_period_seconds
        self._clock = clock

        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()
        self.hits = 0
        self.misses = 0

        logging.info(f"Cache initialized with {ttl_seconds}s TTL")

    def get(self, key: str) -> Optional[Any]:
        """
        Get a live value, counting a hit or a miss.

        Returns:
            The stored value, or None if absent or expired
        """
        with self._lock:
            entry = self._live_entry(key, self._clock())
            if entry is not None:
                self.hits += 1
                logging.debug(f"Cache HIT for key: {key}")
                return entry.value
            self.misses += 1
            logging.debug(f"Cache MISS for key: {key}")
            return None

    def set(self, key: str, value: Any) -> bool:
        """Insert or overwrite a value; it expires ttl_seconds from now."""
        with self._lock:
            now = self._clock()
            self._entries[key] = CacheEntry(value, now + self.ttl_seconds)
            self._maybe_sweep(now)
        logging.info(f"Cached data for key: {key}")
        return True

    def has(self, key: str) -> bool:
        """Check for a live entry without touching the hit/miss counters."""
        with self._lock:
            return self._live_entry(key, self._clock()) is not None

    def get_ttl(self, key: str) -> int:
        """Whole seconds left before the key expires, or 0 if it is absent."""
        with self._lock:
            now = self._clock()
            entry = self._live_entry(key, now)
            if entry is None:
                return 0
            return max(0, int(math.floor(entry.expires_at - now)))

    def clear(self) -> None:
        """Drop all entries; statistics are kept."""
        with self._lock:
            self._entries.clear()
        logging.info("Cache cleared")

    def keys(self) -> List[str]:
        """Names of all live keys."""
        with self._lock:
            now = self._clock()
            return [key for key, entry in self._entries.items() if not entry.is_expired(now)]

    def get_stats(self) -> Dict[str, Any]:
        """
        Get cache statistics.

        Returns:
            Dict with hits, misses, hit_rate (e.g. "75.00%", or "0%" before
            any access), keys and key_count
        """
        with self._lock:
            now = self._clock()
            self._maybe_sweep(now)
            hits, misses = self.hits, self.misses
            live_keys = [key for key, entry in self._entries.items() if not entry.is_expired(now)]
        total = hits + misses
        hit_rate = f"{hits / total * 100:.2f}%" if total > 0 else "0%"
        return {
            "hits": hits,
            "misses": misses,
            "hit_rate": hit_rate,
            "keys": live_keys,
            "key_count": len(live_keys),
        }

    def _live_entry(self, key: str, now: float) -> Optional[CacheEntry]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(now):
            logging.debug(f"Cache entry expired for key: {key}")
            del self._entries[key]
            return None
        return entry

    def _maybe_sweep(self, now: float) -> None:
        if now - self._last_sweep < self.check_period_seconds:
            return
        self._last_sweep = now
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            del self._entries[key]
        if expired:
            logging.debug(f"Swept {len(expired)} expired cache entries")
