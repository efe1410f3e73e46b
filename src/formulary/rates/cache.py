"""TTL cache for exchange-rate lookups.

Entries expire lazily: an expired entry is replaced on the next access for
its key and nothing is evicted in the background. Concurrent requests for
the same missing key share one fetch. A failed fetch yields None to every
waiter and leaves the cache untouched, so callers keep whatever they showed
before.

Thread-safe for synchronous readers (`peek`, `size`) running alongside the
event loop; `get_or_fetch` itself must be awaited on one loop at a time.
"""

from __future__ import annotations

import asyncio
import logging
import math
import threading
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Final

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS: Final[float] = 600.0

Fetcher = Callable[[], Awaitable[Any]]


@dataclass(frozen=True, slots=True)
class RateCacheEntry:
    """A cached payload and when it was fetched (clock seconds)."""

    key: str
    data: Any
    fetched_at: float
    expires_at: float

    def is_fresh(self, now: float) -> bool:
        return now < self.expires_at


class RateCache:
    """Keyed cache with per-entry TTL and in-flight request coalescing."""

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the cache.

        Args:
            ttl_seconds: Default lifetime of an entry. ``math.inf`` keeps
                entries forever.
            clock: Monotonic time source in seconds; injectable for tests.

        Raises:
            ValueError: If ttl_seconds is not positive.
        """
        if not ttl_seconds > 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, RateCacheEntry] = {}
        self._inflight: dict[str, asyncio.Future[Any]] = {}
        self._lock = threading.Lock()

    @property
    def ttl_seconds(self) -> float:
        return self._ttl_seconds

    @property
    def size(self) -> int:
        """Number of stored entries, fresh or not yet replaced."""
        with self._lock:
            return len(self._entries)

    def _fresh_entry(self, key: str) -> RateCacheEntry | None:
        entry = self._entries.get(key)
        if entry is None or not entry.is_fresh(self._clock()):
            return None
        return entry

    def peek(self, key: str) -> Any | None:
        """Return fresh cached data for a key without fetching."""
        with self._lock:
            entry = self._fresh_entry(key)
        return entry.data if entry is not None else None

    def invalidate(self, key: str) -> bool:
        """Drop one entry. Returns True if it existed."""
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        """Drop all entries. In-flight fetches still complete and store."""
        with self._lock:
            self._entries.clear()

    async def get_or_fetch(
        self,
        key: str,
        fetcher: Fetcher,
        *,
        ttl_seconds: float | None = None,
    ) -> Any | None:
        """Return cached data for `key`, fetching it on a miss.

        Args:
            key: Cache key; must encode every parameter that changes the data.
            fetcher: Zero-argument coroutine function producing the data.
            ttl_seconds: Lifetime for an entry stored by this call; defaults
                to the cache TTL.

        Returns:
            The data, or None if the fetch failed or produced None.
        """
        with self._lock:
            entry = self._fresh_entry(key)
            if entry is not None:
                logger.debug("Rate cache hit: %s", key)
                return entry.data
            pending = self._inflight.get(key)
            if pending is None:
                future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
                self._inflight[key] = future

        if pending is not None:
            logger.debug("Joining in-flight rate fetch: %s", key)
            return await asyncio.shield(pending)

        data: Any = None
        try:
            data = await fetcher()
        except Exception as exc:
            logger.warning("Rate fetch failed for %s: %s", key, exc)
            data = None
        else:
            if data is not None:
                self._store(key, data, self._ttl_seconds if ttl_seconds is None else ttl_seconds)
        finally:
            with self._lock:
                self._inflight.pop(key, None)
            if not future.done():
                future.set_result(data)
        return data

    def _store(self, key: str, data: Any, ttl_seconds: float) -> None:
        now = self._clock()
        expires_at = math.inf if math.isinf(ttl_seconds) else now + ttl_seconds
        with self._lock:
            self._entries[key] = RateCacheEntry(
                key=key, data=data, fetched_at=now, expires_at=expires_at
            )
        logger.debug("Cached rate data for %s (ttl=%s)", key, ttl_seconds)
