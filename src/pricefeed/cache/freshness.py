"""Single-slot TTL cache with single-flight refresh.

One FreshnessCache guards one feed. While the entry is fresh it is returned
as-is. When it is empty or stale, the first caller starts a refresh task and
every concurrent caller awaits that same task, so at most one upstream
fetch+sign runs per feed at any time.

A failed refresh leaves the previous entry in place but it is never served
past its TTL: callers get either fresh data or RefreshFailed.
"""

import asyncio
import time
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any

from pricefeed.exceptions import RefreshFailed
from pricefeed.models import CacheEntry

RefreshFn = Callable[[], Awaitable[Any]]


def _now_ms() -> int:
    return int(time.time() * 1000)


class CacheState(str, Enum):
    """Freshness of the cached slot."""

    EMPTY = "empty"
    FRESH = "fresh"
    STALE = "stale"


class FreshnessCache:
    """Single-slot cache with TTL and coalesced refreshes.

    Args:
        ttl_ms: Default time-to-live in milliseconds.
        clock: Returns the current Unix time in milliseconds.
    """

    def __init__(self, ttl_ms: int, clock: Callable[[], int] | None = None) -> None:
        if ttl_ms <= 0:
            raise ValueError(f"ttl_ms must be positive, got {ttl_ms}")
        self._ttl_ms = ttl_ms
        self._clock = clock or _now_ms
        self._entry: CacheEntry | None = None
        self._inflight: asyncio.Task | None = None  # type: ignore[type-arg]
        self._lock = asyncio.Lock()

    @property
    def ttl_ms(self) -> int:
        return self._ttl_ms

    @property
    def entry(self) -> CacheEntry | None:
        """The stored entry, fresh or not."""
        return self._entry

    @property
    def refreshing(self) -> bool:
        return self._inflight is not None

    def state(self, ttl_ms: int | None = None) -> CacheState:
        """Classify the slot relative to now."""
        entry = self._entry
        if entry is None:
            return CacheState.EMPTY
        if self._is_fresh(entry, self._ttl_ms if ttl_ms is None else ttl_ms):
            return CacheState.FRESH
        return CacheState.STALE

    def invalidate(self) -> None:
        """Drop the stored entry. An in-flight refresh still completes."""
        self._entry = None

    def _is_fresh(self, entry: CacheEntry, ttl_ms: int) -> bool:
        return self._clock() - entry.cached_at_ms < ttl_ms

    async def get_or_refresh(
        self,
        refresh_fn: RefreshFn,
        ttl_ms: int | None = None,
        timeout: float | None = None,
    ) -> Any:
        """Return the fresh cached value, refreshing it first if needed.

        Args:
            refresh_fn: Coroutine function producing a new value.
            ttl_ms: Override of the default TTL for this read. 0 forces a refresh.
            timeout: Seconds to wait on an in-flight refresh. The refresh itself
                is never cancelled by a caller giving up.

        Raises:
            RefreshFailed: If the refresh this caller waited on failed.
            asyncio.TimeoutError: If timeout elapsed before the refresh finished.
        """
        ttl = self._ttl_ms if ttl_ms is None else ttl_ms
        entry = self._entry
        if entry is not None and self._is_fresh(entry, ttl):
            return entry.value

        async with self._lock:
            # Re-check: a refresh may have landed while we queued on the lock.
            entry = self._entry
            if entry is not None and self._is_fresh(entry, ttl):
                return entry.value
            if self._inflight is None:
                self._inflight = asyncio.create_task(self._refresh(refresh_fn))
                self._inflight.add_done_callback(_retrieve_exception)
            task = self._inflight

        waiter = asyncio.shield(task)
        if timeout is None:
            return await waiter
        return await asyncio.wait_for(waiter, timeout)

    async def _refresh(self, refresh_fn: RefreshFn) -> Any:
        try:
            value = await refresh_fn()
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            raise RefreshFailed(exc) from exc
        else:
            # Stamped on completion so a slow refresh is still fresh when served.
            self._entry = CacheEntry(value=value, cached_at_ms=self._clock())
            return value
        finally:
            self._inflight = None


def _retrieve_exception(task: asyncio.Task) -> None:  # type: ignore[type-arg]
    # Mark the exception retrieved when every waiter has timed out.
    if not task.cancelled():
        task.exception()
