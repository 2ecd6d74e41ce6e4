"""In-process fallback tier: size-bounded store with per-entry TTL.

Safe for concurrent coroutine access via ``asyncio.Lock``; nothing outside
this class touches the map or the size counter.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from typing import Callable, Optional

from etsyboost.cache.models import CacheEntry
from etsyboost.exceptions import EntryTooLarge

log = logging.getLogger(__name__)


def approximate_size(value: str) -> int:
    """Bytes the serialized value occupies once UTF-8 encoded."""
    return len(value.encode("utf-8"))


class VolatileStore:
    """Dict-backed text store with soonest-expiry-first eviction.

    Expired entries are dropped lazily on read and proactively by a
    background sweep started with :meth:`start`.
    """

    def __init__(
        self,
        max_bytes: int = 100 * 1024 * 1024,
        *,
        sweep_interval_seconds: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._max_bytes = max_bytes
        self._sweep_interval = sweep_interval_seconds
        self._clock = clock
        self._store: dict[str, CacheEntry] = {}
        self._size = 0
        self._lock = asyncio.Lock()
        self._sweep_task: Optional[asyncio.Task[None]] = None

    @property
    def size(self) -> int:
        return self._size

    @property
    def max_size(self) -> int:
        return self._max_bytes

    def __len__(self) -> int:
        return len(self._store)

    def stats(self) -> dict[str, int]:
        return {"size": self._size, "max_size": self._max_bytes, "items": len(self._store)}

    async def get(self, key: str) -> Optional[str]:
        """Return the stored text, or None on miss or expiry."""
        async with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            if entry.is_expired(self._clock()):
                self._discard(key)
                return None
            return entry.value

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store ``value`` for ``ttl_seconds``, evicting soonest-to-expire entries as needed.

        Raises:
            EntryTooLarge: the value alone exceeds the store's byte budget.
                Nothing is stored and nothing is evicted.
        """
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        size = approximate_size(value)
        if size > self._max_bytes:
            raise EntryTooLarge(key, size, self._max_bytes)

        async with self._lock:
            now = self._clock()
            self._discard(key)
            self._make_room(size)
            self._store[key] = CacheEntry(
                key=key,
                value=value,
                created_at=now,
                expires_at=now + ttl_seconds,
                size=size,
            )
            self._size += size

    async def delete(self, key: str) -> None:
        async with self._lock:
            self._discard(key)

    async def clear(self) -> None:
        async with self._lock:
            self._store.clear()
            self._size = 0

    async def sweep(self) -> int:
        """Evict every expired entry. Returns how many were removed."""
        async with self._lock:
            now = self._clock()
            expired = [k for k, e in self._store.items() if e.is_expired(now)]
            for key in expired:
                self._discard(key)
        if expired:
            log.debug("Swept %d expired entries from memory tier", len(expired))
        return len(expired)

    def start(self) -> None:
        """Launch the periodic sweep on the running event loop."""
        if self._sweep_task is None or self._sweep_task.done():
            self._sweep_task = asyncio.create_task(self._sweep_loop(), name="volatile-store-sweep")

    async def stop(self) -> None:
        if self._sweep_task is None:
            return
        self._sweep_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._sweep_task
        self._sweep_task = None

    async def _sweep_loop(self) -> None:
        while True:
            await asyncio.sleep(self._sweep_interval)
            await self.sweep()

    # Callers must hold self._lock

    def _discard(self, key: str) -> None:
        entry = self._store.pop(key, None)
        if entry is not None:
            self._size -= entry.size

    def _make_room(self, size: int) -> None:
        if self._size + size <= self._max_bytes:
            return
        by_expiry = sorted(self._store.values(), key=lambda e: e.expires_at)
        evicted = 0
        for entry in by_expiry:
            if self._size + size <= self._max_bytes:
                break
            self._discard(entry.key)
            evicted += 1
        log.debug("Evicted %d entries to fit %d bytes", evicted, size)
