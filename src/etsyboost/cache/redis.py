"""External cache tier: async Redis client with a latched degraded state.

State machine (queried synchronously by ``CacheService`` on every call)::

    UNINITIALIZED --connect ok--> CONNECTED
    UNINITIALIZED --error------> DEGRADED
    CONNECTED     --error------> DEGRADED
    DEGRADED      --connect ok--> CONNECTED

No URL configured means DEGRADED from construction with no connection ever
attempted. A successful ``ping`` alone does not clear DEGRADED; only
``connect`` does, so a flapping backend cannot bounce traffic back and forth.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Any, Awaitable, Callable, Optional

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from etsyboost.cache.models import ExternalState, StoreStatus
from etsyboost.exceptions import CacheUnavailable

log = logging.getLogger(__name__)

# decode_responses=True raises UnicodeDecodeError on non-UTF-8 values
_FAILURES = (RedisError, OSError, asyncio.TimeoutError, UnicodeDecodeError)

NOT_CONFIGURED = "external cache not configured"


class ExternalCache:
    """Networked key/value tier with bounded reconnect and typed failures.

    ``get`` returning None means the key is absent on a reachable server;
    any transport problem raises ``CacheUnavailable`` and latches DEGRADED.
    """

    def __init__(
        self,
        url: str = "",
        *,
        client: Any | None = None,
        read_timeout_seconds: float = 2.0,
        socket_timeout_seconds: float = 2.0,
        connect_attempts: int = 3,
        backoff_base_seconds: float = 0.5,
        backoff_max_seconds: float = 4.0,
        reconnect_interval_seconds: float = 30.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._url = url
        self._client = client
        self._read_timeout = read_timeout_seconds
        self._socket_timeout = socket_timeout_seconds
        self._connect_attempts = max(1, connect_attempts)
        self._backoff_base = backoff_base_seconds
        self._backoff_max = backoff_max_seconds
        self._reconnect_interval = reconnect_interval_seconds
        self._sleep = sleep
        self._supervisor: Optional[asyncio.Task[None]] = None

        self._configured = bool(url) or client is not None
        if self._configured:
            self._state = ExternalState.UNINITIALIZED
            self._last_error: Optional[str] = None
        else:
            self._state = ExternalState.DEGRADED
            self._last_error = NOT_CONFIGURED
            log.info("No external cache configured; serving from memory tier")

    @property
    def state(self) -> ExternalState:
        return self._state

    @property
    def is_configured(self) -> bool:
        return self._configured

    @property
    def is_available(self) -> bool:
        return self._state == ExternalState.CONNECTED

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    def status(self) -> StoreStatus:
        return StoreStatus(using="external" if self.is_available else "memory", last_error=self._last_error)

    def _get_client(self) -> Any:
        """Lazy-initialize the Redis async client."""
        if self._client is None:
            self._client = aioredis.from_url(
                self._url,
                decode_responses=True,
                socket_connect_timeout=self._socket_timeout,
                socket_timeout=self._socket_timeout,
            )
        return self._client

    # ── Connection lifecycle ─────────────────────────────────────────

    async def connect(self) -> bool:
        """Ping with capped exponential backoff. Returns True once connected."""
        if not self._configured:
            return False

        last_exc: BaseException | None = None
        for attempt in range(self._connect_attempts):
            try:
                await asyncio.wait_for(self._get_client().ping(), timeout=self._read_timeout)
            except (*_FAILURES, ValueError) as exc:
                last_exc = exc
                if attempt + 1 < self._connect_attempts:
                    delay = min(self._backoff_base * (2**attempt), self._backoff_max)
                    log.debug("External cache connect attempt %d failed (%s); retrying in %.2fs", attempt + 1, exc, delay)
                    await self._sleep(delay)
                continue
            self._on_connected()
            return True

        self._on_error(last_exc)
        return False

    def start(self) -> None:
        """Launch the reconnect supervisor; a no-op when nothing is configured."""
        if not self._configured:
            return
        if self._supervisor is None or self._supervisor.done():
            self._supervisor = asyncio.create_task(self._supervise(), name="external-cache-reconnect")

    async def close(self) -> None:
        if self._supervisor is not None:
            self._supervisor.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._supervisor
            self._supervisor = None
        if self._client is not None:
            try:
                await self._client.aclose()
            except _FAILURES as exc:
                log.debug("Error closing external cache client: %s", exc)
            self._client = None

    async def _supervise(self) -> None:
        while True:
            await self._sleep(self._reconnect_interval)
            if self._state == ExternalState.DEGRADED:
                await self.connect()

    def _on_connected(self) -> None:
        if self._state != ExternalState.CONNECTED:
            log.info("External cache -> CONNECTED (was %s)", self._state.value)
        self._state = ExternalState.CONNECTED
        self._last_error = None

    def _on_error(self, exc: BaseException | None) -> None:
        message = (str(exc) or type(exc).__name__) if exc is not None else "unknown error"
        if self._state != ExternalState.DEGRADED:
            log.warning("External cache -> DEGRADED: %s", message)
        self._state = ExternalState.DEGRADED
        self._last_error = message

    # ── Key/value operations ─────────────────────────────────────────

    async def _call(self, op: str, fn: Callable[[Any], Awaitable[Any]]) -> Any:
        if not self._configured:
            raise CacheUnavailable(NOT_CONFIGURED)
        try:
            return await asyncio.wait_for(fn(self._get_client()), timeout=self._read_timeout)
        except _FAILURES as exc:
            self._on_error(exc)
            raise CacheUnavailable(f"external cache {op} failed: {exc}") from exc

    async def get(self, key: str) -> Optional[str]:
        """Return the stored text, or None when the key is absent."""
        return await self._call("get", lambda c: c.get(key))

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        await self._call("set", lambda c: c.setex(key, ttl_seconds, value))

    async def delete(self, key: str) -> None:
        await self._call("delete", lambda c: c.delete(key))

    async def ping(self) -> bool:
        """Check reachability without touching the degraded latch."""
        if not self._configured:
            return False
        try:
            return bool(await asyncio.wait_for(self._get_client().ping(), timeout=self._read_timeout))
        except (*_FAILURES, ValueError):
            return False
