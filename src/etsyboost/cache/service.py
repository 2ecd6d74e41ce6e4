"""CacheService: the single cache entry point for the request path.

Tier selection is re-evaluated on every call: the external tier is tried
only while it reports CONNECTED; any failure during the attempt falls through
to the memory tier for that call, and the external tier's own latch keeps
later calls on memory until it reconnects. Writes go to the selected tier
only (no dual-write, no read-repair after recovery).

Cache faults are absorbed here. Callers see ``None`` for both a miss and an
outage, and ``False`` from a write that could not be cached.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Optional

from etsyboost.cache.memory import VolatileStore
from etsyboost.cache.models import (
    BinaryPayload,
    CachePayload,
    JsonPayload,
    decode_payload,
    encode_payload,
)
from etsyboost.cache.redis import ExternalCache
from etsyboost.exceptions import CacheUnavailable, EntryTooLarge

log = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 24 * 60 * 60
_PROBE_VALUE = "ok"


class CacheService:
    """Two-tier cache façade with JSON and binary-safe accessors."""

    def __init__(
        self,
        external: ExternalCache,
        memory: VolatileStore,
        *,
        key_prefix: str = "etsyboost:",
        default_ttl_seconds: int = DEFAULT_TTL_SECONDS,
        health_probe_ttl_seconds: int = 5,
    ) -> None:
        self._external = external
        self._memory = memory
        self._prefix = key_prefix
        self._default_ttl = default_ttl_seconds
        self._probe_ttl = health_probe_ttl_seconds

    @property
    def external(self) -> ExternalCache:
        return self._external

    @property
    def memory(self) -> VolatileStore:
        return self._memory

    def _key(self, key: str) -> str:
        """Prefix key with namespace."""
        return f"{self._prefix}{key}"

    # ── Lifecycle ────────────────────────────────────────────────────

    async def start(self) -> None:
        """Connect the external tier and start background maintenance."""
        await self._external.connect()
        self._external.start()
        self._memory.start()
        log.info("Cache service started using %s tier", self._external.status().using)

    async def close(self) -> None:
        await self._memory.stop()
        await self._external.close()

    # ── JSON values ──────────────────────────────────────────────────

    async def get(self, key: str) -> Any | None:
        """Return the cached JSON value, or None on miss, outage or type mismatch."""
        payload = await self._read(key)
        if not isinstance(payload, JsonPayload):
            return None
        try:
            return payload.value()
        except ValueError as exc:
            log.warning("Discarding unparseable cached JSON for %s: %s", key, exc)
            return None

    async def set(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> bool:
        """Cache a JSON-serializable value. Returns whether it landed in a tier."""
        try:
            payload = JsonPayload.from_value(value)
        except (TypeError, ValueError) as exc:
            log.warning("Value for %s is not JSON-serializable: %s", key, exc)
            return False
        return await self._write(key, payload, ttl_seconds)

    # ── Binary values ────────────────────────────────────────────────

    async def get_binary(self, key: str) -> bytes | None:
        payload = await self._read(key)
        if not isinstance(payload, BinaryPayload):
            return None
        return payload.data

    async def set_binary(self, key: str, data: bytes, ttl_seconds: Optional[int] = None) -> bool:
        return await self._write(key, BinaryPayload(bytes(data)), ttl_seconds)

    async def delete(self, key: str) -> None:
        full_key = self._key(key)
        if self._external.is_available:
            try:
                await self._external.delete(full_key)
                return
            except CacheUnavailable as exc:
                log.debug("External delete failed for %s, using memory tier: %s", key, exc)
        await self._memory.delete(full_key)

    # ── Diagnostics ──────────────────────────────────────────────────

    async def health_check(self) -> bool:
        """Round-trip a short-lived probe key through the normal tier selection."""
        probe_key = f"health:{uuid.uuid4().hex}"
        if not await self.set(probe_key, _PROBE_VALUE, ttl_seconds=self._probe_ttl):
            return False
        ok = await self.get(probe_key) == _PROBE_VALUE
        if not ok:
            log.warning("Cache health probe read back a different value")
        return ok

    def status(self) -> dict[str, Any]:
        """``{using, error}`` plus tier details for diagnostics endpoints."""
        return {
            **self._external.status().to_dict(),
            "state": self._external.state.value,
            "memory": self._memory.stats(),
        }

    # ── Tier selection ───────────────────────────────────────────────

    async def _read(self, key: str) -> CachePayload | None:
        full_key = self._key(key)
        raw: str | None
        if self._external.is_available:
            try:
                raw = await self._external.get(full_key)
            except CacheUnavailable as exc:
                log.debug("External read failed for %s, using memory tier: %s", key, exc)
                raw = await self._memory.get(full_key)
        else:
            raw = await self._memory.get(full_key)

        if raw is None:
            return None
        try:
            return decode_payload(raw)
        except ValueError as exc:
            log.warning("Discarding undecodable cache value for %s: %s", key, exc)
            return None

    async def _write(self, key: str, payload: CachePayload, ttl_seconds: Optional[int]) -> bool:
        ttl = self._default_ttl if ttl_seconds is None else ttl_seconds
        if ttl <= 0:
            log.warning("Refusing to cache %s with non-positive TTL %s", key, ttl)
            return False

        full_key = self._key(key)
        # Encode the full buffer up front so a tier never sees a partial write
        raw = encode_payload(payload)

        if self._external.is_available:
            try:
                await self._external.set(full_key, raw, ttl)
                return True
            except CacheUnavailable as exc:
                log.debug("External write failed for %s, using memory tier: %s", key, exc)

        try:
            await self._memory.set(full_key, raw, ttl)
        except EntryTooLarge as exc:
            log.warning("Not caching %s: %s", key, exc)
            return False
        return True
