"""Two-tier result cache: factory + tier implementations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from etsyboost.cache.key_strategy import compute_content_hash, compute_tag_key, compute_watermark_key
from etsyboost.cache.memory import VolatileStore
from etsyboost.cache.models import ExternalState, StoreStatus
from etsyboost.cache.redis import ExternalCache
from etsyboost.cache.service import CacheService

if TYPE_CHECKING:
    from etsyboost.core.config import CacheConfig

__all__ = [
    "CacheService",
    "ExternalCache",
    "ExternalState",
    "StoreStatus",
    "VolatileStore",
    "compute_content_hash",
    "compute_tag_key",
    "compute_watermark_key",
    "create_cache_service",
]


def create_cache_service(settings: object | None = None) -> CacheService:
    """Build a CacheService from settings.

    Args:
        settings: An ``AppSettings`` or ``CacheConfig`` instance. If None,
            defaults apply: memory tier only, 100 MB budget.
    """
    from etsyboost.core.config import CacheConfig

    config: CacheConfig | None = getattr(settings, "cache", None)
    if config is None:
        config = settings if isinstance(settings, CacheConfig) else CacheConfig(redis_url="")

    external = ExternalCache(
        config.redis_url,
        read_timeout_seconds=config.read_timeout_seconds,
        socket_timeout_seconds=config.socket_timeout_seconds,
        connect_attempts=config.connect_attempts,
        backoff_base_seconds=config.backoff_base_seconds,
        backoff_max_seconds=config.backoff_max_seconds,
        reconnect_interval_seconds=config.reconnect_interval_seconds,
    )
    memory = VolatileStore(
        config.memory_max_bytes,
        sweep_interval_seconds=config.sweep_interval_seconds,
    )
    return CacheService(
        external,
        memory,
        key_prefix=config.key_prefix,
        default_ttl_seconds=config.default_ttl_seconds,
        health_probe_ttl_seconds=config.health_probe_ttl_seconds,
    )
