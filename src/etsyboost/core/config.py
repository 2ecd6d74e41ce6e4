"""Nested pydantic-settings configuration for the application.

Each sub-config reads its own ``ETSYBOOST_<GROUP>_*`` env vars, so
``AppSettings().cache.redis_url`` maps to ``ETSYBOOST_CACHE_REDIS_URL``.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class CacheConfig(BaseSettings):
    """Two-tier result cache configuration.

    Env vars use ``ETSYBOOST_CACHE_`` prefix::

        export ETSYBOOST_CACHE_REDIS_URL=redis://localhost:6379/0
        export ETSYBOOST_CACHE_MEMORY_MAX_MB=256

    Leaving ``redis_url`` empty runs on the in-process tier only.
    """

    model_config = {"env_prefix": "ETSYBOOST_CACHE_"}

    redis_url: str = ""
    key_prefix: str = "etsyboost:"
    default_ttl_seconds: int = 24 * 60 * 60
    health_probe_ttl_seconds: int = 5

    # ── In-process fallback tier ─────────────────────────────────────
    memory_max_mb: float = 100.0
    sweep_interval_seconds: float = 300.0

    # ── External tier ────────────────────────────────────────────────
    read_timeout_seconds: float = 2.0
    socket_timeout_seconds: float = 2.0
    connect_attempts: int = 3
    backoff_base_seconds: float = 0.5
    backoff_max_seconds: float = 4.0
    reconnect_interval_seconds: float = 30.0

    @property
    def memory_max_bytes(self) -> int:
        return int(self.memory_max_mb * 1024 * 1024)


class ComputeConfig(BaseSettings):
    """Time budgets and limits for tag scoring and watermark rendering.

    Env vars use ``ETSYBOOST_COMPUTE_`` prefix.
    """

    model_config = {"env_prefix": "ETSYBOOST_COMPUTE_"}

    tag_timeout_seconds: float = 5.0
    render_timeout_seconds: float = 10.0
    max_upload_bytes: int = 50 * 1024 * 1024
    ffmpeg_binary: str = "ffmpeg"
    font_size: int = Field(default=20, ge=6, le=200)


class ObservabilityConfig(BaseSettings):
    """Observability configuration.

    Env vars use ``ETSYBOOST_OBSERVABILITY_`` prefix.
    """

    model_config = {"env_prefix": "ETSYBOOST_OBSERVABILITY_"}

    service_name: str = "etsyboost"
    log_level: str = "INFO"


class APIConfig(BaseSettings):
    """HTTP surface configuration.

    Env vars use ``ETSYBOOST_API_`` prefix.
    """

    model_config = {"env_prefix": "ETSYBOOST_API_"}

    title: str = "EtsyBoost"
    description: str = "Listing tag scoring and image/video watermarking for Etsy sellers."
    port: int = 8080


class AppSettings(BaseSettings):
    """Top-level application settings aggregating all sub-configs."""

    cache: CacheConfig = CacheConfig()
    compute: ComputeConfig = ComputeConfig()
    observability: ObservabilityConfig = ObservabilityConfig()
    api: APIConfig = APIConfig()
