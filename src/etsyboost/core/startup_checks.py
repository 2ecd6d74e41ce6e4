"""Startup validation: fail-fast on critical misconfigurations."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from etsyboost.core.config import AppSettings

log = logging.getLogger(__name__)

_REDIS_SCHEMES = ("redis://", "rediss://", "unix://")


def validate_settings(settings: AppSettings) -> None:
    """Validate application settings at startup. Raises ValueError on fatal misconfig."""
    _check_cache_budget(settings)
    _check_redis_url(settings)
    _check_timeouts(settings)


def _check_cache_budget(settings: AppSettings) -> None:
    """The fallback tier must be able to hold something."""
    if settings.cache.memory_max_bytes <= 0:
        raise ValueError(
            f"ETSYBOOST_CACHE_MEMORY_MAX_MB must be positive, got {settings.cache.memory_max_mb}."
        )
    if settings.cache.default_ttl_seconds <= 0:
        raise ValueError("ETSYBOOST_CACHE_DEFAULT_TTL_SECONDS must be positive.")


def _check_redis_url(settings: AppSettings) -> None:
    """Reject malformed URLs; warn when a container runs without the external tier."""
    url = settings.cache.redis_url
    if url and not url.startswith(_REDIS_SCHEMES):
        raise ValueError(
            f"ETSYBOOST_CACHE_REDIS_URL must start with one of {', '.join(_REDIS_SCHEMES)}; got {url!r}."
        )

    is_container = bool(
        os.environ.get("ECS_CONTAINER_METADATA_URI")
        or os.environ.get("KUBERNETES_SERVICE_HOST")
    )
    if is_container and not url:
        log.warning(
            "ETSYBOOST_CACHE_REDIS_URL is not set in a container environment. "
            "Each replica will cache in its own memory only."
        )


def _check_timeouts(settings: AppSettings) -> None:
    for name, value in (
        ("ETSYBOOST_CACHE_READ_TIMEOUT_SECONDS", settings.cache.read_timeout_seconds),
        ("ETSYBOOST_COMPUTE_TAG_TIMEOUT_SECONDS", settings.compute.tag_timeout_seconds),
        ("ETSYBOOST_COMPUTE_RENDER_TIMEOUT_SECONDS", settings.compute.render_timeout_seconds),
    ):
        if value <= 0:
            raise ValueError(f"{name} must be positive, got {value}.")
    if settings.cache.connect_attempts < 1:
        raise ValueError("ETSYBOOST_CACHE_CONNECT_ATTEMPTS must be at least 1.")
