"""etsyboost: tag scoring and watermarking for Etsy sellers, behind a two-tier cache.

Public API::

    from etsyboost import (
        AppSettings,
        CacheService, ExternalCache, VolatileStore, create_cache_service,
        TagScorer, TagService, WatermarkService,
        ScoredTag, TagResult, WatermarkPosition,
    )
"""

from __future__ import annotations

from etsyboost.cache import (
    CacheService,
    ExternalCache,
    VolatileStore,
    compute_content_hash,
    compute_tag_key,
    compute_watermark_key,
    create_cache_service,
)
from etsyboost.core.config import AppSettings
from etsyboost.exceptions import (
    CacheUnavailable,
    ComputeTimeout,
    EntryTooLarge,
    EtsyBoostError,
    InvalidAsset,
    UpstreamRenderFailure,
)
from etsyboost.models import ScoredTag, TagResult, WatermarkPosition
from etsyboost.services import RenderedAsset, TagService, WatermarkService
from etsyboost.tags import TagScorer

__all__ = [
    "AppSettings",
    "CacheService",
    "CacheUnavailable",
    "ComputeTimeout",
    "EntryTooLarge",
    "EtsyBoostError",
    "ExternalCache",
    "InvalidAsset",
    "RenderedAsset",
    "ScoredTag",
    "TagResult",
    "TagScorer",
    "TagService",
    "UpstreamRenderFailure",
    "VolatileStore",
    "WatermarkPosition",
    "WatermarkService",
    "compute_content_hash",
    "compute_tag_key",
    "compute_watermark_key",
    "create_cache_service",
]
