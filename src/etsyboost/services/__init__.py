"""Request-path orchestration: cache lookup, compute on miss, write back."""

from __future__ import annotations

from etsyboost.services.tag_service import TagService
from etsyboost.services.watermark_service import RenderedAsset, WatermarkService

__all__ = ["RenderedAsset", "TagService", "WatermarkService"]
