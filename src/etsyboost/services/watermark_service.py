"""Watermark service: content-addressed caching around the render transform."""

from __future__ import annotations

import asyncio
import logging
from typing import NamedTuple, Optional, Union

from etsyboost.cache.key_strategy import compute_content_hash, compute_watermark_key
from etsyboost.cache.service import CacheService
from etsyboost.exceptions import ComputeTimeout, InvalidAsset, UpstreamRenderFailure
from etsyboost.models import AssetKind, WatermarkPosition
from etsyboost.services._timeouts import cache_read_or_miss
from etsyboost.watermark.protocols import IWatermarkRenderer
from etsyboost.watermark.sniff import sniff_mime

log = logging.getLogger(__name__)

_OCTET_STREAM = "application/octet-stream"


class RenderedAsset(NamedTuple):
    data: bytes
    mime: str
    ext: str


class WatermarkService:
    """Validate the upload, serve a cached render, or render and cache it."""

    def __init__(
        self,
        cache: CacheService,
        renderer: IWatermarkRenderer,
        *,
        read_timeout_seconds: float = 2.0,
        render_timeout_seconds: float = 10.0,
        ttl_seconds: Optional[int] = None,
    ) -> None:
        self._cache = cache
        self._renderer = renderer
        self._read_timeout = read_timeout_seconds
        self._render_timeout = render_timeout_seconds
        self._ttl = ttl_seconds

    async def watermark(
        self,
        data: bytes,
        text: str,
        position: Union[WatermarkPosition, str],
        opacity: float,
    ) -> RenderedAsset:
        """Return the watermarked asset with its sniffed MIME type.

        Raises:
            InvalidAsset: the upload is not a recognizable image or video.
            ComputeTimeout: rendering exceeded ``render_timeout_seconds``.
            UpstreamRenderFailure: the renderer failed on this input.
        """
        sniffed = sniff_mime(data)
        if sniffed is None:
            raise InvalidAsset("Invalid file type")
        kind = sniffed.kind
        if kind is None:
            raise InvalidAsset(f"Unsupported file type: {sniffed.mime}")

        position_value = WatermarkPosition(position).value
        key = compute_watermark_key(compute_content_hash(data), text, position_value, opacity)

        cached = await cache_read_or_miss(self._cache.get_binary(key), self._read_timeout, key)
        if cached is not None:
            log.info("Watermark cache hit for %s upload", sniffed.mime)
            out_type = sniff_mime(cached)
            if out_type is None:
                return RenderedAsset(cached, _OCTET_STREAM, "file")
            return RenderedAsset(cached, out_type.mime, out_type.ext)

        log.info("Watermark cache miss; rendering %d-byte %s", len(data), kind.value)
        render = (
            self._renderer.render_image_watermark
            if kind == AssetKind.IMAGE
            else self._renderer.render_video_watermark
        )
        try:
            output = await asyncio.wait_for(
                render(data, text, position_value, opacity),
                timeout=self._render_timeout,
            )
        except asyncio.TimeoutError as exc:
            raise ComputeTimeout(f"Watermark processing timed out after {self._render_timeout}s") from exc
        except UpstreamRenderFailure:
            raise
        except Exception as exc:
            raise UpstreamRenderFailure(f"Render transform failed: {exc}") from exc

        if not output:
            raise UpstreamRenderFailure("Render transform returned no data")

        await self._cache.set_binary(key, output, ttl_seconds=self._ttl)
        return RenderedAsset(output, sniffed.mime, sniffed.ext)
