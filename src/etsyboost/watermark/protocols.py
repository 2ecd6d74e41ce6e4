"""Render transform protocol: the contract every watermark renderer implements."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IWatermarkRenderer(Protocol):
    """Opaque, possibly slow, possibly failing image/video transforms.

    Implementations raise ``UpstreamRenderFailure`` (or any exception, which
    the caller wraps) when the input cannot be rendered. They own cleanup of
    any temporary files they create.
    """

    async def render_image_watermark(self, data: bytes, text: str, position: str, opacity: float) -> bytes:
        """Return a new image with ``text`` drawn at ``position``."""
        ...

    async def render_video_watermark(self, data: bytes, text: str, position: str, opacity: float) -> bytes:
        """Return a new video with ``text`` drawn at ``position`` on every frame."""
        ...
