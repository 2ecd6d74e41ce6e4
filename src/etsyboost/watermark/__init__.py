"""Watermark rendering collaborators: protocol, sniffing, default ffmpeg renderer."""

from __future__ import annotations

from etsyboost.watermark.ffmpeg import FFmpegRenderer, build_drawtext_filter
from etsyboost.watermark.protocols import IWatermarkRenderer
from etsyboost.watermark.sniff import SniffedType, sniff_mime

__all__ = [
    "FFmpegRenderer",
    "IWatermarkRenderer",
    "SniffedType",
    "build_drawtext_filter",
    "sniff_mime",
]
