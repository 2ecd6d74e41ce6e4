"""Magic-number sniffing for uploaded assets.

Looks only at leading bytes; the client-declared content type and filename
are never trusted.
"""

from __future__ import annotations

import dataclasses
from typing import Optional

from etsyboost.models import AssetKind


@dataclasses.dataclass(frozen=True)
class SniffedType:
    mime: str
    ext: str

    @property
    def kind(self) -> Optional[AssetKind]:
        if self.mime.startswith("image/"):
            return AssetKind.IMAGE
        if self.mime.startswith("video/"):
            return AssetKind.VIDEO
        return None


# (offset, signature, type) checked in order; first match wins.
_SIGNATURES: tuple[tuple[int, bytes, SniffedType], ...] = (
    (0, b"\x89PNG\r\n\x1a\n", SniffedType("image/png", "png")),
    (0, b"\xff\xd8\xff", SniffedType("image/jpeg", "jpg")),
    (0, b"GIF87a", SniffedType("image/gif", "gif")),
    (0, b"GIF89a", SniffedType("image/gif", "gif")),
    (0, b"II*\x00", SniffedType("image/tiff", "tif")),
    (0, b"MM\x00*", SniffedType("image/tiff", "tif")),
    (0, b"BM", SniffedType("image/bmp", "bmp")),
    (0, b"%PDF", SniffedType("application/pdf", "pdf")),
)

# ISO base media major brands (bytes 8..12 after "ftyp"); unlisted brands are unknown
_MP4 = SniffedType("video/mp4", "mp4")
_HEIC = SniffedType("image/heic", "heic")
_HEIF = SniffedType("image/heif", "heif")
_FTYP_BRANDS: dict[bytes, SniffedType] = {
    b"isom": _MP4,
    b"iso2": _MP4,
    b"iso4": _MP4,
    b"iso5": _MP4,
    b"iso6": _MP4,
    b"mp41": _MP4,
    b"mp42": _MP4,
    b"avc1": _MP4,
    b"dash": _MP4,
    b"MSNV": _MP4,
    b"M4V ": SniffedType("video/x-m4v", "m4v"),
    b"qt  ": SniffedType("video/quicktime", "mov"),
    b"3gp4": SniffedType("video/3gpp", "3gp"),
    b"3gp5": SniffedType("video/3gpp", "3gp"),
    b"3gp6": SniffedType("video/3gpp", "3gp"),
    b"3g2a": SniffedType("video/3gpp2", "3g2"),
    b"avif": SniffedType("image/avif", "avif"),
    b"avis": SniffedType("image/avif", "avif"),
    b"heic": _HEIC,
    b"heix": _HEIC,
    b"hevc": SniffedType("image/heic-sequence", "heic"),
    b"mif1": _HEIF,
    b"msf1": SniffedType("image/heif-sequence", "heif"),
    b"M4A ": SniffedType("audio/mp4", "m4a"),
    b"M4B ": SniffedType("audio/mp4", "m4b"),
}

_EBML_MAGIC = b"\x1a\x45\xdf\xa3"


def sniff_mime(data: bytes) -> Optional[SniffedType]:
    """Identify the container from its leading bytes, or None if unknown."""
    head = data[:64]

    if head[:4] == b"RIFF" and len(head) >= 12:
        form = head[8:12]
        if form == b"WEBP":
            return SniffedType("image/webp", "webp")
        if form == b"AVI ":
            return SniffedType("video/x-msvideo", "avi")
        if form == b"WAVE":
            return SniffedType("audio/wav", "wav")
        return None

    if head[4:8] == b"ftyp" and len(head) >= 12:
        return _FTYP_BRANDS.get(head[8:12])

    if head[:4] == _EBML_MAGIC:
        if b"webm" in head:
            return SniffedType("video/webm", "webm")
        return SniffedType("video/x-matroska", "mkv")

    for offset, signature, sniffed in _SIGNATURES:
        if head[offset:offset + len(signature)] == signature:
            return sniffed
    return None
