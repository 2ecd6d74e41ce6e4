"""Tests for MIME sniffing and the ffmpeg render transform."""

from __future__ import annotations

import shutil

import pytest

from etsyboost.exceptions import UpstreamRenderFailure
from etsyboost.models import AssetKind
from etsyboost.watermark import FFmpegRenderer, IWatermarkRenderer, build_drawtext_filter, sniff_mime
from tests.conftest import JPEG_BYTES, MP4_BYTES, PNG_BYTES, WEBM_BYTES
from tests.fakes.fake_renderer import FakeRenderer


class TestSniffMime:
    @pytest.mark.parametrize(
        ("data", "mime", "ext", "kind"),
        [
            (PNG_BYTES, "image/png", "png", AssetKind.IMAGE),
            (JPEG_BYTES, "image/jpeg", "jpg", AssetKind.IMAGE),
            (b"GIF89a" + b"\x00" * 10, "image/gif", "gif", AssetKind.IMAGE),
            (b"RIFF\x00\x00\x00\x00WEBPVP8 ", "image/webp", "webp", AssetKind.IMAGE),
            (MP4_BYTES, "video/mp4", "mp4", AssetKind.VIDEO),
            (b"\x00\x00\x00\x18ftypmp42" + b"\x00" * 8, "video/mp4", "mp4", AssetKind.VIDEO),
            (b"\x00\x00\x00\x18ftypheic" + b"\x00" * 32, "image/heic", "heic", AssetKind.IMAGE),
            (b"\x00\x00\x00\x18ftypheix" + b"\x00" * 32, "image/heic", "heic", AssetKind.IMAGE),
            (b"\x00\x00\x00\x18ftypmif1" + b"\x00" * 32, "image/heif", "heif", AssetKind.IMAGE),
            (b"\x00\x00\x00\x1cftypavif" + b"\x00" * 32, "image/avif", "avif", AssetKind.IMAGE),
            (b"\x00\x00\x00\x14ftypqt  " + b"\x00" * 8, "video/quicktime", "mov", AssetKind.VIDEO),
            (WEBM_BYTES, "video/webm", "webm", AssetKind.VIDEO),
            (b"\x1a\x45\xdf\xa3" + b"\x00" * 20, "video/x-matroska", "mkv", AssetKind.VIDEO),
            (b"RIFF\x00\x00\x00\x00AVI LIST", "video/x-msvideo", "avi", AssetKind.VIDEO),
        ],
    )
    def test_known_containers(self, data: bytes, mime: str, ext: str, kind: AssetKind) -> None:
        sniffed = sniff_mime(data)
        assert sniffed is not None
        assert (sniffed.mime, sniffed.ext, sniffed.kind) == (mime, ext, kind)

    def test_non_media_has_no_kind(self) -> None:
        sniffed = sniff_mime(b"%PDF-1.7")
        assert sniffed is not None
        assert sniffed.kind is None

    def test_audio_has_no_kind(self) -> None:
        sniffed = sniff_mime(b"\x00\x00\x00\x20ftypM4A " + b"\x00" * 8)
        assert sniffed is not None
        assert sniffed.kind is None

    def test_unknown_bytes(self) -> None:
        assert sniff_mime(b"hello world") is None
        assert sniff_mime(b"") is None

    def test_unlisted_ftyp_brand_is_unknown(self) -> None:
        assert sniff_mime(b"\x00\x00\x00\x18ftypzzzz" + b"\x00" * 32) is None

    def test_declared_extension_is_irrelevant(self) -> None:
        # Only content decides; a PNG is a PNG whatever the client called it
        assert sniff_mime(PNG_BYTES).mime == "image/png"


class TestDrawtextFilter:
    def test_center(self) -> None:
        vf = build_drawtext_filter("/tmp/wm.txt", "center", 0.5)
        assert vf.startswith("drawtext=textfile='/tmp/wm.txt':expansion=none")
        assert "fontcolor=white@0.50" in vf
        assert vf.endswith(":x=(w-tw)/2:y=(h-th)/2")

    def test_corners(self) -> None:
        assert ":x=10:y=10" in build_drawtext_filter("t", "top-left", 1)
        assert ":x=w-tw-10:y=10" in build_drawtext_filter("t", "top-right", 1)
        assert ":x=10:y=h-th-10" in build_drawtext_filter("t", "bottom-left", 1)
        assert ":x=w-tw-10:y=h-th-10" in build_drawtext_filter("t", "bottom-right", 1)

    def test_font_size(self) -> None:
        assert "fontsize=36" in build_drawtext_filter("t", "center", 0.3, font_size=36)

    def test_unknown_position(self) -> None:
        with pytest.raises(ValueError, match="middle"):
            build_drawtext_filter("t", "middle", 0.5)


class TestFFmpegRenderer:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(FFmpegRenderer(), IWatermarkRenderer)
        assert isinstance(FakeRenderer(), IWatermarkRenderer)

    async def test_missing_binary_is_render_failure(self) -> None:
        renderer = FFmpegRenderer(binary="/nonexistent/ffmpeg")
        with pytest.raises(UpstreamRenderFailure, match="Cannot start"):
            await renderer.render_image_watermark(PNG_BYTES, "© Shop", "center", 0.5)

    @pytest.mark.skipif(shutil.which("false") is None, reason="no 'false' binary")
    async def test_nonzero_exit_is_render_failure(self) -> None:
        renderer = FFmpegRenderer(binary=shutil.which("false") or "false")
        with pytest.raises(UpstreamRenderFailure, match="exited with code"):
            await renderer.render_video_watermark(MP4_BYTES, "© Shop", "center", 0.5)

    @pytest.mark.skipif(shutil.which("true") is None, reason="no 'true' binary")
    async def test_missing_output_is_render_failure(self) -> None:
        renderer = FFmpegRenderer(binary=shutil.which("true") or "true")
        with pytest.raises(UpstreamRenderFailure):
            await renderer.render_image_watermark(PNG_BYTES, "© Shop", "center", 0.5)
