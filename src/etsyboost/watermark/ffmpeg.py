"""Default render transform: draws watermark text with the ffmpeg ``drawtext`` filter.

Works on still images and videos alike. Every render runs in its own
temporary directory, removed on success, failure and cancellation.
"""

from __future__ import annotations

import asyncio
import logging
import tempfile
from pathlib import Path

from etsyboost.exceptions import UpstreamRenderFailure
from etsyboost.watermark.sniff import sniff_mime

log = logging.getLogger(__name__)

_MARGIN = 10

# drawtext x/y expressions; tw/th are the rendered text's width and height
_POSITIONS: dict[str, tuple[str, str]] = {
    "top-left": (f"{_MARGIN}", f"{_MARGIN}"),
    "top-right": (f"w-tw-{_MARGIN}", f"{_MARGIN}"),
    "bottom-left": (f"{_MARGIN}", f"h-th-{_MARGIN}"),
    "bottom-right": (f"w-tw-{_MARGIN}", f"h-th-{_MARGIN}"),
    "center": ("(w-tw)/2", "(h-th)/2"),
}

_MAX_STDERR_CHARS = 500


def build_drawtext_filter(textfile: str, position: str, opacity: float, font_size: int = 20) -> str:
    """Filter expression drawing the contents of ``textfile`` at ``position``."""
    try:
        x, y = _POSITIONS[position]
    except KeyError:
        raise ValueError(f"Unknown watermark position: {position!r}") from None
    return (
        f"drawtext=textfile='{textfile}':expansion=none"
        f":fontsize={font_size}:fontcolor=white@{opacity:.2f}"
        f":box=1:boxcolor=black@0.3:boxborderw=3"
        f":x={x}:y={y}"
    )


class FFmpegRenderer:
    """Shells out to the ffmpeg binary for both image and video watermarking."""

    def __init__(self, binary: str = "ffmpeg", font_size: int = 20) -> None:
        self._binary = binary
        self._font_size = font_size

    async def render_image_watermark(self, data: bytes, text: str, position: str, opacity: float) -> bytes:
        sniffed = sniff_mime(data)
        ext = sniffed.ext if sniffed else "png"
        # Animated GIFs keep all frames; everything else is a single frame
        extra = [] if ext == "gif" else ["-frames:v", "1", "-update", "1"]
        return await self._render(data, ext, text, position, opacity, extra)

    async def render_video_watermark(self, data: bytes, text: str, position: str, opacity: float) -> bytes:
        sniffed = sniff_mime(data)
        ext = sniffed.ext if sniffed else "mp4"
        return await self._render(data, ext, text, position, opacity, ["-c:a", "copy"])

    async def _render(
        self,
        data: bytes,
        ext: str,
        text: str,
        position: str,
        opacity: float,
        extra_args: list[str],
    ) -> bytes:
        with tempfile.TemporaryDirectory(prefix="etsyboost-") as tmp:
            workdir = Path(tmp)
            src = workdir / f"input.{ext}"
            dst = workdir / f"output.{ext}"
            textfile = workdir / "watermark.txt"
            src.write_bytes(data)
            textfile.write_text(text, encoding="utf-8")

            vf = build_drawtext_filter(str(textfile), position, opacity, self._font_size)
            cmd = [
                self._binary, "-hide_banner", "-loglevel", "error", "-y",
                "-i", str(src), "-vf", vf, *extra_args, str(dst),
            ]
            try:
                proc = await asyncio.create_subprocess_exec(
                    *cmd,
                    stdout=asyncio.subprocess.DEVNULL,
                    stderr=asyncio.subprocess.PIPE,
                )
            except OSError as exc:
                raise UpstreamRenderFailure(f"Cannot start {self._binary}: {exc}") from exc

            try:
                _, stderr_b = await proc.communicate()
            except asyncio.CancelledError:
                proc.kill()
                await proc.wait()
                raise

            if proc.returncode != 0 or not dst.exists():
                stderr = stderr_b.decode("utf-8", errors="replace").strip()
                log.warning("ffmpeg exited with %s: %s", proc.returncode, stderr[-_MAX_STDERR_CHARS:])
                raise UpstreamRenderFailure(
                    f"ffmpeg exited with code {proc.returncode}: {stderr[-_MAX_STDERR_CHARS:]}"
                )
            return dst.read_bytes()
