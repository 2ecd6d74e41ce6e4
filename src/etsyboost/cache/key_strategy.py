"""Cache key computation for deterministic, collision-resistant keys.

Inputs are joined as a JSON array (so no delimiter inside a value can shift
field boundaries), then base64-encoded under a family namespace. No case
folding or trimming happens here: callers that want case-insensitive hits
normalize before calling.
"""

from __future__ import annotations

import base64
import hashlib
import json

TAG_NAMESPACE = "tags:"
WATERMARK_NAMESPACE = "watermark:"


def _encode_parts(*parts: object) -> str:
    raw = json.dumps(list(parts), separators=(",", ":"), ensure_ascii=False)
    return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii")


def compute_tag_key(title: str, description: str, category: str) -> str:
    """Key for a scored-tag result."""
    return TAG_NAMESPACE + _encode_parts(title, description, category)


def compute_watermark_key(content_hash: str, text: str, position: str, opacity: float) -> str:
    """Key for a rendered watermark output.

    ``opacity`` is serialized via ``float`` so ``0.5`` and ``0.50`` collide
    on purpose while ``1`` and ``1.0`` do too.
    """
    return WATERMARK_NAMESPACE + _encode_parts(content_hash, text, position, float(opacity))


def compute_content_hash(data: bytes) -> str:
    """SHA-256 hex digest of raw upload bytes: same content, same hash, any filename."""
    return hashlib.sha256(data).hexdigest()
