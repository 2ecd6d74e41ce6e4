"""Data models for the cache tiers."""

from __future__ import annotations

import base64
import binascii
import dataclasses
import json
from enum import Enum
from typing import Any, Literal, Optional, Union

# Wire tags that keep JSON and binary values apart inside one text store
_JSON_TAG = "j:"
_BINARY_TAG = "b:"


@dataclasses.dataclass(frozen=True)
class JsonPayload:
    """A JSON-shaped value, held in its serialized form."""

    text: str

    @classmethod
    def from_value(cls, value: Any) -> JsonPayload:
        return cls(json.dumps(value, separators=(",", ":"), ensure_ascii=False))

    def value(self) -> Any:
        return json.loads(self.text)


@dataclasses.dataclass(frozen=True)
class BinaryPayload:
    """An opaque byte buffer such as a rendered image or video."""

    data: bytes


CachePayload = Union[JsonPayload, BinaryPayload]


def encode_payload(payload: CachePayload) -> str:
    """Render a payload as tagged text; binary buffers are base64-encoded."""
    if isinstance(payload, BinaryPayload):
        return _BINARY_TAG + base64.b64encode(payload.data).decode("ascii")
    return _JSON_TAG + payload.text


def decode_payload(raw: str) -> CachePayload:
    """Inverse of :func:`encode_payload`. Raises ValueError on foreign or corrupt text."""
    if raw.startswith(_JSON_TAG):
        return JsonPayload(raw[len(_JSON_TAG):])
    if raw.startswith(_BINARY_TAG):
        try:
            return BinaryPayload(base64.b64decode(raw[len(_BINARY_TAG):], validate=True))
        except binascii.Error as exc:
            raise ValueError(f"Corrupt binary cache payload: {exc}") from exc
    raise ValueError("Cache value carries no payload tag")


@dataclasses.dataclass
class CacheEntry:
    """A stored value with absolute expiry and approximate size in bytes."""

    key: str
    value: str
    created_at: float
    expires_at: float
    size: int

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class ExternalState(str, Enum):
    UNINITIALIZED = "uninitialized"  # Configured, first connect not yet finished
    CONNECTED = "connected"          # Serving traffic
    DEGRADED = "degraded"            # Bypassed until the next successful connect


@dataclasses.dataclass(frozen=True)
class StoreStatus:
    """Which tier currently serves requests, and why not the external one."""

    using: Literal["external", "memory"]
    last_error: Optional[str] = None

    def to_dict(self) -> dict[str, Optional[str]]:
        return {"using": self.using, "error": self.last_error}
