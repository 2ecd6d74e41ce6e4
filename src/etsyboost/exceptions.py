"""Exception hierarchy for etsyboost."""


class EtsyBoostError(Exception):
    """Base exception for all etsyboost errors."""


class CacheError(EtsyBoostError):
    """Base class for cache-layer faults. Never surfaced to end users."""


class CacheUnavailable(CacheError):
    """External cache is unreachable, timed out, or erroring."""


class EntryTooLarge(CacheError):
    """A single entry exceeds the in-memory store's total byte budget."""

    def __init__(self, key: str, size: int, max_size: int) -> None:
        super().__init__(f"Entry {key!r} is {size} bytes; store budget is {max_size} bytes")
        self.key = key
        self.size = size
        self.max_size = max_size


class ComputeTimeout(EtsyBoostError):
    """Tag generation or watermark rendering exceeded its time budget."""


class InvalidAsset(EtsyBoostError):
    """Uploaded content is not a recognizable image or video."""


class UpstreamRenderFailure(EtsyBoostError):
    """The render transform failed on this input."""
