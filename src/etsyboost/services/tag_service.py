"""Tag service: cached scored-tag generation for one listing."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from pydantic import ValidationError

from etsyboost.cache.key_strategy import compute_tag_key
from etsyboost.cache.service import CacheService
from etsyboost.exceptions import ComputeTimeout
from etsyboost.models import TagResult
from etsyboost.services._timeouts import cache_read_or_miss
from etsyboost.tags.scorer import TagScorer

log = logging.getLogger(__name__)


class TagService:
    """Serve tag results from cache, scoring on a miss."""

    def __init__(
        self,
        cache: CacheService,
        scorer: Optional[TagScorer] = None,
        *,
        read_timeout_seconds: float = 2.0,
        compute_timeout_seconds: float = 5.0,
        ttl_seconds: Optional[int] = None,
    ) -> None:
        self._cache = cache
        self._scorer = scorer or TagScorer()
        self._read_timeout = read_timeout_seconds
        self._compute_timeout = compute_timeout_seconds
        self._ttl = ttl_seconds

    async def generate(self, title: str, description: str, category: str) -> TagResult:
        """Return ranked tags and tips, computing and caching them on a miss.

        Raises:
            ComputeTimeout: scoring exceeded ``compute_timeout_seconds``.
        """
        key = compute_tag_key(title, description, category)

        cached = await cache_read_or_miss(self._cache.get(key), self._read_timeout, key)
        if cached is not None:
            try:
                result = TagResult.model_validate(cached)
            except ValidationError as exc:
                log.warning("Ignoring malformed cached tag result: %s", exc)
            else:
                log.info("Tag cache hit for category %r", category)
                return result

        log.info("Tag cache miss for category %r; scoring listing", category)
        try:
            result = await asyncio.wait_for(
                asyncio.to_thread(self._scorer.generate, title, description, category),
                timeout=self._compute_timeout,
            )
        except asyncio.TimeoutError as exc:
            raise ComputeTimeout(f"Tag generation timed out after {self._compute_timeout}s") from exc

        await self._cache.set(key, result.model_dump(mode="json"), ttl_seconds=self._ttl)
        return result
