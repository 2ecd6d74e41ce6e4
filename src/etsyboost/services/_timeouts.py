"""Time-bounded cache reads shared by the request-path services."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Optional, TypeVar

log = logging.getLogger(__name__)

T = TypeVar("T")

# Must exceed the external tier's own read timeout, so a hung read latches
# DEGRADED and falls through to the memory tier before this deadline fires
READ_DEADLINE_SLACK_SECONDS = 0.5


async def cache_read_or_miss(read: Awaitable[Optional[T]], timeout_seconds: float, key: str) -> Optional[T]:
    """Await a cache read, treating a timeout exactly like a miss.

    ``timeout_seconds`` is the tier read timeout; the overall deadline adds
    ``READ_DEADLINE_SLACK_SECONDS`` on top.
    """
    deadline = timeout_seconds + READ_DEADLINE_SLACK_SECONDS
    try:
        return await asyncio.wait_for(read, timeout=deadline)
    except asyncio.TimeoutError:
        log.warning("Cache read for %s exceeded %.1fs; treating as miss", key[:64], deadline)
        return None
