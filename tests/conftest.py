"""Shared fixtures for etsyboost tests."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterator

import pytest

from etsyboost.cache.memory import VolatileStore
from etsyboost.cache.redis import ExternalCache
from etsyboost.cache.service import CacheService
from tests.fakes.fake_redis import FakeRedisClient

# Smallest valid-looking headers for each container the sniffer knows
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 32
MP4_BYTES = b"\x00\x00\x00\x18ftypisom" + b"\x00" * 32
WEBM_BYTES = b"\x1a\x45\xdf\xa3\x9f\x42\x86\x81\x01\x42\xf7\x81\x01webm" + b"\x00" * 16


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


async def no_sleep(_: float) -> None:
    await asyncio.sleep(0)


@pytest.fixture(autouse=True)
def _restore_logging_state() -> Iterator[None]:
    """Undo process-global logging changes (e.g. configure_logging) between tests."""
    root = logging.getLogger()
    pkg = logging.getLogger("etsyboost")
    handlers, root_level, pkg_level = list(root.handlers), root.level, pkg.level
    yield
    root.handlers[:] = handlers
    root.setLevel(root_level)
    pkg.setLevel(pkg_level)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_redis() -> FakeRedisClient:
    return FakeRedisClient()


@pytest.fixture
def memory_store(clock: FakeClock) -> VolatileStore:
    return VolatileStore(1024 * 1024, clock=clock)


@pytest.fixture
def external(fake_redis: FakeRedisClient) -> ExternalCache:
    return ExternalCache(client=fake_redis, connect_attempts=3, sleep=no_sleep)


@pytest.fixture
def unconfigured_external() -> ExternalCache:
    return ExternalCache("")


@pytest.fixture
async def connected_service(external: ExternalCache, memory_store: VolatileStore) -> CacheService:
    """CacheService whose external tier is a healthy fake Redis."""
    assert await external.connect()
    return CacheService(external, memory_store)


@pytest.fixture
def memory_only_service(unconfigured_external: ExternalCache, memory_store: VolatileStore) -> CacheService:
    """CacheService with no external tier configured."""
    return CacheService(unconfigured_external, memory_store)
