"""Tests for startup validation checks."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from etsyboost.core.config import AppSettings, CacheConfig, ComputeConfig
from etsyboost.core.startup_checks import validate_settings


class TestCacheBudget:
    def test_defaults_pass(self):
        validate_settings(AppSettings(cache=CacheConfig(redis_url="")))  # Should not raise

    def test_rejects_zero_budget(self):
        settings = AppSettings(cache=CacheConfig(memory_max_mb=0))
        with pytest.raises(ValueError, match="ETSYBOOST_CACHE_MEMORY_MAX_MB"):
            validate_settings(settings)

    def test_rejects_zero_ttl(self):
        settings = AppSettings(cache=CacheConfig(default_ttl_seconds=0))
        with pytest.raises(ValueError, match="DEFAULT_TTL_SECONDS"):
            validate_settings(settings)


class TestRedisUrl:
    def test_accepts_redis_schemes(self):
        for url in ("redis://localhost:6379/0", "rediss://cache.internal:6380", "unix:///tmp/redis.sock"):
            validate_settings(AppSettings(cache=CacheConfig(redis_url=url)))

    def test_rejects_http_url(self):
        settings = AppSettings(cache=CacheConfig(redis_url="http://localhost:6379"))
        with pytest.raises(ValueError, match="ETSYBOOST_CACHE_REDIS_URL"):
            validate_settings(settings)

    def test_warns_memory_only_in_ecs(self):
        settings = AppSettings(cache=CacheConfig(redis_url=""))
        with patch.dict(os.environ, {"ECS_CONTAINER_METADATA_URI": "http://169.254.170.2/v4"}):
            with patch("etsyboost.core.startup_checks.log") as mock_log:
                validate_settings(settings)
                mock_log.warning.assert_called()

    def test_warns_memory_only_in_k8s(self):
        settings = AppSettings(cache=CacheConfig(redis_url=""))
        with patch.dict(os.environ, {"KUBERNETES_SERVICE_HOST": "10.0.0.1"}):
            with patch("etsyboost.core.startup_checks.log") as mock_log:
                validate_settings(settings)
                mock_log.warning.assert_called()

    def test_no_warning_with_redis_in_container(self):
        settings = AppSettings(cache=CacheConfig(redis_url="redis://cache:6379/0"))
        with patch.dict(os.environ, {"KUBERNETES_SERVICE_HOST": "10.0.0.1"}):
            with patch("etsyboost.core.startup_checks.log") as mock_log:
                validate_settings(settings)
                mock_log.warning.assert_not_called()


class TestTimeouts:
    def test_rejects_non_positive_render_timeout(self):
        settings = AppSettings(compute=ComputeConfig(render_timeout_seconds=0))
        with pytest.raises(ValueError, match="RENDER_TIMEOUT_SECONDS"):
            validate_settings(settings)

    def test_rejects_zero_connect_attempts(self):
        settings = AppSettings(cache=CacheConfig(connect_attempts=0))
        with pytest.raises(ValueError, match="CONNECT_ATTEMPTS"):
            validate_settings(settings)
