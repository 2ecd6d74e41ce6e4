"""Configuration, startup validation and logging setup."""

from __future__ import annotations

from etsyboost.core.config import APIConfig, AppSettings, CacheConfig, ComputeConfig, ObservabilityConfig
from etsyboost.core.logging_config import setup_logging
from etsyboost.core.startup_checks import validate_settings

__all__ = [
    "APIConfig",
    "AppSettings",
    "CacheConfig",
    "ComputeConfig",
    "ObservabilityConfig",
    "setup_logging",
    "validate_settings",
]
