"""FastAPI application with lifespan management."""

from __future__ import annotations

import importlib.metadata
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI

from etsyboost.api.middleware.error_handler import register_error_handlers
from etsyboost.api.routes import health, tags, watermark
from etsyboost.cache import create_cache_service
from etsyboost.core.config import APIConfig, AppSettings
from etsyboost.core.logging_config import setup_logging
from etsyboost.core.startup_checks import validate_settings
from etsyboost.services import TagService, WatermarkService
from etsyboost.watermark import FFmpegRenderer, IWatermarkRenderer


def _get_version() -> str:
    """Read package version from installed metadata, with dev fallback."""
    try:
        return importlib.metadata.version("etsyboost")
    except importlib.metadata.PackageNotFoundError:
        return "0.0.0-dev"


def create_app(
    settings: Optional[AppSettings] = None,
    renderer: Optional[IWatermarkRenderer] = None,
) -> FastAPI:
    """Build the application; tests pass their own settings and renderer."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application startup/shutdown lifecycle."""
        app_settings = settings or AppSettings()
        validate_settings(app_settings)
        setup_logging(app_settings.observability)

        cache = create_cache_service(app_settings)
        await cache.start()

        app.state.settings = app_settings
        app.state.cache = cache
        app.state.tag_service = TagService(
            cache,
            read_timeout_seconds=app_settings.cache.read_timeout_seconds,
            compute_timeout_seconds=app_settings.compute.tag_timeout_seconds,
        )
        app.state.watermark_service = WatermarkService(
            cache,
            renderer or FFmpegRenderer(app_settings.compute.ffmpeg_binary, app_settings.compute.font_size),
            read_timeout_seconds=app_settings.cache.read_timeout_seconds,
            render_timeout_seconds=app_settings.compute.render_timeout_seconds,
        )
        try:
            yield
        finally:
            await cache.close()

    api_config = APIConfig()
    app = FastAPI(
        title=api_config.title,
        description=api_config.description,
        version=_get_version(),
        lifespan=lifespan,
    )
    register_error_handlers(app)
    app.include_router(health.router)
    app.include_router(tags.router, prefix="/api")
    app.include_router(watermark.router, prefix="/api")
    return app


app = create_app()
