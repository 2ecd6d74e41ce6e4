"""Global exception handlers mapping domain exceptions to HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from etsyboost.exceptions import (
    ComputeTimeout,
    EtsyBoostError,
    InvalidAsset,
    UpstreamRenderFailure,
)

log = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register exception-to-HTTP-status mappings."""

    @app.exception_handler(InvalidAsset)
    async def handle_invalid_asset(request: Request, exc: InvalidAsset) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": str(exc), "type": "invalid_asset"})

    @app.exception_handler(ComputeTimeout)
    async def handle_timeout(request: Request, exc: ComputeTimeout) -> JSONResponse:
        log.warning("%s %s timed out: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=504, content={"error": str(exc), "type": "timeout"})

    @app.exception_handler(UpstreamRenderFailure)
    async def handle_render_failure(request: Request, exc: UpstreamRenderFailure) -> JSONResponse:
        log.error("Render failure on %s: %s", request.url.path, exc)
        return JSONResponse(status_code=500, content={"error": str(exc), "type": "render_failure"})

    @app.exception_handler(EtsyBoostError)
    async def handle_generic_error(request: Request, exc: EtsyBoostError) -> JSONResponse:
        log.error("Unhandled service error on %s: %s", request.url.path, exc)
        return JSONResponse(status_code=500, content={"error": str(exc), "type": "etsyboost_error"})
