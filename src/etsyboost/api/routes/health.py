"""Health check endpoints."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe — always returns 200 if the process is up."""
    return {"status": "ok"}


@router.get("/ready")
async def ready() -> dict[str, str]:
    """Readiness probe — confirms the app can serve requests."""
    return {"status": "ready"}


@router.get("/api/health")
async def cache_health(req: Request) -> dict[str, Any]:
    """Round-trip a probe through the cache and report which tier served it."""
    cache = req.app.state.cache
    healthy = await cache.health_check()
    status = cache.status()
    return {
        "status": "healthy",
        "cache": "connected" if healthy else "disconnected",
        "using": status["using"],
        "error": status["error"],
        "memory": status["memory"],
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
