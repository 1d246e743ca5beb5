"""Health check endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter()


@router.get(
    "/health",
    summary="Health check",
    description="Basic health check endpoint.",
)
async def health():
    """Basic health check."""
    return {"status": "healthy", "service": "status-aggregator"}


@router.get(
    "/ready",
    summary="Readiness check",
    description="Check if service is ready to receive traffic.",
)
async def ready(request: Request):
    """Readiness check.

    Ready once the catalog is loaded and the collector is wired.
    """
    catalog = getattr(request.app.state, "catalog", None)
    checks = {
        "catalog": catalog is not None,
        "collector": getattr(request.app.state, "collector", None) is not None,
    }

    all_ready = all(checks.values())

    return {
        "status": "ready" if all_ready else "not_ready",
        "checks": checks,
        "projects": len(catalog.projects) if catalog is not None else 0,
    }
