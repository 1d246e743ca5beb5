"""Prometheus scrape endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Request, Response
from prometheus_client import CONTENT_TYPE_LATEST

from ..services.collector import FanOutCollector
from ..services.exposition import render_scrape

router = APIRouter()


@router.get(
    "/metrics",
    summary="Resource status metrics",
    description="Run one full scrape of every catalog resource and expose it for Prometheus.",
    response_class=Response,
)
async def metrics(request: Request) -> Response:
    """Scrape synchronously within the request."""
    collector: FanOutCollector = request.app.state.collector
    result = await collector.scrape()
    return Response(content=render_scrape(result), media_type=CONTENT_TYPE_LATEST)
