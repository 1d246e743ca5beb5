"""Status Aggregator FastAPI Application.

The Status Aggregator provides:
- Project definition lookups from the static catalog
- On-demand resource and deployment snapshots
- A Prometheus scrape endpoint that fans out across every catalog resource
"""

from __future__ import annotations

import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config import StatusAggregatorSettings, get_aggregator_settings
from shared.observability import get_logger, setup_logging

from .api import health, metrics, projects
from .catalog import Catalog
from .errors import ConfigError
from .middleware import RequestLoggingMiddleware
from .providers import ProviderDispatcher, create_dispatcher, missing_credentials
from .services import FanOutCollector, SnapshotService

logger = get_logger(__name__)


def load_catalog(settings: StatusAggregatorSettings) -> Catalog:
    """Load the catalog and verify the credentials its providers need.

    Raises:
        ConfigError: the catalog is invalid or credentials are missing.
    """
    catalog = Catalog.from_file(settings.catalog_path)

    if settings.check_credentials:
        missing = missing_credentials(settings, catalog.provider_families())
        if missing:
            raise ConfigError(
                f"required environment variables not set: {', '.join(missing)}"
            )

    return catalog


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown of:
    - The catalog (loaded once, read-only afterwards)
    - Provider clients behind the dispatcher
    - The fan-out collector and snapshot service
    """
    settings: StatusAggregatorSettings = app.state.settings
    logger.info("Starting Status Aggregator service", version=settings.app_version)

    catalog: Catalog | None = app.state.catalog
    if catalog is None:
        catalog = load_catalog(settings)
        app.state.catalog = catalog

    dispatcher: ProviderDispatcher | None = app.state.dispatcher
    if dispatcher is None:
        dispatcher = create_dispatcher(settings, catalog.provider_families())
        app.state.dispatcher = dispatcher

    collector = FanOutCollector(
        catalog,
        dispatcher,
        fetch_timeout_seconds=settings.fetch_timeout_seconds,
    )
    app.state.collector = collector
    app.state.snapshot_service = SnapshotService(catalog, collector)

    logger.info(
        "Status Aggregator service started successfully",
        projects=len(catalog.projects),
        resources=catalog.resource_count,
    )

    yield

    # Shutdown
    logger.info("Shutting down Status Aggregator service")
    await dispatcher.close()
    logger.info("Status Aggregator service shutdown complete")


def create_app(
    settings: StatusAggregatorSettings | None = None,
    catalog: Catalog | None = None,
    dispatcher: ProviderDispatcher | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    A pre-loaded catalog or dispatcher is used as-is; anything not supplied
    is built from settings during startup.
    """
    settings = settings or get_aggregator_settings()
    setup_logging(log_level=settings.log_level, log_format=settings.log_format)

    app = FastAPI(
        title="CloudPulse - Status Aggregator",
        description="Cloud resource health snapshots and aggregated status metrics",
        version=settings.app_version,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.catalog = catalog
    app.state.dispatcher = dispatcher

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.is_development else [],
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    # Include routers
    app.include_router(health.router, tags=["Health"])
    app.include_router(projects.router, tags=["Projects"])
    app.include_router(metrics.router, tags=["Metrics"])

    return app


app = create_app()


def run() -> None:
    """Console entry point: validate configuration, then serve."""
    settings = get_aggregator_settings()
    setup_logging(log_level=settings.log_level, log_format=settings.log_format)

    try:
        catalog = load_catalog(settings)
    except ConfigError as e:
        logger.error("Invalid configuration", error=str(e))
        sys.exit(1)

    uvicorn.run(
        create_app(settings, catalog=catalog),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.value.lower(),
    )


if __name__ == "__main__":
    run()
