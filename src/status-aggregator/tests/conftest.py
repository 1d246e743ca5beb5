"""Status Aggregator test fixtures."""

import asyncio
import os
from typing import Any

import pytest

# Set test environment before importing settings
os.environ["ENV"] = "development"
os.environ["LOG_FORMAT"] = "text"

from fastapi.testclient import TestClient  # noqa: E402

from app.catalog import Catalog  # noqa: E402
from app.main import create_app  # noqa: E402
from shared.config import StatusAggregatorSettings  # noqa: E402
from shared.models import ResourceDefinition, ResourceStatus  # noqa: E402

CATALOG_DOCUMENT: list[dict[str, Any]] = [
    {
        "name": "web",
        "deployments": [
            {
                "name": "prod",
                "resources": [
                    {"name": "api", "identifier": "web-prod-api", "type": "aws-apigw"},
                    {"name": "db", "identifier": "web-prod-db", "type": "aws-rds"},
                ],
            },
            {
                "name": "staging",
                "resources": [
                    {"name": "cluster", "identifier": "web-staging", "type": "aws-ecs"},
                    {"name": "lb", "identifier": "web-staging-lb", "type": "aws-elb"},
                    {"name": "site", "identifier": "web-staging-site", "type": "cloudflare-pages"},
                ],
            },
        ],
    },
    {
        "name": "docs",
        "deployments": [
            {
                "name": "prod",
                "resources": [
                    {"name": "site", "identifier": "docs-site", "type": "cloudflare-pages"},
                ],
            },
        ],
    },
]


class FakeDispatcher:
    """In-memory dispatcher keyed by resource name.

    A value may be a status, an exception to raise, or a callable returning
    either. Every call is recorded in ``calls``.
    """

    def __init__(
        self,
        results: dict[str, Any] | None = None,
        delays: dict[str, float] | None = None,
    ):
        self.results = results or {}
        self.delays = delays or {}
        self.calls: list[str] = []
        self.closed = False

    async def dispatch(self, resource: ResourceDefinition) -> ResourceStatus:
        self.calls.append(resource.name)
        delay = self.delays.get(resource.name)
        if delay:
            await asyncio.sleep(delay)

        result = self.results[resource.name]
        if callable(result):
            result = result()
        if isinstance(result, BaseException):
            raise result
        return result

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def catalog_document() -> list[dict[str, Any]]:
    return CATALOG_DOCUMENT


@pytest.fixture
def catalog() -> Catalog:
    return Catalog.load(CATALOG_DOCUMENT)


@pytest.fixture
def web_prod(catalog: Catalog):
    """The (project, deployment) pair for web/prod."""
    return catalog.resolve_deployment("web", "prod")


@pytest.fixture
def settings() -> StatusAggregatorSettings:
    return StatusAggregatorSettings(check_credentials=False, fetch_timeout_seconds=1.0)


@pytest.fixture
def dispatcher() -> FakeDispatcher:
    return FakeDispatcher()


@pytest.fixture
def client(settings, catalog, dispatcher):
    """Test client with lifespan run against the fake dispatcher."""
    app = create_app(settings, catalog=catalog, dispatcher=dispatcher)
    with TestClient(app) as test_client:
        yield test_client
