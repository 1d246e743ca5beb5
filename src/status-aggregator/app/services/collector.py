"""Fan-out status collector.

One scrape walks every project and deployment of the catalog. Deployments are
processed one after another; within a deployment one task per resource is
started and ``asyncio.gather`` is the join barrier. Each task hands back an
outcome instead of touching shared counters, and the deployment tally is
folded from those outcomes only after every task has finished, so summary
counts are never read while still being produced.

Outcome accounting per resource:
- fetch failed: counted in ``failed_fetch_resources``, no status sample
- provider reports not found: counted in ``missing_resources``, no sample
- exists: one status sample valued 1 if healthy else 0
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from typing import Protocol
from uuid import uuid4

from shared.models import (
    DeploymentDefinition,
    ProjectDefinition,
    ResourceDefinition,
    ResourceStatus,
)
from shared.observability import CorrelationContext, get_logger

from ..catalog import Catalog
from ..errors import FetchError

logger = get_logger(__name__)


class StatusDispatcher(Protocol):
    async def dispatch(self, resource: ResourceDefinition) -> ResourceStatus: ...


@dataclass(frozen=True)
class ResourceOutcome:
    """Result of one resource fetch within a scrape."""

    resource: ResourceDefinition
    status: ResourceStatus | None = None
    error: FetchError | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass(frozen=True)
class StatusSample:
    """Per-resource observation: 1 if healthy, 0 otherwise."""

    project: str
    deployment: str
    resource: str
    kind: str
    status: str
    value: int


@dataclass
class DeploymentTally:
    """Per-deployment counters for a single scrape.

    ``total_resources`` always equals the sum of the other four.
    """

    total_resources: int = 0
    healthy_resources: int = 0
    unhealthy_resources: int = 0
    missing_resources: int = 0
    failed_fetch_resources: int = 0

    def record(self, outcome: ResourceOutcome) -> None:
        self.total_resources += 1
        if outcome.failed:
            self.failed_fetch_resources += 1
        elif not outcome.status.exists():
            self.missing_resources += 1
        elif outcome.status.is_healthy():
            self.healthy_resources += 1
        else:
            self.unhealthy_resources += 1


@dataclass(frozen=True)
class DeploymentCollection:
    """Everything one deployment contributed to a scrape."""

    project: str
    deployment: str
    outcomes: list[ResourceOutcome]
    samples: list[StatusSample]
    tally: DeploymentTally


@dataclass
class ScrapeResult:
    """One full collection pass across the catalog."""

    scrape_id: str
    deployments: list[DeploymentCollection] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def samples(self) -> list[StatusSample]:
        return [sample for collection in self.deployments for sample in collection.samples]


def _sample(
    project: ProjectDefinition,
    deployment: DeploymentDefinition,
    outcome: ResourceOutcome,
) -> StatusSample:
    status = outcome.status
    return StatusSample(
        project=project.name,
        deployment=deployment.name,
        resource=outcome.resource.name,
        kind=outcome.resource.type.value,
        status=status.status_label(),
        value=1 if status.is_healthy() else 0,
    )


class FanOutCollector:
    """Collects the status of every catalog resource, one deployment at a time."""

    def __init__(
        self,
        catalog: Catalog,
        dispatcher: StatusDispatcher,
        fetch_timeout_seconds: float | None = 10.0,
    ):
        self.catalog = catalog
        self.dispatcher = dispatcher
        self.fetch_timeout_seconds = fetch_timeout_seconds

    async def scrape(self) -> ScrapeResult:
        """Run one scrape across all projects and deployments.

        A failing resource never aborts the scrape; it only shows up in its
        deployment's failed-fetch count.
        """
        result = ScrapeResult(scrape_id=uuid4().hex)
        start = time.perf_counter()

        async with CorrelationContext(scrape_id=result.scrape_id):
            for project in self.catalog.projects:
                for deployment in project.deployments:
                    collection = await self.collect_deployment(project, deployment)
                    result.deployments.append(collection)

            result.duration_seconds = time.perf_counter() - start
            logger.info(
                "Scrape completed",
                deployments=len(result.deployments),
                samples=len(result.samples),
                failed=sum(c.tally.failed_fetch_resources for c in result.deployments),
                duration_ms=round(result.duration_seconds * 1000, 2),
            )

        return result

    async def collect_deployment(
        self,
        project: ProjectDefinition,
        deployment: DeploymentDefinition,
    ) -> DeploymentCollection:
        """Fetch every resource of one deployment concurrently and tally them."""
        resources = list(deployment.resources)
        results = await asyncio.gather(
            *(self.fetch(resource) for resource in resources),
            return_exceptions=True,
        )

        outcomes: list[ResourceOutcome] = []
        for resource, result in zip(resources, results):
            # CancelledError is a BaseException and comes back as a result too
            if isinstance(result, BaseException):
                error = str(result) or type(result).__name__
                logger.error(
                    "Resource task crashed",
                    project=project.name,
                    deployment=deployment.name,
                    resource=resource.name,
                    error=error,
                )
                result = ResourceOutcome(
                    resource=resource,
                    error=FetchError(error, resource.name, resource.type),
                )
            outcomes.append(result)

        tally = DeploymentTally()
        samples: list[StatusSample] = []
        for outcome in outcomes:
            tally.record(outcome)
            if outcome.failed:
                logger.warning(
                    "Resource fetch failed",
                    project=project.name,
                    deployment=deployment.name,
                    resource=outcome.resource.name,
                    kind=outcome.resource.type.value,
                    error=str(outcome.error),
                )
            elif outcome.status.exists():
                samples.append(_sample(project, deployment, outcome))

        return DeploymentCollection(
            project=project.name,
            deployment=deployment.name,
            outcomes=outcomes,
            samples=samples,
            tally=tally,
        )

    async def fetch(self, resource: ResourceDefinition) -> ResourceOutcome:
        """Fetch one resource under the per-resource timeout."""
        try:
            status = await asyncio.wait_for(
                self.dispatcher.dispatch(resource),
                timeout=self.fetch_timeout_seconds,
            )
        except TimeoutError:
            return ResourceOutcome(
                resource=resource,
                error=FetchError(
                    f"timed out after {self.fetch_timeout_seconds}s",
                    resource.name,
                    resource.type,
                ),
            )
        except FetchError as e:
            return ResourceOutcome(resource=resource, error=e)

        return ResourceOutcome(resource=resource, status=status)
