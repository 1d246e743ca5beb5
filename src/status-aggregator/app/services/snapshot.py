"""On-demand resource snapshots."""

from __future__ import annotations

import asyncio

from pydantic import Field

from shared.models import CloudPulseBaseModel, ResourceSnapshot
from shared.observability import get_logger

from ..catalog import Catalog
from ..errors import FetchError
from .collector import FanOutCollector

logger = get_logger(__name__)


class DeploymentSnapshot(CloudPulseBaseModel):
    """Snapshots of every resource in a deployment whose fetch succeeded."""

    resources: list[ResourceSnapshot] = Field(default_factory=list)
    failed: list[str] = Field(default_factory=list, description="Resources whose fetch failed")


class SnapshotService:
    """Synchronous lookups for interactive callers.

    A single resource is resolved through the catalog and fetched exactly
    once; nothing is cached between calls.
    """

    def __init__(self, catalog: Catalog, collector: FanOutCollector):
        self.catalog = catalog
        self.collector = collector

    async def get_snapshot(
        self,
        project_name: str,
        deployment_name: str,
        resource_name: str,
    ) -> ResourceSnapshot:
        """Fetch the current status of one resource.

        Raises:
            DefinitionNotFoundError: a name did not resolve; no provider call is made.
            FetchError: the provider call failed or timed out.
        """
        _, _, resource = self.catalog.resolve(project_name, deployment_name, resource_name)

        timeout = self.collector.fetch_timeout_seconds
        try:
            status = await asyncio.wait_for(
                self.collector.dispatcher.dispatch(resource),
                timeout=timeout,
            )
        except TimeoutError as e:
            raise FetchError(f"timed out after {timeout}s", resource.name, resource.type) from e

        return ResourceSnapshot.capture(resource, status)

    async def get_deployment_snapshot(
        self,
        project_name: str,
        deployment_name: str,
    ) -> DeploymentSnapshot:
        """Fan out over one deployment and snapshot each resource."""
        project, deployment = self.catalog.resolve_deployment(project_name, deployment_name)
        collection = await self.collector.collect_deployment(project, deployment)

        snapshot = DeploymentSnapshot()
        for outcome in collection.outcomes:
            if outcome.failed:
                snapshot.failed.append(outcome.resource.name)
            else:
                snapshot.resources.append(ResourceSnapshot.capture(outcome.resource, outcome.status))
        return snapshot
