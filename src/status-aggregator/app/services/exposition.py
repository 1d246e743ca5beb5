"""Prometheus exposition of a scrape result.

Every /metrics request runs a fresh scrape, so the result is rendered through
a throwaway registry rather than long-lived module-level gauges: a resource
that disappears from one scrape must not keep its last value.
"""

from __future__ import annotations

from collections.abc import Iterator

from prometheus_client import CollectorRegistry, generate_latest
from prometheus_client.core import GaugeMetricFamily, Metric

from .collector import ScrapeResult

DEPLOYMENT_LABELS = ["project", "deployment"]
RESOURCE_LABELS = ["project", "deployment", "resource", "type", "status"]


class ScrapeResultCollector:
    """Custom prometheus_client collector over one ScrapeResult."""

    def __init__(self, result: ScrapeResult):
        self.result = result

    def collect(self) -> Iterator[Metric]:
        resource_status = GaugeMetricFamily(
            "resource_status",
            "Status of a resource (1 if healthy, 0 otherwise)",
            labels=RESOURCE_LABELS,
        )
        total = GaugeMetricFamily(
            "resources_total", "Number of resources", labels=DEPLOYMENT_LABELS
        )
        healthy = GaugeMetricFamily(
            "resources_healthy", "Number of healthy resources", labels=DEPLOYMENT_LABELS
        )
        unhealthy = GaugeMetricFamily(
            "resources_unhealthy",
            "Number of resources that exist but are not healthy",
            labels=DEPLOYMENT_LABELS,
        )
        missing = GaugeMetricFamily(
            "resources_missing",
            "Number of resources the provider reports as not found",
            labels=DEPLOYMENT_LABELS,
        )
        failed_fetch = GaugeMetricFamily(
            "resources_failed_fetch",
            "Number of resources whose status couldn't be fetched",
            labels=DEPLOYMENT_LABELS,
        )

        for collection in self.result.deployments:
            for sample in collection.samples:
                resource_status.add_metric(
                    [
                        sample.project,
                        sample.deployment,
                        sample.resource,
                        sample.kind,
                        sample.status,
                    ],
                    sample.value,
                )

            labels = [collection.project, collection.deployment]
            tally = collection.tally
            total.add_metric(labels, tally.total_resources)
            healthy.add_metric(labels, tally.healthy_resources)
            unhealthy.add_metric(labels, tally.unhealthy_resources)
            missing.add_metric(labels, tally.missing_resources)
            failed_fetch.add_metric(labels, tally.failed_fetch_resources)

        yield resource_status
        yield total
        yield healthy
        yield unhealthy
        yield missing
        yield failed_fetch
        yield GaugeMetricFamily(
            "resource_scrape_duration_seconds",
            "Duration of the last full resource scrape",
            value=self.result.duration_seconds,
        )


def render_scrape(result: ScrapeResult) -> bytes:
    """Render a scrape in the Prometheus text exposition format."""
    registry = CollectorRegistry(auto_describe=False)
    registry.register(ScrapeResultCollector(result))
    return generate_latest(registry)
