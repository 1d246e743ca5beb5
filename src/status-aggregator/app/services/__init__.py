"""Services for the Status Aggregator."""

from .collector import (
    DeploymentCollection,
    DeploymentTally,
    FanOutCollector,
    ResourceOutcome,
    ScrapeResult,
    StatusSample,
)
from .exposition import ScrapeResultCollector, render_scrape
from .snapshot import DeploymentSnapshot, SnapshotService

__all__ = [
    "DeploymentCollection",
    "DeploymentSnapshot",
    "DeploymentTally",
    "FanOutCollector",
    "ResourceOutcome",
    "ScrapeResult",
    "ScrapeResultCollector",
    "SnapshotService",
    "StatusSample",
    "render_scrape",
]
