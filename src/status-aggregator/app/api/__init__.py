"""API endpoints for the Status Aggregator."""

from . import health, metrics, projects

__all__ = ["health", "metrics", "projects"]
