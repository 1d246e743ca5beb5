"""Shared Pydantic models for the CloudPulse status aggregator."""

from .base import CloudPulseBaseModel, FrozenModel
from .catalog import (
    DeploymentDefinition,
    ProjectDefinition,
    ProviderFamily,
    ResourceDefinition,
    ResourceKind,
)
from .common import ErrorDetail, ErrorResponse
from .status import (
    MISSING_LABEL,
    ClusterStatus,
    DatabaseStatus,
    DeploymentStatus,
    GatewayStatus,
    LoadBalancerStatus,
    ResourceSnapshot,
    ResourceStatus,
    ServiceSummary,
)

__all__ = [
    # Base
    "CloudPulseBaseModel",
    "FrozenModel",
    # Catalog
    "ProviderFamily",
    "ResourceKind",
    "ResourceDefinition",
    "DeploymentDefinition",
    "ProjectDefinition",
    # Status
    "MISSING_LABEL",
    "ClusterStatus",
    "DatabaseStatus",
    "LoadBalancerStatus",
    "GatewayStatus",
    "DeploymentStatus",
    "ServiceSummary",
    "ResourceStatus",
    "ResourceSnapshot",
    # Common
    "ErrorDetail",
    "ErrorResponse",
]
