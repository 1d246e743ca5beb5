"""Resource status models.

One variant per ResourceKind, joined into the ResourceStatus tagged union on
the ``kind`` field. Every variant answers the same three questions:

- ``exists()``: false only when the provider confirmed the resource is absent
- ``is_healthy()``: the kind-specific health rule, always false when absent
- ``status_label()``: human-readable provider status

A variant is either fully populated (``exists=True``) or carries only
``exists=False``; build absent ones with ``missing()``.
"""

from abc import abstractmethod
from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import Field

from .base import CloudPulseBaseModel
from .catalog import ResourceDefinition, ResourceKind

MISSING_LABEL = "missing"


class _StatusBase(CloudPulseBaseModel):
    found: bool = Field(default=True, alias="exists", description="Provider confirmed existence")

    @classmethod
    def missing(cls):
        """Status for a resource the provider reports as not found."""
        return cls(found=False)

    def exists(self) -> bool:
        return self.found

    @abstractmethod
    def is_healthy(self) -> bool: ...

    @abstractmethod
    def status_label(self) -> str: ...


class ServiceSummary(CloudPulseBaseModel):
    """A service running on a compute cluster."""

    name: str
    status: str
    created_at: datetime | None = None
    desired_count: int = 0
    pending_count: int = 0
    running_count: int = 0


class ClusterStatus(_StatusBase):
    """ECS cluster status."""

    kind: Literal["aws-ecs"] = ResourceKind.CLUSTER.value
    status: str = ""
    tasks_pending: int = 0
    tasks_running: int = 0
    services: list[ServiceSummary] = Field(default_factory=list)

    def is_healthy(self) -> bool:
        return self.found and self.status == "ACTIVE"

    def status_label(self) -> str:
        return self.status if self.found else MISSING_LABEL


class DatabaseStatus(_StatusBase):
    """RDS instance status."""

    kind: Literal["aws-rds"] = ResourceKind.RELATIONAL_DATABASE.value
    status: str = ""
    instance_class: str = ""

    def is_healthy(self) -> bool:
        return self.found and self.status == "available"

    def status_label(self) -> str:
        return self.status if self.found else MISSING_LABEL


class LoadBalancerStatus(_StatusBase):
    """Elastic Load Balancer (v2) status."""

    kind: Literal["aws-elb"] = ResourceKind.LOAD_BALANCER.value
    status: str = Field(default="", description="Load balancer state code")
    dns_name: str = ""

    def is_healthy(self) -> bool:
        return self.found and self.status == "active"

    def status_label(self) -> str:
        return self.status if self.found else MISSING_LABEL


class GatewayStatus(_StatusBase):
    """API Gateway status.

    A gateway has no degraded state: it is healthy whenever it exists.
    """

    kind: Literal["aws-apigw"] = ResourceKind.API_GATEWAY.value
    endpoint: str = ""
    protocol: str = ""

    def is_healthy(self) -> bool:
        return self.found

    def status_label(self) -> str:
        return "active" if self.found else MISSING_LABEL


class DeploymentStatus(_StatusBase):
    """Static-site (Cloudflare Pages) canonical deployment status."""

    kind: Literal["cloudflare-pages"] = ResourceKind.STATIC_SITE_DEPLOYMENT.value
    status: str = Field(default="", description="Latest stage status of the canonical deployment")
    url: str = ""

    def is_healthy(self) -> bool:
        return self.found and self.status == "success"

    def status_label(self) -> str:
        return self.status if self.found else MISSING_LABEL


ResourceStatus = Annotated[
    Union[ClusterStatus, DatabaseStatus, LoadBalancerStatus, GatewayStatus, DeploymentStatus],
    Field(discriminator="kind"),
]


class ResourceSnapshot(CloudPulseBaseModel):
    """Point-in-time status of a single resource. Never persisted."""

    definition: ResourceDefinition
    status: ResourceStatus
    healthy: bool
    exists: bool

    @classmethod
    def capture(cls, definition: ResourceDefinition, status: ResourceStatus) -> "ResourceSnapshot":
        return cls(
            definition=definition,
            status=status,
            healthy=status.is_healthy(),
            exists=status.exists(),
        )
