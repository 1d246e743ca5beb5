"""Catalog domain models.

Projects contain deployments, deployments contain resources. Every resource
is tagged with a ResourceKind and an opaque provider identifier.
"""

from enum import Enum

from pydantic import Field, model_validator

from .base import FrozenModel


class ProviderFamily(str, Enum):
    """Cloud provider a resource kind is fetched from."""

    AWS = "aws"
    CLOUDFLARE = "cloudflare"


class ResourceKind(str, Enum):
    """Closed set of supported resource kinds.

    Adding a kind requires a status variant and a dispatcher case.
    """

    CLUSTER = "aws-ecs"
    RELATIONAL_DATABASE = "aws-rds"
    LOAD_BALANCER = "aws-elb"
    API_GATEWAY = "aws-apigw"
    STATIC_SITE_DEPLOYMENT = "cloudflare-pages"

    @property
    def provider(self) -> ProviderFamily:
        if self is ResourceKind.STATIC_SITE_DEPLOYMENT:
            return ProviderFamily.CLOUDFLARE
        return ProviderFamily.AWS

    @classmethod
    def is_valid(cls, value: object) -> bool:
        return isinstance(value, str) and value in {kind.value for kind in cls}


def _ensure_unique(names: list[str], level: str, parent: str) -> None:
    seen: set[str] = set()
    for name in names:
        if name in seen:
            raise ValueError(f"duplicate {level} name '{name}' in {parent}")
        seen.add(name)


class ResourceDefinition(FrozenModel):
    """A single monitored resource."""

    name: str = Field(min_length=1, description="Unique within the deployment")
    identifier: str = Field(min_length=1, description="Provider-specific identifier")
    type: ResourceKind = Field(description="Resource kind tag")


class DeploymentDefinition(FrozenModel):
    """A named group of resources inside a project."""

    name: str = Field(min_length=1)
    resources: tuple[ResourceDefinition, ...] = Field(default_factory=tuple)

    @model_validator(mode="after")
    def validate_unique_resources(self) -> "DeploymentDefinition":
        _ensure_unique(
            [resource.name for resource in self.resources],
            "resource",
            f"deployment '{self.name}'",
        )
        return self


class ProjectDefinition(FrozenModel):
    """Top-level catalog entry."""

    name: str = Field(min_length=1)
    deployments: tuple[DeploymentDefinition, ...] = Field(default_factory=tuple)

    @model_validator(mode="after")
    def validate_unique_deployments(self) -> "ProjectDefinition":
        _ensure_unique(
            [deployment.name for deployment in self.deployments],
            "deployment",
            f"project '{self.name}'",
        )
        return self
