"""Status Aggregator exceptions."""

from __future__ import annotations

from shared.models import ResourceKind


class ConfigError(Exception):
    """Raised when the catalog or provider configuration is unusable.

    Fatal: the service does not start.
    """

    pass


class DefinitionNotFoundError(Exception):
    """Raised when a project, deployment or resource name has no match."""

    error_code = "DEFINITION_NOT_FOUND"
    level = "definition"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{self.level} not found: {name}")


class ProjectNotFoundError(DefinitionNotFoundError):
    error_code = "PROJECT_NOT_FOUND"
    level = "project"


class DeploymentNotFoundError(DefinitionNotFoundError):
    error_code = "DEPLOYMENT_NOT_FOUND"
    level = "deployment"


class ResourceNotFoundError(DefinitionNotFoundError):
    error_code = "RESOURCE_NOT_FOUND"
    level = "resource"


class FetchError(Exception):
    """Raised when a provider call fails for any reason other than not-found."""

    error_code = "FETCH_FAILED"

    def __init__(
        self,
        message: str,
        resource: str | None = None,
        kind: ResourceKind | str | None = None,
    ):
        self.message = message
        self.resource = resource
        self.kind = kind.value if isinstance(kind, ResourceKind) else kind
        super().__init__(message)

    def for_resource(self, resource: str, kind: ResourceKind | str) -> FetchError:
        """Attach resource context if the adapter did not."""
        if self.resource is None:
            self.resource = resource
        if self.kind is None:
            self.kind = kind.value if isinstance(kind, ResourceKind) else kind
        return self
