"""Resource catalog.

The catalog is loaded once at startup from a JSON document and is read-only
afterwards. It is passed explicitly to the dispatcher, collector and API
handlers through ``app.state``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from shared.models import (
    DeploymentDefinition,
    ProjectDefinition,
    ProviderFamily,
    ResourceDefinition,
    ResourceKind,
)
from shared.observability import get_logger

from .errors import (
    ConfigError,
    DeploymentNotFoundError,
    ProjectNotFoundError,
    ResourceNotFoundError,
)

logger = get_logger(__name__)

_projects_adapter = TypeAdapter(list[ProjectDefinition])


def _check_resource_kinds(source: Any) -> None:
    """Fail on the first resource whose kind tag is not a ResourceKind."""
    if not isinstance(source, list):
        raise ConfigError("catalog must be a list of projects")

    for project in source:
        if not isinstance(project, dict):
            continue
        for deployment in project.get("deployments") or []:
            if not isinstance(deployment, dict):
                continue
            for resource in deployment.get("resources") or []:
                if not isinstance(resource, dict):
                    continue
                kind = resource.get("type")
                if not ResourceKind.is_valid(kind):
                    raise ConfigError(
                        f"invalid resource type '{kind}' for resource "
                        f"'{resource.get('name')}' in {project.get('name')}/{deployment.get('name')}"
                    )


class Catalog:
    """Projects → Deployments → Resources."""

    def __init__(self, projects: list[ProjectDefinition]):
        self._projects = tuple(projects)
        self._by_name = {project.name: project for project in self._projects}
        if len(self._by_name) != len(self._projects):
            raise ConfigError("duplicate project names in catalog")

    @classmethod
    def load(cls, source: Any) -> Catalog:
        """Validate a parsed catalog document.

        Raises:
            ConfigError: on the first invalid resource kind or any structural
                problem; no partial catalog is ever returned.
        """
        _check_resource_kinds(source)

        try:
            projects = _projects_adapter.validate_python(source)
        except ValidationError as e:
            raise ConfigError(f"invalid catalog: {e}") from e

        return cls(projects)

    @classmethod
    def from_file(cls, path: str | Path) -> Catalog:
        """Read, parse and validate a catalog file."""
        path = Path(path)
        try:
            source = json.loads(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise ConfigError(f"cannot read catalog {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigError(f"catalog {path} is not valid JSON: {e}") from e

        catalog = cls.load(source)
        logger.info(
            "Catalog loaded",
            path=str(path),
            projects=len(catalog.projects),
            resources=catalog.resource_count,
        )
        return catalog

    @property
    def projects(self) -> tuple[ProjectDefinition, ...]:
        return self._projects

    @property
    def resource_count(self) -> int:
        return sum(
            len(deployment.resources)
            for project in self._projects
            for deployment in project.deployments
        )

    def find_project(self, name: str) -> ProjectDefinition | None:
        return self._by_name.get(name)

    @staticmethod
    def find_deployment(project: ProjectDefinition, name: str) -> DeploymentDefinition | None:
        return next((d for d in project.deployments if d.name == name), None)

    @staticmethod
    def find_resource(deployment: DeploymentDefinition, name: str) -> ResourceDefinition | None:
        return next((r for r in deployment.resources if r.name == name), None)

    def get_project(self, name: str) -> ProjectDefinition:
        project = self.find_project(name)
        if project is None:
            raise ProjectNotFoundError(name)
        return project

    def resolve_deployment(
        self, project_name: str, deployment_name: str
    ) -> tuple[ProjectDefinition, DeploymentDefinition]:
        project = self.get_project(project_name)
        deployment = self.find_deployment(project, deployment_name)
        if deployment is None:
            raise DeploymentNotFoundError(deployment_name)
        return project, deployment

    def resolve(
        self, project_name: str, deployment_name: str, resource_name: str
    ) -> tuple[ProjectDefinition, DeploymentDefinition, ResourceDefinition]:
        """Resolve a full resource path.

        Raises:
            DefinitionNotFoundError: subclass naming the first level that missed.
        """
        project, deployment = self.resolve_deployment(project_name, deployment_name)
        resource = self.find_resource(deployment, resource_name)
        if resource is None:
            raise ResourceNotFoundError(resource_name)
        return project, deployment, resource

    def provider_families(self) -> set[ProviderFamily]:
        return {
            resource.type.provider
            for project in self._projects
            for deployment in project.deployments
            for resource in deployment.resources
        }
