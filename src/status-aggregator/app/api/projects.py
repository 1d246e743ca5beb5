"""Project definition and snapshot endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, status

from shared.models import CloudPulseBaseModel, ErrorResponse, ProjectDefinition, ResourceSnapshot
from shared.observability import get_logger

from ..catalog import Catalog
from ..errors import DefinitionNotFoundError, FetchError
from ..services.snapshot import DeploymentSnapshot, SnapshotService

logger = get_logger(__name__)

router = APIRouter()


class ProjectResponse(CloudPulseBaseModel):
    """Response wrapper for a project definition."""

    project: ProjectDefinition


def get_catalog(request: Request) -> Catalog:
    return request.app.state.catalog


def get_snapshot_service(request: Request) -> SnapshotService:
    return request.app.state.snapshot_service


def _not_found(e: DefinitionNotFoundError) -> HTTPException:
    logger.info("Definition not found", definition=e.level, name=e.name)
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={"error": e.error_code, "message": str(e)},
    )


@router.get(
    "/projects/{project}",
    response_model=ProjectResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get project definition",
    description="Return the catalog definition of a project.",
)
async def get_project(request: Request, project: str):
    """Look up a project in the catalog."""
    try:
        definition = get_catalog(request).get_project(project)
    except DefinitionNotFoundError as e:
        raise _not_found(e)
    return ProjectResponse(project=definition)


@router.get(
    "/projects/{project}/deployments/{deployment}/resources/{resource}/snapshot",
    response_model=ResourceSnapshot,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Get resource snapshot",
    description="Fetch the current status of a single resource from its provider.",
)
async def get_resource_snapshot(request: Request, project: str, deployment: str, resource: str):
    """Fetch one resource once, synchronously within the request."""
    service = get_snapshot_service(request)

    try:
        return await service.get_snapshot(project, deployment, resource)
    except DefinitionNotFoundError as e:
        raise _not_found(e)
    except FetchError as e:
        logger.warning(
            "Error getting resource status",
            project=project,
            deployment=deployment,
            resource=resource,
            error=str(e),
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": e.error_code, "message": "failed to get resource status"},
        ) from e


@router.get(
    "/projects/{project}/deployments/{deployment}/snapshot",
    response_model=DeploymentSnapshot,
    responses={404: {"model": ErrorResponse}},
    summary="Get deployment snapshot",
    description="Fetch every resource of a deployment concurrently.",
)
async def get_deployment_snapshot(request: Request, project: str, deployment: str):
    """Fan out over a deployment; failed fetches are listed by name."""
    service = get_snapshot_service(request)

    try:
        return await service.get_deployment_snapshot(project, deployment)
    except DefinitionNotFoundError as e:
        raise _not_found(e)
