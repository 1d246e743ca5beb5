"""Provider dispatcher.

Routes a resource definition to the adapter for its kind. Holds nothing but
references to the adapters, which are safe to share across concurrent tasks.
"""

from __future__ import annotations

from shared.models import ResourceDefinition, ResourceKind, ResourceStatus
from shared.observability import get_logger

from ..errors import FetchError
from .aws import AWSStatusProvider
from .cloudflare import CloudflareStatusProvider

logger = get_logger(__name__)


class ProviderDispatcher:
    """Single entry point from the aggregation engine to the providers."""

    def __init__(
        self,
        aws: AWSStatusProvider | None = None,
        cloudflare: CloudflareStatusProvider | None = None,
    ):
        self.aws = aws
        self.cloudflare = cloudflare

    async def dispatch(self, resource: ResourceDefinition) -> ResourceStatus:
        """Fetch the current status of one resource.

        Raises:
            FetchError: the provider call failed, the kind is unknown, or the
                provider for the kind is not configured.
        """
        try:
            return await self._route(resource)
        except FetchError as e:
            raise e.for_resource(resource.name, resource.type)
        except Exception as e:
            logger.error(
                "Unexpected provider failure",
                resource=resource.name,
                kind=str(resource.type),
                error=str(e),
            )
            raise FetchError(str(e), resource.name, resource.type) from e

    async def _route(self, resource: ResourceDefinition) -> ResourceStatus:
        identifier = resource.identifier

        match resource.type:
            case ResourceKind.CLUSTER:
                return await self._aws().fetch_cluster(identifier)
            case ResourceKind.RELATIONAL_DATABASE:
                return await self._aws().fetch_database(identifier)
            case ResourceKind.LOAD_BALANCER:
                return await self._aws().fetch_load_balancer(identifier)
            case ResourceKind.API_GATEWAY:
                return await self._aws().fetch_gateway(identifier)
            case ResourceKind.STATIC_SITE_DEPLOYMENT:
                return await self._cloudflare().fetch_deployment(identifier)
            case _:
                raise FetchError(f"invalid resource type encountered: {resource.type}")

    def _aws(self) -> AWSStatusProvider:
        if self.aws is None:
            raise FetchError("aws provider is not configured")
        return self.aws

    def _cloudflare(self) -> CloudflareStatusProvider:
        if self.cloudflare is None:
            raise FetchError("cloudflare provider is not configured")
        return self.cloudflare

    async def close(self) -> None:
        for provider in (self.aws, self.cloudflare):
            if provider is not None:
                await provider.close()
