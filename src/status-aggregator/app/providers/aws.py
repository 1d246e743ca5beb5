"""AWS status adapters (ECS, RDS, ELBv2, API Gateway v2).

Each fetch makes the describe/get calls for one resource and builds the
matching status variant. A definitive not-found from AWS becomes a
``missing()`` status; every other failure is raised as FetchError.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import aioboto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from shared.config import AWSSettings
from shared.models import (
    ClusterStatus,
    DatabaseStatus,
    GatewayStatus,
    LoadBalancerStatus,
    ServiceSummary,
)
from shared.observability import get_logger, provider_call

from ..errors import FetchError

logger = get_logger(__name__)

# describe_services accepts at most 10 services per call
ECS_DESCRIBE_SERVICES_BATCH = 10


def build_boto_config(connect_timeout: float, read_timeout: float) -> BotoConfig:
    """One attempt per call; the next scrape is the retry."""
    return BotoConfig(
        connect_timeout=connect_timeout,
        read_timeout=read_timeout,
        retries={"total_max_attempts": 1},
    )


def _error_code(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Code", "")


class AWSStatusProvider:
    """Fetches AWS resource status through a shared aioboto3 session."""

    def __init__(
        self,
        settings: AWSSettings,
        session: aioboto3.Session | None = None,
        config: BotoConfig | None = None,
    ):
        self.settings = settings
        self.session = session or aioboto3.Session(**settings.session_kwargs)
        self.config = config or build_boto_config(5.0, 30.0)

    def _get_client(self, service_name: str) -> Any:
        return self.session.client(service_name, config=self.config)

    @asynccontextmanager
    async def _call(self, service_name: str, operation: str) -> AsyncIterator[Any]:
        """Open a client, log the call and translate SDK failures to FetchError."""
        try:
            async with provider_call(logger, service_name, operation):
                async with self._get_client(service_name) as client:
                    yield client
        except (ClientError, BotoCoreError) as e:
            raise FetchError(f"{service_name} {operation} failed: {e}") from e

    async def fetch_cluster(self, identifier: str) -> ClusterStatus:
        """Describe an ECS cluster and its services."""
        async with self._call("ecs", "describe_clusters") as ecs:
            response = await ecs.describe_clusters(clusters=[identifier])
            clusters = response.get("clusters", [])

            if not clusters:
                failures = response.get("failures", [])
                if any(failure.get("reason") == "MISSING" for failure in failures):
                    return ClusterStatus.missing()
                raise FetchError(f"no cluster found for {identifier}")

            cluster = clusters[0]

            service_arns: list[str] = []
            paginator = ecs.get_paginator("list_services")
            async for page in paginator.paginate(cluster=identifier):
                service_arns.extend(page.get("serviceArns", []))

            services: list[ServiceSummary] = []
            for offset in range(0, len(service_arns), ECS_DESCRIBE_SERVICES_BATCH):
                batch = service_arns[offset : offset + ECS_DESCRIBE_SERVICES_BATCH]
                described = await ecs.describe_services(cluster=identifier, services=batch)
                for service in described.get("services", []):
                    services.append(
                        ServiceSummary(
                            name=service.get("serviceName", ""),
                            status=service.get("status", ""),
                            created_at=service.get("createdAt"),
                            desired_count=service.get("desiredCount", 0),
                            pending_count=service.get("pendingCount", 0),
                            running_count=service.get("runningCount", 0),
                        )
                    )

        return ClusterStatus(
            status=cluster.get("status", ""),
            tasks_pending=cluster.get("pendingTasksCount", 0),
            tasks_running=cluster.get("runningTasksCount", 0),
            services=services,
        )

    async def fetch_database(self, identifier: str) -> DatabaseStatus:
        """Describe an RDS instance."""
        async with self._call("rds", "describe_db_instances") as rds:
            try:
                response = await rds.describe_db_instances(DBInstanceIdentifier=identifier)
            except ClientError as e:
                if _error_code(e) == "DBInstanceNotFound":
                    return DatabaseStatus.missing()
                raise

        instances = response.get("DBInstances", [])
        if not instances:
            raise FetchError(f"no db instance found for {identifier}")

        instance = instances[0]
        return DatabaseStatus(
            status=instance.get("DBInstanceStatus", ""),
            instance_class=instance.get("DBInstanceClass", ""),
        )

    async def fetch_load_balancer(self, identifier: str) -> LoadBalancerStatus:
        """Describe an application/network load balancer by name."""
        async with self._call("elbv2", "describe_load_balancers") as elb:
            try:
                response = await elb.describe_load_balancers(Names=[identifier])
            except ClientError as e:
                if _error_code(e) == "LoadBalancerNotFound":
                    return LoadBalancerStatus.missing()
                raise

        load_balancers = response.get("LoadBalancers", [])
        if not load_balancers:
            raise FetchError(f"no load balancer found for {identifier}")

        load_balancer = load_balancers[0]
        return LoadBalancerStatus(
            status=load_balancer.get("State", {}).get("Code", ""),
            dns_name=load_balancer.get("DNSName", ""),
        )

    async def fetch_gateway(self, identifier: str) -> GatewayStatus:
        """Find an HTTP/WebSocket API by name, then read its endpoint."""
        async with self._call("apigatewayv2", "get_apis") as apigw:
            api_id = None
            paginator = apigw.get_paginator("get_apis")
            async for page in paginator.paginate():
                for api in page.get("Items", []):
                    if api.get("Name") == identifier:
                        api_id = api.get("ApiId")
                        break
                if api_id:
                    break

            if not api_id:
                return GatewayStatus.missing()

            try:
                api = await apigw.get_api(ApiId=api_id)
            except ClientError as e:
                # Deleted between the listing and the lookup
                if _error_code(e) == "NotFoundException":
                    return GatewayStatus.missing()
                raise

        return GatewayStatus(
            endpoint=api.get("ApiEndpoint", ""),
            protocol=api.get("ProtocolType", ""),
        )

    async def close(self) -> None:
        # Clients are opened per call; the session holds no connections
        pass
