"""Unit tests for Pydantic models."""

from datetime import datetime, timezone

import pytest
from pydantic import TypeAdapter, ValidationError

from shared.models import (
    MISSING_LABEL,
    ClusterStatus,
    DatabaseStatus,
    DeploymentDefinition,
    DeploymentStatus,
    GatewayStatus,
    LoadBalancerStatus,
    ProjectDefinition,
    ProviderFamily,
    ResourceDefinition,
    ResourceKind,
    ResourceSnapshot,
    ResourceStatus,
    ServiceSummary,
)
from shared.models.status import _StatusBase


class TestCatalogModels:
    """Test catalog definition models."""

    def test_resource_definition_parses_kind_tag(self) -> None:
        resource = ResourceDefinition(name="db", identifier="prod-db", type="aws-rds")
        assert resource.type is ResourceKind.RELATIONAL_DATABASE

    def test_resource_definition_rejects_unknown_kind(self) -> None:
        with pytest.raises(ValidationError):
            ResourceDefinition(name="db", identifier="prod-db", type="gcp-sql")

    def test_resource_definition_is_immutable(self) -> None:
        resource = ResourceDefinition(name="db", identifier="prod-db", type="aws-rds")
        with pytest.raises(ValidationError):
            resource.name = "other"

    def test_duplicate_resource_names_rejected(self) -> None:
        with pytest.raises(ValidationError, match="duplicate resource name 'db'"):
            DeploymentDefinition(
                name="prod",
                resources=[
                    {"name": "db", "identifier": "a", "type": "aws-rds"},
                    {"name": "db", "identifier": "b", "type": "aws-rds"},
                ],
            )

    def test_duplicate_deployment_names_rejected(self) -> None:
        with pytest.raises(ValidationError, match="duplicate deployment name 'prod'"):
            ProjectDefinition(
                name="web",
                deployments=[{"name": "prod"}, {"name": "prod"}],
            )

    def test_project_serializes_with_type_tags(self, sample_catalog_data) -> None:
        project = ProjectDefinition.model_validate(sample_catalog_data[0])
        dumped = project.model_dump(mode="json")

        assert dumped["deployments"][0]["resources"][0] == {
            "name": "api",
            "identifier": "web-prod-api",
            "type": "aws-apigw",
        }

    @pytest.mark.parametrize(
        ("kind", "family"),
        [
            (ResourceKind.CLUSTER, ProviderFamily.AWS),
            (ResourceKind.RELATIONAL_DATABASE, ProviderFamily.AWS),
            (ResourceKind.LOAD_BALANCER, ProviderFamily.AWS),
            (ResourceKind.API_GATEWAY, ProviderFamily.AWS),
            (ResourceKind.STATIC_SITE_DEPLOYMENT, ProviderFamily.CLOUDFLARE),
        ],
    )
    def test_kind_provider_family(self, kind, family) -> None:
        assert kind.provider is family

    def test_kind_is_valid(self) -> None:
        assert ResourceKind.is_valid("aws-ecs")
        assert not ResourceKind.is_valid("aws-s3")
        assert not ResourceKind.is_valid(None)


class TestStatusModels:
    """Test per-kind health rules."""

    @pytest.mark.parametrize(
        ("status", "healthy"),
        [
            (ClusterStatus(status="ACTIVE"), True),
            (ClusterStatus(status="INACTIVE"), False),
            (ClusterStatus(status="active"), False),
            (DatabaseStatus(status="available", instance_class="db.t3.micro"), True),
            (DatabaseStatus(status="stopped"), False),
            (LoadBalancerStatus(status="active", dns_name="lb.example.com"), True),
            (LoadBalancerStatus(status="provisioning"), False),
            (GatewayStatus(endpoint="https://abc.execute-api", protocol="HTTP"), True),
            (DeploymentStatus(status="success", url="https://site.pages.dev"), True),
            (DeploymentStatus(status="failure"), False),
        ],
    )
    def test_health_rules(self, status, healthy) -> None:
        assert status.exists() is True
        assert status.is_healthy() is healthy

    def test_status_labels(self) -> None:
        assert ClusterStatus(status="ACTIVE").status_label() == "ACTIVE"
        assert DatabaseStatus(status="backing-up").status_label() == "backing-up"
        assert LoadBalancerStatus(status="failed").status_label() == "failed"
        assert GatewayStatus().status_label() == "active"
        assert DeploymentStatus(status="success").status_label() == "success"

    @pytest.mark.parametrize(
        "variant",
        [ClusterStatus, DatabaseStatus, LoadBalancerStatus, GatewayStatus, DeploymentStatus],
    )
    def test_missing_status(self, variant) -> None:
        status = variant.missing()

        assert status.exists() is False
        assert status.is_healthy() is False
        assert status.status_label() == MISSING_LABEL

    def test_base_status_cannot_be_instantiated(self) -> None:
        with pytest.raises(TypeError, match="abstract"):
            _StatusBase.missing()

    def test_status_serializes_exists_flag_and_kind(self) -> None:
        dumped = DatabaseStatus(status="available", instance_class="db.m5.large").model_dump(
            by_alias=True
        )

        assert dumped == {
            "exists": True,
            "kind": "aws-rds",
            "status": "available",
            "instance_class": "db.m5.large",
        }

    def test_tagged_union_parses_by_kind(self) -> None:
        adapter = TypeAdapter(ResourceStatus)

        status = adapter.validate_python({"kind": "aws-elb", "exists": True, "status": "active"})

        assert isinstance(status, LoadBalancerStatus)
        assert status.is_healthy()

    def test_cluster_services(self) -> None:
        created = datetime(2024, 5, 1, tzinfo=timezone.utc)
        status = ClusterStatus(
            status="ACTIVE",
            tasks_running=3,
            services=[ServiceSummary(name="web", status="ACTIVE", created_at=created, running_count=3)],
        )

        assert status.services[0].running_count == 3
        assert status.model_dump(mode="json")["services"][0]["created_at"].startswith("2024-05-01")


class TestResourceSnapshot:
    """Test snapshot derivation."""

    def test_capture_derives_flags(self) -> None:
        definition = ResourceDefinition(name="db", identifier="prod-db", type="aws-rds")

        snapshot = ResourceSnapshot.capture(definition, DatabaseStatus(status="available"))

        assert snapshot.healthy is True
        assert snapshot.exists is True
        assert snapshot.definition == definition

    def test_capture_missing(self) -> None:
        definition = ResourceDefinition(name="lb", identifier="prod-lb", type="aws-elb")

        snapshot = ResourceSnapshot.capture(definition, LoadBalancerStatus.missing())

        assert snapshot.healthy is False
        assert snapshot.exists is False
        assert snapshot.model_dump(mode="json", by_alias=True)["status"]["exists"] is False
