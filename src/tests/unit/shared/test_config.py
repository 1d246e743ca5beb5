"""Unit tests for configuration settings."""

import pytest

from shared.config import (
    AWSSettings,
    CloudflareSettings,
    LogFormat,
    StatusAggregatorSettings,
)

AWS_VARS = ["AWS_REGION", "AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY", "AWS_SESSION_TOKEN"]
CLOUDFLARE_VARS = [
    "CLOUDFLARE_EMAIL",
    "CLOUDFLARE_API_KEY",
    "CLOUDFLARE_API_TOKEN",
    "CLOUDFLARE_ACCOUNT_ID",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove provider credentials inherited from the host environment."""
    for name in AWS_VARS + CLOUDFLARE_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestAWSSettings:
    """Test AWS credential handling."""

    def test_reads_standard_variables(self, clean_env) -> None:
        clean_env.setenv("AWS_REGION", "eu-west-1")
        clean_env.setenv("AWS_ACCESS_KEY_ID", "AKIATEST")
        clean_env.setenv("AWS_SECRET_ACCESS_KEY", "secret")

        settings = AWSSettings()

        assert settings.region == "eu-west-1"
        assert settings.session_kwargs == {
            "region_name": "eu-west-1",
            "aws_access_key_id": "AKIATEST",
            "aws_secret_access_key": "secret",
        }

    def test_session_kwargs_skip_unset(self, clean_env) -> None:
        assert AWSSettings(region="us-east-1").session_kwargs == {"region_name": "us-east-1"}


class TestCloudflareSettings:
    """Test Cloudflare authentication headers."""

    def test_token_preferred(self, clean_env) -> None:
        settings = CloudflareSettings(api_token="tok", email="ops@example.com", api_key="key")
        assert settings.auth_headers == {"Authorization": "Bearer tok"}

    def test_global_key_headers(self, clean_env) -> None:
        settings = CloudflareSettings(email="ops@example.com", api_key="key")
        assert settings.auth_headers == {"X-Auth-Email": "ops@example.com", "X-Auth-Key": "key"}

    def test_no_credentials(self, clean_env) -> None:
        assert CloudflareSettings().auth_headers == {}

    def test_default_base_url(self, clean_env) -> None:
        assert CloudflareSettings().base_url == "https://api.cloudflare.com/client/v4"


class TestStatusAggregatorSettings:
    """Test service settings."""

    def test_defaults(self, clean_env) -> None:
        clean_env.delenv("CATALOG_PATH", raising=False)
        clean_env.delenv("FETCH_TIMEOUT_SECONDS", raising=False)

        settings = StatusAggregatorSettings()

        assert settings.catalog_path == "projects.json"
        assert settings.fetch_timeout_seconds == 10.0
        assert settings.check_credentials is True
        assert settings.is_development
        assert settings.log_format is LogFormat.TEXT

    def test_environment_overrides(self, clean_env) -> None:
        clean_env.setenv("CATALOG_PATH", "/etc/cloudpulse/projects.json")
        clean_env.setenv("FETCH_TIMEOUT_SECONDS", "2.5")
        clean_env.setenv("AWS_REGION", "us-west-2")

        settings = StatusAggregatorSettings()

        assert settings.catalog_path == "/etc/cloudpulse/projects.json"
        assert settings.fetch_timeout_seconds == 2.5
        assert settings.aws.region == "us-west-2"

    def test_timeout_must_be_positive(self, clean_env) -> None:
        with pytest.raises(ValueError):
            StatusAggregatorSettings(fetch_timeout_seconds=0)

    def test_workers_at_least_one(self, clean_env) -> None:
        assert StatusAggregatorSettings(workers=0).workers == 1
