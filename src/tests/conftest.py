"""Pytest configuration and shared fixtures."""

import os
from typing import Any

import pytest

# Set test environment before importing settings
os.environ["ENV"] = "development"
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ["LOG_FORMAT"] = "text"


@pytest.fixture
def sample_catalog_data() -> list[dict[str, Any]]:
    """Sample catalog document for testing."""
    return [
        {
            "name": "web",
            "deployments": [
                {
                    "name": "prod",
                    "resources": [
                        {"name": "api", "identifier": "web-prod-api", "type": "aws-apigw"},
                        {"name": "db", "identifier": "web-prod-db", "type": "aws-rds"},
                    ],
                },
                {
                    "name": "staging",
                    "resources": [
                        {"name": "cluster", "identifier": "web-staging", "type": "aws-ecs"},
                        {"name": "site", "identifier": "web-staging-site", "type": "cloudflare-pages"},
                    ],
                },
            ],
        }
    ]


@pytest.fixture
def mock_settings() -> dict[str, Any]:
    """Mock settings for testing."""
    return {
        "app_name": "cloudpulse-test",
        "environment": "development",
        "log_level": "DEBUG",
        "log_format": "text",
        "aws": {
            "region": "us-east-1",
            "access_key_id": "AKIATEST",
            "secret_access_key": "secret",
        },
        "cloudflare": {
            "email": "ops@example.com",
            "api_key": "cf-key",
            "account_id": "acc-123",
        },
    }


# =============================================================================
# Markers
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line(
        "markers", "integration: Integration tests (require external services)"
    )
    config.addinivalue_line("markers", "slow: Slow tests")
