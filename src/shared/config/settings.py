"""Configuration management with Pydantic Settings.

Environment variables are loaded from:
1. Environment variables (highest priority)
2. .env file (development)
3. Defaults (lowest priority)

Provider credentials keep the variable names the provider SDKs read on
their own (AWS_ACCESS_KEY_ID, CLOUDFLARE_API_KEY, ...), so the same
environment works for the service and for the SDK default chains.
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Deployment environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    """Logging level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Logging format."""

    JSON = "json"
    TEXT = "text"


class AWSSettings(BaseSettings):
    """AWS credentials and region for the ECS, RDS, ELB and API Gateway adapters."""

    model_config = SettingsConfigDict(env_prefix="AWS_")

    region: str | None = Field(default=None, description="AWS region")
    access_key_id: str | None = Field(default=None, description="AWS access key ID")
    secret_access_key: str | None = Field(default=None, description="AWS secret access key")
    session_token: str | None = Field(default=None, description="AWS session token")

    @property
    def session_kwargs(self) -> dict[str, str]:
        """Keyword arguments for an aioboto3 session, omitting unset values."""
        values = {
            "region_name": self.region,
            "aws_access_key_id": self.access_key_id,
            "aws_secret_access_key": self.secret_access_key,
            "aws_session_token": self.session_token,
        }
        return {key: value for key, value in values.items() if value}


class CloudflareSettings(BaseSettings):
    """Cloudflare API configuration for the Pages adapter."""

    model_config = SettingsConfigDict(env_prefix="CLOUDFLARE_")

    email: str | None = Field(default=None, description="Account email (global API key auth)")
    api_key: str | None = Field(default=None, description="Global API key")
    api_token: str | None = Field(default=None, description="Scoped API token")
    account_id: str | None = Field(default=None, description="Account ID owning the Pages projects")
    base_url: str = Field(
        default="https://api.cloudflare.com/client/v4",
        description="Cloudflare API base URL",
    )

    @property
    def auth_headers(self) -> dict[str, str]:
        """Build authentication headers, preferring a scoped token."""
        if self.api_token:
            return {"Authorization": f"Bearer {self.api_token}"}
        if self.email and self.api_key:
            return {"X-Auth-Email": self.email, "X-Auth-Key": self.api_key}
        return {}


class Settings(BaseSettings):
    """Main application settings.

    All settings can be overridden via environment variables.
    For nested settings, use the appropriate prefix (e.g., AWS_REGION).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="cloudpulse", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        alias="ENV",
        description="Deployment environment",
    )

    # Logging configuration
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    log_format: LogFormat = Field(default=LogFormat.JSON, description="Logging format")

    # Server configuration
    host: str = Field(default="0.0.0.0", description="Server bind host")
    port: int = Field(default=8080, description="Server bind port")
    workers: int = Field(default=1, description="Number of worker processes")
    debug: bool = Field(default=False, description="Enable debug mode")

    # Nested settings
    aws: AWSSettings = Field(default_factory=AWSSettings)
    cloudflare: CloudflareSettings = Field(default_factory=CloudflareSettings)

    @field_validator("workers")
    @classmethod
    def validate_workers(cls, v: int) -> int:
        """Ensure workers is at least 1."""
        return max(1, v)

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == Environment.PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses LRU cache to avoid re-parsing environment variables.
    """
    return Settings()


class StatusAggregatorSettings(Settings):
    """Settings specific to the Status Aggregator service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    catalog_path: str = Field(
        default="projects.json",
        description="Path to the project/deployment/resource catalog document",
    )
    fetch_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Per-resource provider call timeout; a timeout counts as a failed fetch",
    )
    provider_connect_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Connect timeout for provider HTTP clients",
    )
    check_credentials: bool = Field(
        default=True,
        description="Refuse to start when provider credential variables are missing",
    )


@lru_cache
def get_aggregator_settings() -> StatusAggregatorSettings:
    """Get cached Status Aggregator settings."""
    return StatusAggregatorSettings()
