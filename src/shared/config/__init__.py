"""Environment-driven settings for CloudPulse services and provider credentials."""

from .settings import (
    AWSSettings,
    CloudflareSettings,
    Environment,
    LogFormat,
    LogLevel,
    Settings,
    StatusAggregatorSettings,
    get_aggregator_settings,
    get_settings,
)

__all__ = [
    # Main settings
    "Settings",
    "get_settings",
    # Enums
    "Environment",
    "LogLevel",
    "LogFormat",
    # Component settings
    "AWSSettings",
    "CloudflareSettings",
    # Service-specific settings
    "StatusAggregatorSettings",
    "get_aggregator_settings",
]
