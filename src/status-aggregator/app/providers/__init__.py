"""Provider adapters and dispatcher for the Status Aggregator."""

from .aws import AWSStatusProvider, build_boto_config
from .cloudflare import CloudflareStatusProvider
from .dispatcher import ProviderDispatcher
from .factory import create_dispatcher, missing_credentials

__all__ = [
    "AWSStatusProvider",
    "CloudflareStatusProvider",
    "ProviderDispatcher",
    "build_boto_config",
    "create_dispatcher",
    "missing_credentials",
]
