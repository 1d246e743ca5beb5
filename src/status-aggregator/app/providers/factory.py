"""Provider construction from settings.

Only the providers the catalog actually uses are built, and their credentials
are checked up front so a misconfigured deployment fails at startup rather
than on the first scrape.
"""

from __future__ import annotations

from shared.config import StatusAggregatorSettings
from shared.models import ProviderFamily

from .aws import AWSStatusProvider, build_boto_config
from .cloudflare import CloudflareStatusProvider
from .dispatcher import ProviderDispatcher


def missing_credentials(
    settings: StatusAggregatorSettings,
    families: set[ProviderFamily],
) -> list[str]:
    """Names of the credential variables that are required but unset."""
    missing: list[str] = []

    if ProviderFamily.AWS in families:
        aws = settings.aws
        required = {
            "AWS_ACCESS_KEY_ID": aws.access_key_id,
            "AWS_SECRET_ACCESS_KEY": aws.secret_access_key,
            "AWS_REGION": aws.region,
        }
        missing.extend(name for name, value in required.items() if not value)

    if ProviderFamily.CLOUDFLARE in families:
        cloudflare = settings.cloudflare
        if not cloudflare.account_id:
            missing.append("CLOUDFLARE_ACCOUNT_ID")
        if not cloudflare.api_token:
            # Global API key auth needs both values
            if not cloudflare.email:
                missing.append("CLOUDFLARE_EMAIL")
            if not cloudflare.api_key:
                missing.append("CLOUDFLARE_API_KEY")

    return missing


def create_dispatcher(
    settings: StatusAggregatorSettings,
    families: set[ProviderFamily],
) -> ProviderDispatcher:
    """Build a dispatcher with one adapter per provider family in use."""
    aws = None
    cloudflare = None

    if ProviderFamily.AWS in families:
        aws = AWSStatusProvider(
            settings.aws,
            config=build_boto_config(
                connect_timeout=settings.provider_connect_timeout_seconds,
                read_timeout=settings.fetch_timeout_seconds,
            ),
        )

    if ProviderFamily.CLOUDFLARE in families:
        cloudflare = CloudflareStatusProvider(
            settings.cloudflare,
            timeout=settings.fetch_timeout_seconds,
            connect_timeout=settings.provider_connect_timeout_seconds,
        )

    return ProviderDispatcher(aws=aws, cloudflare=cloudflare)
