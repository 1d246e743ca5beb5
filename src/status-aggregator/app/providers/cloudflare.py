"""Cloudflare Pages status adapter."""

from __future__ import annotations

import httpx

from shared.config import CloudflareSettings
from shared.models import DeploymentStatus
from shared.observability import get_logger, provider_call

from ..errors import FetchError

logger = get_logger(__name__)

# Label for a Pages project that exists but has never been deployed
NO_DEPLOYMENT_STATUS = "no_deployment"


class CloudflareStatusProvider:
    """Fetches Pages project status from the Cloudflare v4 API."""

    def __init__(
        self,
        settings: CloudflareSettings,
        timeout: float = 30.0,
        connect_timeout: float = 5.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.settings = settings
        self.client = client or httpx.AsyncClient(
            base_url=settings.base_url.rstrip("/"),
            headers=settings.auth_headers,
            timeout=httpx.Timeout(timeout, connect=connect_timeout),
        )

    async def fetch_deployment(self, project_name: str) -> DeploymentStatus:
        """Read a Pages project's canonical deployment."""
        account_id = self.settings.account_id
        if not account_id:
            raise FetchError("CLOUDFLARE_ACCOUNT_ID not configured")

        async with provider_call(logger, "cloudflare-pages", "get_project", project=project_name):
            try:
                response = await self.client.get(
                    f"/accounts/{account_id}/pages/projects/{project_name}"
                )
            except httpx.HTTPError as e:
                raise FetchError(f"cloudflare pages request failed: {e}") from e

            if response.status_code == 404:
                return DeploymentStatus.missing()

            if response.status_code != 200:
                raise FetchError(
                    f"cloudflare pages returned HTTP {response.status_code}: {response.text[:200]}"
                )

            try:
                payload = response.json()
            except ValueError as e:
                raise FetchError(f"cloudflare pages returned invalid JSON: {e}") from e

        if not payload.get("success", False):
            raise FetchError(f"cloudflare pages error: {payload.get('errors')}")

        project = payload.get("result") or {}
        canonical = project.get("canonical_deployment")
        if not canonical:
            return DeploymentStatus(status=NO_DEPLOYMENT_STATUS)

        return DeploymentStatus(
            status=(canonical.get("latest_stage") or {}).get("status", ""),
            url=canonical.get("url", ""),
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()
