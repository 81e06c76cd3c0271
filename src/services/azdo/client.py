"""Azure DevOps REST client - data layer."""

import httpx

from src.core.exceptions import ConfigurationError
from src.core.logging import get_logger

logger = get_logger("azdo.client")

API_VERSION = "7.1"


async def _log_request(request: httpx.Request) -> None:
    logger.debug(f"[AzDo API Request] {request.method} {request.url}")


async def _log_response(response: httpx.Response) -> None:
    if response.is_error:
        logger.error(
            f"[AzDo API Error] Status: {response.status_code} "
            f"Resource: {response.request.method} {response.request.url}"
        )


def create_azdo_client(org_url: str | None, pat: str | None, timeout: float = 30.0) -> httpx.AsyncClient:
    """Create an HTTP client for one Azure DevOps organization (PAT basic auth)."""
    if not org_url or not pat:
        raise ConfigurationError("Azure DevOps organization URL or PAT not configured")

    return httpx.AsyncClient(
        base_url=org_url.rstrip("/"),
        auth=("", pat),
        timeout=timeout,
        headers={"Accept": "application/json"},
        event_hooks={"request": [_log_request], "response": [_log_response]},
    )
