"""GitHub API client - data layer."""

from github import Auth, Github, GithubIntegration
from loguru import logger

from src.core.exceptions import ConfigurationError


def get_installation_client(
    app_id: str | None,
    private_key: str | None,
    installation_id: int,
) -> Github:
    """Get a GitHub client authenticated as one App installation."""
    if not app_id or not private_key:
        raise ConfigurationError("GitHub App credentials not configured")

    auth = Auth.AppAuth(int(app_id), private_key.replace("\\n", "\n"))
    integration = GithubIntegration(auth=auth)
    client = integration.get_github_for_installation(int(installation_id))

    logger.info(f"GitHub App client initialized for installation {installation_id}")
    return client
