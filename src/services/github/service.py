"""GitHub service - business logic layer."""

from src.config import settings
from src.core.exceptions import ReviewFailedError
from src.core.logging import get_logger
from src.services.github.client import get_installation_client
from src.services.github.host import GitHubCodeHost
from src.services.github.schemas import GitHubWebhookPayload, WebhookResponse
from src.services.reviewer.service import review_pull_request

logger = get_logger("github.service")


def build_code_host(payload: GitHubWebhookPayload) -> GitHubCodeHost:
    """Create the code host for the PR a webhook refers to."""
    client = get_installation_client(
        app_id=settings.github_app_id,
        private_key=settings.github_private_key,
        installation_id=payload.installation.id,
    )
    return GitHubCodeHost(
        client=client,
        owner=payload.repository.owner.login,
        repo=payload.repository.name,
        pr_number=payload.pull_request.number,
        reviewer_name=settings.github_reviewer_name,
        action=payload.action,
        head_sha=payload.pull_request.head.sha,
    )


async def handle_pull_request_event(payload: GitHubWebhookPayload) -> WebhookResponse:
    """Review the PR of a pull_request webhook event."""
    pr_ref = (
        f"GitHub:{payload.repository.owner.login}/{payload.repository.name}"
        f"#{payload.pull_request.number}"
    )
    logger.info(f"PR event: {payload.action} on {pr_ref}")

    try:
        host = build_code_host(payload)
        result = await review_pull_request(host)
    except Exception as e:
        logger.error(f"Review failed for {pr_ref}: {e}")
        raise ReviewFailedError(pr_ref, str(e)) from e

    return WebhookResponse(
        message="Review completed" if result.stage == "done" else "Review skipped",
        pr=result.pr,
        action=payload.action,
        stage=result.stage,
        status=result.status.value if result.status else None,
        comments_posted=result.comments_posted,
    )
