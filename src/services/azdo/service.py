"""Azure DevOps service - business logic layer."""

from src.config import settings
from src.core.exceptions import ReviewFailedError
from src.core.logging import get_logger
from src.services.azdo.client import create_azdo_client
from src.services.azdo.host import AzDoCodeHost
from src.services.azdo.schemas import AzDoWebhookPayload
from src.services.github.schemas import WebhookResponse
from src.services.reviewer.service import review_pull_request

logger = get_logger("azdo.service")


async def handle_pull_request_event(payload: AzDoWebhookPayload) -> WebhookResponse:
    """Review the PR of an Azure DevOps pull request service-hook event."""
    resource = payload.resource
    pr_ref = f"AzDo:{resource.repository.project.name}/{resource.pull_request_id}"
    logger.info(f"PR event: {payload.event_type} on {pr_ref}")

    try:
        async with create_azdo_client(settings.azdo_org_url, settings.azdo_pat) as client:
            host = AzDoCodeHost(
                client=client,
                project=resource.repository.project.name,
                repo_id=resource.repository.id,
                pr_id=resource.pull_request_id,
                reviewer_name=settings.azdo_reviewer_name,
                event_type=payload.event_type,
            )
            result = await review_pull_request(host)
    except Exception as e:
        logger.error(f"Review failed for {pr_ref}: {e}")
        raise ReviewFailedError(pr_ref, str(e)) from e

    return WebhookResponse(
        message="Review completed" if result.stage == "done" else "Review skipped",
        pr=result.pr,
        action=payload.event_type,
        stage=result.stage,
        status=result.status.value if result.status else None,
        comments_posted=result.comments_posted,
    )
