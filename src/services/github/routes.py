"""GitHub webhook routes."""

from fastapi import APIRouter, Request
from pydantic import ValidationError as PydanticValidationError

from src.core.exceptions import ValidationError
from src.core.logging import get_logger
from src.core.security import require_github_signature
from src.services.github.schemas import GitHubWebhookPayload, PingResponse, WebhookResponse
from src.services.github.service import handle_pull_request_event

logger = get_logger("github.routes")

router = APIRouter()


@router.post("/webhook/github")
async def github_webhook(request: Request):
    """Handle GitHub webhook events."""
    event = request.headers.get("X-GitHub-Event")
    signature = request.headers.get("X-Hub-Signature-256", "")
    delivery_id = request.headers.get("X-GitHub-Delivery")

    logger.info(f"Webhook received: event={event}, delivery={delivery_id}")

    body = await request.body()
    require_github_signature(body, signature)

    try:
        payload = await request.json()
    except ValueError as e:
        raise ValidationError("Webhook body is not valid JSON") from e

    if not isinstance(payload, dict):
        raise ValidationError("Webhook body must be a JSON object")

    if event == "ping":
        return PingResponse(zen=payload.get("zen", ""))

    if event != "pull_request":
        logger.info(f"Unhandled event type: {event}")
        return WebhookResponse(message=f"Event {event} not handled")

    try:
        pr_event = GitHubWebhookPayload.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError(
            "Invalid pull_request payload",
            {"errors": [err["msg"] for err in e.errors()]},
        ) from e

    return await handle_pull_request_event(pr_event)
