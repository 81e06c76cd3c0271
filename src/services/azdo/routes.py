"""Azure DevOps service-hook routes."""

from fastapi import APIRouter, Request
from pydantic import ValidationError as PydanticValidationError

from src.core.exceptions import ValidationError
from src.core.logging import get_logger
from src.services.azdo.schemas import AzDoWebhookPayload
from src.services.azdo.service import handle_pull_request_event

logger = get_logger("azdo.routes")

router = APIRouter()


@router.post("/webhook/azdo")
async def azdo_webhook(request: Request):
    """Handle Azure DevOps pull request service hooks."""
    try:
        payload = await request.json()
    except ValueError as e:
        raise ValidationError("Webhook body is not valid JSON") from e

    if not isinstance(payload, dict):
        raise ValidationError("Webhook body must be a JSON object")

    logger.info(f"Service hook received: event={payload.get('eventType')}, id={payload.get('id')}")

    try:
        pr_event = AzDoWebhookPayload.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError(
            "Invalid pull request payload",
            {"errors": [err["msg"] for err in e.errors()]},
        ) from e

    return await handle_pull_request_event(pr_event)
