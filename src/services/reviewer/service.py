"""Reviewer service - orchestration layer."""

import asyncio
from typing import Awaitable, Callable, Optional

from src.config import settings
from src.core.llm import build_chat_completion
from src.core.logging import get_logger
from src.services.reviewer.ai_client import AIReviewClient
from src.services.reviewer.graph import create_review_graph
from src.services.reviewer.host import CodeHost
from src.services.reviewer.schemas import ReviewConfig, ReviewResult
from src.services.reviewer.state import initial_state

logger = get_logger("reviewer.service")

_ai_client: Optional[AIReviewClient] = None


def get_ai_review_client() -> AIReviewClient:
    """Get the process-wide AI review client for the configured provider."""
    global _ai_client

    if _ai_client:
        return _ai_client

    complete = build_chat_completion(
        provider_name=settings.ai_provider,
        model=settings.ai_model,
        api_key=settings.ai_api_key,
        base_url=settings.ai_base_url,
    )
    _ai_client = AIReviewClient(complete)
    return _ai_client


async def review_pull_request(
    host: CodeHost,
    config: Optional[ReviewConfig] = None,
    ai_client: Optional[AIReviewClient] = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> ReviewResult:
    """Run the full review pipeline for one pull request.

    Errors from one file never abort the run; errors before any file is
    reviewed (or while setting the final status) propagate to the caller.
    """
    pr_id = host.get_pr_identifier()
    logger.info(f"[REVIEW] Starting review for {pr_id}")

    graph = create_review_graph(
        host=host,
        get_ai_client=lambda: ai_client or get_ai_review_client(),
        config=config or ReviewConfig.from_settings(settings),
        sleep=sleep,
    )
    final_state = await graph.ainvoke(initial_state(pr_id))

    result = ReviewResult(
        pr=pr_id,
        stage=final_state["stage"],
        files_reviewed=final_state["files_reviewed"],
        files_failed=final_state["files_failed"],
        comments_posted=final_state["comments_posted"],
        status=final_state["status"],
    )
    logger.info(f"[REVIEW] Finished {pr_id}: {result.model_dump(mode='json')}")
    return result
