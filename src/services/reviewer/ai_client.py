"""AI review client: prompt, call the configured backend, parse, retry."""

import asyncio
import json
import random
import re
from typing import Awaitable, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from src.core.llm import ChatCompletion, is_rate_limit_error
from src.core.logging import get_logger
from src.core.prompts import SYSTEM_PROMPT, render_code_review_prompt
from src.services.reviewer.schemas import ReviewComment, Severity

logger = get_logger("reviewer.ai_client")

MAX_RETRIES = 3

UNKNOWN_SEVERITY = "unknown"

_CODE_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)


class AIReviewEntry(BaseModel):
    """One entry of the ``reviews`` array returned by the model."""

    model_config = ConfigDict(populate_by_name=True)

    start_line: Optional[int] = Field(default=None, alias="startLine")
    end_line: Optional[int] = Field(default=None, alias="endLine")
    severity: str = Severity.MINOR.value
    comment: str = Field(min_length=1)

    @field_validator("severity", mode="before")
    @classmethod
    def _coerce_severity(cls, value):
        # Unrecognized severities are kept and ranked last
        if isinstance(value, str) and value.strip():
            return value
        return UNKNOWN_SEVERITY


def backoff_delay(attempt: int, jitter: float) -> float:
    """Seconds to wait before retry ``attempt + 1``: linear with jitter."""
    return attempt * 2.0 + jitter


def strip_code_fences(raw: str) -> str:
    return _CODE_FENCE.sub("", raw).strip()


def parse_review_response(raw: Optional[str], file_name: str) -> list[ReviewComment]:
    """Parse the model's ``{"reviews": [...]}`` answer.

    Malformed output never raises: it is logged and treated as no findings.
    """
    if not raw:
        return []

    try:
        payload = json.loads(strip_code_fences(raw))
    except json.JSONDecodeError as e:
        logger.warning(f"[AI] Failed to parse review JSON for {file_name}: {e}")
        logger.debug(f"[AI] Raw content: {raw[:2000]}")
        return []

    if not isinstance(payload, dict):
        logger.warning(f"[AI] Review response for {file_name} is not a JSON object")
        return []

    entries = payload.get("reviews") or []
    if not isinstance(entries, list):
        logger.warning(f"[AI] 'reviews' for {file_name} is not a list")
        return []

    comments = []
    for entry in entries:
        if not isinstance(entry, dict):
            logger.warning(f"[AI] Skipping non-object review entry for {file_name}")
            continue
        try:
            parsed = AIReviewEntry.model_validate(entry)
        except PydanticValidationError as e:
            logger.warning(f"[AI] Skipping invalid review entry for {file_name}: {e.errors()[:1]}")
            continue
        comments.append(
            ReviewComment(
                file_path=file_name,
                start_line=parsed.start_line,
                end_line=parsed.end_line,
                severity=parsed.severity.strip().lower(),
                text=parsed.comment,
            )
        )
    return comments


class AIReviewClient:
    """Reviews one file at a time through a single chat-completion backend."""

    def __init__(
        self,
        complete: ChatCompletion,
        max_retries: int = MAX_RETRIES,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        jitter: Callable[[], float] = lambda: random.uniform(0.0, 1.0),
    ) -> None:
        self._complete = complete
        self._max_retries = max_retries
        self._sleep = sleep
        self._jitter = jitter

    async def review(
        self,
        file_name: str,
        content: str,
        guidelines: Optional[str] = None,
    ) -> list[ReviewComment]:
        """Review a file, retrying rate-limited calls with linear backoff.

        Raises:
            Exception: the backend error, immediately if it is not a rate
                limit, or once the retry budget is spent
        """
        prompt = render_code_review_prompt(file_name, content, guidelines)

        attempt = 1
        while True:
            try:
                raw = await self._complete(SYSTEM_PROMPT, prompt)
            except Exception as e:
                if not is_rate_limit_error(e) or attempt > self._max_retries:
                    raise
                delay = backoff_delay(attempt, self._jitter())
                logger.warning(
                    f"[AI] Rate limit hit for {file_name}. "
                    f"Retrying in {delay:.1f}s (attempt {attempt})"
                )
                await self._sleep(delay)
                attempt += 1
                continue

            return parse_review_response(raw, file_name)
