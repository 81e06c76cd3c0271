"""
Shared fixtures for reviewer tests.

Provides an in-memory code host, a scripted chat completion and a sleep
recorder so no test waits in real time.
"""

from typing import Optional

import pytest

from src.services.reviewer.ai_client import AIReviewClient
from src.services.reviewer.host import CodeHost
from src.services.reviewer.schemas import FileChange, ReviewConfig, ReviewStatus


class RateLimitedError(Exception):
    """Mimics an SDK error carrying an HTTP 429."""

    status_code = 429


class FakeCodeHost(CodeHost):
    """Code host backed by dicts; records every side effect."""

    def __init__(
        self,
        files: Optional[list[FileChange]] = None,
        contents: Optional[dict[str, str]] = None,
        valid: bool = True,
        eligible: bool = True,
        lock_error: Optional[Exception] = None,
        failing_posts: int = 0,
    ) -> None:
        self.files = files or []
        self.contents = contents or {}
        self.valid = valid
        self.eligible = eligible
        self.lock_error = lock_error
        self.failing_posts = failing_posts
        self.calls: list[str] = []
        self.fetched: list[str] = []
        self.posted: list[tuple] = []
        self.final_status: Optional[ReviewStatus] = None

    async def validate_webhook(self) -> bool:
        self.calls.append("validate_webhook")
        return self.valid

    async def should_process_pr(self) -> bool:
        self.calls.append("should_process_pr")
        return self.eligible

    async def lock_pr(self) -> None:
        self.calls.append("lock_pr")
        if self.lock_error:
            raise self.lock_error

    async def get_changed_files(self) -> list[FileChange]:
        self.calls.append("get_changed_files")
        return list(self.files)

    async def get_file_content(self, path: str, commit_id: str) -> str:
        self.fetched.append(path)
        if isinstance(self.contents.get(path), Exception):
            raise self.contents[path]
        if path not in self.contents:
            raise FileNotFoundError(path)
        return self.contents[path]

    async def post_comment(self, path, start_line, end_line, text) -> None:
        self.calls.append("post_comment")
        if self.failing_posts:
            self.failing_posts -= 1
            raise RuntimeError("host rejected comment")
        self.posted.append((path, start_line, end_line, text))

    async def set_final_status(self, status: ReviewStatus) -> None:
        self.calls.append("set_final_status")
        self.final_status = status

    def get_pr_identifier(self) -> str:
        return "Fake:acme/widgets#7"


class ScriptedCompletion:
    """Chat completion returning (or raising) scripted results in order.

    The last entry repeats once the script runs out.
    """

    def __init__(self, *results) -> None:
        self.results = list(results)
        self.prompts: list[tuple[str, str]] = []

    async def __call__(self, system_prompt: str, user_prompt: str) -> str:
        self.prompts.append((system_prompt, user_prompt))
        index = min(len(self.prompts), len(self.results)) - 1
        result = self.results[index]
        if isinstance(result, Exception):
            raise result
        return result

    @property
    def call_count(self) -> int:
        return len(self.prompts)


class SleepRecorder:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def sleep() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def make_host():
    return FakeCodeHost


@pytest.fixture
def make_ai_client(sleep):
    def _make(*results) -> tuple[AIReviewClient, ScriptedCompletion]:
        completion = ScriptedCompletion(*results)
        return AIReviewClient(completion, sleep=sleep, jitter=lambda: 0.5), completion

    return _make


@pytest.fixture
def review_config() -> ReviewConfig:
    return ReviewConfig(file_delay_seconds=1.0)


@pytest.fixture
def rate_limited():
    return RateLimitedError
