"""Interface every code-hosting platform implements for the review pipeline."""

from abc import ABC, abstractmethod
from typing import Optional

from src.services.reviewer.schemas import FileChange, ReviewStatus


class CodeHost(ABC):
    """One pull request on one code-hosting platform."""

    @abstractmethod
    async def validate_webhook(self) -> bool:
        """Whether the triggering event is one we react to."""

    @abstractmethod
    async def should_process_pr(self) -> bool:
        """Whether this PR version still needs a review from us."""

    @abstractmethod
    async def lock_pr(self) -> None:
        """Best-effort marker so redelivered events see the PR as taken."""

    @abstractmethod
    async def get_changed_files(self) -> list[FileChange]:
        """Changed files of the latest PR revision."""

    @abstractmethod
    async def get_file_content(self, path: str, commit_id: str) -> str:
        """Raw content of ``path`` at ``commit_id``."""

    @abstractmethod
    async def post_comment(
        self,
        path: str,
        start_line: Optional[int],
        end_line: Optional[int],
        text: str,
    ) -> None:
        """Post a comment, anchored to lines when they are given."""

    @abstractmethod
    async def set_final_status(self, status: ReviewStatus) -> None:
        """Record the overall review outcome."""

    @abstractmethod
    def get_pr_identifier(self) -> str:
        """Human-readable PR id for logs."""
