"""GitHub implementation of the code host used by the review pipeline."""

import asyncio
import re
from typing import Optional

from github import Github, GithubException
from github.PullRequest import PullRequest
from github.Repository import Repository

from src.core.logging import get_logger
from src.services.reviewer.host import CodeHost
from src.services.reviewer.schemas import FileChange, ReviewStatus

logger = get_logger("github.host")

REVIEWABLE_ACTIONS = ("opened", "synchronize", "reopened", "review_requested")

REVIEW_EVENTS = {
    ReviewStatus.APPROVED: "APPROVE",
    ReviewStatus.COMMENTED: "COMMENT",
    ReviewStatus.CHANGES_REQUESTED: "REQUEST_CHANGES",
}


class GitHubCodeHost(CodeHost):
    """One GitHub pull request, reviewed as the configured reviewer."""

    def __init__(
        self,
        client: Github,
        owner: str,
        repo: str,
        pr_number: int,
        reviewer_name: str,
        action: Optional[str] = None,
        head_sha: Optional[str] = None,
    ) -> None:
        self.client = client
        self.owner = owner
        self.repo = repo
        self.pr_number = pr_number
        self.reviewer_name = reviewer_name
        self.action = action
        self.head_sha = head_sha
        self._repository: Optional[Repository] = None
        self._pull: Optional[PullRequest] = None

    @property
    def bot_name(self) -> str:
        return re.sub(r"\s+", "-", self.reviewer_name.strip().lower())

    @property
    def lock_marker(self) -> str:
        return f"<!-- ai-code-reviewer:reviewing:{self.head_sha} -->"

    def _get_pull(self) -> PullRequest:
        if self._pull is None:
            self._repository = self.client.get_repo(f"{self.owner}/{self.repo}")
            self._pull = self._repository.get_pull(self.pr_number)
            if not self.head_sha:
                self.head_sha = self._pull.head.sha
        return self._pull

    def _is_requested_reviewer(self, pr: PullRequest) -> bool:
        users, teams = pr.get_review_requests()
        bot = self.bot_name
        return any(bot in (user.login or "").lower() for user in users) or any(
            bot in (team.name or "").lower() for team in teams
        )

    def _should_process(self) -> bool:
        pr = self._get_pull()

        if not self._is_requested_reviewer(pr):
            return False

        bot = self.bot_name
        for review in pr.get_reviews():
            login = review.user.login.lower() if review.user else ""
            if bot in login and review.commit_id == self.head_sha:
                return False

        marker = self.lock_marker
        return not any(marker in (comment.body or "") for comment in pr.get_issue_comments())

    def _lock(self) -> None:
        self._get_pull().create_issue_comment(
            f"🤖 **{self.reviewer_name}** is reviewing this Pull Request...\n\n{self.lock_marker}"
        )

    def _changed_files(self) -> list[FileChange]:
        pr = self._get_pull()
        return [
            FileChange(path=f.filename, commit_id=self.head_sha)
            for f in pr.get_files()
            if f.status != "removed"
        ]

    def _file_content(self, path: str, commit_id: str) -> str:
        self._get_pull()
        content = self._repository.get_contents(path, ref=commit_id)
        if isinstance(content, list):
            raise ValueError(f"Path {path} is a directory, not a file")
        return content.decoded_content.decode("utf-8")

    def _post_comment(
        self,
        path: str,
        start_line: Optional[int],
        end_line: Optional[int],
        text: str,
    ) -> None:
        pr = self._get_pull()

        if end_line and end_line > 0:
            anchor = {"line": end_line, "side": "RIGHT"}
            if start_line and 0 < start_line < end_line:
                anchor.update(start_line=start_line, start_side="RIGHT")
            try:
                commit = self._repository.get_commit(self.head_sha)
                pr.create_review_comment(text, commit, path, **anchor)
                return
            except GithubException as e:
                # 422: the lines are outside the diff
                if e.status != 422:
                    raise
                logger.warning(f"Inline comment rejected for {path}:{end_line}, posting on the PR")

        location = f" (lines {start_line}-{end_line})" if end_line else ""
        pr.create_issue_comment(f"**File: {path}**{location}\n\n{text}")

    def _final_status(self, status: ReviewStatus) -> None:
        pr = self._get_pull()
        if status is ReviewStatus.APPROVED:
            body = f"✅ Pull Request approved by **{self.reviewer_name}**."
        elif status is ReviewStatus.CHANGES_REQUESTED:
            body = (
                f"🔴 Major issues found by **{self.reviewer_name}**. "
                "Please address the feedback."
            )
        else:
            body = f"🟡 Suggestions provided by **{self.reviewer_name}** for improvement."

        pr.create_review(
            commit=self._repository.get_commit(self.head_sha),
            body=body,
            event=REVIEW_EVENTS[status],
        )

    async def validate_webhook(self) -> bool:
        return self.action in REVIEWABLE_ACTIONS

    async def should_process_pr(self) -> bool:
        return await asyncio.to_thread(self._should_process)

    async def lock_pr(self) -> None:
        await asyncio.to_thread(self._lock)

    async def get_changed_files(self) -> list[FileChange]:
        return await asyncio.to_thread(self._changed_files)

    async def get_file_content(self, path: str, commit_id: str) -> str:
        return await asyncio.to_thread(self._file_content, path, commit_id)

    async def post_comment(
        self,
        path: str,
        start_line: Optional[int],
        end_line: Optional[int],
        text: str,
    ) -> None:
        await asyncio.to_thread(self._post_comment, path, start_line, end_line, text)

    async def set_final_status(self, status: ReviewStatus) -> None:
        await asyncio.to_thread(self._final_status, status)

    def get_pr_identifier(self) -> str:
        return f"GitHub:{self.owner}/{self.repo}#{self.pr_number}"
