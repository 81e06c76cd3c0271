"""Azure DevOps implementation of the code host used by the review pipeline."""

from typing import Any, Optional
from urllib.parse import quote

import httpx

from src.core.logging import get_logger
from src.services.azdo.client import API_VERSION
from src.services.reviewer.host import CodeHost
from src.services.reviewer.schemas import FileChange, ReviewStatus

logger = get_logger("azdo.host")

REVIEWABLE_EVENT = "git.pullrequest.updated"

VOTE_APPROVED = 10
VOTE_APPROVED_WITH_SUGGESTIONS = 5
VOTE_NO_VOTE = 0
VOTE_WAITING_FOR_AUTHOR = -5

STATUS_VOTES = {
    ReviewStatus.APPROVED: VOTE_APPROVED,
    ReviewStatus.COMMENTED: VOTE_APPROVED_WITH_SUGGESTIONS,
    ReviewStatus.CHANGES_REQUESTED: VOTE_WAITING_FOR_AUTHOR,
}

THREAD_STATUS_ACTIVE = 1
COMMENT_TYPE_TEXT = 1


class AzDoCodeHost(CodeHost):
    """One Azure DevOps pull request, reviewed as the configured reviewer."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        project: str,
        repo_id: str,
        pr_id: int,
        reviewer_name: Optional[str],
        event_type: Optional[str] = None,
    ) -> None:
        self.client = client
        self.project = project
        self.repo_id = repo_id
        self.pr_id = pr_id
        self.reviewer_name = reviewer_name
        self.event_type = event_type
        self.reviewer_id: Optional[str] = None

    @property
    def _repo_path(self) -> str:
        return f"/{quote(self.project)}/_apis/git/repositories/{self.repo_id}"

    @property
    def _pr_path(self) -> str:
        return f"{self._repo_path}/pullRequests/{self.pr_id}"

    async def _get(self, url: str, params: Optional[dict] = None) -> Any:
        response = await self.client.get(url, params={"api-version": API_VERSION, **(params or {})})
        response.raise_for_status()
        return response.json()

    async def _set_vote(self, vote: int) -> None:
        response = await self.client.put(
            f"{self._pr_path}/reviewers/{self.reviewer_id}",
            params={"api-version": API_VERSION},
            json={"vote": vote},
        )
        response.raise_for_status()

    async def validate_webhook(self) -> bool:
        return self.event_type == REVIEWABLE_EVENT

    async def should_process_pr(self) -> bool:
        pr = await self._get(self._pr_path)
        reviewer = next(
            (r for r in pr.get("reviewers") or [] if r.get("displayName") == self.reviewer_name),
            None,
        )
        if reviewer is None:
            return False

        self.reviewer_id = reviewer.get("id")
        return reviewer.get("vote", VOTE_NO_VOTE) == VOTE_NO_VOTE

    async def lock_pr(self) -> None:
        if not self.reviewer_id:
            raise RuntimeError("Reviewer not identified")
        await self._set_vote(VOTE_WAITING_FOR_AUTHOR)

    async def get_changed_files(self) -> list[FileChange]:
        iterations = (await self._get(f"{self._pr_path}/iterations")).get("value") or []
        if not iterations:
            return []

        latest = iterations[-1]
        commit_id = latest["sourceRefCommit"]["commitId"]

        data = await self._get(f"{self._pr_path}/iterations/{latest['id']}/changes")
        changes = data.get("changeEntries") or data.get("changes") or data.get("value") or []
        return [
            FileChange(path=change["item"]["path"], commit_id=commit_id)
            for change in changes
            if change.get("item") and not change["item"].get("isFolder")
        ]

    async def get_file_content(self, path: str, commit_id: str) -> str:
        data = await self._get(
            f"{self._repo_path}/items",
            params={
                "path": path,
                "includeContent": "true",
                "versionDescriptor.versionType": "commit",
                "versionDescriptor.version": commit_id,
                "$format": "json",
            },
        )
        return data.get("content") or ""

    async def post_comment(
        self,
        path: str,
        start_line: Optional[int],
        end_line: Optional[int],
        text: str,
    ) -> None:
        thread: dict[str, Any] = {
            "comments": [
                {"parentCommentId": 0, "content": text, "commentType": COMMENT_TYPE_TEXT}
            ],
            "status": THREAD_STATUS_ACTIVE,
        }

        if path and end_line:
            start = start_line if start_line and start_line < end_line else end_line
            thread["threadContext"] = {
                "filePath": path,
                "rightFileStart": {"line": start, "offset": 1},
                "rightFileEnd": {"line": end_line, "offset": 1},
            }
        elif path:
            thread["threadContext"] = {"filePath": path}

        response = await self.client.post(
            f"{self._pr_path}/threads",
            params={"api-version": API_VERSION},
            json=thread,
        )
        response.raise_for_status()

    async def set_final_status(self, status: ReviewStatus) -> None:
        if not self.reviewer_id:
            logger.warning(f"Reviewer unknown for {self.get_pr_identifier()}, not voting")
            return
        await self._set_vote(STATUS_VOTES[status])

    def get_pr_identifier(self) -> str:
        return f"AzDo:{self.project}/{self.pr_id}"
