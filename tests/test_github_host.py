"""Tests for the GitHub code host using mocked PyGithub objects."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from github import GithubException

from src.services.github.host import GitHubCodeHost
from src.services.reviewer.schemas import ReviewStatus

HEAD_SHA = "abc123"


def user(login: str) -> SimpleNamespace:
    return SimpleNamespace(login=login)


@pytest.fixture
def pull():
    pr = MagicMock()
    pr.head.sha = HEAD_SHA
    pr.get_review_requests.return_value = ([user("ai-reviewer[bot]")], [])
    pr.get_reviews.return_value = []
    pr.get_issue_comments.return_value = []
    return pr


@pytest.fixture
def repository(pull):
    repo = MagicMock()
    repo.get_pull.return_value = pull
    return repo


@pytest.fixture
def host(repository):
    client = MagicMock()
    client.get_repo.return_value = repository
    return GitHubCodeHost(
        client=client,
        owner="acme",
        repo="widgets",
        pr_number=7,
        reviewer_name="AI Reviewer",
        action="review_requested",
    )


class TestValidateAndEligibility:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("action,expected", [("opened", True), ("synchronize", True), ("closed", False)])
    async def test_validate_webhook(self, host, action, expected):
        host.action = action
        assert await host.validate_webhook() is expected

    @pytest.mark.asyncio
    async def test_eligible_when_requested(self, host):
        assert await host.should_process_pr()
        assert host.head_sha == HEAD_SHA

    @pytest.mark.asyncio
    async def test_not_requested(self, host, pull):
        pull.get_review_requests.return_value = ([user("someone")], [])
        assert not await host.should_process_pr()

    @pytest.mark.asyncio
    async def test_requested_through_team(self, host, pull):
        pull.get_review_requests.return_value = ([], [SimpleNamespace(name="AI-Reviewer team")])
        assert await host.should_process_pr()

    @pytest.mark.asyncio
    async def test_already_reviewed_at_head(self, host, pull):
        pull.get_reviews.return_value = [
            SimpleNamespace(user=user("ai-reviewer[bot]"), commit_id=HEAD_SHA)
        ]
        assert not await host.should_process_pr()

    @pytest.mark.asyncio
    async def test_reviewed_at_older_revision(self, host, pull):
        pull.get_reviews.return_value = [
            SimpleNamespace(user=user("ai-reviewer[bot]"), commit_id="old")
        ]
        assert await host.should_process_pr()

    @pytest.mark.asyncio
    async def test_lock_comment_blocks_second_run(self, host, pull):
        host.head_sha = HEAD_SHA
        pull.get_issue_comments.return_value = [SimpleNamespace(body=f"reviewing\n\n{host.lock_marker}")]
        assert not await host.should_process_pr()


class TestSideEffects:
    @pytest.mark.asyncio
    async def test_lock_posts_marker(self, host, pull):
        await host.lock_pr()

        body = pull.create_issue_comment.call_args[0][0]
        assert "AI Reviewer" in body
        assert f"reviewing:{HEAD_SHA}" in body

    @pytest.mark.asyncio
    async def test_changed_files_skip_removed(self, host, pull):
        pull.get_files.return_value = [
            SimpleNamespace(filename="a.py", status="modified"),
            SimpleNamespace(filename="old.py", status="removed"),
            SimpleNamespace(filename="b.ts", status="added"),
        ]

        files = await host.get_changed_files()

        assert [f.path for f in files] == ["a.py", "b.ts"]
        assert all(f.commit_id == HEAD_SHA for f in files)

    @pytest.mark.asyncio
    async def test_file_content(self, host, repository):
        repository.get_contents.return_value = SimpleNamespace(decoded_content="x = 1\n".encode())

        assert await host.get_file_content("a.py", HEAD_SHA) == "x = 1\n"
        repository.get_contents.assert_called_once_with("a.py", ref=HEAD_SHA)

    @pytest.mark.asyncio
    async def test_inline_comment_range(self, host, pull):
        await host.post_comment("a.py", 3, 5, "🟡 fix")

        args, kwargs = pull.create_review_comment.call_args
        assert args[0] == "🟡 fix"
        assert args[2] == "a.py"
        assert kwargs == {"line": 5, "side": "RIGHT", "start_line": 3, "start_side": "RIGHT"}

    @pytest.mark.asyncio
    async def test_single_line_comment(self, host, pull):
        await host.post_comment("a.py", 4, 4, "note")

        assert pull.create_review_comment.call_args[1] == {"line": 4, "side": "RIGHT"}

    @pytest.mark.asyncio
    async def test_comment_outside_diff_falls_back(self, host, pull):
        pull.create_review_comment.side_effect = GithubException(422, {"message": "Validation Failed"}, None)

        await host.post_comment("a.py", 40, 41, "🔴 broken")

        body = pull.create_issue_comment.call_args[0][0]
        assert body.startswith("**File: a.py** (lines 40-41)")
        assert "🔴 broken" in body

    @pytest.mark.asyncio
    async def test_other_github_errors_propagate(self, host, pull):
        pull.create_review_comment.side_effect = GithubException(500, {"message": "boom"}, None)

        with pytest.raises(GithubException):
            await host.post_comment("a.py", 1, 1, "x")

    @pytest.mark.asyncio
    async def test_file_level_comment(self, host, pull):
        await host.post_comment("big.py", None, None, "🔴 too big")

        pull.create_review_comment.assert_not_called()
        assert pull.create_issue_comment.call_args[0][0] == "**File: big.py**\n\n🔴 too big"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status,event",
        [
            (ReviewStatus.APPROVED, "APPROVE"),
            (ReviewStatus.COMMENTED, "COMMENT"),
            (ReviewStatus.CHANGES_REQUESTED, "REQUEST_CHANGES"),
        ],
    )
    async def test_final_status(self, host, pull, status, event):
        await host.set_final_status(status)

        assert pull.create_review.call_args[1]["event"] == event

    def test_identifier(self, host):
        assert host.get_pr_identifier() == "GitHub:acme/widgets#7"
