"""Pydantic schemas for GitHub service."""

from pydantic import BaseModel


class GitHubAccount(BaseModel):
    login: str


class GitHubRepository(BaseModel):
    name: str
    owner: GitHubAccount


class GitHubCommitRef(BaseModel):
    sha: str


class GitHubPullRequest(BaseModel):
    number: int
    head: GitHubCommitRef


class GitHubInstallation(BaseModel):
    id: int


class GitHubWebhookPayload(BaseModel):
    """The parts of a ``pull_request`` event the reviewer needs."""

    action: str
    pull_request: GitHubPullRequest
    repository: GitHubRepository
    installation: GitHubInstallation


class WebhookResponse(BaseModel):
    """Response schema for webhook events."""

    message: str
    pr: str | None = None
    action: str | None = None
    stage: str | None = None
    status: str | None = None
    comments_posted: int = 0


class PingResponse(BaseModel):
    """Response schema for GitHub ping event."""

    message: str = "pong"
    zen: str = ""
