"""Tests for the webhook endpoints."""

import hashlib
import hmac
import json

import pytest
from fastapi.testclient import TestClient

from src.config import settings
from src.core.exceptions import ReviewFailedError
from src.main import app
from src.services.azdo import routes as azdo_routes
from src.services.github import routes as github_routes
from src.services.github import service as github_service
from src.services.github.schemas import GitHubWebhookPayload, WebhookResponse

PR_EVENT = {
    "action": "review_requested",
    "pull_request": {"number": 7, "head": {"sha": "abc123"}},
    "repository": {"name": "widgets", "owner": {"login": "acme"}},
    "installation": {"id": 99},
}

AZDO_EVENT = {
    "id": "hook-1",
    "eventType": "git.pullrequest.updated",
    "resource": {
        "pullRequestId": 42,
        "repository": {"id": "repo-1", "project": {"name": "My Project"}},
    },
}


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def received(monkeypatch):
    """Replace both handlers with recorders."""
    events = []

    async def fake_handler(payload):
        events.append(payload)
        return WebhookResponse(message="Review completed", stage="done", status="approved")

    monkeypatch.setattr(github_routes, "handle_pull_request_event", fake_handler)
    monkeypatch.setattr(azdo_routes, "handle_pull_request_event", fake_handler)
    return events


class TestGitHubWebhook:
    def test_ping(self, client, received):
        response = client.post(
            "/api/webhook/github",
            json={"zen": "Keep it logically awesome."},
            headers={"X-GitHub-Event": "ping"},
        )

        assert response.status_code == 200
        assert response.json() == {"message": "pong", "zen": "Keep it logically awesome."}
        assert received == []

    def test_unhandled_event(self, client, received):
        response = client.post("/api/webhook/github", json={}, headers={"X-GitHub-Event": "push"})

        assert response.status_code == 200
        assert response.json()["message"] == "Event push not handled"
        assert received == []

    def test_pull_request_event(self, client, received):
        response = client.post(
            "/api/webhook/github", json=PR_EVENT, headers={"X-GitHub-Event": "pull_request"}
        )

        assert response.status_code == 200
        assert response.json()["status"] == "approved"
        (payload,) = received
        assert payload.pull_request.number == 7
        assert payload.installation.id == 99

    def test_invalid_payload(self, client, received):
        response = client.post(
            "/api/webhook/github",
            json={"action": "opened"},
            headers={"X-GitHub-Event": "pull_request"},
        )

        assert response.status_code == 422
        assert response.json()["success"] is False
        assert received == []

    def test_invalid_json(self, client, received):
        response = client.post(
            "/api/webhook/github",
            content=b"not json",
            headers={"X-GitHub-Event": "pull_request"},
        )

        assert response.status_code == 422

    def test_signature_checked_when_secret_set(self, client, received, monkeypatch):
        monkeypatch.setattr(settings, "github_webhook_secret", "s3cret")
        body = json.dumps(PR_EVENT).encode()

        bad = client.post(
            "/api/webhook/github",
            content=body,
            headers={"X-GitHub-Event": "pull_request", "X-Hub-Signature-256": "sha256=bad"},
        )
        digest = hmac.new(b"s3cret", body, hashlib.sha256).hexdigest()
        good = client.post(
            "/api/webhook/github",
            content=body,
            headers={"X-GitHub-Event": "pull_request", "X-Hub-Signature-256": f"sha256={digest}"},
        )

        assert bad.status_code == 401
        assert good.status_code == 200
        assert len(received) == 1


class TestAzDoWebhook:
    def test_pull_request_event(self, client, received):
        response = client.post("/api/webhook/azdo", json=AZDO_EVENT)

        assert response.status_code == 200
        (payload,) = received
        assert payload.event_type == "git.pullrequest.updated"
        assert payload.resource.pull_request_id == 42
        assert payload.resource.repository.project.name == "My Project"

    def test_invalid_payload(self, client, received):
        response = client.post("/api/webhook/azdo", json={"eventType": "git.pullrequest.updated"})

        assert response.status_code == 422
        assert received == []

    def test_non_object_body(self, client, received):
        response = client.post("/api/webhook/azdo", json=[1, 2])

        assert response.status_code == 422


class TestReviewFailure:
    @pytest.mark.asyncio
    async def test_errors_become_review_failed(self, monkeypatch):
        def broken_host(payload):
            raise RuntimeError("GitHub App credentials not configured")

        monkeypatch.setattr(github_service, "build_code_host", broken_host)

        with pytest.raises(ReviewFailedError) as exc_info:
            await github_service.handle_pull_request_event(GitHubWebhookPayload.model_validate(PR_EVENT))

        assert exc_info.value.status_code == 500
        assert exc_info.value.details == {"pr": "GitHub:acme/widgets#7"}


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_health_lists_configured_platforms(client, monkeypatch):
    monkeypatch.setattr(settings, "github_app_id", "123")
    monkeypatch.setattr(settings, "github_private_key", "key")
    monkeypatch.setattr(settings, "azdo_org_url", None)

    body = client.get("/health").json()

    assert body["platforms"] == ["github"]
    assert body["ai_provider"] == settings.ai_provider
