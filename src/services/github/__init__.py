"""GitHub service."""

from src.services.github.host import GitHubCodeHost
from src.services.github.service import build_code_host, handle_pull_request_event

__all__ = [
    "GitHubCodeHost",
    "build_code_host",
    "handle_pull_request_event",
]
