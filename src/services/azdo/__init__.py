"""Azure DevOps service."""

from src.services.azdo.host import AzDoCodeHost
from src.services.azdo.service import handle_pull_request_event

__all__ = ["AzDoCodeHost", "handle_pull_request_event"]
