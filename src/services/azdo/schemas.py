"""Pydantic schemas for Azure DevOps service."""

from pydantic import BaseModel, ConfigDict, Field


class AzDoProject(BaseModel):
    name: str


class AzDoRepository(BaseModel):
    id: str
    project: AzDoProject


class AzDoPullRequestResource(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    pull_request_id: int = Field(alias="pullRequestId")
    repository: AzDoRepository


class AzDoWebhookPayload(BaseModel):
    """The parts of a service-hook pull request event the reviewer needs."""

    model_config = ConfigDict(populate_by_name=True)

    event_type: str = Field(alias="eventType")
    resource: AzDoPullRequestResource
