"""Response bodies shared by every endpoint."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body returned for any ApiException."""

    success: bool = False
    error: str
    details: dict | None = None


class HealthResponse(BaseModel):
    status: str = "healthy"
    service: str = "ai-code-reviewer"
    ai_provider: str | None = None
    platforms: list[str] = Field(default_factory=list)
