"""AI Code Reviewer - FastAPI entry point."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.config import settings
from src.core.exceptions import ApiException
from src.core.logging import get_logger
from src.core.schemas.responses import ErrorResponse, HealthResponse
from src.services.azdo.routes import router as azdo_router
from src.services.github.routes import router as github_router

logger = get_logger("main")

app = FastAPI(
    title="AI Code Reviewer",
    description="AI-powered pull request reviewer for GitHub and Azure DevOps",
    version="0.1.0",
)


def configured_platforms() -> list[str]:
    """Code hosts whose credentials are present in settings."""
    platforms = []
    if settings.github_app_id and settings.github_private_key:
        platforms.append("github")
    if settings.azdo_org_url and settings.azdo_pat:
        platforms.append("azdo")
    return platforms


@app.exception_handler(ApiException)
async def api_exception_handler(request: Request, exc: ApiException) -> JSONResponse:
    """Turn API exceptions into an ErrorResponse body."""
    logger.warning(f"{request.method} {request.url.path} failed: {exc.message} (status={exc.status_code})")
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=exc.message,
            details=exc.details or None,
        ).model_dump(),
    )


app.include_router(github_router, prefix="/api")
app.include_router(azdo_router, prefix="/api")


@app.get("/")
async def root():
    return {
        "service": "ai-code-reviewer",
        "version": "0.1.0",
        "webhooks": ["/api/webhook/github", "/api/webhook/azdo"],
    }


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Health check, with the AI provider and the code hosts we can reach."""
    return HealthResponse(ai_provider=settings.ai_provider, platforms=configured_platforms())


if __name__ == "__main__":
    import uvicorn

    platforms = ", ".join(configured_platforms()) or "none"
    logger.info(
        f"Starting AI Code Reviewer on {settings.host}:{settings.port} "
        f"(provider={settings.ai_provider}, platforms={platforms})"
    )
    uvicorn.run(
        "src.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
