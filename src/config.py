"""Configuration for the AI Code Reviewer."""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # App
    environment: str = Field(default="development", env="ENVIRONMENT")
    debug: bool = Field(default=True, env="DEBUG")
    host: str = Field(default="0.0.0.0", env="HOST")
    port: int = Field(default=8080, env="PORT")

    # LLM - one provider per process (openai / anthropic / google and aliases)
    ai_provider: str = Field(default="openai", env="AI_PROVIDER")
    ai_model: str = Field(default="gpt-4o", env="AI_MODEL")
    ai_api_key: Optional[str] = Field(default=None, env="AI_API_KEY")
    ai_base_url: Optional[str] = Field(default=None, env="AI_BASE_URL")

    # GitHub App Authentication
    github_app_id: Optional[str] = Field(default=None, env="GITHUB_APP_ID")
    github_private_key: Optional[str] = Field(default=None, env="GITHUB_PRIVATE_KEY")
    github_webhook_secret: Optional[str] = Field(default=None, env="GITHUB_WEBHOOK_SECRET")
    github_reviewer_name: str = Field(default="AI Reviewer", env="GITHUB_REVIEWER_NAME")

    # Azure DevOps
    azdo_org_url: Optional[str] = Field(default=None, env="AZDO_ORG_URL")
    azdo_pat: Optional[str] = Field(default=None, env="AZDO_PAT")
    azdo_reviewer_name: Optional[str] = Field(default=None, env="AZDO_REVIEWER_NAME")

    # Review Configuration
    ai_review_guidelines: Optional[str] = Field(default=None, env="AI_REVIEW_GUIDELINES")
    max_comments: int = Field(default=15, env="MAX_COMMENTS")
    max_file_lines: int = Field(default=1000, env="MAX_FILE_LINES")
    file_delay_seconds: float = Field(default=1.0, env="FILE_DELAY_SECONDS")
    send_cleaned_content: bool = Field(default=False, env="SEND_CLEANED_CONTENT")
    extra_ignored_files: list[str] = Field(default_factory=list, env="EXTRA_IGNORED_FILES")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


settings = Settings()
