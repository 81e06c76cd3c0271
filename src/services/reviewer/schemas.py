"""Schemas for the reviewer service."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from src.core.ignore_files import IGNORED_FILES


class Severity(str, Enum):
    CRITICAL = "critical"
    MAJOR = "major"
    MINOR = "minor"


SEVERITY_PRIORITY = {
    Severity.CRITICAL: 0,
    Severity.MAJOR: 1,
    Severity.MINOR: 2,
}
UNKNOWN_SEVERITY_PRIORITY = 3


class ReviewStatus(str, Enum):
    APPROVED = "approved"
    COMMENTED = "commented"
    CHANGES_REQUESTED = "changes_requested"


@dataclass(frozen=True)
class FileChange:
    """One changed file at a specific PR revision."""

    path: str
    commit_id: str


@dataclass(frozen=True)
class CleanedFile:
    """File content with blank lines and block comments stripped.

    ``line_map[i]`` is the 1-based line in the original file that cleaned
    line ``i + 1`` came from. Empty or all-blank input gives
    ``cleaned_content == ""`` and an empty ``line_map``; otherwise
    ``cleaned_content.split("\\n")`` has exactly ``len(line_map)`` lines.
    """

    cleaned_content: str
    line_map: tuple[int, ...]

    @property
    def line_count(self) -> int:
        return len(self.line_map)


class ReviewComment(BaseModel):
    """A candidate comment for one file."""

    file_path: str
    start_line: Optional[int] = None
    end_line: Optional[int] = None
    severity: str = Severity.MINOR.value
    text: str
    red_flag: bool = False

    @model_validator(mode="after")
    def _normalize_lines(self) -> "ReviewComment":
        if self.start_line is None:
            self.start_line = self.end_line
        if self.end_line is None:
            self.end_line = self.start_line
        if self.start_line is not None and self.start_line > self.end_line:
            self.start_line = self.end_line
        return self

    @property
    def priority(self) -> int:
        return SEVERITY_PRIORITY.get(self.severity, UNKNOWN_SEVERITY_PRIORITY)


class ReviewConfig(BaseModel):
    """Knobs for a single review run, built once from settings."""

    max_comments: int = 15
    max_file_lines: int = 1000
    oversize_exempt_extensions: tuple[str, ...] = (".md",)
    file_delay_seconds: float = 1.0
    guidelines_path: Optional[str] = None
    ignored_files: tuple[str, ...] = IGNORED_FILES
    send_cleaned_content: bool = False

    @classmethod
    def from_settings(cls, settings) -> "ReviewConfig":
        return cls(
            max_comments=settings.max_comments,
            max_file_lines=settings.max_file_lines,
            file_delay_seconds=settings.file_delay_seconds,
            guidelines_path=settings.ai_review_guidelines or None,
            ignored_files=IGNORED_FILES + tuple(settings.extra_ignored_files),
            send_cleaned_content=settings.send_cleaned_content,
        )


class ReviewResult(BaseModel):
    """Outcome of a review run."""

    pr: str
    stage: str
    files_reviewed: int = 0
    files_failed: list[str] = Field(default_factory=list)
    comments_posted: int = 0
    status: Optional[ReviewStatus] = None
