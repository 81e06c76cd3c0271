"""State schema for the review pipeline graph."""

from typing import Optional, TypedDict

from src.services.reviewer.schemas import FileChange, ReviewComment, ReviewStatus


class ReviewState(TypedDict):
    """State carried through one review run."""

    # PR context (immutable)
    pr: str

    # Last stage reached; early exits overwrite it with the reason
    stage: str

    # Fetched inputs
    files: list[FileChange]
    guidelines: Optional[str]

    # Accumulated results
    candidates: list[list[ReviewComment]]  # per file, in emission order
    files_reviewed: int
    files_failed: list[str]
    has_red_flags: bool

    # Output
    comments: list[ReviewComment]
    comments_posted: int
    issues_posted: int  # non-red-flag comments the host accepted
    status: Optional[ReviewStatus]


def initial_state(pr: str) -> ReviewState:
    return ReviewState(
        pr=pr,
        stage="validating",
        files=[],
        guidelines=None,
        candidates=[],
        files_reviewed=0,
        files_failed=[],
        has_red_flags=False,
        comments=[],
        comments_posted=0,
        issues_posted=0,
        status=None,
    )
