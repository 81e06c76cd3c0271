"""Rank candidate comments across a PR and enforce the posting budget."""

from typing import Iterable, Sequence

from src.services.reviewer.schemas import ReviewComment

DEFAULT_COMMENT_BUDGET = 15


def aggregate_comments(
    per_file_comments: Iterable[Sequence[ReviewComment]],
    budget: int = DEFAULT_COMMENT_BUDGET,
) -> list[ReviewComment]:
    """Flatten, rank by severity and keep the first ``budget`` comments.

    Sorting is stable, so comments of equal severity keep file-iteration
    order and their in-file order.
    """
    if budget <= 0:
        return []
    flattened = [comment for comments in per_file_comments for comment in comments]
    ranked = sorted(flattened, key=lambda comment: comment.priority)
    return ranked[:budget]
