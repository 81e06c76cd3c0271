"""LangGraph pipeline for reviewing one pull request.

validate -> check_eligibility -> lock -> fetch_files -> review_files
-> aggregate -> post_comments -> finalize

validate, check_eligibility and fetch_files (on an empty change set) may end
the run early without side effects.
"""

import asyncio
from typing import Awaitable, Callable, Literal, Optional

from langgraph.graph import END, StateGraph

from src.core.ignore_files import should_ignore_file
from src.core.logging import get_logger
from src.services.reviewer.aggregator import aggregate_comments
from src.services.reviewer.ai_client import AIReviewClient
from src.services.reviewer.cleaner import clean_code, remap_line
from src.services.reviewer.host import CodeHost
from src.services.reviewer.schemas import (
    CleanedFile,
    FileChange,
    ReviewComment,
    ReviewConfig,
    ReviewStatus,
    Severity,
)
from src.services.reviewer.state import ReviewState

logger = get_logger("reviewer.graph")

RED_FLAG_TEMPLATE = (
    "🔴 **Architectural Red Flag**: This file exceeds {limit} lines "
    "({count} non-blank lines). Split it into smaller, focused modules."
)


def decide_status(has_red_flags: bool, has_issues: bool) -> ReviewStatus:
    if has_red_flags:
        return ReviewStatus.CHANGES_REQUESTED
    if has_issues:
        return ReviewStatus.COMMENTED
    return ReviewStatus.APPROVED


def remap_comments(comments: list[ReviewComment], cleaned: CleanedFile) -> list[ReviewComment]:
    """Translate line numbers reported against cleaned content to the original file."""
    remapped = []
    for comment in comments:
        data = comment.model_dump()
        data["start_line"] = remap_line(cleaned.line_map, comment.start_line)
        data["end_line"] = remap_line(cleaned.line_map, comment.end_line)
        remapped.append(ReviewComment(**data))
    return remapped


def create_review_graph(
    host: CodeHost,
    get_ai_client: Callable[[], AIReviewClient],
    config: ReviewConfig,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
):
    """Create the review pipeline graph for one PR.

    ``get_ai_client`` is only called once files are about to be reviewed, so
    skipped events never touch the AI provider configuration.
    """

    pr_id = host.get_pr_identifier()

    def is_oversized(path: str, cleaned: CleanedFile) -> bool:
        if path.lower().endswith(config.oversize_exempt_extensions):
            return False
        return cleaned.line_count > config.max_file_lines

    async def fetch_guidelines(commit_id: Optional[str]) -> Optional[str]:
        """Fetch custom review rules from the PR's own revision, if configured."""
        path = config.guidelines_path
        if not path:
            logger.info("[CONFIG] No custom rules configured, using defaults")
            return None
        if not commit_id:
            logger.info("[CONFIG] No commit id available, using default rules")
            return None

        try:
            guidelines = await host.get_file_content(path, commit_id)
        except Exception as e:
            logger.info(f"[CONFIG] Could not fetch custom rules at {path} ({e}), using defaults")
            return None

        if not guidelines or not guidelines.strip():
            logger.info(f"[CONFIG] Custom rules at {path} are empty, using defaults")
            return None

        logger.info(f"[CONFIG] Using custom rules from repo: {path}")
        return guidelines

    async def review_file(
        ai_client: AIReviewClient, file: FileChange, guidelines: Optional[str]
    ) -> list[ReviewComment]:
        content = await host.get_file_content(file.path, file.commit_id)
        cleaned = clean_code(content, file.path)

        if is_oversized(file.path, cleaned):
            logger.warning(
                f"[FILES] {file.path} has {cleaned.line_count} lines, flagging without AI review"
            )
            return [
                ReviewComment(
                    file_path=file.path,
                    severity=Severity.CRITICAL.value,
                    text=RED_FLAG_TEMPLATE.format(
                        limit=config.max_file_lines, count=cleaned.line_count
                    ),
                    red_flag=True,
                )
            ]

        if config.send_cleaned_content:
            comments = await ai_client.review(file.path, cleaned.cleaned_content, guidelines)
            return remap_comments(comments, cleaned)

        return await ai_client.review(file.path, content, guidelines)

    async def validate_node(state: ReviewState) -> dict:
        logger.info(f"[VALIDATE] Validating webhook for {pr_id}")
        if not await host.validate_webhook():
            logger.info(f"[IGNORE] {pr_id}: event is not one we review")
            return {"stage": "skipped_invalid"}
        return {"stage": "checking_eligibility"}

    async def check_eligibility_node(state: ReviewState) -> dict:
        if not await host.should_process_pr():
            logger.info(
                f"[IGNORE] {pr_id}: already reviewed at this revision or reviewer not assigned"
            )
            return {"stage": "skipped_ineligible"}
        return {"stage": "locking"}

    async def lock_node(state: ReviewState) -> dict:
        try:
            await host.lock_pr()
            logger.info(f"[LOCK] Locked {pr_id}")
        except Exception as e:
            logger.warning(f"[LOCK] Failed to lock {pr_id}, continuing without lock: {e}")
        return {"stage": "fetching_files"}

    async def fetch_files_node(state: ReviewState) -> dict:
        files = await host.get_changed_files()
        logger.info(f"[FILES] {pr_id}: found {len(files)} changed files")
        if not files:
            return {"stage": "no_files", "files": []}

        guidelines = await fetch_guidelines(files[0].commit_id)
        return {"stage": "reviewing", "files": files, "guidelines": guidelines}

    async def review_files_node(state: ReviewState) -> dict:
        ai_client = get_ai_client()
        candidates = []
        failed = []
        reviewed = 0
        has_red_flags = False

        for index, file in enumerate(state["files"], start=1):
            if should_ignore_file(file.path, config.ignored_files):
                logger.info(f"[SKIP] Ignoring file: {file.path}")
                continue

            logger.info(f"[FILES] Reviewing {index}/{len(state['files'])}: {file.path}")
            try:
                comments = await review_file(ai_client, file, state["guidelines"])
                candidates.append(comments)
                reviewed += 1
                has_red_flags = has_red_flags or any(c.red_flag for c in comments)
                logger.info(f"[AI] {file.path}: {len(comments)} candidate comments")
            except Exception as e:
                failed.append(file.path)
                logger.error(f"[ERROR] Failed to review {file.path}: {e}")

            await sleep(config.file_delay_seconds)

        return {
            "stage": "aggregating",
            "candidates": candidates,
            "files_reviewed": reviewed,
            "files_failed": failed,
            "has_red_flags": has_red_flags,
        }

    def aggregate_node(state: ReviewState) -> dict:
        comments = aggregate_comments(state["candidates"], config.max_comments)
        total = sum(len(c) for c in state["candidates"])
        if total > len(comments):
            logger.info(f"[POST] Keeping {len(comments)} of {total} comments")
        return {"stage": "posting", "comments": comments}

    async def post_comments_node(state: ReviewState) -> dict:
        posted = 0
        issues_posted = 0
        for comment in state["comments"]:
            try:
                await host.post_comment(
                    comment.file_path,
                    comment.start_line,
                    comment.end_line,
                    comment.text,
                )
                posted += 1
                if not comment.red_flag:
                    issues_posted += 1
            except Exception as e:
                logger.error(
                    f"[POST] Failed to post comment on {comment.file_path}"
                    f":{comment.start_line}: {e} | {comment.text}"
                )
        logger.info(f"[POST] {pr_id}: posted {posted}/{len(state['comments'])} comments")
        return {"stage": "finalizing", "comments_posted": posted, "issues_posted": issues_posted}

    async def finalize_node(state: ReviewState) -> dict:
        status = decide_status(state["has_red_flags"], state["issues_posted"] > 0)
        await host.set_final_status(status)
        logger.info(f"[FINAL] {pr_id}: review completed with status {status.value}")
        return {"stage": "done", "status": status}

    def route_after_validate(state: ReviewState) -> Literal["check_eligibility", "end"]:
        return "end" if state["stage"] == "skipped_invalid" else "check_eligibility"

    def route_after_eligibility(state: ReviewState) -> Literal["lock", "end"]:
        return "end" if state["stage"] == "skipped_ineligible" else "lock"

    def route_after_fetch(state: ReviewState) -> Literal["review_files", "end"]:
        return "end" if state["stage"] == "no_files" else "review_files"

    # Build the graph
    graph = StateGraph(ReviewState)

    graph.add_node("validate", validate_node)
    graph.add_node("check_eligibility", check_eligibility_node)
    graph.add_node("lock", lock_node)
    graph.add_node("fetch_files", fetch_files_node)
    graph.add_node("review_files", review_files_node)
    graph.add_node("aggregate", aggregate_node)
    graph.add_node("post_comments", post_comments_node)
    graph.add_node("finalize", finalize_node)

    graph.set_entry_point("validate")

    graph.add_conditional_edges(
        "validate",
        route_after_validate,
        {"check_eligibility": "check_eligibility", "end": END},
    )
    graph.add_conditional_edges(
        "check_eligibility",
        route_after_eligibility,
        {"lock": "lock", "end": END},
    )
    graph.add_edge("lock", "fetch_files")
    graph.add_conditional_edges(
        "fetch_files",
        route_after_fetch,
        {"review_files": "review_files", "end": END},
    )
    graph.add_edge("review_files", "aggregate")
    graph.add_edge("aggregate", "post_comments")
    graph.add_edge("post_comments", "finalize")
    graph.add_edge("finalize", END)

    return graph.compile()
