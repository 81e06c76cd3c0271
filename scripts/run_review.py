#!/usr/bin/env python3
"""Run a PR review locally against a GitHub pull request.

Usage: python scripts/run_review.py OWNER REPO PR_NUMBER INSTALLATION_ID
"""
import asyncio
import sys

from dotenv import load_dotenv

load_dotenv()

from src.config import settings
from src.services.github.client import get_installation_client
from src.services.github.host import GitHubCodeHost
from src.services.reviewer.service import review_pull_request


async def main(owner: str, repo: str, pr_number: int, installation_id: int):
    client = get_installation_client(
        settings.github_app_id,
        settings.github_private_key,
        installation_id,
    )
    host = GitHubCodeHost(
        client=client,
        owner=owner,
        repo=repo,
        pr_number=pr_number,
        reviewer_name=settings.github_reviewer_name,
        action="review_requested",
    )
    result = await review_pull_request(host)
    print(f"Review result: {result.model_dump(mode='json')}")

if __name__ == "__main__":
    if len(sys.argv) != 5:
        sys.exit(__doc__)
    asyncio.run(main(sys.argv[1], sys.argv[2], int(sys.argv[3]), int(sys.argv[4])))
