"""First-response latency extraction for pull requests, RFCs and issues.

The latency of an item is the time from its creation to its earliest comment,
in seconds. Items without any comment have no latency and are left out of the
sample set rather than counted as zero.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .github_client import GitHubClient
from .models import PULL_REQUEST, Comment, TrackedItem

logger = logging.getLogger(__name__)


def first_response_latency(github_client: GitHubClient, item: TrackedItem) -> Optional[float]:
    """Compute seconds between item creation and its first comment.

    Business logic:
    - Pull requests use the first review comment, issues the first issue comment.
    - Only the first comment page, sorted by creation ascending, is requested.
    - A negative duration is returned as-is when the comment predates the item.

    Returns ``None`` when the item has no comments.
    """
    comment: Optional[Comment]
    if item.kind == PULL_REQUEST:
        comment = github_client.first_pull_request_comment(item.repository, item.number)
    else:
        comment = github_client.first_issue_comment(item.repository, item.number)

    if comment is None:
        return None

    latency = (comment.created_at - item.created_at).total_seconds()
    if latency < 0:
        logger.debug(
            "First comment predates item creation",
            extra={"repository": item.repository, "number": item.number, "latency": latency},
        )
    return latency


def collect_latencies(github_client: GitHubClient, items: Iterable[TrackedItem]) -> List[float]:
    """Collect first-response latencies, skipping items without comments."""
    latencies: List[float] = []
    items_without_response = 0

    for item in items:
        latency = first_response_latency(github_client, item)
        if latency is None:
            items_without_response += 1
        else:
            latencies.append(latency)

    logger.info(
        "Collected response latencies",
        extra={"samples": len(latencies), "items_without_response": items_without_response},
    )
    return latencies
