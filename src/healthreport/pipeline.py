"""Aggregation pipeline turning collected GitHub data into a MetricSet.

Every category runs through the same stages: collect, keep external
contributions, restrict to the reporting window, then reduce. A single
classifier (and therefore a single membership cache) serves all categories and
the review count of one run.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from .config import Config
from .github_client import GitHubClient
from .latency import collect_latencies
from .membership import MembershipClassifier
from .models import ISSUE, PULL_REQUEST, MetricSet, ResourceCategory, TimeWindow, TrackedItem
from .stats import average, median, percentage
from .window import filter_window

logger = logging.getLogger(__name__)

RFCS = "rfcs"
PULL_REQUESTS = "prs"
ISSUES = "issues"

GOOD_FIRST_ISSUE_MARKERS = ("good-first-issue", "good first issue")
PENDING_REVIEW_STATE = "PENDING"


def default_categories(config: Config) -> List[ResourceCategory]:
    """Return the RFC, pull request and issue categories for ``config``."""
    return [
        ResourceCategory(name=RFCS, kind=PULL_REQUEST, repositories=(config.rfc_repository,)),
        ResourceCategory(name=PULL_REQUESTS, kind=PULL_REQUEST, repositories=config.repositories),
        ResourceCategory(name=ISSUES, kind=ISSUE, repositories=config.repositories),
    ]


def collect_category(
    github_client: GitHubClient,
    category: ResourceCategory,
    window: TimeWindow,
) -> List[TrackedItem]:
    """Fetch every item of a category across its repositories.

    Issues are requested with ``since=window.start``; the server applies it to
    update time, so callers still filter on creation time.
    """
    items: List[TrackedItem] = []
    for repository in category.repositories:
        if category.kind == ISSUE:
            items.extend(github_client.list_issues(repository, since=window.start))
        else:
            items.extend(github_client.list_pull_requests(repository))

    logger.info(
        "Collected category",
        extra={"category": category.name, "repositories": len(category.repositories), "items": len(items)},
    )
    return items


def has_good_first_issue_label(item: TrackedItem) -> bool:
    return any(marker in label for label in item.labels for marker in GOOD_FIRST_ISSUE_MARKERS)


def good_first_issue_percentage(issues: Sequence[TrackedItem]) -> Optional[float]:
    """Share of issues labelled for newcomers, or ``None`` without issues."""
    labelled = sum(1 for issue in issues if has_good_first_issue_label(issue))
    return percentage(labelled, len(issues))


def count_internal_reviews(
    github_client: GitHubClient,
    classifier: MembershipClassifier,
    items: Sequence[TrackedItem],
) -> int:
    """Count submitted reviews written by internal contributors on ``items``.

    Pending reviews and reviews whose author account no longer exists are
    ignored.
    """
    count = 0
    for item in items:
        for review in github_client.list_reviews(item.repository, item.number):
            if review.state == PENDING_REVIEW_STATE or review.author is None:
                continue
            if classifier.is_internal(review.author):
                count += 1
    return count


def generate_metrics(
    github_client: GitHubClient,
    classifier: MembershipClassifier,
    config: Config,
    categories: Optional[Sequence[ResourceCategory]] = None,
) -> MetricSet:
    """Run the full collection and aggregation pipeline for one report.

    Args:
        github_client: Authenticated GitHub client.
        classifier: Membership classifier shared across all categories.
        config: Validated configuration providing the window and median mode.
        categories: Category descriptors; defaults to :func:`default_categories`.
            Categories are keyed by name, so ``rfcs``, ``prs`` and ``issues``
            must each be present.

    Returns:
        The immutable ``MetricSet`` for the configured window.

    Raises:
        TransportError: On the first failed GitHub request.
    """
    window = config.window
    collected: Dict[str, List[TrackedItem]] = {
        category.name: collect_category(github_client, category, window)
        for category in (categories or default_categories(config))
    }

    rfcs = filter_window(classifier.filter_external(collected[RFCS]), window)
    prs = filter_window(classifier.filter_external(collected[PULL_REQUESTS]), window)

    windowed_issues = filter_window(collected[ISSUES], window)
    external_issues = filter_window(classifier.filter_external(collected[ISSUES]), window)

    logger.info(
        "Filtered external contributions in window",
        extra={
            "rfcs": len(rfcs),
            "prs": len(prs),
            "issues": len(windowed_issues),
            "external_issues": len(external_issues),
        },
    )

    rfc_latencies = collect_latencies(github_client, rfcs)
    pr_latencies = collect_latencies(github_client, prs)
    issue_latencies = collect_latencies(github_client, external_issues)

    review_count = count_internal_reviews(github_client, classifier, rfcs + prs)

    return MetricSet(
        rfc_count=len(rfcs),
        pr_count=len(prs),
        issue_count=len(external_issues),
        review_count=review_count,
        median_response_seconds=median(rfc_latencies, pr_latencies, legacy=config.legacy_median),
        median_issue_response_seconds=median(issue_latencies, legacy=config.legacy_median),
        average_response_seconds=average(
            rfc_latencies + pr_latencies + issue_latencies,
            len(rfcs) + len(prs) + len(external_issues),
        ),
        good_first_issue_percentage=good_first_issue_percentage(windowed_issues),
        window=window,
    )
