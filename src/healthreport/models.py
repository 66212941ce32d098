"""Domain models for community health report processing.

These dataclasses intentionally model only the subset of GitHub payload fields
that are required for metric computation.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

PULL_REQUEST = "pull_request"
ISSUE = "issue"


@dataclass(frozen=True, slots=True)
class TrackedItem:
    """A pull request, RFC or issue collected from a repository."""

    kind: str
    repository: str
    number: int
    author: str
    created_at: datetime
    labels: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Review:
    """A pull request review; ``author`` is ``None`` for deleted accounts."""

    author: Optional[str]
    state: str


@dataclass(frozen=True, slots=True)
class Comment:
    """Represents the minimal comment data used to find the first response."""

    author: Optional[str]
    created_at: datetime


@dataclass(frozen=True, slots=True)
class TimeWindow:
    """Reporting period; a window without ``end`` is bounded only below."""

    start: datetime
    end: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.end is None


@dataclass(frozen=True, slots=True)
class ResourceCategory:
    """Describes one collection fed through the aggregation pipeline."""

    name: str
    kind: str
    repositories: Tuple[str, ...]


@dataclass(frozen=True, slots=True)
class MetricSet:
    """Final report values; ``None`` marks a metric undefined for empty input."""

    rfc_count: int
    pr_count: int
    issue_count: int
    review_count: int
    median_response_seconds: Optional[float]
    median_issue_response_seconds: Optional[float]
    average_response_seconds: Optional[float]
    good_first_issue_percentage: Optional[float]
    window: TimeWindow
