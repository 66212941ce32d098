"""Tests for first-response latency extraction."""

import sys
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import Mock

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from healthreport.latency import collect_latencies, first_response_latency
from healthreport.models import ISSUE, PULL_REQUEST, Comment, TrackedItem
from healthreport.stats import median


def _utc(hour: int, minute: int = 0) -> datetime:
    return datetime(2021, 6, 1, hour, minute, tzinfo=timezone.utc)


def _make_item(number: int = 1, kind: str = PULL_REQUEST, created_at: datetime | None = None) -> TrackedItem:
    return TrackedItem(
        kind=kind,
        repository="pack",
        number=number,
        author="alice",
        created_at=created_at or _utc(10),
    )


def test_first_response_latency_pull_request_uses_review_comments():
    """Verify pull request latency is measured to the first review comment."""
    client = Mock()
    client.first_pull_request_comment.return_value = Comment(author="bob", created_at=_utc(10, 8))

    result = first_response_latency(client, _make_item(number=4))

    assert result == 8 * 60
    client.first_pull_request_comment.assert_called_once_with("pack", 4)
    client.first_issue_comment.assert_not_called()


def test_first_response_latency_issue_uses_issue_comments():
    """Verify issue latency is measured to the first issue comment."""
    client = Mock()
    client.first_issue_comment.return_value = Comment(author="bob", created_at=_utc(12))

    result = first_response_latency(client, _make_item(number=9, kind=ISSUE))

    assert result == 2 * 3600
    client.first_issue_comment.assert_called_once_with("pack", 9)


def test_first_response_latency_no_comments_returns_none():
    """Verify an item without comments has no latency."""
    client = Mock()
    client.first_pull_request_comment.return_value = None

    assert first_response_latency(client, _make_item()) is None


def test_first_response_latency_keeps_negative_durations():
    """Verify a comment dated before the item yields a negative latency."""
    client = Mock()
    client.first_pull_request_comment.return_value = Comment(author="bob", created_at=_utc(9, 30))

    assert first_response_latency(client, _make_item()) == -30 * 60


def test_collect_latencies_skips_items_without_comments():
    """Verify latencies {10m, absent, 30m} give two samples with a 20m median."""
    comments = {
        1: Comment(author="bob", created_at=_utc(10, 10)),
        2: None,
        3: Comment(author="carol", created_at=_utc(10, 30)),
    }
    client = Mock()
    client.first_pull_request_comment.side_effect = lambda repository, number: comments[number]
    items = [_make_item(number=n) for n in (1, 2, 3)]

    latencies = collect_latencies(client, items)

    assert latencies == [600.0, 1800.0]
    assert median(latencies) == 1200.0
