"""Plain-text rendering of a MetricSet."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from .models import MetricSet
from .stats import format_duration, format_percentage

COMMUNITY_HEALTH = "Community Health"
TEAM_EFFICIENCY = "Team Efficiency"

_TIMESTAMP_FORMAT = "%b %d %H:%M:%S %Y"


def build_sections(metrics: MetricSet) -> Dict[str, Dict[str, str]]:
    """Group formatted metric values under their report section titles."""
    return {
        COMMUNITY_HEALTH: {
            "RFCs from external contributors": str(metrics.rfc_count),
            "PRs from external contributors": str(metrics.pr_count),
            "Issues from external contributors": str(metrics.issue_count),
        },
        TEAM_EFFICIENCY: {
            "Count of RFC + PR reviews by team members": str(metrics.review_count),
            "Median response time to RFC + PR": format_duration(metrics.median_response_seconds),
            "Median response time to issues": format_duration(metrics.median_issue_response_seconds),
            "Average response time to RFC + PR + issues": format_duration(metrics.average_response_seconds),
            'Percentage of "good first issues"': format_percentage(metrics.good_first_issue_percentage),
        },
    }


def _format_timestamp(value: Optional[datetime]) -> str:
    if value is None:
        return "open"
    return value.strftime(_TIMESTAMP_FORMAT)


def _columns(rows: Dict[str, str]) -> List[str]:
    width = max((len(label) for label in rows), default=0)
    return [f"{label.ljust(width)}  {value}" for label, value in rows.items()]


def generate_report(metrics: MetricSet) -> str:
    """Generate the human-readable community health report.

    Each section is printed as a title followed by aligned label/value rows,
    and the report ends with the window boundaries.
    """
    lines: List[str] = []
    for title, rows in build_sections(metrics).items():
        lines.append(title)
        lines.extend(_columns(rows))
        lines.append("")

    lines.extend(
        _columns(
            {
                "from:": _format_timestamp(metrics.window.start),
                "to:": _format_timestamp(metrics.window.end),
            }
        )
    )
    return "\n".join(lines)
