"""Command-line argument parsing for the community health report."""

from __future__ import annotations

import argparse
from datetime import datetime, timezone
from typing import Optional, Sequence

from dateutil.relativedelta import relativedelta

from .config import (
    DEFAULT_INTERNAL_ORGANIZATIONS,
    DEFAULT_MAX_PAGES,
    DEFAULT_OWNER,
    DEFAULT_REPOSITORIES,
    DEFAULT_RFC_REPOSITORY,
)
from .models import TimeWindow

DEFAULT_MONTHS = 3


def _positive_int(value: str) -> int:
    """Parse and validate a positive integer CLI value.

    Raises:
        argparse.ArgumentTypeError: If value is not a positive integer.
    """
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("must be an integer") from exc

    if parsed <= 0:
        raise argparse.ArgumentTypeError("must be greater than 0")

    return parsed


def _utc_date(value: str) -> datetime:
    """Parse a ``YYYY-MM-DD`` CLI value as midnight UTC."""
    try:
        parsed = datetime.strptime(value, "%Y-%m-%d")
    except ValueError as exc:
        raise argparse.ArgumentTypeError("must be a date formatted as YYYY-MM-DD") from exc

    return parsed.replace(tzinfo=timezone.utc)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments for report generation.

    Returns:
        Parsed CLI arguments. ``since``/``until`` select a fixed window and
        ``months`` a window open towards now; ``months`` defaults to
        ``DEFAULT_MONTHS`` when no ``--since`` is given.
    """
    parser = argparse.ArgumentParser(
        prog="community-health-report",
        description=(
            "Generate community health and team efficiency metrics for a GitHub "
            "organization (external contributions, review counts, response times)."
        ),
    )

    parser.add_argument(
        "--owner",
        default=DEFAULT_OWNER,
        help=f"GitHub organization owning the repositories (default: {DEFAULT_OWNER}).",
    )
    parser.add_argument(
        "--rfc-repo",
        default=DEFAULT_RFC_REPOSITORY,
        help=f"Repository whose pull requests are RFCs (default: {DEFAULT_RFC_REPOSITORY}).",
    )
    parser.add_argument(
        "--repo",
        dest="repos",
        action="append",
        default=None,
        help="Project repository to analyze (repeatable; default: %s)." % ", ".join(DEFAULT_REPOSITORIES),
    )
    parser.add_argument(
        "--internal-org",
        dest="internal_orgs",
        action="append",
        default=None,
        help="Organization login treated as internal (repeatable).",
    )
    parser.add_argument(
        "--since",
        type=_utc_date,
        default=None,
        help="Start of the reporting window (YYYY-MM-DD, exclusive).",
    )
    parser.add_argument(
        "--until",
        type=_utc_date,
        default=None,
        help="End of the reporting window (YYYY-MM-DD, exclusive). Requires --since.",
    )
    parser.add_argument(
        "--months",
        type=_positive_int,
        default=None,
        help=f"Report on the last N months up to now (default: {DEFAULT_MONTHS}).",
    )
    parser.add_argument(
        "--max-pages",
        type=_positive_int,
        default=DEFAULT_MAX_PAGES,
        help=f"Maximum pages fetched per listing (default: {DEFAULT_MAX_PAGES}).",
    )
    parser.add_argument(
        "--legacy-median",
        action="store_true",
        help="Use the historical median rule instead of the conventional median.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    args = parser.parse_args(argv)

    if args.until is not None and args.since is None:
        parser.error("--until requires --since")
    if args.months is not None and args.since is not None:
        parser.error("--months cannot be combined with --since")

    if args.since is None and args.months is None:
        args.months = DEFAULT_MONTHS
    if args.repos is None:
        args.repos = list(DEFAULT_REPOSITORIES)
    if args.internal_orgs is None:
        args.internal_orgs = list(DEFAULT_INTERNAL_ORGANIZATIONS)

    return args


def build_window(args: argparse.Namespace, now: Optional[datetime] = None) -> TimeWindow:
    """Translate parsed arguments into the reporting ``TimeWindow``."""
    if args.since is not None:
        return TimeWindow(start=args.since, end=args.until)

    current = now or datetime.now(timezone.utc)
    return TimeWindow(start=current - relativedelta(months=args.months))
