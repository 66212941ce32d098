"""Tests for command-line argument parsing and window construction."""

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from healthreport.cli import DEFAULT_MONTHS, build_window, parse_args
from healthreport.config import DEFAULT_INTERNAL_ORGANIZATIONS, DEFAULT_REPOSITORIES


def test_parse_args_defaults(monkeypatch):
    """Verify defaults select the built-in repositories and the last-months window."""
    monkeypatch.setattr(sys, "argv", ["community-health-report"])

    args = parse_args()

    assert args.owner == "buildpacks"
    assert args.rfc_repo == "rfcs"
    assert args.repos == list(DEFAULT_REPOSITORIES)
    assert args.internal_orgs == list(DEFAULT_INTERNAL_ORGANIZATIONS)
    assert args.since is None
    assert args.months == DEFAULT_MONTHS
    assert args.legacy_median is False


def test_parse_args_with_bounded_window_and_repeated_options(monkeypatch):
    """Verify repeatable options and a two-sided window are parsed."""
    monkeypatch.setattr(
        sys,
        "argv",
        [
            "community-health-report",
            "--repo",
            "pack",
            "--repo",
            "lifecycle",
            "--internal-org",
            "vmware",
            "--since",
            "2021-05-01",
            "--until",
            "2021-07-31",
            "--max-pages",
            "50",
            "--legacy-median",
        ],
    )

    args = parse_args()

    assert args.repos == ["pack", "lifecycle"]
    assert args.internal_orgs == ["vmware"]
    assert args.since == datetime(2021, 5, 1, tzinfo=timezone.utc)
    assert args.until == datetime(2021, 7, 31, tzinfo=timezone.utc)
    assert args.months is None
    assert args.max_pages == 50
    assert args.legacy_median is True


@pytest.mark.parametrize(
    "argv",
    [
        ["--until", "2021-07-31"],
        ["--since", "2021-05-01", "--months", "2"],
        ["--since", "05/01/2021"],
        ["--months", "0"],
        ["--max-pages", "-1"],
    ],
)
def test_parse_args_rejects_invalid_combinations(monkeypatch, argv):
    """Verify invalid dates, non-positive counts and conflicting window options exit."""
    monkeypatch.setattr(sys, "argv", ["community-health-report", *argv])

    with pytest.raises(SystemExit):
        parse_args()


def test_build_window_from_since_and_until():
    """Verify --since/--until produce a bounded window."""
    args = parse_args(["--since", "2021-05-01", "--until", "2021-07-31"])

    window = build_window(args)

    assert window.start == datetime(2021, 5, 1, tzinfo=timezone.utc)
    assert window.end == datetime(2021, 7, 31, tzinfo=timezone.utc)


def test_build_window_from_since_only_is_open():
    """Verify --since alone produces a window bounded only below."""
    window = build_window(parse_args(["--since", "2021-05-01"]))

    assert window.end is None


def test_build_window_from_months_counts_back_from_now():
    """Verify --months produces an open window starting N calendar months ago."""
    now = datetime(2021, 8, 15, 9, 30, tzinfo=timezone.utc)

    window = build_window(parse_args(["--months", "3"]), now=now)

    assert window.start == datetime(2021, 5, 15, 9, 30, tzinfo=timezone.utc)
    assert window.end is None


def test_build_window_months_clamps_day_and_crosses_years():
    """Verify month stepping clamps to the month length and wraps into the previous year."""
    one_month = parse_args(["--months", "1"])
    two_months = parse_args(["--months", "2"])

    assert build_window(one_month, now=datetime(2021, 3, 31, tzinfo=timezone.utc)).start == datetime(
        2021, 2, 28, tzinfo=timezone.utc
    )
    assert build_window(one_month, now=datetime(2020, 3, 31, tzinfo=timezone.utc)).start == datetime(
        2020, 2, 29, tzinfo=timezone.utc
    )
    assert build_window(two_months, now=datetime(2021, 1, 15, tzinfo=timezone.utc)).start == datetime(
        2020, 11, 15, tzinfo=timezone.utc
    )
