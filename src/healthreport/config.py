"""Configuration parsing and validation for the community health report."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Sequence, Tuple

from .errors import AuthenticationError, ConfigurationError
from .models import TimeWindow

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_OWNER = "buildpacks"
DEFAULT_RFC_REPOSITORY = "rfcs"
DEFAULT_REPOSITORIES: Tuple[str, ...] = ("pack", "lifecycle", "spec", "imgutil", "docs")
DEFAULT_INTERNAL_ORGANIZATIONS: Tuple[str, ...] = (
    "pivotal",
    "pivotal-legacy",
    "vmware",
    "vmware-tanzu",
)
DEFAULT_MAX_PAGES = 1000


@dataclass(frozen=True)
class Config:
    """Validated runtime settings used by the report generator."""

    owner: str
    rfc_repository: str
    repositories: Tuple[str, ...]
    internal_organizations: Tuple[str, ...]
    window: TimeWindow
    token: str
    max_pages: int = DEFAULT_MAX_PAGES
    legacy_median: bool = False
    api_url: str = DEFAULT_API_URL


def load_config(
    owner: str,
    rfc_repository: str,
    repositories: Sequence[str],
    internal_organizations: Sequence[str],
    window: TimeWindow,
    max_pages: int = DEFAULT_MAX_PAGES,
    legacy_median: bool = False,
) -> Config:
    """Build and validate application configuration.

    Args:
        owner: GitHub organization or user owning the repositories.
        rfc_repository: Repository whose pull requests are counted as RFCs.
        repositories: Project repositories queried for pull requests and issues.
        internal_organizations: Organization logins treated as the sponsor.
        window: Reporting period.
        max_pages: Upper bound on pages fetched from a single listing endpoint.
        legacy_median: Use the historical even-length median rule.

    Returns:
        A validated ``Config`` instance.

    Raises:
        ConfigurationError: If repositories or organizations are empty, or
            ``max_pages`` is not greater than ``0``.
        AuthenticationError: If ``GITHUB_TOKEN`` is not configured.
    """
    repos = tuple(name.strip() for name in repositories if name.strip())
    if not repos:
        raise ConfigurationError("At least one repository must be configured.")

    orgs = tuple(name.strip() for name in internal_organizations if name.strip())
    if not orgs:
        raise ConfigurationError("At least one internal organization must be configured.")

    if max_pages <= 0:
        raise ConfigurationError("Invalid value for 'max_pages': expected an integer greater than 0.")

    token: str = os.getenv("GITHUB_TOKEN", "").strip()
    if not token:
        raise AuthenticationError(
            "Missing required env var 'GITHUB_TOKEN'. "
            "Set it to a GitHub token before running the report generator."
        )

    return Config(
        owner=owner,
        rfc_repository=rfc_repository,
        repositories=repos,
        internal_organizations=orgs,
        window=window,
        token=token,
        max_pages=max_pages,
        legacy_median=legacy_median,
    )
