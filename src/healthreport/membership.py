"""Internal/external contributor classification.

A contributor is internal when any of their public GitHub organizations is one
of the configured sponsor aliases. Verdicts are memoized in a
:class:`MembershipCache` so each login costs at most one organization lookup
per run, no matter how many items it authors or reviews.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from .github_client import GitHubClient
from .models import TrackedItem

logger = logging.getLogger(__name__)


class MembershipCache:
    """Login to "is internal" verdicts recorded for the lifetime of one run."""

    def __init__(self) -> None:
        self._verdicts: Dict[str, bool] = {}
        self.hits = 0
        self.misses = 0

    def __contains__(self, login: str) -> bool:
        return login in self._verdicts

    def __len__(self) -> int:
        return len(self._verdicts)

    def get(self, login: str) -> Optional[bool]:
        verdict = self._verdicts.get(login)
        if verdict is None:
            self.misses += 1
        else:
            self.hits += 1
        return verdict

    def record(self, login: str, is_internal: bool) -> None:
        # Verdicts are never overwritten.
        self._verdicts.setdefault(login, is_internal)


class MembershipClassifier:
    """Classifies contributors against the sponsor organization allow-list."""

    def __init__(
        self,
        client: GitHubClient,
        internal_organizations: Iterable[str],
        cache: Optional[MembershipCache] = None,
    ) -> None:
        self._client = client
        self._internal_organizations = frozenset(internal_organizations)
        self.cache = cache if cache is not None else MembershipCache()

    def is_internal(self, login: str) -> bool:
        """Return whether ``login`` belongs to a sponsor organization.

        The first call for a login fetches its organizations; every later call
        is answered from the cache.

        Raises:
            TransportError: If the organization lookup fails.
        """
        verdict = self.cache.get(login)
        if verdict is not None:
            return verdict

        organizations = self._client.list_user_organizations(login)
        verdict = not self._internal_organizations.isdisjoint(organizations)
        self.cache.record(login, verdict)

        logger.debug(
            "Classified contributor",
            extra={"login": login, "internal": verdict, "organizations": organizations},
        )
        return verdict

    def is_external(self, login: str) -> bool:
        return not self.is_internal(login)

    def filter_external(self, items: Iterable[TrackedItem]) -> List[TrackedItem]:
        """Keep only items authored by external contributors, in input order."""
        external = [item for item in items if self.is_external(item.author)]

        logger.debug(
            "Filtered external contributions",
            extra={
                "external_items": len(external),
                "cached_logins": len(self.cache),
                "cache_hits": self.cache.hits,
                "cache_misses": self.cache.misses,
            },
        )
        return external
