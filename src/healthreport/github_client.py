"""GitHub REST API client for community health data retrieval."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import requests

from .config import Config
from .errors import PaginationLimitError, TransportError
from .models import ISSUE, PULL_REQUEST, Comment, Review, TrackedItem

logger = logging.getLogger(__name__)


class GitHubClient:
    """Small, typed client for the GitHub pull request, issue and org APIs."""

    _PAGE_SIZE = 100

    def __init__(self, config: Config, timeout_seconds: int = 30) -> None:
        """Initialize an authenticated GitHub API client.

        Args:
            config: Validated runtime configuration including owner and token.
            timeout_seconds: Per-request timeout in seconds.
        """
        self._owner = config.owner
        self._max_pages = config.max_pages
        self._timeout_seconds = timeout_seconds
        self._base_url = config.api_url.rstrip("/")

        self._session = requests.Session()
        self._session.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "Authorization": f"Bearer {config.token}",
            }
        )

    def _build_url(self, path: str) -> str:
        """Build a fully qualified API URL from a path below the API root."""
        return f"{self._base_url}/{path.lstrip('/')}"

    def _format_datetime(self, value: datetime) -> str:
        """Format a datetime as UTC ISO8601 suitable for GitHub query params."""
        utc_value = value.astimezone(timezone.utc)
        return utc_value.isoformat().replace("+00:00", "Z")

    def _parse_datetime(self, value: Optional[str]) -> Optional[datetime]:
        """Parse GitHub ISO8601 timestamps into timezone-aware datetimes."""
        if not value:
            return None

        normalized = value[:-1] + "+00:00" if value.endswith("Z") else value
        parsed = datetime.fromisoformat(normalized)
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed

    def _get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Execute a single GET request and return the decoded JSON payload.

        Failures are not retried; the first one aborts the run.

        Raises:
            TransportError: If the request fails, returns HTTP >= 400,
                or does not return valid JSON.
        """
        url = self._build_url(path)

        try:
            response = self._session.get(url, params=params, timeout=self._timeout_seconds)
        except requests.RequestException as exc:
            raise TransportError(f"GitHub request failed: GET {url}: {exc}") from exc

        status_code = response.status_code
        if status_code >= 400:
            if status_code in (403, 429) and response.headers.get("X-RateLimit-Remaining") == "0":
                raise TransportError(
                    f"GitHub API rate limit exceeded: GET {url} "
                    f"(resets at {response.headers.get('X-RateLimit-Reset', 'unknown')})"
                )
            raise TransportError(
                "GitHub API request failed: "
                f"GET {url} returned {status_code} - {response.text}"
            )

        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(f"GitHub API returned invalid JSON: GET {url}") from exc

    def paginate(self, path: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """Fetch every page of a listing endpoint.

        Pages of ``_PAGE_SIZE`` items are requested from page 1 upwards until the
        API returns an empty page. Items are returned in API order.

        Raises:
            TransportError: If any page request fails or is not a JSON array.
            PaginationLimitError: If more than ``max_pages`` requests would be needed.
        """
        items: List[Dict[str, Any]] = []
        page = 1

        while True:
            if page > self._max_pages:
                raise PaginationLimitError(
                    f"GitHub listing {path} did not end within {self._max_pages} pages."
                )

            query: Dict[str, Any] = dict(params or {})
            query["per_page"] = self._PAGE_SIZE
            query["page"] = page

            payload = self._get_json(path, params=query)
            if not isinstance(payload, list):
                raise TransportError(f"GitHub API returned unexpected payload shape: GET {path}")

            logger.debug(
                "Fetched listing page",
                extra={"path": path, "page": page, "items": len(payload)},
            )

            if not payload:
                return items

            items.extend(payload)
            page += 1

    def _login(self, payload: Optional[Dict[str, Any]]) -> Optional[str]:
        login = (payload or {}).get("login")
        return str(login) if login else None

    def _to_item(self, kind: str, repository: str, item: Dict[str, Any]) -> TrackedItem:
        number = item.get("number")
        author = self._login(item.get("user"))
        created_at = self._parse_datetime(item.get("created_at"))

        if number is None or author is None or created_at is None:
            raise TransportError(
                "GitHub payload is missing required fields: "
                f"repository={repository}, payload={item}"
            )

        labels = tuple(
            str(label["name"])
            for label in item.get("labels") or []
            if isinstance(label, dict) and label.get("name")
        )
        return TrackedItem(
            kind=kind,
            repository=repository,
            number=int(number),
            author=author,
            created_at=created_at,
            labels=labels,
        )

    def list_pull_requests(self, repository: str) -> List[TrackedItem]:
        """List every pull request of a repository regardless of state."""
        payload = self.paginate(
            f"repos/{self._owner}/{repository}/pulls",
            params={"state": "all"},
        )
        return [self._to_item(PULL_REQUEST, repository, item) for item in payload]

    def list_issues(self, repository: str, since: Optional[datetime] = None) -> List[TrackedItem]:
        """List issues of a repository updated at or after ``since``.

        GitHub returns pull requests from the issues endpoint as well; entries
        carrying a ``pull_request`` key are skipped.
        """
        params: Dict[str, Any] = {"state": "all"}
        if since is not None:
            params["since"] = self._format_datetime(since)

        payload = self.paginate(f"repos/{self._owner}/{repository}/issues", params=params)
        return [
            self._to_item(ISSUE, repository, item)
            for item in payload
            if "pull_request" not in item
        ]

    def list_user_organizations(self, login: str) -> List[str]:
        """List the public organization logins a user belongs to."""
        payload = self.paginate(f"users/{login}/orgs")
        return [str(org["login"]) for org in payload if org.get("login")]

    def list_reviews(self, repository: str, number: int) -> List[Review]:
        """List reviews submitted on a pull request."""
        payload = self.paginate(f"repos/{self._owner}/{repository}/pulls/{number}/reviews")
        return [
            Review(author=self._login(item.get("user")), state=str(item.get("state") or ""))
            for item in payload
        ]

    def _first_comment(self, path: str) -> Optional[Comment]:
        payload = self._get_json(
            path,
            params={"sort": "created", "direction": "asc", "per_page": 1, "page": 1},
        )
        if not isinstance(payload, list):
            raise TransportError(f"GitHub API returned unexpected payload shape: GET {path}")
        if not payload:
            return None

        first = payload[0]
        created_at = self._parse_datetime(first.get("created_at"))
        if created_at is None:
            raise TransportError(f"GitHub comment payload is missing 'created_at': GET {path}")

        return Comment(author=self._login(first.get("user")), created_at=created_at)

    def first_pull_request_comment(self, repository: str, number: int) -> Optional[Comment]:
        """Return the earliest review comment on a pull request, if any."""
        return self._first_comment(f"repos/{self._owner}/{repository}/pulls/{number}/comments")

    def first_issue_comment(self, repository: str, number: int) -> Optional[Comment]:
        """Return the earliest comment on an issue, if any."""
        return self._first_comment(f"repos/{self._owner}/{repository}/issues/{number}/comments")
