"""
Client for the GitHub REST API.

Only the two paginated list endpoints needed to resolve a version are
wrapped: repository tags and commit history. On error conditions (HTTP
errors, timeouts, unexpected payloads) a :class:`GitHubError` is raised.
Nothing is retried.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

from gh_tag_version.history.models import RawCommit, Tag


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


DEFAULT_API_URL = "https://api.github.com"
API_VERSION = "2022-11-28"


class GitHubError(Exception):
    """Raised when communication with the GitHub API fails."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass
class GitHubClient:
    """Client for listing tags and commits of one repository.

    Parameters
    ----------
    repository : str
        Repository in ``owner/name`` form, e.g. ``"octo-org/octo-repo"``.
    token : str, optional
        Token sent as a bearer ``Authorization`` header. Public
        repositories can be read without one, at a lower rate limit.
    api_url : str, optional
        Base URL of the API. Defaults to ``https://api.github.com``;
        GitHub Enterprise installations expose their own.
    request_timeout : float, optional
        Timeout in seconds for each HTTP request. Defaults to 30 seconds.

    Notes
    -----
    Page arguments are zero-based indexes. GitHub numbers pages from 1
    and serves page 1 for ``page=0``, so the index is shifted by one on
    the wire.
    """

    repository: str
    token: Optional[str] = None
    api_url: str = DEFAULT_API_URL
    request_timeout: float = 30.0

    def _endpoint(self, resource: str) -> str:
        return f"{self.api_url.rstrip('/')}/repos/{self.repository}/{resource}"

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": API_VERSION,
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _get(self, resource: str, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Issue a GET request and return the decoded JSON list.

        Raises
        ------
        GitHubError
            If the request fails, the status is not 200 or the body is
            not a JSON list.
        """
        url = self._endpoint(resource)
        logger.debug("GET %s params=%s", url, params)
        try:
            response = requests.get(
                url,
                headers=self._headers(),
                params=params,
                timeout=self.request_timeout,
            )
        except requests.RequestException as exc:
            logger.error("Request to %s failed: %s", url, exc)
            raise GitHubError(f"Request to {url} failed: {exc}") from exc
        if response.status_code != 200:
            logger.error(
                "GitHub returned non-200 status %s: %s", response.status_code, response.text
            )
            raise GitHubError(
                f"GitHub returned status {response.status_code} for {url}: {response.text}",
                status_code=response.status_code,
            )
        try:
            data = response.json()
        except (json.JSONDecodeError, ValueError) as exc:
            logger.error("Failed to parse GitHub response: %s", exc)
            raise GitHubError(f"Failed to parse GitHub response from {url}") from exc
        if not isinstance(data, list):
            raise GitHubError(f"Unexpected response structure from {url}: expected a list")
        return data

    def list_tags(self, page: int, per_page: int) -> List[Tag]:
        """Return one page of repository tags.

        Parameters
        ----------
        page : int
            Zero-based page index.
        per_page : int
            Page size; GitHub caps it at 100.
        """
        items = self._get("tags", {"per_page": per_page, "page": page + 1})
        try:
            return [Tag(name=item["name"], commit_sha=item["commit"]["sha"]) for item in items]
        except (KeyError, TypeError) as exc:
            raise GitHubError(f"Malformed tag entry in GitHub response: {exc!r}") from exc

    def list_commits(self, sha: str, page: int, per_page: int) -> List[RawCommit]:
        """Return one page of the history reachable from ``sha``.

        Commits come back most recent first, so page 0 starts with
        ``sha`` itself.
        """
        items = self._get("commits", {"sha": sha, "per_page": per_page, "page": page + 1})
        try:
            return [
                RawCommit(
                    sha=item["sha"],
                    parent_shas=tuple(parent["sha"] for parent in item.get("parents", [])),
                )
                for item in items
            ]
        except (KeyError, TypeError, AttributeError) as exc:
            raise GitHubError(f"Malformed commit entry in GitHub response: {exc!r}") from exc
