"""
Lazy commit graph backed by the paginated commit history endpoint.

GitHub offers no point lookup for a commit's parents through the list
API, only "history starting at X". :class:`CommitGraphProvider` therefore
resolves a sha by paging through the history rooted at it and caching
every commit it sees. Resolving a deep ancestor primes the cache with
many of its own ancestors, so later lookups are usually free.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict

from gh_tag_version.history.models import CommitNode, RawCommit

if TYPE_CHECKING:
    from gh_tag_version.github.client import GitHubClient


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


PAGE_SIZE = 100


class CommitResolutionError(Exception):
    """Raised when a commit is still unknown after its history ran out.

    This means the service did not return a commit it should have, e.g.
    for an unreachable or malformed sha. It is an invariant violation,
    not a "not found" result.
    """

    def __init__(self, sha: str, page: int, cached: Dict[str, RawCommit]) -> None:
        self.sha = sha
        self.page = page
        self.cached_shas = sorted(cached)
        super().__init__(
            f"Commit {sha} was not returned by its own history "
            f"(page={page}, cached={len(self.cached_shas)}: {self.cached_shas})"
        )


class CommitGraphProvider:
    """Fetches and caches commits on demand.

    Parameters
    ----------
    client : GitHubClient
        Client used to list commit history.
    page_size : int
        Number of commits requested per page.
    """

    def __init__(self, client: "GitHubClient", page_size: int = PAGE_SIZE) -> None:
        self.client = client
        self.page_size = page_size
        self._commits: Dict[str, RawCommit] = {}
        self.fetch_count = 0

    def __contains__(self, sha: str) -> bool:
        return sha in self._commits

    def __len__(self) -> int:
        return len(self._commits)

    def resolve(self, sha: str) -> RawCommit:
        """Return the commit ``sha``, fetching history pages if needed.

        Cached commits are returned without a request. Otherwise pages of
        history rooted at ``sha`` are fetched until ``sha`` is cached or a
        short page signals the end of history. A full page is always
        cached before the check, so neighbours of ``sha`` get cached too.

        Raises
        ------
        GitHubError
            If a page request fails.
        CommitResolutionError
            If ``sha`` is still missing once its history is exhausted.
        """
        commit = self._commits.get(sha)
        if commit is not None:
            return commit

        page = 0
        while sha not in self._commits:
            commits = self.client.list_commits(sha, page=page, per_page=self.page_size)
            self.fetch_count += 1
            logger.debug(
                "Fetched history page %d rooted at %s with %d commit(s)", page, sha, len(commits)
            )
            for raw in commits:
                # Entries are never overwritten once cached.
                self._commits.setdefault(raw.sha, raw)
            page += 1
            if len(commits) < self.page_size:
                break

        commit = self._commits.get(sha)
        if commit is None:
            logger.error("Commit %s missing after exhausting its history", sha)
            raise CommitResolutionError(sha, page, self._commits)
        return commit

    def node(self, sha: str) -> CommitNode:
        """Return a lazily expanding node for ``sha``."""
        return CommitNode.from_raw(self.resolve(sha), self.resolve)
