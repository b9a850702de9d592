import logging
from collections import deque
from typing import Dict, Iterable, List, Sequence, Tuple

import pytest

from gh_tag_version.history.models import RawCommit, Tag


class FakeGitHub:
    """In-memory stand-in for :class:`GitHubClient`.

    ``parents`` maps each commit sha to its parent shas. History listings
    start at the requested sha and walk its ancestry breadth first, which
    keeps the "most recent first" shape of the real endpoint.
    """

    def __init__(self, parents: Dict[str, Sequence[str]], tags: Iterable[Tuple[str, str]] = ()):
        self.parents = {sha: tuple(ps) for sha, ps in parents.items()}
        self.tags = [Tag(name=name, commit_sha=sha) for name, sha in tags]
        self.tag_calls: List[Tuple[int, int]] = []
        self.commit_calls: List[Tuple[str, int, int]] = []

    def history(self, sha: str) -> List[str]:
        if sha not in self.parents:
            return []
        order = []
        seen = {sha}
        queue = deque([sha])
        while queue:
            current = queue.popleft()
            order.append(current)
            for parent in self.parents[current]:
                if parent not in seen:
                    seen.add(parent)
                    queue.append(parent)
        return order

    def list_tags(self, page: int, per_page: int) -> List[Tag]:
        self.tag_calls.append((page, per_page))
        return self.tags[page * per_page:(page + 1) * per_page]

    def list_commits(self, sha: str, page: int, per_page: int) -> List[RawCommit]:
        self.commit_calls.append((sha, page, per_page))
        shas = self.history(sha)[page * per_page:(page + 1) * per_page]
        return [RawCommit(sha=s, parent_shas=self.parents[s]) for s in shas]


def linear_history(length: int) -> Dict[str, List[str]]:
    """Return ``C0 <- C1 <- ... <- C{length-1}`` with C0 as the root."""
    return {f"C{i}": ([f"C{i - 1}"] if i else []) for i in range(length)}


@pytest.fixture
def fake_github():
    return FakeGitHub


@pytest.fixture
def linear():
    return linear_history


@pytest.fixture(autouse=True)
def reset_root_logging():
    """Drop handlers the CLI installs so later tests never log to a closed stream."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
