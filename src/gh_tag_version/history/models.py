"""
Data models for commit history traversal.

:class:`Tag` and :class:`RawCommit` mirror the records returned by the
GitHub list endpoints. :class:`CommitNode` is the unit walked by the
closest-tag search; its parents are resolved lazily through a provider
callable so that history is only fetched as far as the search needs it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, ClassVar, List, Tuple


@dataclass(frozen=True)
class Tag:
    """A tag as listed by the hosting service.

    Attributes
    ----------
    name : str
        The tag name, e.g. ``"v1.2.0"``.
    commit_sha : str
        Identifier of the commit the tag points at.
    """

    name: str
    commit_sha: str


@dataclass(frozen=True)
class RawCommit:
    """A commit record as listed by the hosting service.

    Attributes
    ----------
    sha : str
        The commit identifier.
    parent_shas : Tuple[str, ...]
        Parent identifiers in the order returned by the service. Merge
        commits have several, root commits none.
    """

    sha: str
    parent_shas: Tuple[str, ...] = ()


@dataclass(frozen=True)
class TagDistance:
    """Result of a closest-tag search.

    ``distance`` is the number of edges between the start commit and the
    tagged commit, or ``-1`` when no tag is reachable.
    """

    tag: str
    distance: int

    NOT_FOUND: ClassVar["TagDistance"]

    @property
    def found(self) -> bool:
        return self.distance >= 0


TagDistance.NOT_FOUND = TagDistance(tag="", distance=-1)


@dataclass(frozen=True)
class CommitNode:
    """A commit in the ancestry graph whose parents are fetched on demand.

    Nodes are cheap to create and hold no traversal state. The durable
    state lives in the provider's commit cache.
    """

    sha: str
    parent_shas: Tuple[str, ...]
    provider: Callable[[str], RawCommit] = field(repr=False, compare=False)

    @classmethod
    def from_raw(cls, raw: RawCommit, provider: Callable[[str], RawCommit]) -> "CommitNode":
        return cls(sha=raw.sha, parent_shas=raw.parent_shas, provider=provider)

    def parents(self) -> List["CommitNode"]:
        """Resolve every parent into a node, preserving parent order."""
        return [CommitNode.from_raw(self.provider(sha), self.provider) for sha in self.parent_shas]
