"""
Breadth-first search for the nearest tagged ancestor.

Traversal is strictly level by level and every commit is expanded at most
once, so the first tagged commit reached is at the minimum distance from
the start. Among tagged commits at the same depth the one enqueued first
wins, which follows the parent order reported by the service.
"""

from __future__ import annotations

import logging
from typing import List, Mapping, Set

from gh_tag_version.history.models import CommitNode, TagDistance


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


def find_closest_tag(tag_index: Mapping[str, str], start: CommitNode) -> TagDistance:
    """Find the tag nearest to ``start`` in its ancestry.

    Parameters
    ----------
    tag_index : Mapping[str, str]
        Mapping of commit sha to tag name.
    start : CommitNode
        The commit to describe.

    Returns
    -------
    TagDistance
        The tag and its edge distance from ``start``, or
        :attr:`TagDistance.NOT_FOUND` when no ancestor is tagged.
    """
    frontier: List[CommitNode] = [start]
    visited: Set[str] = set()
    depth = 0

    while frontier:
        next_frontier: List[CommitNode] = []
        for node in frontier:
            # Merge commits make shared ancestors reachable more than once.
            if node.sha in visited:
                continue
            tag = tag_index.get(node.sha)
            if tag is not None:
                logger.debug("Found tag %s on %s at distance %d", tag, node.sha, depth)
                return TagDistance(tag=tag, distance=depth)
            visited.add(node.sha)
            next_frontier.extend(node.parents())
        frontier = next_frontier
        depth += 1

    logger.debug("No tag reachable from %s after visiting %d commit(s)", start.sha, len(visited))
    return TagDistance.NOT_FOUND
