"""
Formatting of the resolved version string.

The format follows ``git describe``: the tag itself on a tagged commit,
``{tag}-{distance}-{sha}`` on a descendant, and the bare sha when no tag
is reachable.
"""

from __future__ import annotations

from gh_tag_version.history.models import TagDistance


def format_version(result: TagDistance, sha: str) -> str:
    if result.distance < 0:
        return sha
    if result.distance == 0:
        return result.tag
    return f"{result.tag}-{result.distance}-{sha}"
