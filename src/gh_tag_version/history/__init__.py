"""
Commit history traversal for gh_tag_version.

This package builds the tag index, lazily materialises the commit
ancestry graph and searches it for the closest tag. See
:mod:`gh_tag_version.history.closest_tag` for the search itself.
"""

from .closest_tag import find_closest_tag  # noqa: F401
from .commit_graph import CommitGraphProvider, CommitResolutionError  # noqa: F401
from .models import CommitNode, RawCommit, Tag, TagDistance  # noqa: F401
from .tag_index import build_tag_index  # noqa: F401
