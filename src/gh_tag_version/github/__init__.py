"""
GitHub integration for gh_tag_version.

This package contains the :class:`GitHubClient` used to page through a
repository's tags and commit history.
"""

from .client import GitHubClient, GitHubError  # noqa: F401
