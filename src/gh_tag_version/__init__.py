"""
Top-level package for gh_tag_version.

This package derives a ``git describe`` style version for a commit from
the tags and history exposed by the GitHub REST API. The command line
entry point lives in :mod:`gh_tag_version.cli`.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
