"""
Configuration loading for gh_tag_version.

Settings come from the GitHub Actions environment and may be overridden
on the command line. See :mod:`gh_tag_version.config.loader` for
implementation details.
"""

from .loader import ConfigError, load_config  # noqa: F401
