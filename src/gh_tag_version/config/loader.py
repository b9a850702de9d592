"""
Configuration loader for gh_tag_version.

The tool runs as a step of a GitHub Actions workflow and takes its
settings from the environment the runner provides (``GITHUB_SHA``,
``GITHUB_REPOSITORY`` and friends). This loader collects those values,
validates them and returns a dictionary of settings.

If a required value is missing or a value has the wrong shape, a
:class:`ConfigError` is raised.
"""

from __future__ import annotations

import logging
import os
import re
from typing import Any, Dict, Mapping, Optional


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


DEFAULT_API_URL = "https://api.github.com"
DEFAULT_REQUEST_TIMEOUT = 30.0

_REPOSITORY = re.compile(r"^[A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+$")


class ConfigError(Exception):
    """Raised when the run configuration is missing or invalid."""

    pass


def _first(environ: Mapping[str, str], *names: str) -> Optional[str]:
    for name in names:
        value = environ.get(name)
        if value:
            return value
    return None


def validate_config(data: Dict[str, Any]) -> Dict[str, Any]:
    """Validate a configuration dictionary and return it.

    Raises:
        ConfigError: If a required key is missing or a value is invalid.
    """
    required_keys = ["repository", "sha"]
    missing = [key for key in required_keys if not data.get(key)]
    if missing:
        logger.error("Configuration missing required keys: %s", missing)
        raise ConfigError(f"Missing required configuration keys: {', '.join(missing)}")

    if not isinstance(data["repository"], str) or not _REPOSITORY.match(data["repository"]):
        raise ConfigError(
            f"'repository' must have the form 'owner/name', got {data['repository']!r}"
        )
    if not isinstance(data["sha"], str):
        raise ConfigError("'sha' must be a string")
    if not isinstance(data.get("api_url"), str) or not data["api_url"].startswith(
        ("http://", "https://")
    ):
        raise ConfigError(f"'api_url' must be an http(s) URL, got {data.get('api_url')!r}")

    timeout = data.get("request_timeout")
    if isinstance(timeout, str):
        try:
            timeout = float(timeout)
        except ValueError as exc:
            raise ConfigError(f"'request_timeout' must be a number, got {timeout!r}") from exc
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ConfigError("'request_timeout' must be a positive number")
    data["request_timeout"] = float(timeout)

    return data


def load_config(
    environ: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """Load the run configuration from the environment and return it.

    Args:
        environ: Environment to read. Defaults to ``os.environ``.
        overrides: Values taking precedence over the environment, such as
                   command line options. ``None`` entries are ignored.

    Returns:
        A dictionary containing the validated configuration with keys:
        - repository (str): ``owner/name`` of the repository
        - sha (str): The commit to describe
        - token (str|None): API token (``INPUT_TOKEN`` or ``GITHUB_TOKEN``)
        - api_url (str): Base URL of the GitHub API
        - env_file (str|None): Path of the ``GITHUB_ENV`` file
        - output_file (str|None): Path of the ``GITHUB_OUTPUT`` file
        - request_timeout (float): Request timeout in seconds

    Raises:
        ConfigError: If the configuration is incomplete or invalid.
    """
    if environ is None:
        environ = os.environ

    data: Dict[str, Any] = {
        "repository": _first(environ, "GITHUB_REPOSITORY"),
        "sha": _first(environ, "GITHUB_SHA"),
        "token": _first(environ, "INPUT_TOKEN", "GITHUB_TOKEN"),
        "api_url": _first(environ, "GITHUB_API_URL") or DEFAULT_API_URL,
        "env_file": _first(environ, "GITHUB_ENV"),
        "output_file": _first(environ, "GITHUB_OUTPUT"),
        "request_timeout": _first(environ, "INPUT_REQUEST_TIMEOUT") or DEFAULT_REQUEST_TIMEOUT,
    }
    for key, value in (overrides or {}).items():
        if value is not None:
            data[key] = value

    validate_config(data)
    logger.debug(
        "Loaded configuration for %s at %s (token %s)",
        data["repository"],
        data["sha"],
        "set" if data["token"] else "not set",
    )
    return data
