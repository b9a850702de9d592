"""
Propagation of results to the workflow.

A step publishes outputs by appending ``name=value`` lines to the file
named by ``GITHUB_OUTPUT`` and exports environment variables for later
steps through the file named by ``GITHUB_ENV``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


class OutputError(Exception):
    """Raised when a workflow command file cannot be written."""

    pass


def _append_line(path: Union[str, Path], key: str, value: str) -> None:
    if "\n" in value or "\r" in value:
        raise OutputError(f"Value for {key} must be a single line")
    try:
        with open(path, "a", encoding="utf-8") as fh:
            fh.write(f"{key}={value}\n")
    except OSError as exc:
        logger.error("Failed to write %s to %s: %s", key, path, exc)
        raise OutputError(f"Failed to write {key} to {path}: {exc}") from exc


def set_output(name: str, value: str, output_file: Optional[Union[str, Path]]) -> bool:
    """Publish a step output. Returns False when no output file is configured."""
    if not output_file:
        logger.debug("GITHUB_OUTPUT not set; skipping output %s", name)
        return False
    _append_line(output_file, name, value)
    logger.debug("Set output %s=%s", name, value)
    return True


def export_variable(name: str, value: str, env_file: Optional[Union[str, Path]]) -> bool:
    """Export an environment variable to later steps of the job."""
    if not env_file:
        logger.debug("GITHUB_ENV not set; skipping variable %s", name)
        return False
    _append_line(env_file, name, value)
    logger.debug("Exported %s=%s", name, value)
    return True
