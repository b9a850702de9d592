"""
Command line interface for the gh_tag_version tool.

This module defines the ``main`` function which is used as the entry
point when executing the ``gh-tag-version`` command. It loads the run
configuration, indexes the repository's tags, searches the history of
the target commit for the closest tag, and publishes the resulting
version string to stdout and to the workflow's output files.
"""

from __future__ import annotations

import logging
from typing import Optional

import click

from gh_tag_version import __version__
from gh_tag_version.config.loader import ConfigError, load_config
from gh_tag_version.github.client import GitHubClient, GitHubError
from gh_tag_version.history.closest_tag import find_closest_tag
from gh_tag_version.history.commit_graph import CommitGraphProvider, CommitResolutionError
from gh_tag_version.history.tag_index import build_tag_index
from gh_tag_version.outputs import OutputError, export_variable, set_output
from gh_tag_version.version import format_version

logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_GENERIC_ERROR = 1
EXIT_INVALID_USAGE = 2
EXIT_CONFIG_ERROR = 3
EXIT_API_FAILURE = 4
EXIT_HISTORY_ERROR = 5
EXIT_OUTPUT_ERROR = 6

OUTPUT_NAME = "version"
ENV_NAME = "VERSION"


# ---------------------------------------------------------------------------
# Status display utilities
# ---------------------------------------------------------------------------

def print_info(message: str, indent: int = 0):
    """Print an info message to stderr, keeping stdout for the version."""
    prefix = "  " * indent
    click.echo(f"{prefix}ℹ {message}", err=True)


def print_success(message: str, indent: int = 0):
    """Print a success message to stderr."""
    prefix = "  " * indent
    click.echo(f"{prefix}✓ {message}", err=True)


def fail(message: str, exit_code: int) -> None:
    """Emit a workflow error annotation and stop with ``exit_code``."""
    click.echo(f"::error::{message}")
    raise click.exceptions.Exit(exit_code)


# ---------------------------------------------------------------------------
# Core functionality
# ---------------------------------------------------------------------------

def resolve_version(client: GitHubClient, sha: str) -> str:
    """Return the version string for ``sha``.

    Raises
    ------
    GitHubError
        If listing tags or commits fails.
    CommitResolutionError
        If the history endpoint never returns a requested commit.
    """
    tags = build_tag_index(client)
    provider = CommitGraphProvider(client)
    result = find_closest_tag(tags, provider.node(sha))
    logger.debug(
        "Resolved %s to tag=%r distance=%d using %d history request(s), %d cached commit(s)",
        sha,
        result.tag,
        result.distance,
        provider.fetch_count,
        len(provider),
    )
    if result.found:
        print_info(f"Closest tag: {result.tag} ({result.distance} commit(s) behind)")
    else:
        print_info("No tag reachable; using the commit sha")
    return format_version(result, sha)


@click.command()
@click.option("--repository", help="Repository as owner/name. Defaults to $GITHUB_REPOSITORY.")
@click.option("--sha", help="Commit to describe. Defaults to $GITHUB_SHA.")
@click.option("--token", help="GitHub token. Defaults to $INPUT_TOKEN or $GITHUB_TOKEN.")
@click.option("--api-url", help="GitHub API base URL. Defaults to $GITHUB_API_URL.")
@click.option("--github-env", "env_file", type=click.Path(dir_okay=False),
              help="File receiving VERSION=<version>. Defaults to $GITHUB_ENV.")
@click.option("--github-output", "output_file", type=click.Path(dir_okay=False),
              help="File receiving version=<version>. Defaults to $GITHUB_OUTPUT.")
@click.option("--verbose", is_flag=True, help="Enable verbose (debug) output.")
@click.version_option(version=__version__, prog_name="gh-tag-version")
def main(
    repository: Optional[str],
    sha: Optional[str],
    token: Optional[str],
    api_url: Optional[str],
    env_file: Optional[str],
    output_file: Optional[str],
    verbose: bool,
) -> None:
    """Describe a commit by its closest tag, like ``git describe``.

    Prints TAG for a tagged commit, TAG-DISTANCE-SHA for a descendant of
    a tag, and SHA when no tag is reachable.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        force=True,
    )

    ctx = click.get_current_context(silent=True)

    try:
        try:
            config = load_config(overrides={
                "repository": repository,
                "sha": sha,
                "token": token,
                "api_url": api_url,
                "env_file": env_file,
                "output_file": output_file,
            })
        except ConfigError as exc:
            fail(f"Configuration error: {exc}", EXIT_CONFIG_ERROR)

        print_info(f"Describing {config['sha']} in {config['repository']}")

        client = GitHubClient(
            repository=config["repository"],
            token=config["token"],
            api_url=config["api_url"],
            request_timeout=config["request_timeout"],
        )

        try:
            version = resolve_version(client, config["sha"])
        except GitHubError as exc:
            fail(f"GitHub API error: {exc}", EXIT_API_FAILURE)
        except CommitResolutionError as exc:
            fail(f"History error: {exc}", EXIT_HISTORY_ERROR)

        try:
            set_output(OUTPUT_NAME, version, config["output_file"])
            export_variable(ENV_NAME, version, config["env_file"])
        except OutputError as exc:
            fail(f"Output error: {exc}", EXIT_OUTPUT_ERROR)

        print_success(f"Version: {version}")
        click.echo(version)
        raise click.exceptions.Exit(EXIT_SUCCESS)

    except click.exceptions.Exit:
        # Click uses its own Exit exception; re-raise to let Click handle it
        raise
    except Exception as exc:
        logging.exception("Unhandled error: %s", exc)
        click.echo(f"::error::Unexpected error: {exc}")
        ctx.exit(EXIT_GENERIC_ERROR)
