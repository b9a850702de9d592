#!/usr/bin/env python
"""
Thin wrapper script to invoke the gh_tag_version CLI.

Running ``python ghtagversion.py`` is equivalent to running the
``gh-tag-version`` console script installed via ``pyproject.toml``.
"""

from gh_tag_version.cli import main


if __name__ == "__main__":
    main(prog_name="gh-tag-version")
