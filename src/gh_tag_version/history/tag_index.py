"""
Construction of the tag index.

The index maps a commit sha to the name of the tag pointing at it. It is
built once per run by draining the paginated tag listing.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Dict, List, Tuple

if TYPE_CHECKING:
    from gh_tag_version.github.client import GitHubClient


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


PAGE_SIZE = 100

_RELEASE = re.compile(r"\d+(?:\.\d+)*")
_NUMBER = re.compile(r"\d+")

VersionKey = Tuple[Tuple[int, ...], int, Tuple[int, ...]]


def version_key(tag_name: str) -> VersionKey:
    """Return an ordering key for a tag name.

    The key is ``(release, is_final, prerelease)``. ``release`` holds the
    first dotted run of numbers with trailing zeros dropped, so ``v1.0``
    and ``v1.0.0`` compare equal. A ``-`` right after it marks a
    prerelease, which sorts below the final release with the same
    numbers; ``+build`` metadata is ignored. ``"v1.0.0-rc2"`` yields
    ``((1,), 0, (2,))`` and ``"v1.10.0"`` yields ``((1, 10), 1, ())``.
    Names without digits yield ``((), 1, ())`` and sort below any
    versioned name.
    """
    match = _RELEASE.search(tag_name)
    if match is None:
        return (), 1, ()
    release = [int(part) for part in match.group().split(".")]
    while release and release[-1] == 0:
        release.pop()
    suffix = tag_name[match.end():]
    if suffix.startswith("-"):
        prerelease = tuple(int(part) for part in _NUMBER.findall(suffix.split("+", 1)[0]))
        return tuple(release), 0, prerelease
    return tuple(release), 1, ()


def preferred_tag(names: List[str]) -> str:
    """Pick the tag to report for a commit carrying several tags.

    The highest version key wins, so a final release beats its own
    prereleases; among equal keys the first listed name is kept.
    """
    best = names[0]
    for name in names[1:]:
        if version_key(name) > version_key(best):
            best = name
    return best


def build_tag_index(client: "GitHubClient", page_size: int = PAGE_SIZE) -> Dict[str, str]:
    """Fetch every tag of the repository and index it by commit sha.

    Pages are requested until one comes back shorter than ``page_size``.
    A tag count that is an exact multiple of the page size ends on the
    trailing empty page.

    Parameters
    ----------
    client : GitHubClient
        Client used to list tags.
    page_size : int
        Number of tags requested per page.

    Returns
    -------
    Dict[str, str]
        Mapping of commit sha to tag name.

    Raises
    ------
    GitHubError
        If any page request fails.
    """
    names_by_sha: Dict[str, List[str]] = {}
    page = 0
    while True:
        tags = client.list_tags(page=page, per_page=page_size)
        logger.debug("Fetched tag page %d with %d tag(s)", page, len(tags))
        for tag in tags:
            names_by_sha.setdefault(tag.commit_sha, []).append(tag.name)
        page += 1
        if len(tags) < page_size:
            break

    index = {sha: preferred_tag(names) for sha, names in names_by_sha.items()}
    for sha, names in names_by_sha.items():
        if len(names) > 1:
            logger.debug("Commit %s carries tags %s; using %s", sha, names, index[sha])
    logger.info("Indexed %d tagged commit(s) from %d page(s)", len(index), page)
    return index
