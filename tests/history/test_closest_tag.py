"""Tests for the breadth-first closest-tag search."""

import pytest

from gh_tag_version.history.closest_tag import find_closest_tag
from gh_tag_version.history.commit_graph import CommitGraphProvider
from gh_tag_version.history.models import TagDistance
from gh_tag_version.version import format_version


class CountingIndex(dict):
    """Tag index that records how often each sha is looked up."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.lookups = {}

    def get(self, key, default=None):
        self.lookups[key] = self.lookups.get(key, 0) + 1
        return super().get(key, default)


def describe(client, tags, sha):
    provider = CommitGraphProvider(client)
    return find_closest_tag(tags, provider.node(sha))


def test_tag_exact_match(fake_github):
    client = fake_github({"C0": []})
    result = describe(client, {"C0": "v1.0.0"}, "C0")
    assert result == TagDistance("v1.0.0", 0)
    assert format_version(result, "C0") == "v1.0.0"


def test_two_commits_ahead(fake_github, linear):
    client = fake_github(linear(3))
    result = describe(client, {"C0": "v1.0.0"}, "C2")
    assert result == TagDistance("v1.0.0", 2)
    assert format_version(result, "C2") == "v1.0.0-2-C2"


def test_no_tags_terminates_with_not_found(fake_github, linear):
    client = fake_github(linear(3))
    result = describe(client, {}, "C2")
    assert result == TagDistance.NOT_FOUND
    assert result.distance == -1
    assert not result.found
    assert format_version(result, "C2") == "C2"


@pytest.mark.parametrize("depth", [0, 1, 2, 5, 9])
def test_unique_tagged_ancestor_at_depth(fake_github, linear, depth):
    client = fake_github(linear(10))
    tagged = f"C{9 - depth}"
    assert describe(client, {tagged: "v2.0.0"}, "C9") == TagDistance("v2.0.0", depth)


def test_nearest_of_several_tags_wins(fake_github, linear):
    client = fake_github(linear(5))
    result = describe(client, {"C0": "v1.0.0", "C2": "v1.1.0"}, "C4")
    assert result == TagDistance("v1.1.0", 2)


@pytest.mark.parametrize("merge_parents", [["C1", "C2"], ["C2", "C1"]])
def test_merge_diamond(fake_github, merge_parents):
    client = fake_github({"C0": [], "C1": ["C0"], "C2": ["C0"], "C3": merge_parents})
    result = describe(client, {"C0": "v1.0.0"}, "C3")
    assert result == TagDistance("v1.0.0", 2)


def test_shared_ancestor_is_expanded_once(fake_github):
    # C0 is reachable through both C1 and C2 but only its first occurrence counts.
    client = fake_github({"R": [], "C0": ["R"], "C1": ["C0"], "C2": ["C0"], "C3": ["C1", "C2"]})
    tags = CountingIndex({"R": "v0.1.0"})
    result = describe(client, tags, "C3")
    assert result == TagDistance("v0.1.0", 3)
    assert tags.lookups["C0"] == 1


@pytest.mark.parametrize("merge_parents", [["A", "T"], ["T", "A"]])
def test_shorter_of_two_paths_is_reported(fake_github, merge_parents):
    client = fake_github({"T": [], "B": ["T"], "A": ["B"], "S": merge_parents})
    result = describe(client, {"T": "v3.0.0"}, "S")
    assert result == TagDistance("v3.0.0", 1)


def test_ties_follow_parent_order(fake_github):
    tags = {"A": "a-tag", "B": "b-tag"}
    assert describe(fake_github({"A": [], "B": [], "S": ["A", "B"]}), tags, "S").tag == "a-tag"
    assert describe(fake_github({"A": [], "B": [], "S": ["B", "A"]}), tags, "S").tag == "b-tag"


def test_untagged_merge_history_terminates(fake_github):
    client = fake_github({"C0": [], "C1": ["C0"], "C2": ["C0"], "C3": ["C1", "C2"], "C4": ["C3", "C2"]})
    assert describe(client, {}, "C4") == TagDistance.NOT_FOUND


def test_repeated_runs_are_identical(fake_github, linear):
    client = fake_github(linear(6))
    tags = {"C1": "v1.0.0"}
    first = describe(client, tags, "C5")
    second = describe(client, tags, "C5")
    assert first == second == TagDistance("v1.0.0", 4)


def test_same_provider_can_search_twice(fake_github, linear):
    provider = CommitGraphProvider(fake_github(linear(4)))
    tags = {"C0": "v1.0.0"}
    first = find_closest_tag(tags, provider.node("C3"))
    second = find_closest_tag(tags, provider.node("C3"))
    assert first == second == TagDistance("v1.0.0", 3)
