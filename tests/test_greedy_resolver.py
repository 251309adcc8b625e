"""Tests for the greedy resolver."""

import pytest

from errors import MetadataFetchError, VersionNotFoundError
from resolution.cache import MetadataCache
from resolution.context import ResolutionContext
from resolution.greedy import GreedyResolver
from resolution.hasher import serialize_tree


def make_resolver(registry):
    return GreedyResolver(MetadataCache(registry))


class TestGreedyResolver:
    """Greedy resolution: highest matching version at every edge."""

    def test_picks_highest_matching_version(self, ab_registry):
        tree = make_resolver(ab_registry).resolve("A", "1.0.0")
        assert tree.children["B"].version == "1.1.0"
        assert serialize_tree(tree) == "A@1.0.0\n  B@1.1.0"

    def test_is_deterministic(self, ab_registry):
        first = serialize_tree(make_resolver(ab_registry).resolve("A", "1.0.0"))
        second = serialize_tree(make_resolver(ab_registry).resolve("A", "1.0.0"))
        assert first == second

    def test_unknown_root_version_raises(self, ab_registry):
        with pytest.raises(VersionNotFoundError) as excinfo:
            make_resolver(ab_registry).resolve("A", "9.9.9")
        assert excinfo.value.package == "A"
        assert excinfo.value.version == "9.9.9"

    def test_root_fetch_failure_propagates(self, fake_registry):
        with pytest.raises(MetadataFetchError) as excinfo:
            make_resolver(fake_registry).resolve("missing", "1.0.0")
        assert excinfo.value.status == 404

    def test_cycle_terminates_with_placeholder(self, cycle_registry):
        tree = make_resolver(cycle_registry).resolve("A", "1.0.0")
        b = tree.children["B"]
        assert b.version == "1.0.0"
        assert b.children["A"].children == {}
        assert serialize_tree(tree) == "A@1.0.0\n  B@1.0.0\n    A@1.0.0"

    def test_self_dependency_terminates(self, fake_registry):
        fake_registry.add("self", {"1.0.0": {"self": "1.0.0"}})
        tree = make_resolver(fake_registry).resolve("self", "1.0.0")
        assert tree.children["self"].children == {}

    def test_max_depth_zero_leaves_placeholders(self, fake_registry):
        fake_registry.add("A", {"1.0.0": {"B": "^1.0.0"}})
        fake_registry.add("B", {"1.0.0": {"C": "^1.0.0"}})
        fake_registry.add("C", {"1.0.0": {}})
        tree = make_resolver(fake_registry).resolve("A", "1.0.0", ResolutionContext(max_depth=0))
        assert list(tree.children) == ["B"]
        assert tree.children["B"].children == {}

    @pytest.mark.parametrize("max_depth", [0, -1])
    def test_truncated_root_is_still_validated(self, ab_registry, max_depth):
        with pytest.raises(VersionNotFoundError):
            make_resolver(ab_registry).resolve("A", "9.9.9", ResolutionContext(max_depth=max_depth))

    def test_unmatched_range_is_skipped(self, fake_registry, caplog):
        fake_registry.add("A", {"1.0.0": {"B": "^2.0.0", "C": "1.x"}})
        fake_registry.add("B", {"1.0.0": {}})
        fake_registry.add("C", {"1.4.0": {}})
        with caplog.at_level("WARNING"):
            tree = make_resolver(fake_registry).resolve("A", "1.0.0")
        assert list(tree.children) == ["C"]
        assert "B@^2.0.0" in caplog.text

    def test_missing_dependency_metadata_is_skipped(self, fake_registry):
        fake_registry.add("A", {"1.0.0": {"ghost": "^1.0.0", "B": "*"}})
        fake_registry.add("B", {"0.1.0": {}})
        tree = make_resolver(fake_registry).resolve("A", "1.0.0")
        assert list(tree.children) == ["B"]

    def test_sibling_branches_both_resolve_shared_package(self, fake_registry):
        fake_registry.add("root", {"1.0.0": {"x": "1.0.0", "y": "1.0.0"}})
        fake_registry.add("x", {"1.0.0": {"shared": "^1.0.0"}})
        fake_registry.add("y", {"1.0.0": {"shared": "^1.0.0"}})
        fake_registry.add("shared", {"1.2.0": {"leaf": "*"}})
        fake_registry.add("leaf", {"1.0.0": {}})
        tree = make_resolver(fake_registry).resolve("root", "1.0.0")
        assert tree.children["x"].children["shared"].children["leaf"].version == "1.0.0"
        assert tree.children["y"].children["shared"].children["leaf"].version == "1.0.0"

    def test_metadata_fetched_once_per_package(self, fake_registry):
        fake_registry.add("root", {"1.0.0": {"x": "1.0.0", "y": "1.0.0"}})
        fake_registry.add("x", {"1.0.0": {"shared": "^1.0.0"}})
        fake_registry.add("y", {"1.0.0": {"shared": "^1.0.0"}})
        fake_registry.add("shared", {"1.0.0": {}})
        make_resolver(fake_registry).resolve("root", "1.0.0")
        assert sorted(fake_registry.requests) == ["root", "shared", "x", "y"]

    def test_spaced_comparator_range_resolves(self, fake_registry):
        fake_registry.add("A", {"1.0.0": {"B": ">= 1.0.0"}})
        fake_registry.add("B", {"1.2.5": {}})
        tree = make_resolver(fake_registry).resolve("A", "1.0.0")
        assert serialize_tree(tree) == "A@1.0.0\n  B@1.2.5"
