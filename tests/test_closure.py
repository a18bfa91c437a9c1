"""Tests for the dependency closure over tracked nodes."""

from karps._graph import tracked_item_deps


class TestTrackedItemDeps:
    def test_empty(self) -> None:
        assert tracked_item_deps([], [], {}) == {}

    def test_single_tracked_node(self) -> None:
        assert tracked_item_deps(["a"], ["a"], {}) == {"a": []}

    def test_tracked_chain_is_kept(self) -> None:
        result = tracked_item_deps(["a", "b", "c"], ["a", "b", "c"], {"b": ["a"], "c": ["b"]})
        assert result == {"a": [], "b": ["a"], "c": ["b"]}

    def test_untracked_node_collapsed(self) -> None:
        result = tracked_item_deps(["a", "c"], ["a", "b", "c"], {"b": ["a"], "c": ["b"]})
        assert result == {"a": [], "c": ["a"]}

    def test_long_untracked_chain(self) -> None:
        all_nodes = ["t", "u1", "u2", "u3", "x"]
        deps = {"u1": ["t"], "u2": ["u1"], "u3": ["u2"], "x": ["u3"]}
        assert tracked_item_deps(["t", "x"], all_nodes, deps) == {"t": [], "x": ["t"]}

    def test_transitive_tracked_dependencies_are_not_included(self) -> None:
        # c only sees b, not a: the closure stops at the first tracked node
        result = tracked_item_deps(["a", "b", "c"], ["a", "b", "c"], {"b": ["a"], "c": ["b"]})
        assert "a" not in result["c"]

    def test_duplicates_removed(self) -> None:
        # Two untracked paths from a to d
        all_nodes = ["a", "b", "c", "d"]
        deps = {"b": ["a"], "c": ["a"], "d": ["b", "c", "a"]}
        assert tracked_item_deps(["a", "d"], all_nodes, deps) == {"a": [], "d": ["a"]}

    def test_direct_dependencies_come_first(self) -> None:
        all_nodes = ["a", "b", "u", "c"]
        deps = {"u": ["a"], "c": ["u", "b"]}
        assert tracked_item_deps(["a", "b", "c"], all_nodes, deps)["c"] == ["b", "a"]

    def test_untracked_root_contributes_nothing(self) -> None:
        all_nodes = ["u", "a", "c"]
        deps = {"c": ["u", "a"]}
        assert tracked_item_deps(["a", "c"], all_nodes, deps) == {"a": [], "c": ["a"]}

    def test_one_entry_per_tracked_node(self) -> None:
        all_nodes = ["a", "u", "b", "v", "c"]
        deps = {"u": ["a"], "b": ["u"], "v": ["b", "a"], "c": ["v"]}
        result = tracked_item_deps(["a", "b", "c"], all_nodes, deps)
        assert list(result) == ["a", "b", "c"]
        assert result["c"] == ["b", "a"]

    def test_idempotent(self) -> None:
        all_nodes = ["a", "u", "b", "v", "c"]
        deps = {"u": ["a"], "b": ["u"], "v": ["b", "a"], "c": ["v", "u"]}
        first = tracked_item_deps(["a", "b", "c"], all_nodes, deps)
        second = tracked_item_deps(["a", "b", "c"], all_nodes, deps)
        assert first == second

    def test_input_not_modified(self) -> None:
        deps = {"b": ["a"], "c": ["b"]}
        tracked_item_deps(["a", "c"], ["a", "b", "c"], deps)
        assert deps == {"b": ["a"], "c": ["b"]}
