"""Tests for DependencyGraph and graph algorithms."""

import pytest

from procgraph._errors import CycleDetectedError
from procgraph._graph import DependencyGraph, chain_depths, depth_first_order


class TestDepthFirstOrder:
    """Tests for the depth_first_order algorithm."""

    def test_empty_graph(self) -> None:
        assert depth_first_order({}) == []

    def test_single_node(self) -> None:
        assert depth_first_order({"a": []}) == ["a"]

    def test_linear_chain(self) -> None:
        # c depends on b, b depends on a
        assert depth_first_order({"c": ["b"], "b": ["a"], "a": []}) == ["a", "b", "c"]

    def test_node_only_listed_as_dependency(self) -> None:
        assert depth_first_order({"b": ["a"]}) == ["a", "b"]

    def test_diamond_dependency(self) -> None:
        result = depth_first_order({"d": ["b", "c"], "b": ["a"], "c": ["a"], "a": []})
        assert result[0] == "a"
        assert result[-1] == "d"
        assert result.count("a") == 1

    def test_two_node_cycle_reports_chain(self) -> None:
        with pytest.raises(CycleDetectedError, match="Cycle detected") as exc_info:
            depth_first_order({"a": ["b"], "b": ["a"]})
        assert exc_info.value.chain == ("a", "b", "a")

    def test_self_loop(self) -> None:
        with pytest.raises(CycleDetectedError) as exc_info:
            depth_first_order({"a": ["a"]})
        assert exc_info.value.chain == ("a", "a")

    def test_cycle_chain_excludes_entry_path(self) -> None:
        # x reaches the cycle but is not part of it
        with pytest.raises(CycleDetectedError) as exc_info:
            depth_first_order({"x": ["a"], "a": ["b"], "b": ["a"]})
        assert exc_info.value.chain == ("a", "b", "a")

    def test_deep_chain_does_not_recurse(self) -> None:
        n = 5000
        predecessors = {i: [i - 1] for i in range(1, n)} | {0: []}
        assert depth_first_order(predecessors) == list(range(n))


class TestChainDepths:
    def test_chain(self) -> None:
        preds = {"c": ["b"], "b": ["a"], "a": []}
        assert chain_depths(["a", "b", "c"], preds) == {"a": 1, "b": 2, "c": 3}

    def test_longest_path_wins(self) -> None:
        preds = {"d": ["a", "c"], "c": ["b"], "b": ["a"], "a": []}
        depths = chain_depths(depth_first_order(preds), preds)
        assert depths["d"] == 4


class TestDependencyGraph:
    """Tests for the DependencyGraph class."""

    def test_from_edges(self) -> None:
        graph = DependencyGraph.from_edges([("a", "b"), ("b", "c")])

        assert graph.predecessors("b") == ("a",)
        assert graph.successors("b") == ("c",)
        assert graph.nodes == frozenset({"a", "b", "c"})
        assert len(graph) == 3

    def test_duplicate_edges_are_merged(self) -> None:
        graph = DependencyGraph.from_edges([("a", "b"), ("a", "b")])
        assert graph.predecessors("b") == ("a",)

    def test_isolated_nodes(self) -> None:
        graph = DependencyGraph.from_edges([], nodes=["x"])

        assert "x" in graph
        assert graph.roots() == frozenset({"x"})
        assert graph.leaves() == frozenset({"x"})

    def test_roots_and_leaves(self) -> None:
        graph = DependencyGraph.from_edges([("a", "b"), ("b", "c"), ("a", "d")])

        assert graph.roots() == frozenset({"a"})
        assert graph.leaves() == frozenset({"c", "d"})

    def test_ancestors(self) -> None:
        graph = DependencyGraph.from_edges([("a", "b"), ("b", "c"), ("x", "c")])

        assert graph.ancestors("c") == frozenset({"a", "b", "x"})
        assert graph.ancestors("a") == frozenset()

    def test_unknown_node_has_no_neighbours(self) -> None:
        graph = DependencyGraph.from_edges([("a", "b")])
        assert graph.predecessors("zzz") == ()
        assert graph.successors("zzz") == ()

    def test_topological_order(self) -> None:
        graph = DependencyGraph.from_edges([("a", "b"), ("b", "c")])
        assert graph.topological_order() == ["a", "b", "c"]

    def test_depths(self) -> None:
        graph = DependencyGraph.from_edges([("a", "b"), ("b", "c")])
        assert graph.depths() == {"a": 1, "b": 2, "c": 3}

    def test_find_cycle(self) -> None:
        acyclic = DependencyGraph.from_edges([("a", "b")])
        cyclic = DependencyGraph.from_edges([("a", "b"), ("b", "a")])

        assert acyclic.find_cycle() is None
        chain = cyclic.find_cycle()
        assert chain is not None
        assert chain[0] == chain[-1]
        assert set(chain) == {"a", "b"}
