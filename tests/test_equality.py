"""Tests for the comparison modules."""

import pytest

from procgraph import Graph, SamplePoint, create_module, estimate_error, evaluate_scalar
from procgraph._context import EvaluationContext
from procgraph._modules import TOLERANCE, EqualityModule

# Input indices of EqualityModule
FALSE_OUTPUT = 0
TRUE_OUTPUT = 1
COLOR_1 = 2
SCALAR_1_1 = 3
SCALAR_1_2 = 4
COLOR_2 = 7
SCALAR_2_1 = 8


@pytest.fixture
def graph() -> Graph:
    g = Graph("equality")
    g.add_module(create_module("EqualityModule", "eq"))
    return g


def _add_color(graph: Graph, module_id: str, rgb: tuple[float, float, float]) -> None:
    red, green, blue = rgb
    graph.add_module(create_module("ColorModule", module_id, red=red, green=green, blue=blue))


def _add_number(graph: Graph, module_id: str, value: float) -> None:
    graph.add_module(create_module("NumberModule", module_id, value=value))


def _result(graph: Graph, blur: float = 0.0) -> float:
    return evaluate_scalar(graph, "eq", 0, SamplePoint(), blur)


class TestEqualityModule:
    def test_identical_colors_select_true(self, graph: Graph) -> None:
        _add_color(graph, "c1", (0.2, 0.4, 0.6))
        _add_color(graph, "c2", (0.2, 0.4, 0.6))
        graph.bind_input("eq", COLOR_1, "c1", 0)
        graph.bind_input("eq", COLOR_2, "c2", 0)

        assert _result(graph) == 1.0

    def test_slightly_different_colors_select_false(self, graph: Graph) -> None:
        _add_color(graph, "c1", (0.2, 0.4, 0.6))
        _add_color(graph, "c2", (0.2, 0.4, 0.60001))
        graph.bind_input("eq", COLOR_1, "c1", 0)
        graph.bind_input("eq", COLOR_2, "c2", 0)

        assert _result(graph) == 0.0

    def test_nothing_bound_selects_false(self, graph: Graph) -> None:
        assert _result(graph) == 0.0
        module = graph.module("eq")
        assert isinstance(module, EqualityModule)
        assert not module.is_equal(EvaluationContext())

    def test_first_mismatch_wins(self, graph: Graph) -> None:
        _add_color(graph, "c1", (1.0, 0.0, 0.0))
        _add_color(graph, "c2", (0.0, 0.0, 1.0))
        _add_number(graph, "n1", 5.0)
        _add_number(graph, "n2", 5.0)
        graph.bind_input("eq", COLOR_1, "c1", 0)
        graph.bind_input("eq", COLOR_2, "c2", 0)
        graph.bind_input("eq", SCALAR_1_1, "n1", 0)
        graph.bind_input("eq", SCALAR_2_1, "n2", 0)

        assert _result(graph) == 0.0

    def test_later_scalar_mismatch_selects_false(self, graph: Graph) -> None:
        _add_number(graph, "n1", 5.0)
        _add_number(graph, "n2", 5.0)
        _add_number(graph, "other", 1.0)
        graph.bind_input("eq", SCALAR_1_1, "n1", 0)
        graph.bind_input("eq", SCALAR_2_1, "n2", 0)
        # Scalar 1:2 compared against the default of Scalar 2:2 (0.0)
        graph.bind_input("eq", SCALAR_1_2, "other", 0)

        assert _result(graph) == 0.0

    def test_bound_color_compared_against_default_black(self, graph: Graph) -> None:
        _add_color(graph, "black", (0.0, 0.0, 0.0))
        graph.bind_input("eq", COLOR_1, "black", 0)
        assert _result(graph) == 1.0

    def test_bound_scalar_compared_against_default(self, graph: Graph) -> None:
        _add_number(graph, "zero", 0.0)
        graph.bind_input("eq", SCALAR_1_2, "zero", 0)
        assert _result(graph) == 1.0

    def test_difference_within_tolerance_is_equal(self, graph: Graph) -> None:
        _add_number(graph, "n1", 1.0)
        _add_number(graph, "n2", 1.0 + 1e-13)
        graph.bind_input("eq", SCALAR_1_1, "n1", 0)
        graph.bind_input("eq", SCALAR_2_1, "n2", 0)
        assert _result(graph) == 1.0

    def test_selected_branch_reads_bound_outputs(self, graph: Graph) -> None:
        _add_number(graph, "yes", 7.0)
        _add_number(graph, "no", -3.0)
        _add_number(graph, "zero", 0.0)
        graph.bind_input("eq", TRUE_OUTPUT, "yes", 0)
        graph.bind_input("eq", FALSE_OUTPUT, "no", 0)

        # no pair bound yet
        assert _result(graph) == -3.0

        graph.bind_input("eq", SCALAR_1_1, "zero", 0)
        assert _result(graph) == 7.0

    @pytest.mark.parametrize("blur", [0.0, 0.25, 10.0])
    def test_error_is_tolerance(self, graph: Graph, blur: float) -> None:
        assert estimate_error(graph, "eq", 0, blur) == TOLERANCE
        assert TOLERANCE == 1e-12

    def test_result_is_independent_of_blur(self, graph: Graph) -> None:
        _add_number(graph, "zero", 0.0)
        graph.bind_input("eq", SCALAR_1_1, "zero", 0)
        assert _result(graph, blur=0.5) == _result(graph, blur=0.0) == 1.0


class TestNumberEqualityModule:
    @pytest.fixture
    def number_graph(self) -> Graph:
        g = Graph()
        g.add_module(create_module("NumberEqualityModule", "eq"))
        _add_number(g, "a", 2.0)
        _add_number(g, "b", 2.0)
        _add_number(g, "c", 2.5)
        return g

    def test_equal_numbers(self, number_graph: Graph) -> None:
        number_graph.bind_input("eq", 0, "a", 0)
        number_graph.bind_input("eq", 1, "b", 0)
        assert _result(number_graph) == 1.0

    def test_unequal_numbers(self, number_graph: Graph) -> None:
        number_graph.bind_input("eq", 0, "a", 0)
        number_graph.bind_input("eq", 1, "c", 0)
        assert _result(number_graph) == 0.0

    def test_wide_tolerance(self, number_graph: Graph) -> None:
        _add_number(number_graph, "tol", 1.0)
        number_graph.bind_input("eq", 0, "a", 0)
        number_graph.bind_input("eq", 1, "c", 0)
        number_graph.bind_input("eq", 2, "tol", 0)
        assert _result(number_graph) == 1.0
        assert estimate_error(number_graph, "eq", 0) == 1.0

    def test_needs_both_values(self, number_graph: Graph) -> None:
        number_graph.bind_input("eq", 0, "a", 0)
        assert _result(number_graph) == 0.0


class TestColorEqualityModule:
    def test_defaults_differ(self) -> None:
        g = Graph()
        g.add_module(create_module("ColorEqualityModule", "eq"))
        assert _result(g) == 0.0

    def test_equal_colors(self) -> None:
        g = Graph()
        g.add_module(create_module("ColorEqualityModule", "eq"))
        _add_color(g, "c", (1.0, 1.0, 1.0))
        g.bind_input("eq", 1, "c", 0)
        assert _result(g) == 1.0
