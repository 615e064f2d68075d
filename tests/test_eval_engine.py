"""Tests for the evaluation entry points."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from procgraph import (
    CycleDetectedError,
    EvaluationResult,
    Graph,
    PortIndexError,
    PortKindMismatchError,
    RGBColor,
    SamplePoint,
    UnknownModuleError,
    create_module,
    estimate_error,
    evaluate_color,
    evaluate_many,
    evaluate_scalar,
)


@pytest.fixture
def pattern_graph() -> Graph:
    """Turbulence warped by a cosine of x, blended into a color output."""
    g = Graph("pattern")
    g.add_module(create_module("CoordinateModule", "x", axis="x"))
    g.add_module(create_module("CosineModule", "cos"))
    g.add_module(create_module("TurbulenceModule", "turb", octaves=6))
    g.add_module(create_module("SumModule", "sum"))
    g.add_module(create_module("BlendModule", "blend"))
    g.add_module(create_module("ColorOutputModule", "color"))
    g.add_module(create_module("ScalarOutputModule", "out"))
    g.bind_input("cos", 0, "x", 0)
    g.bind_input("sum", 0, "cos", 0)
    g.bind_input("sum", 1, "turb", 0)
    g.bind_input("out", 0, "sum", 0)
    g.bind_input("blend", 2, "sum", 0)
    g.bind_input("color", 0, "blend", 0)
    return g


def _points(n: int) -> list[SamplePoint]:
    return [SamplePoint(i * 0.173, i * 0.091 - 3.0, i * 0.037, 0.0, 0.01, 0.01, 0.01) for i in range(n)]


class TestEvaluateScalar:
    def test_value(self, pattern_graph: Graph) -> None:
        value = evaluate_scalar(pattern_graph, "cos", 0, SamplePoint(x=0.0))
        assert value == 1.0

    def test_repeated_calls_are_identical(self, pattern_graph: Graph) -> None:
        point = SamplePoint(0.4, 0.8, 1.6, 0.0, 0.05, 0.05, 0.05)
        results = {evaluate_scalar(pattern_graph, "out", 0, point, 0.02) for _ in range(20)}
        assert len(results) == 1

    def test_color_output_rejected(self, pattern_graph: Graph) -> None:
        with pytest.raises(PortKindMismatchError, match="color output"):
            evaluate_scalar(pattern_graph, "color", 0, SamplePoint())

    def test_unknown_module(self, pattern_graph: Graph) -> None:
        with pytest.raises(UnknownModuleError):
            evaluate_scalar(pattern_graph, "nope", 0, SamplePoint())

    def test_output_out_of_range(self, pattern_graph: Graph) -> None:
        with pytest.raises(PortIndexError, match="no output 1"):
            evaluate_scalar(pattern_graph, "out", 1, SamplePoint())

    def test_negative_blur_rejected(self, pattern_graph: Graph) -> None:
        with pytest.raises(ValueError, match="Blur"):
            evaluate_scalar(pattern_graph, "out", 0, SamplePoint(), -0.1)

    def test_cycle_detected_on_first_evaluation(self) -> None:
        g = Graph()
        g.add_module(create_module("AbsModule", "a"))
        g.add_module(create_module("AbsModule", "b"))
        g.bind_input("a", 0, "b", 0)
        g.bind_input("b", 0, "a", 0)

        with pytest.raises(CycleDetectedError):
            evaluate_scalar(g, "a", 0, SamplePoint())


class TestEvaluateColor:
    def test_color_output(self, pattern_graph: Graph) -> None:
        color = evaluate_color(pattern_graph, "color", 0, SamplePoint(0.5, 0.5, 0.5))
        assert isinstance(color, RGBColor)
        assert color.red == color.green == color.blue

    def test_scalar_output_widens_to_grey(self, pattern_graph: Graph) -> None:
        assert evaluate_color(pattern_graph, "cos", 0, SamplePoint(x=0.0)) == RGBColor(1.0, 1.0, 1.0)


class TestEstimateError:
    def test_default_point(self, pattern_graph: Graph) -> None:
        assert estimate_error(pattern_graph, "x", 0) == 0.0
        assert estimate_error(pattern_graph, "x", 0, blur=0.25) == 0.25

    def test_explicit_point(self, pattern_graph: Graph) -> None:
        assert estimate_error(pattern_graph, "x", 0, 0.0, SamplePoint(xsize=1.0)) == 0.5


class TestEvaluateMany:
    def test_matches_single_calls(self, pattern_graph: Graph) -> None:
        points = _points(25)

        result = evaluate_many(pattern_graph, "out", 0, points, blur=0.01)

        assert len(result) == 25
        assert list(result.values) == [evaluate_scalar(pattern_graph, "out", 0, p, 0.01) for p in points]
        assert list(result.errors) == [estimate_error(pattern_graph, "out", 0, 0.01, p) for p in points]
        assert result.max_error == max(result.errors)

    def test_workers_do_not_change_results(self, pattern_graph: Graph) -> None:
        points = _points(200)

        reference = evaluate_many(pattern_graph, "out", 0, points, workers=1)
        threaded = evaluate_many(pattern_graph, "out", 0, points, workers=8)

        assert threaded == reference

    def test_color_output(self, pattern_graph: Graph) -> None:
        result = evaluate_many(pattern_graph, "color", 0, _points(4), workers=2)
        assert all(isinstance(v, RGBColor) for v in result.values)

    def test_invalid_worker_count(self, pattern_graph: Graph) -> None:
        with pytest.raises(ValueError, match="workers"):
            evaluate_many(pattern_graph, "out", 0, _points(1), workers=0)

    def test_empty_batch(self, pattern_graph: Graph) -> None:
        result = evaluate_many(pattern_graph, "out", 0, [])
        assert result == EvaluationResult(values=(), errors=())
        assert result.max_error == 0.0


class TestConcurrency:
    def test_threads_share_one_graph(self, pattern_graph: Graph) -> None:
        """Concurrent callers each get what a single-threaded evaluation gives."""
        points = _points(400)
        reference = [
            (evaluate_scalar(pattern_graph, "out", 0, p, 0.03), evaluate_color(pattern_graph, "color", 0, p, 0.03))
            for p in points
        ]

        def job(index: int) -> tuple[int, float, RGBColor]:
            p = points[index]
            return (
                index,
                evaluate_scalar(pattern_graph, "out", 0, p, 0.03),
                evaluate_color(pattern_graph, "color", 0, p, 0.03),
            )

        with ThreadPoolExecutor(max_workers=16) as executor:
            # reversed so threads start on different points than the reference
            results = list(executor.map(job, reversed(range(len(points)))))

        for index, value, color in results:
            assert (value, color) == reference[index]
