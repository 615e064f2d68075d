"""Core evaluation entry points for module graphs."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import TYPE_CHECKING

from procgraph._color import RGBColor
from procgraph._context import EvaluationContext, SamplePoint
from procgraph._enums import PortKind

from ._resolution import require_numeric, resolve_output

if TYPE_CHECKING:
    from collections.abc import Sequence

    from procgraph._graph import Graph

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EvaluationResult:
    """Values and error estimates for a batch of sample points.

    Attributes:
        values: One value per point, in the order the points were given.
            Color outputs produce ``RGBColor`` values, all others floats.
        errors: The matching error estimates.

    """

    values: tuple[float | RGBColor, ...]
    errors: tuple[float, ...]

    def __len__(self) -> int:
        return len(self.values)

    @property
    def max_error(self) -> float:
        """Largest error estimate in the batch (0.0 when empty)."""
        return max(self.errors, default=0.0)


def evaluate_scalar(
    graph: Graph,
    module_id: str,
    output_index: int,
    point: SamplePoint,
    blur: float = 0.0,
) -> float:
    """Evaluate a scalar or boolean output at a point.

    Raises:
        UnknownModuleError: If no module has the given id.
        PortIndexError: If the module has no such output.
        PortKindMismatchError: If the output is a color.
        CycleDetectedError: If the graph contains a cycle.

    """
    module, port = resolve_output(graph, module_id, output_index)
    require_numeric(module, port)
    return module.average_value(output_index, EvaluationContext(point, blur))


def evaluate_color(
    graph: Graph,
    module_id: str,
    output_index: int,
    point: SamplePoint,
    blur: float = 0.0,
) -> RGBColor:
    """Evaluate any output as a color; numeric outputs widen to grey."""
    module, _ = resolve_output(graph, module_id, output_index)
    return module.color_value(output_index, EvaluationContext(point, blur))


def estimate_error(
    graph: Graph,
    module_id: str,
    output_index: int,
    blur: float = 0.0,
    point: SamplePoint | None = None,
) -> float:
    """Estimate how much an output varies around a point.

    Without a point the estimate is taken at the origin with zero size.
    """
    module, _ = resolve_output(graph, module_id, output_index)
    ctx = EvaluationContext(point if point is not None else SamplePoint(), blur)
    return module.value_error(output_index, ctx)


def evaluate_many(
    graph: Graph,
    module_id: str,
    output_index: int,
    points: Sequence[SamplePoint],
    blur: float = 0.0,
    workers: int = 1,
) -> EvaluationResult:
    """Evaluate one output at many points, optionally on a thread pool.

    The graph is validated once up front; the worker threads then share it
    read-only. Results keep the order of ``points`` whatever the number of
    workers.
    """
    if workers < 1:
        msg = f"workers must be at least 1, got {workers}"
        raise ValueError(msg)
    module, port = resolve_output(graph, module_id, output_index)
    is_color = port.kind is PortKind.COLOR

    def sample(point: SamplePoint) -> tuple[float | RGBColor, float]:
        ctx = EvaluationContext(point, blur)
        value = module.color_value(output_index, ctx) if is_color else module.average_value(output_index, ctx)
        return value, module.value_error(output_index, ctx)

    logger.debug("Evaluating %s[%d] at %d points with %d workers", module_id, output_index, len(points), workers)
    if workers == 1:
        pairs = [sample(point) for point in points]
    else:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            pairs = list(executor.map(sample, points))

    return EvaluationResult(
        values=tuple(value for value, _ in pairs),
        errors=tuple(error for _, error in pairs),
    )
