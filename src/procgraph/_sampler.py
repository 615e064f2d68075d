"""Adaptive sampling driven by the modules' error estimates."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ._config import SamplerSettings
from ._context import EvaluationContext, SamplePoint
from ._enums import PortKind
from ._eval_engine import resolve_output

if TYPE_CHECKING:
    from ._color import RGBColor
    from ._graph import Graph

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Sample:
    """One leaf cell of the refined sampling grid.

    Attributes:
        x, y: Centre of the cell.
        xsize, ysize: Half-extent of the cell.
        depth: How many times the cell's tile was split to reach it.
        value: Output value averaged over the cell.
        error: Error estimate of that value.

    """

    x: float
    y: float
    xsize: float
    ysize: float
    depth: int
    value: float | RGBColor
    error: float


@dataclass(frozen=True, slots=True)
class _Cell:
    x0: float
    y0: float
    x1: float
    y1: float
    depth: int

    def quadrants(self) -> tuple[_Cell, _Cell, _Cell, _Cell]:
        xm = 0.5 * (self.x0 + self.x1)
        ym = 0.5 * (self.y0 + self.y1)
        d = self.depth + 1
        return (
            _Cell(self.x0, self.y0, xm, ym, d),
            _Cell(xm, self.y0, self.x1, ym, d),
            _Cell(self.x0, ym, xm, self.y1, d),
            _Cell(xm, ym, self.x1, self.y1, d),
        )


class AdaptiveSampler:
    """Samples one graph output over a rectangle of the xy plane.

    Each cell is evaluated at its centre, with its half-extent as the sample
    size. A cell whose error estimate exceeds ``settings.error_threshold`` is
    split into four until ``settings.max_depth`` is reached. The rectangle is
    first cut into ``settings.tiles`` x ``settings.tiles`` tiles that are
    refined concurrently.

    Samples come back tile by tile in row order, and within a tile in
    depth-first quadrant order, independent of the number of workers.
    """

    def __init__(
        self,
        graph: Graph,
        module_id: str,
        output_index: int,
        settings: SamplerSettings | None = None,
        *,
        z: float = 0.0,
        t: float = 0.0,
        blur: float = 0.0,
    ) -> None:
        self._module, port = resolve_output(graph, module_id, output_index)
        self._is_color = port.kind is PortKind.COLOR
        self.output_index = output_index
        self.settings = settings if settings is not None else SamplerSettings()
        self.z = z
        self.t = t
        self.blur = blur

    def _evaluate(self, cell: _Cell) -> Sample:
        xsize = 0.5 * (cell.x1 - cell.x0)
        ysize = 0.5 * (cell.y1 - cell.y0)
        point = SamplePoint(cell.x0 + xsize, cell.y0 + ysize, self.z, self.t, xsize, ysize, 0.0)
        ctx = EvaluationContext(point, self.blur)
        which = self.output_index
        value = self._module.color_value(which, ctx) if self._is_color else self._module.average_value(which, ctx)
        return Sample(point.x, point.y, xsize, ysize, cell.depth, value, self._module.value_error(which, ctx))

    def _refine(self, tile: _Cell) -> list[Sample]:
        samples: list[Sample] = []
        stack = [tile]
        while stack:
            cell = stack.pop()
            sample = self._evaluate(cell)
            if sample.error > self.settings.error_threshold and cell.depth < self.settings.max_depth:
                # reversed so the first quadrant is refined first
                stack.extend(reversed(cell.quadrants()))
            else:
                samples.append(sample)
        return samples

    def sample(self, x0: float, y0: float, x1: float, y1: float) -> list[Sample]:
        """Sample the rectangle ``[x0, x1] x [y0, y1]``.

        Raises:
            ValueError: If the rectangle is empty.

        """
        if not (x1 > x0 and y1 > y0):
            msg = f"Empty sampling region ({x0}, {y0}) - ({x1}, {y1})"
            raise ValueError(msg)

        n = self.settings.tiles
        width = (x1 - x0) / n
        height = (y1 - y0) / n
        tiles = [
            _Cell(x0 + i * width, y0 + j * height, x0 + (i + 1) * width, y0 + (j + 1) * height, 0)
            for j in range(n)
            for i in range(n)
        ]
        logger.debug("Sampling %d tiles with %d workers", len(tiles), self.settings.workers)

        if self.settings.workers == 1:
            per_tile = [self._refine(tile) for tile in tiles]
        else:
            with ThreadPoolExecutor(max_workers=self.settings.workers) as executor:
                per_tile = list(executor.map(self._refine, tiles))

        return [sample for samples in per_tile for sample in samples]
