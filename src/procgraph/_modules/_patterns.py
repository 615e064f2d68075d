"""Procedural noise patterns.

The fractal patterns sum octaves of gradient noise, each octave at twice the
frequency and ``persistence`` times the amplitude of the previous one. The
sample's extent, read from the coordinate errors, sets a band limit
``0.5 / size``: octaves above it average to zero over the sample and are
dropped, and octaves within a factor of two of it are faded out linearly.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, ClassVar

from pydantic import Field

from procgraph._catalog import register_module
from procgraph._enums import Axis, CellMetric, ModuleCategory
from procgraph._module import Module
from procgraph._noise import GRADIENT_BOUND, cells3, noise3
from procgraph._ports import Port

if TYPE_CHECKING:
    from collections.abc import Callable

    from procgraph._context import EvaluationContext
    from procgraph._noise import CellSample

# Keeps the first octave off the lattice, where noise is always zero.
_OFFSET = 123.456

_COORDINATE_PORTS = (
    Port.scalar(0, "X", follows=Axis.X),
    Port.scalar(1, "Y", follows=Axis.Y),
    Port.scalar(2, "Z", follows=Axis.Z),
)


def fractal_sum(  # noqa: PLR0913
    x: float,
    y: float,
    z: float,
    size: float,
    *,
    octaves: int,
    amplitude: float,
    persistence: float,
    seed: int = 0,
    shape: Callable[[float], float] | None = None,
) -> tuple[float, float]:
    """Return the band-limited (value, error) pair of a sum of noise octaves."""
    cutoff = 0.5 / size if size > 0.0 else math.inf
    amp = amplitude
    scale = 1.0
    value = 0.0
    error = 0.0
    for _ in range(octaves):
        if scale >= cutoff:
            break
        sample = noise3(x * scale + _OFFSET, y * scale + _OFFSET, z * scale + _OFFSET, seed)
        d = amp * (sample if shape is None else shape(sample))
        e = abs(amp) * scale * GRADIENT_BOUND * size
        if scale > 0.5 * cutoff:
            fade = 2.0 * (1.0 - scale / cutoff)
            d *= fade
            e *= fade
        value += d
        error += e
        amp *= persistence
        scale *= 2.0
    return value, error


class _FractalNoiseModule(Module):
    input_ports = _COORDINATE_PORTS
    output_ports = (Port.scalar(0, "Value"),)

    class Params(Module.Params):
        octaves: int = Field(default=4, ge=1, le=16)
        amplitude: float = 1.0
        persistence: float = Field(default=0.5, ge=0.0, le=1.0)
        seed: int = Field(default=0, ge=0)

    params: Params

    _shape: ClassVar[Callable[[float], float] | None] = None

    def _octaves(self, ctx: EvaluationContext) -> tuple[float, float]:
        size = max(self.input_error(0, ctx), self.input_error(1, ctx), self.input_error(2, ctx))
        return fractal_sum(
            self.input_value(0, ctx),
            self.input_value(1, ctx),
            self.input_value(2, ctx),
            size,
            octaves=self.params.octaves,
            amplitude=self.params.amplitude,
            persistence=self.params.persistence,
            seed=self.params.seed,
            shape=self._shape,
        )

    def average_value(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        return self._octaves(ctx)[0]

    def value_error(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        return self._octaves(ctx)[1]


@register_module(ModuleCategory.PATTERNS)
class NoiseModule(_FractalNoiseModule):
    """Fractal gradient noise, roughly in [-amplitude, amplitude]."""

    display_name = "Noise"


@register_module(ModuleCategory.PATTERNS)
class TurbulenceModule(_FractalNoiseModule):
    """Fractal sum of absolute noise octaves; never negative for positive amplitude."""

    display_name = "Turbulence"

    _shape = staticmethod(abs)


@register_module(ModuleCategory.PATTERNS)
class CellsModule(Module):
    """Worley's cellular pattern.

    Outputs a random value per cell, and the distances to the nearest and
    second nearest feature points. Distances carry the largest coordinate
    error. Near a cell boundary, closer than that error, the cell value is
    blended with the neighbouring cell's and its error is half their
    difference.
    """

    display_name = "Cells"
    input_ports = _COORDINATE_PORTS
    output_ports = (
        Port.scalar(0, "Cell"),
        Port.scalar(1, "Distance 1"),
        Port.scalar(2, "Distance 2"),
    )

    class Params(Module.Params):
        metric: CellMetric = CellMetric.EUCLIDEAN
        seed: int = Field(default=0, ge=0)

    params: Params

    def _size(self, ctx: EvaluationContext) -> float:
        return max(self.input_error(0, ctx), self.input_error(1, ctx), self.input_error(2, ctx))

    def _sample(self, ctx: EvaluationContext) -> CellSample:
        return cells3(
            self.input_value(0, ctx),
            self.input_value(1, ctx),
            self.input_value(2, ctx),
            self.params.metric,
            self.params.seed,
        )

    def average_value(self, which: int, ctx: EvaluationContext) -> float:
        sample = self._sample(ctx)
        if which == 1:
            return sample.distance1
        if which == 2:  # noqa: PLR2004
            return sample.distance2
        size = self._size(ctx)
        gap = sample.distance2 - sample.distance1
        if gap >= size:
            return sample.value1
        weight = 0.5 + 0.5 * gap / size
        return weight * sample.value1 + (1.0 - weight) * sample.value2

    def value_error(self, which: int, ctx: EvaluationContext) -> float:
        size = self._size(ctx)
        if which > 0:
            return size
        sample = self._sample(ctx)
        if sample.distance2 - sample.distance1 >= size:
            return 0.0
        return 0.5 * abs(sample.value1 - sample.value2)


@register_module(ModuleCategory.PATTERNS)
class WoodModule(Module):
    """Concentric rings around the Z axis, distorted by turbulence.

    The ring coordinate is the distance from the axis divided by ``spacing``
    plus a turbulence sum whose persistence comes from the ``Noise`` input.
    With ``mod`` set only its fractional part is output, averaged over the
    error interval; once that interval spans half a ring or more the output
    is the flat mean 0.5 with error 0.5.
    """

    display_name = "Wood"
    input_ports = (*_COORDINATE_PORTS, Port.scalar(3, "Noise", 0.5))
    output_ports = (Port.scalar(0, "Value"),)

    class Params(Module.Params):
        octaves: int = Field(default=2, ge=1, le=16)
        amplitude: float = 1.0
        spacing: float = Field(default=0.25, gt=0.0)
        mod: bool = True
        seed: int = Field(default=0, ge=0)

    params: Params

    def _rings(self, ctx: EvaluationContext) -> tuple[float, float]:
        x = self.input_value(0, ctx)
        y = self.input_value(1, ctx)
        x_size = self.input_error(0, ctx)
        y_size = self.input_error(1, ctx)
        size = max(x_size, y_size, self.input_error(2, ctx))
        turbulence, turbulence_error = fractal_sum(
            x,
            y,
            self.input_value(2, ctx),
            size,
            octaves=self.params.octaves,
            amplitude=0.5 * self.params.amplitude,
            persistence=self.input_value(3, ctx),
            seed=self.params.seed,
            shape=abs,
        )
        scale = 1.0 / self.params.spacing
        value = math.hypot(x, y) * scale + turbulence
        error = max(x_size, y_size) * scale + turbulence_error
        if not self.params.mod:
            return value, error
        if error >= 0.5 or not math.isfinite(value):  # noqa: PLR2004
            return 0.5, 0.5
        if error == 0.0:
            return value - math.floor(value), 0.0
        low = value - error
        high = value + error
        low -= math.floor(low)
        high -= math.floor(high)
        if high > low:
            return 0.5 * (high + low), error
        # The interval wraps past a ring boundary.
        return (0.5 * high * high + 0.5 * (1.0 + low) * (1.0 - low)) / (1.0 - low + high), 0.5

    def average_value(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        return self._rings(ctx)[0]

    def value_error(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        return self._rings(ctx)[1]
