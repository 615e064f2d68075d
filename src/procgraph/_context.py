"""Per-call evaluation parameters.

A module instance is shared between threads, so everything that varies from
one evaluation call to the next lives here rather than on the module.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace

from ._enums import Axis


@dataclass(frozen=True, slots=True)
class SamplePoint:
    """A point at which the renderer wants the graph evaluated.

    Attributes:
        x, y, z: Position.
        t: Animation time.
        xsize, ysize, zsize: Half-extent of the sampled region along each axis.

    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    t: float = 0.0
    xsize: float = 0.0
    ysize: float = 0.0
    zsize: float = 0.0

    def coordinate(self, axis: Axis) -> float:
        match axis:
            case Axis.X:
                return self.x
            case Axis.Y:
                return self.y
            case Axis.Z:
                return self.z
            case Axis.T:
                return self.t

    def size(self, axis: Axis) -> float:
        """Half-extent along ``axis``; time has no extent."""
        match axis:
            case Axis.X:
                return self.xsize
            case Axis.Y:
                return self.ysize
            case Axis.Z:
                return self.zsize
            case Axis.T:
                return 0.0


@dataclass(frozen=True, slots=True)
class EvaluationContext:
    """Blur radius and sample point for one evaluation call.

    Attributes:
        point: The sample point routed to coordinate modules.
        blur: Non-negative area-averaging radius. Zero means point evaluation.

    """

    point: SamplePoint = field(default_factory=SamplePoint)
    blur: float = 0.0

    def __post_init__(self) -> None:
        if not math.isfinite(self.blur) or self.blur < 0.0:
            msg = f"Blur must be a finite non-negative number, got {self.blur!r}"
            raise ValueError(msg)

    def with_blur(self, blur: float) -> EvaluationContext:
        """Return a context for the same point with a different blur."""
        if blur == self.blur:
            return self
        return replace(self, blur=max(blur, 0.0))

    def coordinate_error(self, axis: Axis) -> float:
        """Uncertainty of a raw coordinate: half the sample size plus blur."""
        if axis is Axis.T:
            return 0.0
        return 0.5 * self.point.size(axis) + self.blur
