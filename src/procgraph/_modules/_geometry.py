"""Coordinate transforms that need the 3x3 solver."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from procgraph._catalog import register_module
from procgraph._enums import Axis, ModuleCategory
from procgraph._linalg import Matrix3, Unsolvable, inverse3, solve3
from procgraph._module import Module
from procgraph._ports import Port

if TYPE_CHECKING:
    from procgraph._context import EvaluationContext

logger = logging.getLogger(__name__)

Triple = tuple[float, float, float]


@register_module(ModuleCategory.GEOMETRY)
class ChangeOfBasisModule(Module):
    """Expresses a point in the coordinates of another basis.

    Solves ``origin + u*U + v*V + w*W = (x, y, z)`` for ``(u, v, w)``. A
    degenerate basis has no unique solution; every output is then 0.0 with no
    error.
    """

    display_name = "Change of Basis"
    input_ports = (
        Port.scalar(0, "X", follows=Axis.X),
        Port.scalar(1, "Y", follows=Axis.Y),
        Port.scalar(2, "Z", follows=Axis.Z),
    )
    output_ports = (Port.scalar(0, "U"), Port.scalar(1, "V"), Port.scalar(2, "W"))

    class Params(Module.Params):
        origin: Triple = (0.0, 0.0, 0.0)
        u_axis: Triple = (1.0, 0.0, 0.0)
        v_axis: Triple = (0.0, 1.0, 0.0)
        w_axis: Triple = (0.0, 0.0, 1.0)

    params: Params

    @property
    def matrix(self) -> Matrix3:
        """Basis vectors as matrix columns."""
        u, v, w = self.params.u_axis, self.params.v_axis, self.params.w_axis
        return ((u[0], v[0], w[0]), (u[1], v[1], w[1]), (u[2], v[2], w[2]))

    def average_value(self, which: int, ctx: EvaluationContext) -> float:
        origin = self.params.origin
        offset = tuple(self.input_value(i, ctx) - origin[i] for i in range(3))
        try:
            solution = solve3(self.matrix, offset)
        except Unsolvable:
            logger.debug("%s: basis is degenerate, using zero output", self.id)
            return 0.0
        return solution[which]

    def value_error(self, which: int, ctx: EvaluationContext) -> float:
        try:
            row = inverse3(self.matrix)[which]
        except Unsolvable:
            return 0.0
        return sum(abs(row[i]) * self.input_error(i, ctx) for i in range(3))
