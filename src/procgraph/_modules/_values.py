"""Leaf modules: constants, sample coordinates and graph outputs."""

from __future__ import annotations

from typing import TYPE_CHECKING

from procgraph._catalog import register_module
from procgraph._color import BLACK, WHITE, RGBColor
from procgraph._enums import Axis, ModuleCategory
from procgraph._module import Module
from procgraph._ports import Port

if TYPE_CHECKING:
    from procgraph._context import EvaluationContext


@register_module(ModuleCategory.VALUES)
class NumberModule(Module):
    """Outputs a constant number."""

    display_name = "Number"
    output_ports = (Port.scalar(0, "Value"),)

    class Params(Module.Params):
        value: float = 0.0

    params: Params

    def average_value(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        return self.params.value


@register_module(ModuleCategory.VALUES)
class ColorModule(Module):
    """Outputs a constant color."""

    display_name = "Color"
    output_ports = (Port.color(0, "Color"),)

    class Params(Module.Params):
        red: float = 1.0
        green: float = 1.0
        blue: float = 1.0

    params: Params

    @property
    def color(self) -> RGBColor:
        return RGBColor(self.params.red, self.params.green, self.params.blue)

    def color_value(self, which: int, ctx: EvaluationContext) -> RGBColor:  # noqa: ARG002
        return self.color

    def average_value(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        return self.color.brightness


@register_module(ModuleCategory.VALUES)
class CoordinateModule(Module):
    """Outputs one coordinate of the sample point.

    The error is half the sample size along the axis plus the blur radius, so
    downstream modules see how far the coordinate ranges over the sample.
    """

    display_name = "Coordinate"
    output_ports = (Port.scalar(0, "Value"),)

    class Params(Module.Params):
        axis: Axis = Axis.X

    params: Params

    def average_value(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        return ctx.point.coordinate(self.params.axis)

    def value_error(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        return ctx.coordinate_error(self.params.axis)


@register_module(ModuleCategory.VALUES)
class ScalarOutputModule(Module):
    """Final numeric output of a graph; passes its input through."""

    display_name = "Output"
    input_ports = (Port.scalar(0, "Value"),)
    output_ports = (Port.scalar(0, "Value"),)

    class Params(Module.Params):
        default: float = 0.0

    params: Params

    def average_value(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        if not self.is_bound(0):
            return self.params.default
        return self.input_value(0, ctx)

    def value_error(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        return self.input_error(0, ctx)


@register_module(ModuleCategory.VALUES)
class ColorOutputModule(Module):
    """Final color output of a graph; passes its input through."""

    display_name = "Color Output"
    input_ports = (Port.color(0, "Color", BLACK),)
    output_ports = (Port.color(0, "Color"),)

    class Params(Module.Params):
        default: tuple[float, float, float] = WHITE.as_tuple()

    params: Params

    def color_value(self, which: int, ctx: EvaluationContext) -> RGBColor:  # noqa: ARG002
        if not self.is_bound(0):
            return RGBColor(*self.params.default)
        return self.input_color(0, ctx)

    def average_value(self, which: int, ctx: EvaluationContext) -> float:
        return self.color_value(which, ctx).brightness

    def value_error(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        return self.input_error(0, ctx)
