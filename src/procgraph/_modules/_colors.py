"""Color composition and conversion.

The error reported for a color output is the largest error of the inputs that
feed it, scaled where the module scales them.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from procgraph._catalog import register_module
from procgraph._color import BLACK, WHITE, RGBColor
from procgraph._enums import ModuleCategory
from procgraph._module import Module
from procgraph._ports import Port

from ._functions import clamped_unit_average

if TYPE_CHECKING:
    from procgraph._context import EvaluationContext


class _TwoColorModule(Module):
    """Base for modules combining two colors channel-wise."""

    def _combine(self, color1: RGBColor, color2: RGBColor) -> RGBColor:
        raise NotImplementedError

    def color_value(self, which: int, ctx: EvaluationContext) -> RGBColor:  # noqa: ARG002
        return self._combine(self.input_color(0, ctx), self.input_color(1, ctx))

    def average_value(self, which: int, ctx: EvaluationContext) -> float:
        return self.color_value(which, ctx).brightness

    def value_error(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        return self.input_error(0, ctx) + self.input_error(1, ctx)


@register_module(ModuleCategory.COLOR_FUNCTIONS)
class ColorSumModule(_TwoColorModule):
    """Outputs the sum of two colors."""

    display_name = "+"
    input_ports = (Port.color(0, "Color 1", BLACK), Port.color(1, "Color 2", BLACK))
    output_ports = (Port.color(0, "Sum"),)

    def _combine(self, color1: RGBColor, color2: RGBColor) -> RGBColor:
        return color1 + color2


@register_module(ModuleCategory.COLOR_FUNCTIONS)
class ColorDifferenceModule(_TwoColorModule):
    """Outputs the difference of two colors."""

    display_name = "-"
    input_ports = (Port.color(0, "Color 1", WHITE), Port.color(1, "Color 2", BLACK))
    output_ports = (Port.color(0, "Difference"),)

    def _combine(self, color1: RGBColor, color2: RGBColor) -> RGBColor:
        return color1 - color2


@register_module(ModuleCategory.COLOR_FUNCTIONS)
class ColorProductModule(_TwoColorModule):
    """Outputs the channel-wise product of two colors."""

    display_name = "×"
    input_ports = (Port.color(0, "Color 1", WHITE), Port.color(1, "Color 2", WHITE))
    output_ports = (Port.color(0, "Product"),)

    def _combine(self, color1: RGBColor, color2: RGBColor) -> RGBColor:
        return color1 * color2


@register_module(ModuleCategory.COLOR_FUNCTIONS)
class ColorDarkenModule(_TwoColorModule):
    """Outputs the darker of two colors."""

    display_name = "Darker"
    input_ports = (Port.color(0, "Color 1", WHITE), Port.color(1, "Color 2", WHITE))
    output_ports = (Port.color(0, "Darker"),)

    def _combine(self, color1: RGBColor, color2: RGBColor) -> RGBColor:
        return color1 if color1.brightness < color2.brightness else color2


@register_module(ModuleCategory.COLOR_FUNCTIONS)
class ColorLightenModule(_TwoColorModule):
    """Outputs the lighter of two colors."""

    display_name = "Lighter"
    input_ports = (Port.color(0, "Color 1", BLACK), Port.color(1, "Color 2", BLACK))
    output_ports = (Port.color(0, "Lighter"),)

    def _combine(self, color1: RGBColor, color2: RGBColor) -> RGBColor:
        return color1 if color1.brightness > color2.brightness else color2


@register_module(ModuleCategory.COLOR_FUNCTIONS)
class ColorScaleModule(Module):
    """Outputs the product of a color and a number."""

    display_name = "×"
    input_ports = (Port.color(0, "Color", WHITE), Port.scalar(1, "Scale", 1.0))
    output_ports = (Port.color(0, "Product"),)

    def color_value(self, which: int, ctx: EvaluationContext) -> RGBColor:  # noqa: ARG002
        color = self.input_color(0, ctx)
        if not self.is_bound(1):
            return color
        return color.scale(self.input_value(1, ctx))

    def average_value(self, which: int, ctx: EvaluationContext) -> float:
        return self.color_value(which, ctx).brightness

    def value_error(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        scale = self.input_value(1, ctx)
        color = self.input_color(0, ctx)
        return abs(scale) * self.input_error(0, ctx) + abs(color.brightness) * self.input_error(1, ctx)


@register_module(ModuleCategory.COLOR_FUNCTIONS)
class BlendModule(Module):
    """Outputs a weighted average of two colors.

    The fraction is clamped to [0, 1] and averaged over its error interval, as
    in InterpolateModule.
    """

    display_name = "Blend"
    input_ports = (
        Port.color(0, "Color 1", BLACK),
        Port.color(1, "Color 2", WHITE),
        Port.scalar(2, "Fraction", 0.5),
    )
    output_ports = (Port.color(0, "Blend"),)

    def _fraction(self, ctx: EvaluationContext) -> float:
        return clamped_unit_average(self.input_value(2, ctx), self.input_error(2, ctx))

    def color_value(self, which: int, ctx: EvaluationContext) -> RGBColor:  # noqa: ARG002
        fract = self._fraction(ctx)
        if fract <= 0.0:
            return self.input_color(0, ctx)
        if fract >= 1.0:
            return self.input_color(1, ctx)
        return self.input_color(0, ctx).scale(1.0 - fract) + self.input_color(1, ctx).scale(fract)

    def average_value(self, which: int, ctx: EvaluationContext) -> float:
        return self.color_value(which, ctx).brightness

    def value_error(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        fract = self._fraction(ctx)
        error = (1.0 - fract) * self.input_error(0, ctx) + fract * self.input_error(1, ctx)
        if 0.0 < fract < 1.0:
            spread = self.input_color(0, ctx).max_difference(self.input_color(1, ctx))
            error += spread * min(self.input_error(2, ctx), 0.5)
        return error


@register_module(ModuleCategory.COLOR_FUNCTIONS)
class RGBModule(Module):
    """Builds a color from red, green and blue components."""

    display_name = "RGB"
    input_ports = (Port.scalar(0, "Red"), Port.scalar(1, "Green"), Port.scalar(2, "Blue"))
    output_ports = (Port.color(0, "Color"),)

    def color_value(self, which: int, ctx: EvaluationContext) -> RGBColor:  # noqa: ARG002
        return RGBColor(self.input_value(0, ctx), self.input_value(1, ctx), self.input_value(2, ctx))

    def average_value(self, which: int, ctx: EvaluationContext) -> float:
        return self.color_value(which, ctx).brightness

    def value_error(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        return max(self.input_error(i, ctx) for i in range(3))


@register_module(ModuleCategory.COLOR_FUNCTIONS)
class HSVModule(Module):
    """Builds a color from hue, saturation and value.

    Hue wraps around at 1.0. Saturation is clamped to [0, 1]. When the hue is
    uncertain, the color is the mean of the two ends of its error interval
    (with the half-width capped at a quarter turn).
    """

    display_name = "HSV"
    input_ports = (
        Port.scalar(0, "Hue", 1.0),
        Port.scalar(1, "Saturation", 1.0),
        Port.scalar(2, "Value", 1.0),
    )
    output_ports = (Port.color(0, "Color"),)

    def color_value(self, which: int, ctx: EvaluationContext) -> RGBColor:  # noqa: ARG002
        hue = self.input_value(0, ctx)
        saturation = min(max(self.input_value(1, ctx), 0.0), 1.0)
        value = self.input_value(2, ctx)
        hue_error = min(0.5 * self.input_error(0, ctx), 0.25)
        if hue_error == 0.0:
            return RGBColor.from_hsv((hue - math.floor(hue)) * 360.0, saturation, value)
        low = hue - hue_error
        high = hue + hue_error
        color1 = RGBColor.from_hsv((low - math.floor(low)) * 360.0, saturation, value)
        color2 = RGBColor.from_hsv((high - math.floor(high)) * 360.0, saturation, value)
        return (color1 + color2).scale(0.5)

    def average_value(self, which: int, ctx: EvaluationContext) -> float:
        return self.color_value(which, ctx).brightness

    def value_error(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        value = abs(self.input_value(2, ctx))
        return max(min(self.input_error(0, ctx), 1.0) * value, self.input_error(1, ctx) * value, self.input_error(2, ctx))


@register_module(ModuleCategory.COLOR_FUNCTIONS)
class RGBToHSVModule(Module):
    """Splits red, green and blue components into hue, saturation and value.

    Hue is reported as a fraction of a full turn.
    """

    display_name = "RGB to HSV"
    input_ports = (Port.scalar(0, "Red"), Port.scalar(1, "Green"), Port.scalar(2, "Blue"))
    output_ports = (Port.scalar(0, "Hue"), Port.scalar(1, "Saturation"), Port.scalar(2, "Value"))

    def average_value(self, which: int, ctx: EvaluationContext) -> float:
        color = RGBColor(self.input_value(0, ctx), self.input_value(1, ctx), self.input_value(2, ctx))
        hue, saturation, value = color.to_hsv()
        match which:
            case 0:
                return hue / 360.0
            case 1:
                return saturation
            case 2:
                return value
            case _:
                return 0.0

    def value_error(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        return max(self.input_error(i, ctx) for i in range(3))
