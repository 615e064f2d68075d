"""Equality tests that select between two values."""

from __future__ import annotations

from typing import TYPE_CHECKING

from procgraph._catalog import register_module
from procgraph._color import BLACK, WHITE
from procgraph._enums import ModuleCategory
from procgraph._module import Module
from procgraph._ports import Port

if TYPE_CHECKING:
    from procgraph._context import EvaluationContext

TOLERANCE = 1e-12

_FALSE_OUTPUT = 0
_TRUE_OUTPUT = 1
_COLOR_1 = 2
_COLOR_2 = 7
# (first, second) input indices of the four scalar pairs
_SCALAR_PAIRS = ((3, 8), (4, 9), (5, 10), (6, 11))


@register_module(ModuleCategory.COMPARISON)
class EqualityModule(Module):
    """Selects one of two values depending on whether its comparanda are equal.

    One color pair and four scalar pairs are compared in order. A pair takes
    part only when its first input is bound; the second falls back to its
    default (black, 0.0). The first pair that differs by more than
    ``TOLERANCE`` decides "false" without looking at the rest. If no pair took
    part the result is also "false".

    The result is the ``True output`` input (default 1.0) or the
    ``False output`` input (default 0.0).
    """

    display_name = "Equality"
    input_ports = (
        Port.boolean(_FALSE_OUTPUT, "False output"),
        Port.boolean(_TRUE_OUTPUT, "True output", default=True),
        Port.color(_COLOR_1, "Color 1", WHITE),
        Port.scalar(3, "Scalar 1:1", 1.0),
        Port.scalar(4, "Scalar 1:2", 1.0),
        Port.scalar(5, "Scalar 1:3", 1.0),
        Port.scalar(6, "Scalar 1:4", 1.0),
        Port.color(_COLOR_2, "Color 2", BLACK),
        Port.scalar(8, "Scalar 2:1", 0.0),
        Port.scalar(9, "Scalar 2:2", 0.0),
        Port.scalar(10, "Scalar 2:3", 0.0),
        Port.scalar(11, "Scalar 2:4", 0.0),
    )
    output_ports = (Port.boolean(0, "True/False"),)

    def is_equal(self, ctx: EvaluationContext) -> bool:
        """Run the comparison without resolving the selected result."""
        compared = False
        if self.is_bound(_COLOR_1):
            compared = True
            color2 = self.input_color(_COLOR_2, ctx)
            color1 = self.input_color(_COLOR_1, ctx)
            if color1.max_difference(color2) > TOLERANCE:
                return False
        for first, second in _SCALAR_PAIRS:
            if not self.is_bound(first):
                continue
            compared = True
            if abs(self.input_value(first, ctx) - self.input_value(second, ctx)) > TOLERANCE:
                return False
        return compared

    def average_value(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        if self.is_equal(ctx):
            return self.input_value(_TRUE_OUTPUT, ctx)
        return self.input_value(_FALSE_OUTPUT, ctx)

    # A discrete decision: the error does not vary with blur.
    def value_error(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        return TOLERANCE


@register_module(ModuleCategory.COMPARISON)
class NumberEqualityModule(Module):
    """Outputs 1.0 when two numbers agree within a tolerance, else 0.0.

    Both values must be bound; otherwise there is nothing to compare and the
    result is 0.0.
    """

    display_name = "Number Equality"
    input_ports = (
        Port.scalar(0, "Value 1"),
        Port.scalar(1, "Value 2"),
        Port.scalar(2, "Tolerance", TOLERANCE),
    )
    output_ports = (Port.boolean(0, "True/False"),)

    def average_value(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        if not (self.is_bound(0) and self.is_bound(1)):
            return 0.0
        tolerance = self.input_value(2, ctx)
        difference = abs(self.input_value(0, ctx) - self.input_value(1, ctx))
        return 1.0 if difference < tolerance else 0.0

    def value_error(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        return max(self.input_value(2, ctx), 0.0) if self.is_bound(2) else TOLERANCE


@register_module(ModuleCategory.COMPARISON)
class ColorEqualityModule(Module):
    """Outputs 1.0 when two colors agree channel by channel, else 0.0."""

    display_name = "Color Equality"
    input_ports = (Port.color(0, "Color 1", WHITE), Port.color(1, "Color 2", BLACK))
    output_ports = (Port.boolean(0, "True/False"),)

    def average_value(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        color1 = self.input_color(0, ctx)
        color2 = self.input_color(1, ctx)
        return 1.0 if color1.max_difference(color2) <= TOLERANCE else 0.0

    def value_error(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        return TOLERANCE
