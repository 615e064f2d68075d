"""Arithmetic on two numbers.

Averages pass through linear operators unchanged, so these modules apply their
transfer function to the averaged inputs and propagate errors to first order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from procgraph._catalog import register_module
from procgraph._enums import ModuleCategory
from procgraph._module import Module
from procgraph._ports import Port

if TYPE_CHECKING:
    from procgraph._context import EvaluationContext


@register_module(ModuleCategory.OPERATORS)
class SumModule(Module):
    """Outputs the sum of two numbers."""

    display_name = "+"
    input_ports = (Port.scalar(0, "Value 1"), Port.scalar(1, "Value 2"))
    output_ports = (Port.scalar(0, "Sum"),)

    def average_value(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        return self.input_value(0, ctx) + self.input_value(1, ctx)

    def value_error(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        return self.input_error(0, ctx) + self.input_error(1, ctx)


@register_module(ModuleCategory.OPERATORS)
class DifferenceModule(Module):
    """Outputs the difference of two numbers."""

    display_name = "-"
    input_ports = (Port.scalar(0, "Value 1"), Port.scalar(1, "Value 2"))
    output_ports = (Port.scalar(0, "Difference"),)

    def average_value(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        return self.input_value(0, ctx) - self.input_value(1, ctx)

    def value_error(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        return self.input_error(0, ctx) + self.input_error(1, ctx)


@register_module(ModuleCategory.OPERATORS)
class ProductModule(Module):
    """Outputs the product of two numbers."""

    display_name = "×"
    input_ports = (Port.scalar(0, "Value 1"), Port.scalar(1, "Value 2"))
    output_ports = (Port.scalar(0, "Product"),)

    def average_value(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        return self.input_value(0, ctx) * self.input_value(1, ctx)

    def value_error(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        value1 = self.input_value(0, ctx)
        value2 = self.input_value(1, ctx)
        return abs(value1 * self.input_error(1, ctx)) + abs(value2 * self.input_error(0, ctx))


class _ExtremumModule(Module):
    """Shared logic for Min and Max: pick one input, report that input's error."""

    input_ports = (Port.scalar(0, "Value 1"), Port.scalar(1, "Value 2"))

    def _pick_first(self, value1: float, value2: float) -> bool:
        raise NotImplementedError

    def average_value(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        value1 = self.input_value(0, ctx)
        value2 = self.input_value(1, ctx)
        return value1 if self._pick_first(value1, value2) else value2

    def value_error(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        value1 = self.input_value(0, ctx)
        value2 = self.input_value(1, ctx)
        return self.input_error(0 if self._pick_first(value1, value2) else 1, ctx)


@register_module(ModuleCategory.OPERATORS)
class MinModule(_ExtremumModule):
    """Outputs the smaller of two numbers."""

    display_name = "Min"
    output_ports = (Port.scalar(0, "Minimum"),)

    def _pick_first(self, value1: float, value2: float) -> bool:
        return value1 <= value2


@register_module(ModuleCategory.OPERATORS)
class MaxModule(_ExtremumModule):
    """Outputs the larger of two numbers."""

    display_name = "Max"
    output_ports = (Port.scalar(0, "Maximum"),)

    def _pick_first(self, value1: float, value2: float) -> bool:
        return value1 >= value2
