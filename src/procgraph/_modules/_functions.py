"""Numeric functions and filters.

Nonlinear functions are averaged over the interval their input may span,
taking the input's error estimate as that interval's half-width.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from procgraph._catalog import register_module
from procgraph._enums import ModuleCategory
from procgraph._module import Module
from procgraph._ports import Port

if TYPE_CHECKING:
    from procgraph._context import EvaluationContext

# Largest argument math.exp accepts without overflowing.
_EXP_LIMIT = 709.0


def _exp(x: float) -> float:
    return math.exp(min(x, _EXP_LIMIT))


def clamped_unit_average(value: float, error: float) -> float:
    """Mean of ``clamp(v, 0, 1)`` for ``v`` uniform over ``value ± error``.

    Example:
        >>> clamped_unit_average(0.0, 1.0)
        0.25

    """
    if math.isinf(error):
        # The clamp spends half of an unbounded interval at each end.
        return 0.5
    low, high = value - error, value + error
    if high <= 0.0:
        return 0.0
    if low >= 1.0:
        return 1.0
    if low >= 0.0 and high <= 1.0:
        return value
    result = 0.0
    low = max(low, 0.0)
    if high > 1.0:
        result = high - 1.0
        high = 1.0
    result += 0.5 * (high + low) * (high - low)
    return result / (2.0 * error)


@register_module(ModuleCategory.FUNCTIONS)
class AbsModule(Module):
    """Outputs the absolute value of a number."""

    display_name = "Abs"
    input_ports = (Port.scalar(0, "Input"),)
    output_ports = (Port.scalar(0, "Output"),)

    def average_value(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        return abs(self.input_value(0, ctx))

    # The error is unchanged by this module.
    def value_error(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        return self.input_error(0, ctx)


@register_module(ModuleCategory.FUNCTIONS)
class InterpolateModule(Module):
    """Interpolates between two numbers.

    The fraction is clamped to [0, 1]. When its error interval straddles either
    end, the clamped fraction is averaged over that interval so the output
    blends smoothly instead of stepping.
    """

    display_name = "Interpolate"
    input_ports = (
        Port.scalar(0, "Value 1", 0.0),
        Port.scalar(1, "Value 2", 1.0),
        Port.scalar(2, "Fraction", 0.0),
    )
    output_ports = (Port.scalar(0, "Interpolate"),)

    def _fraction(self, ctx: EvaluationContext) -> float:
        return clamped_unit_average(self.input_value(2, ctx), self.input_error(2, ctx))

    def average_value(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        fract = self._fraction(ctx)
        value1 = 0.0 if fract == 1.0 else self.input_value(0, ctx)
        value2 = 0.0 if fract == 0.0 else self.input_value(1, ctx)
        return (1.0 - fract) * value1 + fract * value2

    def value_error(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        fract = self._fraction(ctx)
        error = (1.0 - fract) * self.input_error(0, ctx) + fract * self.input_error(1, ctx)
        if 0.0 < fract < 1.0:
            spread = abs(self.input_value(1, ctx) - self.input_value(0, ctx))
            error += spread * min(self.input_error(2, ctx), 0.5)
        return error


@register_module(ModuleCategory.FUNCTIONS)
class BlurModule(Module):
    """Adds extra blur to everything upstream of its input."""

    display_name = "Blur"
    input_ports = (Port.scalar(0, "Blur", 0.05), Port.scalar(1, "Input"))
    output_ports = (Port.scalar(0, "Output"),)

    def _blurred(self, ctx: EvaluationContext) -> EvaluationContext:
        extra = self.input_value(0, ctx)
        if not math.isfinite(extra):
            extra = 0.0
        return ctx.with_blur(ctx.blur + extra)

    def average_value(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        if not self.is_bound(1):
            return self.input_value(1, ctx)
        return self.input_value(1, self._blurred(ctx))

    def value_error(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        if not self.is_bound(1):
            return 0.0
        return self.input_error(1, self._blurred(ctx))


@register_module(ModuleCategory.FUNCTIONS)
class CosineModule(Module):
    """Outputs the cosine of a number."""

    display_name = "Cos"
    input_ports = (Port.scalar(0, "Value"),)
    output_ports = (Port.scalar(0, "Cosine"),)

    def average_value(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        value = self.input_value(0, ctx)
        error = self.input_error(0, ctx)
        if error == 0.0:
            return math.cos(value)
        return (math.sin(value + error) - math.sin(value - error)) / (2.0 * error)

    def value_error(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        error = self.input_error(0, ctx)
        if error == 0.0:
            return 0.0
        return min(abs(math.sin(self.input_value(0, ctx)) * error), 0.5)


@register_module(ModuleCategory.FUNCTIONS)
class ExpModule(Module):
    """Outputs the exponential of a number.

    Arguments are capped at the largest value ``math.exp`` accepts. Once the
    whole error interval lies above the cap, the output saturates instead of
    being averaged.
    """

    display_name = "Exp"
    input_ports = (Port.scalar(0, "Value"),)
    output_ports = (Port.scalar(0, "Exponential"),)

    def average_value(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        value = self.input_value(0, ctx)
        error = self.input_error(0, ctx)
        if error == 0.0 or value - error >= _EXP_LIMIT:
            return _exp(value)
        return (_exp(value + error) - _exp(value - error)) / (2.0 * error)

    def value_error(self, which: int, ctx: EvaluationContext) -> float:
        error = self.input_error(0, ctx)
        if error == 0.0:
            return 0.0
        return error * self.average_value(which, ctx)


def signed_power(base: float, exponent: float) -> float:
    """Raise ``base`` to ``exponent``, extending non-integer powers oddly to negative bases.

    Never raises: overflow and division by zero give an infinite result.

    Example:
        >>> signed_power(-2.0, 3.0), signed_power(-4.0, 0.5)
        (-8.0, -2.0)

    """
    if base == 0.0:
        if exponent > 0.0:
            return 0.0
        return 1.0 if exponent == 0.0 else math.inf
    try:
        result = math.pow(abs(base), exponent)
    except OverflowError:
        result = math.inf
    if base > 0.0 or (exponent.is_integer() and exponent % 2.0 == 0.0):
        return result
    return -result


def _half_spread(a: float, b: float) -> float:
    # Equal infinities span nothing.
    return 0.0 if a == b else 0.5 * abs(a - b)


@register_module(ModuleCategory.FUNCTIONS)
class PowerModule(Module):
    """Raises one number to the power of another.

    The value is taken at the centre of the inputs. The error is half the
    spread of the output across the base's error interval, plus the same for
    the exponent's.
    """

    display_name = "Power"
    input_ports = (Port.scalar(0, "Base", 0.0), Port.scalar(1, "Exponent", 1.0))
    output_ports = (Port.scalar(0, "Power"),)

    def average_value(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        return signed_power(self.input_value(0, ctx), self.input_value(1, ctx))

    def value_error(self, which: int, ctx: EvaluationContext) -> float:  # noqa: ARG002
        base = self.input_value(0, ctx)
        exponent = self.input_value(1, ctx)
        base_error = self.input_error(0, ctx)
        exponent_error = self.input_error(1, ctx)
        error = 0.0
        if base_error > 0.0:
            error += _half_spread(
                signed_power(base + base_error, exponent),
                signed_power(base - base_error, exponent),
            )
        if exponent_error > 0.0:
            error += _half_spread(
                signed_power(base, exponent + exponent_error),
                signed_power(base, exponent - exponent_error),
            )
        return error
