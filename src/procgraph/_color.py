"""Immutable RGB color values."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RGBColor:
    """A three-channel color.

    Channels are unconstrained floats; modules clamp only where their own
    contract says so. All operations return new instances.
    """

    red: float = 0.0
    green: float = 0.0
    blue: float = 0.0

    @classmethod
    def grey(cls, value: float) -> RGBColor:
        """Widen a scalar into a color with equal channels."""
        return cls(value, value, value)

    @classmethod
    def from_hsv(cls, hue: float, saturation: float, value: float) -> RGBColor:
        """Build a color from hue in degrees, saturation and value.

        Example:
            >>> RGBColor.from_hsv(120.0, 1.0, 1.0)
            RGBColor(red=0.0, green=1.0, blue=0.0)

        """
        if saturation == 0.0:
            return cls.grey(value)
        h = (hue % 360.0) / 60.0
        sector = math.floor(h)
        f = h - sector
        p = value * (1.0 - saturation)
        q = value * (1.0 - saturation * f)
        t = value * (1.0 - saturation * (1.0 - f))
        match int(sector):
            case 0:
                return cls(value, t, p)
            case 1:
                return cls(q, value, p)
            case 2:
                return cls(p, value, t)
            case 3:
                return cls(p, q, value)
            case 4:
                return cls(t, p, value)
            case _:
                return cls(value, p, q)

    def to_hsv(self) -> tuple[float, float, float]:
        """Return (hue in degrees, saturation, value)."""
        high = max(self.red, self.green, self.blue)
        low = min(self.red, self.green, self.blue)
        delta = high - low
        if delta == 0.0:
            hue = 0.0
        elif self.red == high:
            hue = 60.0 * (self.green - self.blue) / delta
        elif self.green == high:
            hue = 60.0 * (self.blue - self.red) / delta + 120.0
        else:
            hue = 60.0 * (self.red - self.green) / delta + 240.0
        if hue < 0.0:
            hue += 360.0
        saturation = 0.0 if high == 0.0 else delta / high
        return hue, saturation, high

    @property
    def brightness(self) -> float:
        """Brightness as the largest channel (the HSV value)."""
        return max(self.red, self.green, self.blue)

    def max_difference(self, other: RGBColor) -> float:
        """Largest absolute channel difference to another color."""
        return max(
            abs(self.red - other.red),
            abs(self.green - other.green),
            abs(self.blue - other.blue),
        )

    def scale(self, factor: float) -> RGBColor:
        return RGBColor(self.red * factor, self.green * factor, self.blue * factor)

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.red, self.green, self.blue)

    def __add__(self, other: RGBColor) -> RGBColor:
        return RGBColor(self.red + other.red, self.green + other.green, self.blue + other.blue)

    def __sub__(self, other: RGBColor) -> RGBColor:
        return RGBColor(self.red - other.red, self.green - other.green, self.blue - other.blue)

    def __mul__(self, other: RGBColor | float) -> RGBColor:
        if isinstance(other, RGBColor):
            return RGBColor(self.red * other.red, self.green * other.green, self.blue * other.blue)
        return self.scale(other)


BLACK = RGBColor(0.0, 0.0, 0.0)
WHITE = RGBColor(1.0, 1.0, 1.0)
