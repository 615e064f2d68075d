"""Port declarations for modules."""

from __future__ import annotations

from dataclasses import dataclass

from ._color import BLACK, RGBColor
from ._enums import Axis, PortKind


@dataclass(frozen=True, slots=True)
class Port:
    """A typed, indexed, defaulted connection slot on a module.

    Ports are declared once per module class and never change afterwards.

    Attributes:
        index: Position in the module's input or output sequence.
        kind: The kind of value the port carries.
        name: Human-readable label.
        default: Value used when an input is unconnected. A float for scalar
            and boolean ports, an RGBColor for color ports. Unused on outputs.
        follows: When set, an unconnected input yields the sample point's
            coordinate on this axis instead of ``default``.

    """

    index: int
    kind: PortKind
    name: str
    default: float | RGBColor = 0.0
    follows: Axis | None = None

    def __post_init__(self) -> None:
        if self.kind is PortKind.COLOR and not isinstance(self.default, RGBColor):
            msg = f"Color port '{self.name}' needs an RGBColor default"
            raise TypeError(msg)
        if self.kind is not PortKind.COLOR and isinstance(self.default, RGBColor):
            msg = f"{self.kind.capitalize()} port '{self.name}' needs a numeric default"
            raise TypeError(msg)

    @classmethod
    def scalar(cls, index: int, name: str, default: float = 0.0, *, follows: Axis | None = None) -> Port:
        return cls(index, PortKind.SCALAR, name, float(default), follows)

    @classmethod
    def color(cls, index: int, name: str, default: RGBColor = BLACK) -> Port:
        return cls(index, PortKind.COLOR, name, default)

    @classmethod
    def boolean(cls, index: int, name: str, *, default: bool = False) -> Port:
        return cls(index, PortKind.BOOLEAN, name, 1.0 if default else 0.0)

    @property
    def default_label(self) -> str:
        """Short description of the unconnected value, for presentation."""
        if self.follows is not None:
            return self.follows.upper()
        if isinstance(self.default, RGBColor):
            return "({:g}, {:g}, {:g})".format(*self.default.as_tuple())
        return f"{self.default:g}"
