"""String enums shared across the package."""

from __future__ import annotations

from enum import StrEnum
from typing import Self


class DocumentedStrEnum(StrEnum):
    """String enum whose members carry their own docstring.

    Members are declared as ``NAME = "value", "doc"``.
    """

    def __new__(cls, value: str, doc: str = "") -> Self:
        obj = str.__new__(cls, value)
        obj._value_ = value
        obj.__doc__ = doc
        return obj


class PortKind(DocumentedStrEnum):
    """The kind of value a port carries."""

    SCALAR = "scalar", "A real number"
    COLOR = "color", "An RGB triple"
    BOOLEAN = "boolean", "A truth value surfaced as 1.0 or 0.0"

    def accepts(self, source: PortKind) -> bool:
        """Whether an output of kind ``source`` may feed an input of this kind.

        Scalars and booleans interconvert, and both widen to a grey color.
        Colors never narrow to a number.
        """
        if self is PortKind.COLOR:
            return True
        return source is not PortKind.COLOR


class Axis(DocumentedStrEnum):
    """A coordinate of the sample point."""

    X = "x", "First spatial coordinate"
    Y = "y", "Second spatial coordinate"
    Z = "z", "Third spatial coordinate"
    T = "t", "Animation time"


class ModuleCategory(DocumentedStrEnum):
    """Catalog grouping used for presentation."""

    VALUES = "values", "Constants, coordinates and graph outputs"
    OPERATORS = "operators", "Arithmetic on numbers"
    FUNCTIONS = "functions", "Single-input functions and filters"
    COMPARISON = "comparison", "Equality tests producing true/false"
    COLOR_FUNCTIONS = "color_functions", "Color composition and conversion"
    PATTERNS = "patterns", "Procedural noise patterns"
    GEOMETRY = "geometry", "Coordinate transforms"


class CellMetric(DocumentedStrEnum):
    """Distance measure of the cellular pattern."""

    EUCLIDEAN = "euclidean", "Straight-line distance"
    CITY_BLOCK = "city_block", "Sum of the per-axis distances"
    CHESS_BOARD = "chess_board", "Largest per-axis distance"
