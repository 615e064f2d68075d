"""The module catalog.

Importing this package registers every module type with the catalog.
"""

from ._colors import (
    BlendModule,
    ColorDarkenModule,
    ColorDifferenceModule,
    ColorLightenModule,
    ColorProductModule,
    ColorScaleModule,
    ColorSumModule,
    HSVModule,
    RGBModule,
    RGBToHSVModule,
)
from ._comparison import TOLERANCE, ColorEqualityModule, EqualityModule, NumberEqualityModule
from ._functions import AbsModule, BlurModule, CosineModule, ExpModule, InterpolateModule, PowerModule
from ._geometry import ChangeOfBasisModule
from ._operators import DifferenceModule, MaxModule, MinModule, ProductModule, SumModule
from ._patterns import CellsModule, NoiseModule, TurbulenceModule, WoodModule
from ._values import ColorModule, ColorOutputModule, CoordinateModule, NumberModule, ScalarOutputModule

__all__ = [
    "TOLERANCE",
    "AbsModule",
    "BlendModule",
    "BlurModule",
    "CellsModule",
    "ChangeOfBasisModule",
    "ColorDarkenModule",
    "ColorDifferenceModule",
    "ColorEqualityModule",
    "ColorLightenModule",
    "ColorModule",
    "ColorOutputModule",
    "ColorProductModule",
    "ColorScaleModule",
    "ColorSumModule",
    "CoordinateModule",
    "CosineModule",
    "DifferenceModule",
    "EqualityModule",
    "ExpModule",
    "HSVModule",
    "InterpolateModule",
    "MaxModule",
    "MinModule",
    "NoiseModule",
    "NumberEqualityModule",
    "NumberModule",
    "PowerModule",
    "ProductModule",
    "RGBModule",
    "RGBToHSVModule",
    "ScalarOutputModule",
    "SumModule",
    "TurbulenceModule",
    "WoodModule",
]
