"""Three-dimensional gradient and cellular noise.

Lattice gradient noise with quintic fade, returning values in roughly
[-1, 1], and a cellular basis with one feature point per unit cell.
Permutation and feature tables are built once per seed and shared read-only.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import lru_cache

import numpy as np

from ._enums import CellMetric

# Bound on |grad noise|, used for error estimates of noise patterns.
GRADIENT_BOUND = 2.5

_TABLE_SIZE = 256


@lru_cache(maxsize=32)
def permutation_table(seed: int) -> tuple[int, ...]:
    """Return a doubled permutation of 0..255 for ``seed``."""
    rng = np.random.default_rng(seed)
    perm = rng.permutation(_TABLE_SIZE).tolist()
    return tuple(perm + perm)


def _fade(t: float) -> float:
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def _lerp(t: float, a: float, b: float) -> float:
    return a + t * (b - a)


def _grad(hash_: int, x: float, y: float, z: float) -> float:
    h = hash_ & 15
    u = x if h < 8 else y  # noqa: PLR2004
    if h < 4:  # noqa: PLR2004
        v = y
    elif h in (12, 14):
        v = x
    else:
        v = z
    return (u if h & 1 == 0 else -u) + (v if h & 2 == 0 else -v)


def noise3(x: float, y: float, z: float, seed: int = 0) -> float:
    """Evaluate gradient noise at a point.

    The value is zero at every integer lattice point.

    Example:
        >>> noise3(1.0, 2.0, 3.0)
        0.0

    """
    if not (math.isfinite(x) and math.isfinite(y) and math.isfinite(z)):
        return 0.0
    p = permutation_table(seed)
    fx, fy, fz = math.floor(x), math.floor(y), math.floor(z)
    xi, yi, zi = int(fx) & 255, int(fy) & 255, int(fz) & 255
    x -= fx
    y -= fy
    z -= fz
    u, v, w = _fade(x), _fade(y), _fade(z)

    a = p[xi] + yi
    aa = p[a] + zi
    ab = p[a + 1] + zi
    b = p[xi + 1] + yi
    ba = p[b] + zi
    bb = p[b + 1] + zi

    return _lerp(
        w,
        _lerp(
            v,
            _lerp(u, _grad(p[aa], x, y, z), _grad(p[ba], x - 1, y, z)),
            _lerp(u, _grad(p[ab], x, y - 1, z), _grad(p[bb], x - 1, y - 1, z)),
        ),
        _lerp(
            v,
            _lerp(u, _grad(p[aa + 1], x, y, z - 1), _grad(p[ba + 1], x - 1, y, z - 1)),
            _lerp(u, _grad(p[ab + 1], x, y - 1, z - 1), _grad(p[bb + 1], x - 1, y - 1, z - 1)),
        ),
    )


@lru_cache(maxsize=32)
def feature_table(seed: int) -> tuple[tuple[float, float, float, float], ...]:
    """Return 256 feature records: an offset within the cell and the cell's value."""
    rng = np.random.default_rng([seed, _TABLE_SIZE])
    return tuple(tuple(row) for row in rng.random((_TABLE_SIZE, 4)).tolist())


@dataclass(frozen=True, slots=True)
class CellSample:
    """The two feature points nearest to a point.

    Attributes:
        distance1: Distance to the nearest feature point.
        distance2: Distance to the second nearest, never less than ``distance1``.
        value1: Value in [0, 1) of the nearest point's cell.
        value2: Value of the second nearest point's cell.

    """

    distance1: float
    distance2: float
    value1: float
    value2: float


def _distance(dx: float, dy: float, dz: float, metric: CellMetric) -> float:
    match metric:
        case CellMetric.CITY_BLOCK:
            return abs(dx) + abs(dy) + abs(dz)
        case CellMetric.CHESS_BOARD:
            return max(abs(dx), abs(dy), abs(dz))
        case _:
            return math.sqrt(dx * dx + dy * dy + dz * dz)


def cells3(x: float, y: float, z: float, metric: CellMetric = CellMetric.EUCLIDEAN, seed: int = 0) -> CellSample:
    """Evaluate the cellular basis at a point.

    Every unit cell holds one feature point; the 27 cells around the point
    are searched for the two nearest.

    Example:
        >>> sample = cells3(0.5, 0.5, 0.5)
        >>> sample.distance1 <= sample.distance2
        True

    """
    if not (math.isfinite(x) and math.isfinite(y) and math.isfinite(z)):
        return CellSample(0.0, 0.0, 0.0, 0.0)
    p = permutation_table(seed)
    features = feature_table(seed)
    cx, cy, cz = math.floor(x), math.floor(y), math.floor(z)
    nearest = (math.inf, 0.0)
    second = (math.inf, 0.0)
    for i in (cx - 1, cx, cx + 1):
        for j in (cy - 1, cy, cy + 1):
            for k in (cz - 1, cz, cz + 1):
                ox, oy, oz, value = features[p[p[p[i & 255] + (j & 255)] + (k & 255)]]
                d = _distance(i + ox - x, j + oy - y, k + oz - z, metric)
                if d < nearest[0]:
                    second = nearest
                    nearest = (d, value)
                elif d < second[0]:
                    second = (d, value)
    return CellSample(nearest[0], second[0], nearest[1], second[1])
