"""Small dense linear algebra used by geometry modules."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeAlias

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Sequence

# Systems whose determinant magnitude falls below this are treated as singular.
SINGULAR_TOLERANCE = 1e-12

Vector3: TypeAlias = "tuple[float, float, float]"
Matrix3: TypeAlias = "tuple[Vector3, Vector3, Vector3]"


class Unsolvable(ArithmeticError):  # noqa: N818
    """The linear system has no unique solution."""


def solve3(matrix: Sequence[Sequence[float]], vector: Sequence[float]) -> Vector3:
    """Solve ``matrix @ x = vector`` for a 3x3 system.

    Args:
        matrix: Row-major 3x3 coefficients.
        vector: Right-hand side of length 3.

    Returns:
        The solution as a tuple of three floats.

    Raises:
        Unsolvable: If the matrix is singular (or nearly so) or the result is
            not finite.
        ValueError: If the shapes are not 3x3 and 3.

    Example:
        >>> solve3(((2, 0, 0), (0, 4, 0), (0, 0, 1)), (2, 2, 3))
        (1.0, 0.5, 3.0)

    """
    a = np.asarray(matrix, dtype=float)
    b = np.asarray(vector, dtype=float)
    if a.shape != (3, 3) or b.shape != (3,):
        msg = f"Expected a 3x3 matrix and a 3-vector, got shapes {a.shape} and {b.shape}"
        raise ValueError(msg)

    if not np.all(np.isfinite(a)) or abs(np.linalg.det(a)) < SINGULAR_TOLERANCE:
        msg = "Matrix is singular"
        raise Unsolvable(msg)
    try:
        x = np.linalg.solve(a, b)
    except np.linalg.LinAlgError as e:
        raise Unsolvable(str(e)) from e
    if not np.all(np.isfinite(x)):
        msg = "Solution is not finite"
        raise Unsolvable(msg)
    return (float(x[0]), float(x[1]), float(x[2]))


def inverse3(matrix: Sequence[Sequence[float]]) -> Matrix3:
    """Invert a 3x3 matrix by solving for each unit column.

    Raises:
        Unsolvable: If the matrix is singular.

    """
    columns = [solve3(matrix, unit) for unit in ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0))]
    return (
        (columns[0][0], columns[1][0], columns[2][0]),
        (columns[0][1], columns[1][1], columns[2][1]),
        (columns[0][2], columns[1][2], columns[2][2]),
    )
