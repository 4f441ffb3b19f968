"""4x4 transform construction, inversion and point application.

Matrices are NumPy float64 arrays of shape (4, 4), laid out row-major exactly
as they appear in pose files: the translation lives in the last column and
points are treated as column vectors (``p' = M @ p``).

All returned matrices are marked read-only so they can be shared between
render cameras and geometry caches without defensive copies.

Example:
    >>> from src.frustum_viewer.core.transform import build_matrix, invert
    >>> m = build_matrix([[1, 0, 0, 2], [0, 1, 0, 1], [0, 0, 1, 2], [0, 0, 0, 1]])
    >>> matrix_origin(m)
    (2.0, 1.0, 2.0)
    >>> matrix_origin(invert(m))
    (-2.0, -1.0, -2.0)
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import numpy.typing as npt

from src.frustum_viewer.core.errors import SingularMatrixError

# Type alias for 4x4 transform matrices
Matrix = npt.NDArray[np.float64]

# Determinant magnitude below which a matrix is treated as non-invertible
SINGULAR_TOLERANCE = 1e-12

IDENTITY: Matrix = np.eye(4, dtype=np.float64)
IDENTITY.flags.writeable = False


def _freeze(matrix: npt.NDArray[np.float64]) -> Matrix:
    matrix.flags.writeable = False
    return matrix


def build_matrix(rows: Sequence[Sequence[float]] | npt.ArrayLike) -> Matrix:
    """Build a transform matrix from row-major 4x4 values.

    Any real matrix is accepted; no rigidity or orthonormality is checked.

    Args:
        rows: Four rows of four numbers (nested sequences or an array).

    Returns:
        A read-only float64 array of shape (4, 4).

    Raises:
        ValueError: If the input is not 4x4 or is not numeric.
    """
    matrix = np.array(rows, dtype=np.float64)
    if matrix.shape != (4, 4):
        raise ValueError(f"Transform must be 4x4, got shape {matrix.shape}")
    return _freeze(matrix)


def invert(matrix: Matrix) -> Matrix:
    """Invert a transform matrix.

    Args:
        matrix: The 4x4 matrix to invert.

    Returns:
        A new read-only matrix ``M^-1``.

    Raises:
        SingularMatrixError: If ``|det(M)|`` is below ``SINGULAR_TOLERANCE``
            or the decomposition reports a singular matrix.
    """
    det = float(np.linalg.det(matrix))
    if not np.isfinite(det) or abs(det) < SINGULAR_TOLERANCE:
        raise SingularMatrixError(f"Matrix is not invertible (determinant = {det:.3e})")
    try:
        inverse = np.linalg.inv(matrix)
    except np.linalg.LinAlgError as exc:
        raise SingularMatrixError(f"Matrix is not invertible: {exc}") from exc
    return _freeze(inverse)


def compose(*matrices: Matrix) -> Matrix:
    """Multiply matrices left to right: ``compose(A, B) == A @ B``.

    With no arguments the identity is returned.
    """
    result = np.eye(4, dtype=np.float64)
    for m in matrices:
        result = result @ m
    return _freeze(result)


def transform_points(
    matrix: Matrix,
    points: npt.ArrayLike,
) -> npt.NDArray[np.float64]:
    """Apply a 4x4 transform to an array of 3D points.

    Points are extended to homogeneous coordinates (x, y, z, 1), multiplied,
    and divided by the resulting w. For affine poses w stays 1. A projective
    matrix that sends w to zero yields non-finite coordinates rather than an
    error; bounds computation skips such points.

    Args:
        matrix: The 4x4 transform.
        points: Array of shape (N, 3).

    Returns:
        A new float64 array of shape (N, 3). The input is never modified.
    """
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 3)
    homogeneous = np.hstack([pts, np.ones((pts.shape[0], 1), dtype=np.float64)])
    transformed = homogeneous @ np.asarray(matrix, dtype=np.float64).T
    with np.errstate(divide="ignore", invalid="ignore"):
        result = transformed[:, :3] / transformed[:, 3:4]
    return result


def matrix_origin(matrix: Matrix) -> tuple[float, float, float]:
    """Get the world-space image of the local origin (camera position)."""
    x, y, z = transform_points(matrix, [(0.0, 0.0, 0.0)])[0]
    return (float(x), float(y), float(z))


def max_abs_difference(a: Matrix, b: Matrix) -> float:
    """Largest per-element absolute difference between two matrices."""
    return float(np.max(np.abs(np.asarray(a) - np.asarray(b))))
