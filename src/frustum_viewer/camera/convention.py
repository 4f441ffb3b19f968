"""Pose convention normalization.

Pose files disagree on two things: whether a transform maps camera to world
(c2w) or world to camera (w2c), and which world axis points up. Both are
reconciled here, in a fixed order:

1. Invert the pose when the source stores w2c matrices.
2. Pre-multiply by ``Z_TO_Y`` when the source world is Z-up, so that the
   internal world is Y-up.

Swapping the two steps produces plausible but wrong geometry, so callers go
through ``normalize_pose`` rather than applying the steps themselves.
"""

from __future__ import annotations

from enum import Enum

from src.frustum_viewer.core.transform import IDENTITY, Matrix, build_matrix, compose, invert


class UpAxis(str, Enum):
    """Vertical axis of the source world convention.

    ``Y`` keeps poses as-is. ``Z`` applies the vertical-axis swap
    (e.g. Blender exports).
    """

    Y = "y"
    Z = "z"


# Rotation of -90 degrees about X: maps +Z to +Y and +Y to -Z.
# Written out exactly to avoid cos(pi/2) round-off.
Z_TO_Y: Matrix = build_matrix(
    [
        [1.0, 0.0, 0.0, 0.0],
        [0.0, 0.0, 1.0, 0.0],
        [0.0, -1.0, 0.0, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ]
)


def up_axis_correction(up_axis: UpAxis | str) -> Matrix:
    """Get the constant world correction for an up-axis convention."""
    axis = UpAxis(up_axis)
    if axis is UpAxis.Z:
        return Z_TO_Y
    return IDENTITY


def normalize_pose(
    pose: Matrix,
    *,
    invert_pose: bool = False,
    up_axis: UpAxis | str = UpAxis.Y,
) -> Matrix:
    """Convert a source pose into an internal (Y-up, camera-to-world) matrix.

    Args:
        pose: The pose as stored in the source.
        invert_pose: Whether the source stores world-to-camera matrices.
        up_axis: The source's vertical axis.

    Returns:
        The world matrix of the camera.

    Raises:
        SingularMatrixError: If ``invert_pose`` is set and the pose is not
            invertible. No substitute matrix is ever returned.
    """
    c2w = invert(pose) if invert_pose else pose
    if UpAxis(up_axis) is UpAxis.Z:
        return compose(Z_TO_Y, c2w)
    return c2w
