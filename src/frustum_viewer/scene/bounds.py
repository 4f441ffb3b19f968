"""Scene bounds and auto-framing.

``compute_bounds`` unions the axis-aligned extents of world-space frustum
geometry; ``compute_fit_pose`` derives a viewing position and clip planes that
show the whole box.

The viewer is always placed along the (1, 1, 1) diagonal from the box center,
at 1.5 times the distance at which the largest box dimension exactly fills
the vertical field of view. Elongated boxes are not treated specially.

Example:
    >>> import math
    >>> from src.frustum_viewer.scene.bounds import BoundingBox, compute_fit_pose
    >>> box = BoundingBox(min=(-1.0, -1.0, -1.0), max=(1.0, 1.0, 1.0))
    >>> fit = compute_fit_pose(box, math.radians(90))
    >>> fit.target
    (0.0, 0.0, 0.0)
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

# Type alias for 3D points
Vec3 = tuple[float, float, float]

# Safety margin applied to the fitting distance
FIT_MARGIN = 1.5
MIN_FIT_NEAR = 0.01
FIT_DEPTH_RATIO = 1000.0

_FIT_DIRECTION = np.array([1.0, 1.0, 1.0]) / math.sqrt(3.0)


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned bounding box.

    The empty box has ``min = (+inf, +inf, +inf)`` and
    ``max = (-inf, -inf, -inf)``, so it is the identity for ``union``.

    Attributes:
        min: Minimum corner (x, y, z).
        max: Maximum corner (x, y, z).
    """

    min: Vec3
    max: Vec3

    @classmethod
    def empty(cls) -> BoundingBox:
        """Create an empty box."""
        return cls(min=(math.inf,) * 3, max=(-math.inf,) * 3)

    @property
    def is_empty(self) -> bool:
        """True if the box contains no points."""
        return any(hi < lo for lo, hi in zip(self.min, self.max))

    @property
    def center(self) -> Vec3:
        """Center of the box. Undefined for the empty box."""
        return (
            (self.min[0] + self.max[0]) / 2.0,
            (self.min[1] + self.max[1]) / 2.0,
            (self.min[2] + self.max[2]) / 2.0,
        )

    @property
    def size(self) -> Vec3:
        """Extent along each axis; zeros for the empty box."""
        if self.is_empty:
            return (0.0, 0.0, 0.0)
        return (
            self.max[0] - self.min[0],
            self.max[1] - self.min[1],
            self.max[2] - self.min[2],
        )

    def union(self, other: BoundingBox) -> BoundingBox:
        """Smallest box containing both boxes."""
        return BoundingBox(
            min=(
                min(self.min[0], other.min[0]),
                min(self.min[1], other.min[1]),
                min(self.min[2], other.min[2]),
            ),
            max=(
                max(self.max[0], other.max[0]),
                max(self.max[1], other.max[1]),
                max(self.max[2], other.max[2]),
            ),
        )

    def contains_point(self, point: Iterable[float]) -> bool:
        """Check whether a point lies inside the box (boundary included)."""
        return all(lo <= p <= hi for p, lo, hi in zip(point, self.min, self.max))


@dataclass(frozen=True)
class FitPose:
    """Viewing parameters that frame a bounding box.

    Attributes:
        eye: Viewer position.
        target: Point to look at (the box center).
        near: Near clip plane distance.
        far: Far clip plane distance.
    """

    eye: Vec3
    target: Vec3
    near: float
    far: float


def compute_bounds(geometries: Iterable[npt.ArrayLike]) -> BoundingBox:
    """Compute the bounding box of all finite points of the given geometries.

    Args:
        geometries: Point arrays of shape (N, 3), e.g. world-space wireframes.

    Returns:
        The union of the extents, or the empty box when there are no finite
        points at all.
    """
    box = BoundingBox.empty()
    for geometry in geometries:
        pts = np.asarray(geometry, dtype=np.float64).reshape(-1, 3)
        pts = pts[np.all(np.isfinite(pts), axis=1)]
        if pts.shape[0] == 0:
            continue
        lo = pts.min(axis=0)
        hi = pts.max(axis=0)
        box = box.union(
            BoundingBox(
                min=(float(lo[0]), float(lo[1]), float(lo[2])),
                max=(float(hi[0]), float(hi[1]), float(hi[2])),
            )
        )
    return box


def compute_fit_pose(box: BoundingBox, vertical_fov: float) -> FitPose | None:
    """Compute a viewing pose that frames the box.

    Args:
        box: Scene bounds.
        vertical_fov: Vertical field of view of the viewing camera, radians.

    Returns:
        The fit pose, or ``None`` when the box is empty (nothing to frame).
    """
    if box.is_empty:
        return None

    center = np.array(box.center, dtype=np.float64)
    max_size = max(box.size)
    distance = (max_size / 2.0) / math.tan(vertical_fov / 2.0)
    eye = center + _FIT_DIRECTION * (distance * FIT_MARGIN)

    return FitPose(
        eye=(float(eye[0]), float(eye[1]), float(eye[2])),
        target=box.center,
        near=max(MIN_FIT_NEAR, distance / FIT_DEPTH_RATIO),
        far=distance * FIT_DEPTH_RATIO,
    )
