"""Frustum corner and wireframe generation.

A camera frustum is drawn as a truncated pyramid between the near and far
planes. The camera looks down its local -Z axis with +Y as local up, and the
horizontal field of view together with the aspect ratio (width / height)
determine the size of each plane:

    half_width(d)  = d * tan(fov_x / 2)
    half_height(d) = half_width(d) / aspect

Corners are always produced in the same order, counterclockwise from the
bottom-left when viewed from the camera:

    0: near bottom-left    4: far bottom-left
    1: near bottom-right   5: far bottom-right
    2: near top-right      6: far top-right
    3: near top-left       7: far top-left

The wireframe is 12 line segments (24 endpoints) in the fixed order given by
``EDGE_PAIRS``: the near rectangle, the far rectangle, then the four side
edges. Downstream code may rely on this ordering to highlight specific edges.

Local geometry depends only on ``FrustumParams``, so one template is built per
distinct parameter set and shared by every camera using it.

Example:
    >>> import math
    >>> from src.frustum_viewer.geometry.frustum import FrustumParams, frustum_template
    >>> params = FrustumParams(fov_x=math.radians(60), aspect=1.5, near=0.1, far=2.0)
    >>> frustum_template(params).shape
    (24, 3)
"""

from __future__ import annotations

import logging
import math
import warnings
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

from src.frustum_viewer.core.errors import DegenerateParameterWarning
from src.frustum_viewer.core.transform import Matrix, transform_points

if TYPE_CHECKING:
    from src.frustum_viewer.scene.composer import RenderCamera

logger = logging.getLogger(__name__)

# Type alias for point arrays of shape (N, 3)
Points = npt.NDArray[np.float64]

# Smallest aspect ratio used for division; smaller values are clamped up
ASPECT_FLOOR = 1e-6

# Index pairs into the 8-corner array, one per line segment
EDGE_PAIRS: tuple[tuple[int, int], ...] = (
    # near rectangle
    (0, 1),
    (1, 2),
    (2, 3),
    (3, 0),
    # far rectangle
    (4, 5),
    (5, 6),
    (6, 7),
    (7, 4),
    # sides
    (0, 4),
    (1, 5),
    (2, 6),
    (3, 7),
)

NUM_CORNERS = 8
NUM_SEGMENTS = len(EDGE_PAIRS)
NUM_EDGE_POINTS = 2 * NUM_SEGMENTS

_EDGE_INDICES = np.array(EDGE_PAIRS, dtype=np.intp).reshape(-1)


@dataclass(frozen=True)
class FrustumParams:
    """Parameters defining a frustum's local-space shape.

    Instances compare and hash by value, so they serve directly as the key
    of the template cache.

    Attributes:
        fov_x: Horizontal field of view in radians (> 0).
        aspect: Width divided by height. Values below ``ASPECT_FLOOR``
            (including zero and negatives) are clamped when geometry is built.
        near: Distance to the near plane (> 0).
        far: Distance to the far plane (> near).

    Raises:
        ValueError: If fov_x, near or far are out of range.
    """

    fov_x: float
    aspect: float
    near: float
    far: float

    def __post_init__(self) -> None:
        if not self.fov_x > 0.0:
            raise ValueError(f"fov_x = {self.fov_x} must be positive.")
        if not self.near > 0.0:
            raise ValueError(f"near = {self.near} must be positive.")
        if not self.far > self.near:
            raise ValueError(f"far = {self.far} must be greater than near = {self.near}.")


# =============================================================================
# Local Geometry
# =============================================================================


def clamp_aspect(aspect: float) -> float:
    """Clamp an aspect ratio to ``ASPECT_FLOOR``, warning when clamping occurs.

    Zero, negative and NaN aspects are not rejected; they produce a very tall,
    thin frustum instead of non-finite coordinates.
    """
    if aspect >= ASPECT_FLOOR:
        return float(aspect)
    warnings.warn(
        f"Aspect ratio {aspect} is below {ASPECT_FLOOR}; clamped to {ASPECT_FLOOR}.",
        DegenerateParameterWarning,
        stacklevel=3,
    )
    logger.warning("Clamped aspect ratio %s to %s", aspect, ASPECT_FLOOR)
    return ASPECT_FLOOR


def compute_local_corners(
    fov_x: float,
    aspect: float,
    near: float,
    far: float,
) -> Points:
    """Compute the 8 frustum corners in camera-local space.

    Args:
        fov_x: Horizontal field of view in radians.
        aspect: Width / height. Clamped to ``ASPECT_FLOOR`` (with a
            ``DegenerateParameterWarning``) when smaller.
        near: Near plane distance along -Z.
        far: Far plane distance along -Z.

    Returns:
        Float64 array of shape (8, 3) in the documented corner order.
    """
    safe_aspect = clamp_aspect(aspect)
    t = math.tan(fov_x / 2.0)

    corners = []
    for d in (near, far):
        w = d * t
        h = w / safe_aspect
        corners.extend(
            [
                (-w, -h, -d),
                (w, -h, -d),
                (w, h, -d),
                (-w, h, -d),
            ]
        )
    return np.array(corners, dtype=np.float64)


def build_edges(corners: npt.ArrayLike) -> Points:
    """Expand 8 corners into the 24-point line list of the wireframe.

    Args:
        corners: Array of shape (8, 3).

    Returns:
        Float64 array of shape (24, 3); points ``2k`` and ``2k + 1`` are the
        endpoints of segment ``EDGE_PAIRS[k]``.

    Raises:
        ValueError: If ``corners`` is not of shape (8, 3).
    """
    pts = np.asarray(corners, dtype=np.float64)
    if pts.shape != (NUM_CORNERS, 3):
        raise ValueError(f"Expected corners of shape (8, 3), got {pts.shape}")
    return pts[_EDGE_INDICES].copy()


def transform_geometry(edges: npt.ArrayLike, matrix: Matrix) -> Points:
    """Apply a transform to every point of a line list.

    Returns a new array; ``edges`` is left untouched so shared templates stay
    pristine.
    """
    return transform_points(matrix, edges)


# =============================================================================
# Template Cache
# =============================================================================


@lru_cache(maxsize=64)
def _cached_template(fov_x: float, aspect: float, near: float, far: float) -> Points:
    logger.debug(
        "Building frustum template fov_x=%s aspect=%s near=%s far=%s", fov_x, aspect, near, far
    )
    edges = build_edges(compute_local_corners(fov_x, aspect, near, far))
    edges.flags.writeable = False
    return edges


def frustum_template(params: FrustumParams) -> Points:
    """Get the shared, read-only local wireframe for a parameter set.

    Equal parameter values return the same cached array. The result is
    identical to ``build_edges(compute_local_corners(...))``. A degenerate
    aspect is reported on every request, not only when the template is built.
    """
    aspect = clamp_aspect(params.aspect)
    return _cached_template(params.fov_x, aspect, params.near, params.far)


def world_geometry(
    cameras: Iterable[RenderCamera],
    params_for: Callable[[float], FrustumParams],
) -> list[Points]:
    """Build the world-space wireframe of each render camera.

    Args:
        cameras: Render cameras in scene order.
        params_for: Maps a camera's horizontal FOV to its frustum parameters
            (typically ``ViewerConfig.frustum_params``).

    Returns:
        One (24, 3) array per camera, in the same order.
    """
    return [
        transform_geometry(frustum_template(params_for(camera.fov_x)), camera.world_matrix)
        for camera in cameras
    ]
