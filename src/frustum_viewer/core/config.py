"""Viewer configuration.

Holds the numeric parameters the UI layer exposes (frustum aspect, near/far
distances and their display scale, pose conventions, export aspect) in one
dataclass, and derives the frustum parameters used for geometry.

Example:
    >>> from src.frustum_viewer.core.config import ViewerConfig
    >>> config = ViewerConfig(scale=1.0)
    >>> config.scaled_near, config.scaled_far
    (0.1, 2.0)
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any

from src.frustum_viewer.camera.convention import UpAxis
from src.frustum_viewer.geometry.frustum import FrustumParams

# Horizontal FOV used when a source omits camera_angle_x
DEFAULT_FOV_X = math.radians(60.0)

# Smallest scaled near distance, and the minimum gap kept between near and far
MIN_SCALED_DISTANCE = 1e-4


@dataclass
class ViewerConfig:
    """Configuration for frustum display and scene composition.

    Attributes:
        aspect: Frustum width / height (default 1.5).
        near: Unscaled near-plane distance (default 0.1).
        far: Unscaled far-plane distance (default 2.0).
        scale: Multiplier applied to near and far (default 0.1).
        invert: Treat poses as world-to-camera and invert them.
        up_axis: Source vertical axis (default Z-up).
        view_fov_deg: Vertical FOV of the viewing camera, used for fitting.
        export_aspect: Aspect ratio of exported images (default 4:3).
    """

    aspect: float = 1.5
    near: float = 0.1
    far: float = 2.0
    scale: float = 0.1
    invert: bool = False
    up_axis: UpAxis = UpAxis.Z
    view_fov_deg: float = 50.0
    export_aspect: float = 4.0 / 3.0

    def __post_init__(self) -> None:
        self.up_axis = UpAxis(self.up_axis)

    @property
    def scaled_near(self) -> float:
        """Near distance after scaling, never below ``MIN_SCALED_DISTANCE``."""
        return max(MIN_SCALED_DISTANCE, self.near * self.scale)

    @property
    def scaled_far(self) -> float:
        """Far distance after scaling, always strictly beyond ``scaled_near``."""
        return max(self.scaled_near + MIN_SCALED_DISTANCE, self.far * self.scale)

    @property
    def view_fov(self) -> float:
        """Vertical FOV of the viewing camera in radians."""
        return math.radians(self.view_fov_deg)

    def frustum_params(self, fov_x: float) -> FrustumParams:
        """Frustum parameters for a group with the given horizontal FOV."""
        return FrustumParams(
            fov_x=fov_x,
            aspect=self.aspect,
            near=self.scaled_near,
            far=self.scaled_far,
        )

    def to_dict(self) -> dict[str, Any]:
        """Export the configuration to a plain dictionary."""
        data = asdict(self)
        data["up_axis"] = self.up_axis.value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ViewerConfig:
        """Create a configuration from a dictionary, ignoring unknown keys."""
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**known)
