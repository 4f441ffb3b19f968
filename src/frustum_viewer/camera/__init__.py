"""Camera module for pose conventions.

Components:
    convention: Pose inversion and up-axis remapping into the internal
        Y-up, camera-to-world convention
"""

from .convention import Z_TO_Y, UpAxis, normalize_pose, up_axis_correction

__all__ = [
    "UpAxis",
    "Z_TO_Y",
    "normalize_pose",
    "up_axis_correction",
]
