"""Scene module for camera groups, composition and bounds.

Components:
    loader: Validation of parsed pose records (the input boundary)
    composer: Flattening of visible groups into render cameras
    manager: Stateful group collection (load, merge, rename, hide, remove)
    bounds: Axis-aligned bounds and auto-framing
    samples: Built-in sample groups

Data flow:
    parsed records -> loader -> manager groups -> composer -> render cameras
    render cameras -> geometry.frustum -> world wireframes -> bounds
"""

from .bounds import BoundingBox, FitPose, compute_bounds, compute_fit_pose
from .composer import (
    Color,
    Group,
    RenderCamera,
    SceneComposition,
    SkippedCamera,
    compose_scene,
    compose_visible,
    hsl_color,
)
from .loader import (
    CameraSpec,
    PoseSource,
    group_name_from_filename,
    validate_pose_record,
)
from .manager import SceneManager, SceneSummary
from .samples import sample_record, sample_sources

__all__ = [
    # Loader module
    "CameraSpec",
    "PoseSource",
    "validate_pose_record",
    "group_name_from_filename",
    # Composer module
    "Color",
    "Group",
    "RenderCamera",
    "SceneComposition",
    "SkippedCamera",
    "compose_scene",
    "compose_visible",
    "hsl_color",
    # Manager module
    "SceneManager",
    "SceneSummary",
    # Bounds module
    "BoundingBox",
    "FitPose",
    "compute_bounds",
    "compute_fit_pose",
    # Samples module
    "sample_record",
    "sample_sources",
]
