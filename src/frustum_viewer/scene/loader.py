"""Validation of parsed pose records.

Records arrive already parsed (e.g. from a ``transforms.json`` file) with the
shape::

    {
        "camera_angle_x": 0.69,           # horizontal FOV, radians
        "frames": [
            {"file_path": "./r_0", "transform_matrix": [[...], [...], [...], [...]]},
            ...
        ],
    }

``validate_pose_record`` is the single step that turns such a record into a
``PoseSource`` or raises ``InputShapeError``. Nothing partially validated
reaches the geometry code.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass
from numbers import Real
from pathlib import PurePath
from typing import Any

import numpy as np

from src.frustum_viewer.core.config import DEFAULT_FOV_X
from src.frustum_viewer.core.errors import InputShapeError
from src.frustum_viewer.core.transform import Matrix, build_matrix

_EXTENSION = re.compile(r"\.[^.]+$")


@dataclass(frozen=True)
class CameraSpec:
    """A single camera frame of a source.

    Attributes:
        pose: The transform exactly as stored in the source.
        label: Frame identifier (``file_path`` or a synthesized ``cam_<i>``).
    """

    pose: Matrix
    label: str


@dataclass(frozen=True)
class PoseSource:
    """A validated source record.

    Attributes:
        fov_x: Horizontal field of view in radians, shared by every frame.
        cameras: Frames in source order.
    """

    fov_x: float
    cameras: tuple[CameraSpec, ...]


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _is_finite(value: Real) -> bool:
    # Integers beyond float range overflow rather than report inf
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def _validate_matrix(value: Any, index: int) -> Matrix:
    if not isinstance(value, (list, tuple)) or len(value) != 4:
        raise InputShapeError(f"Frame {index}: 'transform_matrix' must be a 4x4 array")
    for row in value:
        if not isinstance(row, (list, tuple)) or len(row) != 4:
            raise InputShapeError(f"Frame {index}: 'transform_matrix' must be a 4x4 array")
        if not all(_is_number(v) for v in row):
            raise InputShapeError(f"Frame {index}: 'transform_matrix' must contain numbers")
    try:
        matrix = build_matrix(value)
    except OverflowError as e:
        raise InputShapeError(f"Frame {index}: 'transform_matrix' value out of range") from e
    if not np.all(np.isfinite(matrix)):
        raise InputShapeError(f"Frame {index}: 'transform_matrix' contains non-finite values")
    return matrix


def validate_pose_record(record: Any) -> PoseSource:
    """Validate a parsed record and convert it to a ``PoseSource``.

    Args:
        record: The parsed JSON object of one source.

    Returns:
        The validated source.

    Raises:
        InputShapeError: If ``frames`` is missing or not a list, any frame is
            malformed, or ``camera_angle_x`` is present but not a positive
            finite number.
    """
    if not isinstance(record, Mapping):
        raise InputShapeError("Pose record must be a JSON object")

    frames = record.get("frames")
    if not isinstance(frames, list):
        raise InputShapeError("Missing 'frames' array")

    fov_x = record.get("camera_angle_x", DEFAULT_FOV_X)
    if not _is_number(fov_x) or not _is_finite(fov_x) or fov_x <= 0:
        raise InputShapeError(f"'camera_angle_x' must be a positive number, got {fov_x!r}")

    cameras = []
    for index, frame in enumerate(frames):
        if not isinstance(frame, Mapping):
            raise InputShapeError(f"Frame {index} must be a JSON object")
        if "transform_matrix" not in frame:
            raise InputShapeError(f"Frame {index} is missing 'transform_matrix'")
        pose = _validate_matrix(frame["transform_matrix"], index)
        file_path = frame.get("file_path")
        label = str(file_path) if file_path is not None else f"cam_{index}"
        cameras.append(CameraSpec(pose=pose, label=label))

    return PoseSource(fov_x=float(fov_x), cameras=tuple(cameras))


def group_name_from_filename(filename: str | None, index: int = 0) -> str:
    """Derive a group name from a file name by dropping its last extension.

    ``"transforms_train.json"`` becomes ``"transforms_train"``. A missing or
    empty name falls back to ``group_<index>``.
    """
    if filename:
        stem = _EXTENSION.sub("", PurePath(filename).name)
        if stem:
            return stem
    return f"group_{index}"
