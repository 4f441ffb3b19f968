"""Built-in sample scene for quick inspection without any data files.

Three groups (``train``, ``val``, ``test``) share the same three poses: the
identity, a pure translation to (2, 1, 2), and a 90 degree yaw about Z
lifted to z = 2.
"""

from __future__ import annotations

import math
from typing import Any

SAMPLE_GROUP_NAMES = ("train", "val", "test")

SAMPLE_FOV_X = math.radians(60.0)

SAMPLE_TRANSFORMS = (
    [[1, 0, 0, 0], [0, 1, 0, 0], [0, 0, 1, 0], [0, 0, 0, 1]],
    [[1, 0, 0, 2], [0, 1, 0, 1], [0, 0, 1, 2], [0, 0, 0, 1]],
    [[0, -1, 0, 0], [1, 0, 0, 0], [0, 0, 1, 2], [0, 0, 0, 1]],
)


def sample_record(name: str) -> dict[str, Any]:
    """Build the parsed-record form of one sample group."""
    return {
        "camera_angle_x": SAMPLE_FOV_X,
        "frames": [
            {"file_path": f"{name}_{i}", "transform_matrix": [list(row) for row in rows]}
            for i, rows in enumerate(SAMPLE_TRANSFORMS)
        ],
    }


def sample_sources() -> list[tuple[str, dict[str, Any]]]:
    """All sample groups as ``(name, record)`` pairs."""
    return [(name, sample_record(name)) for name in SAMPLE_GROUP_NAMES]
