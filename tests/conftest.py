"""Pytest configuration for frustum viewer tests.

This module provides shared fixtures for all test modules: common pose
matrices, a default configuration, and a fresh scene manager per test.
Matplotlib is switched to the non-interactive Agg backend so preview tests
never open windows.
"""

import math

import matplotlib
import pytest

matplotlib.use("Agg")

IDENTITY_ROWS = [[1, 0, 0, 0], [0, 1, 0, 0], [0, 0, 1, 0], [0, 0, 0, 1]]
TRANSLATION_ROWS = [[1, 0, 0, 2], [0, 1, 0, 1], [0, 0, 1, 2], [0, 0, 0, 1]]
SINGULAR_ROWS = [[1, 0, 0, 0], [0, 0, 0, 0], [0, 0, 1, 0], [0, 0, 0, 1]]


def make_record(*matrices, fov_x=0.7, names=None):
    """Build a parsed pose record from transform rows."""
    frames = []
    for i, rows in enumerate(matrices):
        frame = {"transform_matrix": rows}
        if names is not None:
            frame["file_path"] = names[i]
        frames.append(frame)
    return {"camera_angle_x": fov_x, "frames": frames}


@pytest.fixture
def identity_rows():
    return [list(r) for r in IDENTITY_ROWS]


@pytest.fixture
def translation_rows():
    return [list(r) for r in TRANSLATION_ROWS]


@pytest.fixture
def singular_rows():
    return [list(r) for r in SINGULAR_ROWS]


@pytest.fixture
def default_params():
    """Frustum parameters used across geometry tests."""
    from src.frustum_viewer.geometry.frustum import FrustumParams

    return FrustumParams(fov_x=math.radians(60), aspect=1.5, near=0.1, far=2.0)


@pytest.fixture
def y_up_config():
    """Configuration with no pose correction and unscaled near/far."""
    from src.frustum_viewer.camera.convention import UpAxis
    from src.frustum_viewer.core.config import ViewerConfig

    return ViewerConfig(scale=1.0, up_axis=UpAxis.Y)


@pytest.fixture
def fresh_scene():
    """Create a fresh SceneManager for each test."""
    from src.frustum_viewer.scene.manager import SceneManager

    scene = SceneManager()
    yield scene
    scene.clear()


@pytest.fixture
def record_factory():
    """Factory for parsed pose records (see ``make_record``)."""
    return make_record
