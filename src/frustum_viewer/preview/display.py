"""Matplotlib-based preview of camera frustums.

This module draws the world-space wireframes produced by the geometry
pipeline on a Matplotlib 3D axes. It is a lightweight stand-in for an
interactive 3D viewer: it consumes only line buffers, colors and the fit pose,
and owns no scene state.

The internal world is Y-up while Matplotlib's 3D axes are Z-up, so points are
shown as (x, -z, y). The view direction follows the fit pose (the (1, 1, 1)
diagonal from the scene center).

Example:
    >>> from src.frustum_viewer.core.config import ViewerConfig
    >>> from src.frustum_viewer.preview.display import show_frustums
    >>> from src.frustum_viewer.scene.manager import SceneManager
    >>>
    >>> scene = SceneManager()
    >>> scene.load_samples()
    >>> show_frustums(scene, ViewerConfig(scale=1.0))
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

import numpy as np
import numpy.typing as npt

from src.frustum_viewer.geometry.frustum import world_geometry
from src.frustum_viewer.scene.bounds import FitPose, compute_bounds, compute_fit_pose

if TYPE_CHECKING:
    from src.frustum_viewer.core.config import ViewerConfig
    from src.frustum_viewer.scene.composer import Color
    from src.frustum_viewer.scene.manager import SceneManager


def to_display_axes(points: npt.ArrayLike) -> npt.NDArray[np.float64]:
    """Map Y-up world points to Matplotlib's Z-up axes: (x, y, z) -> (x, -z, y)."""
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 3)
    return np.stack([pts[:, 0], -pts[:, 2], pts[:, 1]], axis=1)


def view_angles(fit: FitPose) -> tuple[float, float]:
    """Elevation and azimuth (degrees) looking from the fit eye to its target."""
    eye, target = to_display_axes([fit.eye, fit.target])
    d = eye - target
    horizontal = math.hypot(d[0], d[1])
    elev = math.degrees(math.atan2(d[2], horizontal))
    azim = math.degrees(math.atan2(d[1], d[0]))
    return elev, azim


def plot_frustums(
    ax: Any,
    geometries: Sequence[npt.ArrayLike],
    colors: Sequence[Color],
    *,
    labels: Sequence[str] | None = None,
    origins: Sequence[Sequence[float]] | None = None,
    linewidth: float = 1.0,
) -> Any:
    """Draw frustum wireframes on a 3D axes.

    Args:
        ax: A Matplotlib ``Axes3D``.
        geometries: One (24, 3) line list per camera, world space.
        colors: One RGB color per camera.
        labels: Optional text drawn at each camera origin.
        origins: Camera origins for labels (required when labels are given).
        linewidth: Line width of the wireframes.

    Returns:
        The ``Line3DCollection`` added to the axes.

    Raises:
        ValueError: If the per-camera sequences have different lengths.
    """
    from mpl_toolkits.mplot3d.art3d import Line3DCollection

    if len(colors) != len(geometries):
        raise ValueError(
            f"Got {len(geometries)} geometries but {len(colors)} colors"
        )

    segments = []
    segment_colors = []
    for geometry, color in zip(geometries, colors):
        pts = to_display_axes(geometry)
        segments.extend(pts.reshape(-1, 2, 3))
        segment_colors.extend([color] * (pts.shape[0] // 2))

    collection = Line3DCollection(segments, colors=segment_colors, linewidths=linewidth)
    ax.add_collection3d(collection)

    if labels is not None:
        if origins is None or len(origins) != len(labels):
            raise ValueError("Labels need one origin per camera")
        for label, origin in zip(labels, origins):
            x, y, z = to_display_axes([origin])[0]
            ax.text(x, y, z, label, fontsize=7, color="#111111")

    return collection


def apply_fit(ax: Any, fit: FitPose | None, half_extent: float) -> None:
    """Center the axes on the fit target and orient the view along the fit eye.

    Does nothing when there is nothing to fit.
    """
    if fit is None:
        return
    cx, cy, cz = to_display_axes([fit.target])[0]
    r = max(half_extent, 1e-3)
    ax.set_xlim(cx - r, cx + r)
    ax.set_ylim(cy - r, cy + r)
    ax.set_zlim(cz - r, cz + r)
    elev, azim = view_angles(fit)
    ax.view_init(elev=elev, azim=azim)


def draw_scene(
    ax: Any,
    scene: SceneManager,
    config: ViewerConfig,
    *,
    show_labels: bool = False,
) -> None:
    """Draw all visible frustums of a scene and frame them."""
    cameras = scene.render_cameras(config)
    geometries = world_geometry(cameras, config.frustum_params)
    plot_frustums(
        ax,
        geometries,
        [c.color for c in cameras],
        labels=[c.label for c in cameras] if show_labels else None,
        origins=[c.origin for c in cameras] if show_labels else None,
    )

    box = compute_bounds(geometries)
    half_extent = max(box.size) / 2.0 if not box.is_empty else 0.0
    apply_fit(ax, compute_fit_pose(box, config.view_fov), half_extent)
    ax.set_xlabel("x")
    ax.set_ylabel("-z")
    ax.set_zlabel("y")


def render_to_array(
    scene: SceneManager,
    config: ViewerConfig,
    *,
    width: int = 800,
    height: int = 600,
    dpi: int = 100,
    show_labels: bool = False,
) -> npt.NDArray[np.uint8]:
    """Render the scene off-screen (Agg) on a black background.

    Returns:
        RGB image array of shape (height, width, 3), dtype uint8.
    """
    from matplotlib.backends.backend_agg import FigureCanvasAgg
    from matplotlib.figure import Figure

    fig = Figure(figsize=(width / dpi, height / dpi), dpi=dpi, facecolor="black")
    canvas = FigureCanvasAgg(fig)
    ax = fig.add_subplot(projection="3d", facecolor="black")
    draw_scene(ax, scene, config, show_labels=show_labels)
    ax.set_axis_off()
    canvas.draw()
    rgba = np.asarray(canvas.buffer_rgba())
    return rgba[:, :, :3].copy()


def show_frustums(
    scene: SceneManager,
    config: ViewerConfig,
    *,
    title: str | None = None,
    show_labels: bool = False,
    figsize: tuple[float, float] = (8, 6),
    block: bool = True,
) -> None:
    """Display the visible frustums of a scene in a Matplotlib window.

    Args:
        scene: The scene to draw.
        config: Frustum parameters and pose conventions.
        title: Custom title (default shows the scene summary).
        show_labels: Draw camera labels at each camera origin.
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until the figure is closed.
    """
    import matplotlib.pyplot as plt

    fig = plt.figure(figsize=figsize)
    ax = fig.add_subplot(projection="3d")
    draw_scene(ax, scene, config, show_labels=show_labels)
    ax.set_title(title if title is not None else scene.summary().describe())

    plt.tight_layout()
    plt.show(block=block)
