"""Scene manager for loading, merging and organizing camera groups.

This module provides the stateful side of scene composition: it owns the
ordered list of groups and applies load, reload, rename, visibility and
removal operations to it. Everything derived from the groups (render cameras,
geometry, bounds) is recomputed on request through the pure functions of
``composer``, ``frustum`` and ``bounds``.

Loading follows these rules:
- Every record of a batch is validated before any group changes, so a
  malformed source leaves the scene untouched.
- A source whose name matches an existing group replaces that group's
  cameras and FOV in place; id, color, visibility and position are kept.
- A new name appends a group. Its color is the ``k``-th of ``n`` evenly spaced
  hues, where ``k`` is its insertion index and ``n`` the number of groups
  known at that moment (existing groups plus the whole batch).

Colors are assigned once. Removing groups does not re-spread the palette, so
hue spacing may become uneven over time.

Example:
    >>> from src.frustum_viewer.core.config import ViewerConfig
    >>> from src.frustum_viewer.scene.manager import SceneManager
    >>> scene = SceneManager()
    >>> scene.load_samples()
    >>> len(scene.render_cameras(ViewerConfig()))
    9
"""

from __future__ import annotations

import itertools
import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import Any

import numpy as np
import numpy.typing as npt

from src.frustum_viewer.core.config import ViewerConfig
from src.frustum_viewer.geometry.frustum import world_geometry
from src.frustum_viewer.scene.bounds import (
    BoundingBox,
    FitPose,
    compute_bounds,
    compute_fit_pose,
)
from src.frustum_viewer.scene.composer import (
    Group,
    RenderCamera,
    SceneComposition,
    compose_scene,
    hsl_color,
)
from src.frustum_viewer.scene.loader import PoseSource, validate_pose_record
from src.frustum_viewer.scene.samples import sample_sources

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SceneSummary:
    """Diagnostics about the loaded scene.

    Attributes:
        group_count: Number of groups (visible or not).
        camera_count: Number of cameras over all groups.
        fov_x: Horizontal FOV of the first group in radians, if any.
    """

    group_count: int
    camera_count: int
    fov_x: float | None

    @property
    def fov_x_deg(self) -> float | None:
        """Horizontal FOV of the first group in degrees, if any."""
        return None if self.fov_x is None else math.degrees(self.fov_x)

    def describe(self) -> str:
        """One-line human readable summary."""
        if self.group_count == 0:
            return "No cameras loaded."
        plural = "" if self.group_count == 1 else "s"
        text = f"Loaded {self.camera_count} cameras in {self.group_count} group{plural}"
        if self.fov_x is not None:
            text += f" - FOVx = {self.fov_x:.4f} rad ({self.fov_x_deg:.1f} deg)"
        return text


class SceneManager:
    """Ordered collection of camera groups.

    Attributes:
        groups: Groups in display order. Treat as read-only; use the methods
            below to change them.
    """

    def __init__(self) -> None:
        """Initialize an empty scene."""
        self.groups: list[Group] = []
        self._ids = itertools.count()

    # =========================================================================
    # Loading
    # =========================================================================

    def load_sources(self, sources: Iterable[tuple[str, Any]]) -> list[Group]:
        """Load a batch of parsed records.

        Args:
            sources: ``(group name, parsed record)`` pairs.

        Returns:
            The created or updated group for each source, in input order.

        Raises:
            InputShapeError: If any record is malformed. No group is changed.
        """
        parsed: list[tuple[str, PoseSource]] = [
            (name, validate_pose_record(record)) for name, record in sources
        ]

        existing_count = len(self.groups)
        palette_size = existing_count + len(parsed)
        additions: list[Group] = []
        result: list[Group] = []

        for name, source in parsed:
            index = self._find_by_name(name)
            if index is not None:
                group = replace(self.groups[index], cameras=source.cameras, fov_x=source.fov_x)
                self.groups[index] = group
                logger.info("Reloaded group %r (%d cameras)", name, len(source.cameras))
            else:
                pending = next((g for g in additions if g.name == name), None)
                if pending is not None:
                    group = replace(pending, cameras=source.cameras, fov_x=source.fov_x)
                    additions[additions.index(pending)] = group
                else:
                    group = Group(
                        id=f"group_{next(self._ids)}",
                        name=name,
                        color=hsl_color(existing_count + len(additions), palette_size),
                        fov_x=source.fov_x,
                        cameras=source.cameras,
                    )
                    additions.append(group)
                    logger.info("Added group %r (%d cameras)", name, len(source.cameras))
            result.append(group)

        self.groups.extend(additions)
        return [self._latest(group.id) for group in result]

    def load_source(self, name: str, record: Any) -> Group:
        """Load a single parsed record. See ``load_sources``."""
        return self.load_sources([(name, record)])[0]

    def load_samples(self) -> list[Group]:
        """Replace the scene with the built-in train/val/test sample groups."""
        self.clear()
        return self.load_sources(sample_sources())

    # =========================================================================
    # Group Management
    # =========================================================================

    def get_group(self, group_id: str) -> Group:
        """Get a group by id.

        Raises:
            KeyError: If no group has this id.
        """
        return self.groups[self._index_of(group_id)]

    def remove_group(self, group_id: str) -> None:
        """Remove a group. Colors of the remaining groups are unchanged."""
        group = self.groups.pop(self._index_of(group_id))
        logger.info("Removed group %r", group.name)

    def rename_group(self, group_id: str, name: str) -> Group:
        """Rename a group. The new name becomes its merge key.

        Raises:
            KeyError: If no group has this id.
            ValueError: If another group already uses ``name``.
        """
        index = self._index_of(group_id)
        other = self._find_by_name(name)
        if other is not None and other != index:
            raise ValueError(f"Group name {name!r} is already in use")
        self.groups[index] = replace(self.groups[index], name=name)
        return self.groups[index]

    def set_visible(self, group_id: str, visible: bool) -> Group:
        """Show or hide a group."""
        index = self._index_of(group_id)
        self.groups[index] = replace(self.groups[index], visible=visible)
        return self.groups[index]

    def toggle_visible(self, group_id: str) -> Group:
        """Flip a group's visibility."""
        return self.set_visible(group_id, not self.get_group(group_id).visible)

    def clear(self) -> None:
        """Remove all groups."""
        self.groups.clear()

    # =========================================================================
    # Derived Data
    # =========================================================================

    def compose(self, config: ViewerConfig) -> SceneComposition:
        """Compose the visible groups using the config's pose conventions."""
        return compose_scene(self.groups, invert=config.invert, up_axis=config.up_axis)

    def render_cameras(self, config: ViewerConfig) -> list[RenderCamera]:
        """Render cameras of the visible groups."""
        return list(self.compose(config).cameras)

    def world_geometry(self, config: ViewerConfig) -> list[npt.NDArray[np.float64]]:
        """World-space wireframes (24 points each) of the render cameras."""
        return world_geometry(self.render_cameras(config), config.frustum_params)

    def bounds(self, config: ViewerConfig) -> BoundingBox:
        """Bounding box of all visible frustums."""
        return compute_bounds(self.world_geometry(config))

    def fit_pose(self, config: ViewerConfig) -> FitPose | None:
        """Viewing pose framing all visible frustums, or None if there are none."""
        return compute_fit_pose(self.bounds(config), config.view_fov)

    def summary(self) -> SceneSummary:
        """Diagnostics over all groups."""
        return SceneSummary(
            group_count=len(self.groups),
            camera_count=sum(len(g.cameras) for g in self.groups),
            fov_x=self.groups[0].fov_x if self.groups else None,
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    def _find_by_name(self, name: str) -> int | None:
        for i, group in enumerate(self.groups):
            if group.name == name:
                return i
        return None

    def _index_of(self, group_id: str) -> int:
        for i, group in enumerate(self.groups):
            if group.id == group_id:
                return i
        raise KeyError(f"Unknown group id: {group_id}")

    def _latest(self, group_id: str) -> Group:
        return self.groups[self._index_of(group_id)]
