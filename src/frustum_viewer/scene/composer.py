"""Scene composition: groups of cameras into render-ready cameras.

A scene is an ordered list of named groups, one per loaded source. Composing
it flattens every visible group into ``RenderCamera`` records carrying a
normalized world matrix, a human-readable label, a stable id and the group
color. The result is always rebuilt from the groups and never mutated.

Ids have the form ``"<group id>:<frame index>"`` and stay stable as long as
the group id and frame order do, which lets a UI keep its selection across
recompositions.

Cameras whose pose cannot be inverted (when inversion is requested) are
skipped and reported in ``SceneComposition.skipped``; the rest of the group
still renders, and the frame indices of later cameras do not shift.
"""

from __future__ import annotations

import colorsys
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from src.frustum_viewer.camera.convention import UpAxis, normalize_pose
from src.frustum_viewer.core.errors import SingularMatrixError
from src.frustum_viewer.core.transform import Matrix, matrix_origin
from src.frustum_viewer.scene.loader import CameraSpec

logger = logging.getLogger(__name__)

# Type alias for RGB colors with components in [0, 1]
Color = tuple[float, float, float]

GROUP_SATURATION = 0.6
GROUP_LIGHTNESS = 0.5


def hsl_color(
    index: int,
    count: int,
    saturation: float = GROUP_SATURATION,
    lightness: float = GROUP_LIGHTNESS,
) -> Color:
    """Pick the ``index``-th of ``count`` evenly spaced hues.

    Args:
        index: Position of the item in the palette.
        count: Number of palette slots (values below 1 are treated as 1).
        saturation: HSL saturation in [0, 1].
        lightness: HSL lightness in [0, 1].

    Returns:
        An (r, g, b) tuple with components in [0, 1].
    """
    hue = (index / max(1, count)) % 1.0
    r, g, b = colorsys.hls_to_rgb(hue, lightness, saturation)
    return (r, g, b)


@dataclass
class Group:
    """A named set of cameras loaded from one source.

    Attributes:
        id: Opaque identifier, assigned once at creation.
        name: Display name; also the merge key when sources are reloaded.
        color: Group color, assigned once at creation.
        visible: Whether the group takes part in composition.
        fov_x: Horizontal field of view shared by every camera of the group.
        cameras: Camera frames in source order.
    """

    id: str
    name: str
    color: Color
    fov_x: float
    cameras: tuple[CameraSpec, ...] = ()
    visible: bool = True


@dataclass(frozen=True)
class RenderCamera:
    """A camera ready for geometry generation.

    Attributes:
        id: ``"<group id>:<frame index>"``.
        label: ``"<group name>/<frame label>"``.
        world_matrix: Normalized camera-to-world matrix (Y-up).
        color: Color of the owning group.
        fov_x: Horizontal field of view of the owning group.
    """

    id: str
    label: str
    world_matrix: Matrix
    color: Color
    fov_x: float

    @property
    def origin(self) -> tuple[float, float, float]:
        """Camera position in world space, for label placement."""
        return matrix_origin(self.world_matrix)


@dataclass(frozen=True)
class SkippedCamera:
    """A camera left out of the composition, with the reason why."""

    id: str
    label: str
    reason: str


@dataclass(frozen=True)
class SceneComposition:
    """Result of composing a scene.

    Attributes:
        cameras: Render cameras in group order, then frame order.
        skipped: Cameras that could not be normalized.
    """

    cameras: tuple[RenderCamera, ...] = ()
    skipped: tuple[SkippedCamera, ...] = field(default=())


def compose_scene(
    groups: Iterable[Group],
    *,
    invert: bool = False,
    up_axis: UpAxis | str = UpAxis.Y,
) -> SceneComposition:
    """Flatten the visible groups into render cameras.

    Args:
        groups: Groups in display order.
        invert: Whether poses are world-to-camera and must be inverted.
        up_axis: Vertical axis of the source convention.

    Returns:
        The composition, including any cameras skipped for singular poses.
    """
    cameras: list[RenderCamera] = []
    skipped: list[SkippedCamera] = []

    for group in groups:
        if not group.visible:
            continue
        for index, spec in enumerate(group.cameras):
            camera_id = f"{group.id}:{index}"
            label = f"{group.name}/{spec.label}"
            try:
                world = normalize_pose(spec.pose, invert_pose=invert, up_axis=up_axis)
            except SingularMatrixError as exc:
                logger.warning("Skipping camera %s (%s): %s", camera_id, label, exc)
                skipped.append(SkippedCamera(id=camera_id, label=label, reason=str(exc)))
                continue
            cameras.append(
                RenderCamera(
                    id=camera_id,
                    label=label,
                    world_matrix=world,
                    color=group.color,
                    fov_x=group.fov_x,
                )
            )

    logger.debug("Composed %d cameras (%d skipped)", len(cameras), len(skipped))
    return SceneComposition(cameras=tuple(cameras), skipped=tuple(skipped))


def compose_visible(
    groups: Iterable[Group],
    *,
    invert: bool = False,
    up_axis: UpAxis | str = UpAxis.Y,
) -> list[RenderCamera]:
    """Render cameras of the visible groups, in group then frame order."""
    return list(compose_scene(groups, invert=invert, up_axis=up_axis).cameras)
