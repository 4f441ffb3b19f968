"""Fixed-aspect image export.

Exported views always have the same aspect ratio (4:3 by default) whatever the
size of the surface they were rendered on. ``compute_crop`` finds the largest
centered rectangle of that ratio; the remaining helpers apply it to an image
array and save the result with Pillow.

Crop rectangles use a top-left pixel origin: ``x`` grows to the right and
``y`` grows downward, matching NumPy image arrays of shape (H, W, C).

Example:
    >>> from src.frustum_viewer.preview.export import compute_crop
    >>> compute_crop(1920, 1080)
    CropRect(x=240, y=0, width=1440, height=1080)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from fractions import Fraction

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

DEFAULT_EXPORT_ASPECT = 4.0 / 3.0

# Denominator bound used to turn a float aspect into an exact ratio
_MAX_ASPECT_DENOMINATOR = 10_000


@dataclass(frozen=True)
class CropRect:
    """A pixel rectangle inside a surface.

    Attributes:
        x: Left edge.
        y: Top edge.
        width: Width in pixels.
        height: Height in pixels.
    """

    x: int
    y: int
    width: int
    height: int


def _as_fraction(aspect: float | Fraction) -> Fraction:
    if isinstance(aspect, Fraction):
        return aspect
    return Fraction(aspect).limit_denominator(_MAX_ASPECT_DENOMINATOR)


def compute_crop(
    surface_width: int,
    surface_height: int,
    target_aspect: float | Fraction = DEFAULT_EXPORT_ASPECT,
) -> CropRect:
    """Compute the largest centered rectangle with the target aspect ratio.

    The aspect is converted to an exact fraction first, so 4/3 given as a
    float behaves exactly like ``Fraction(4, 3)`` and the floor operations
    below are exact integer arithmetic.

    Args:
        surface_width: Surface width in pixels (>= 0).
        surface_height: Surface height in pixels (>= 0).
        target_aspect: Desired width / height (> 0).

    Returns:
        A rectangle fully inside the surface.

    Raises:
        ValueError: If a dimension is negative or the aspect is not positive.
    """
    if surface_width < 0 or surface_height < 0:
        raise ValueError(
            f"Surface size must be non-negative, got {surface_width}x{surface_height}"
        )
    if not target_aspect > 0 or not math.isfinite(target_aspect):
        raise ValueError(f"Target aspect must be positive, got {target_aspect}")

    aspect = _as_fraction(target_aspect)
    width = int(surface_width)
    height = int(surface_height)

    target_width = min(width, math.floor(height * aspect))
    target_height = min(height, math.floor(width / aspect))

    return CropRect(
        x=(width - target_width) // 2,
        y=(height - target_height) // 2,
        width=target_width,
        height=target_height,
    )


def crop_image(image: npt.NDArray[np.generic], rect: CropRect) -> npt.NDArray[np.generic]:
    """Cut a crop rectangle out of an image array of shape (H, W[, C]).

    Raises:
        ValueError: If the rectangle does not fit inside the image.
    """
    height, width = image.shape[:2]
    if rect.x < 0 or rect.y < 0 or rect.x + rect.width > width or rect.y + rect.height > height:
        raise ValueError(f"Crop {rect} does not fit inside a {width}x{height} image")
    return image[rect.y : rect.y + rect.height, rect.x : rect.x + rect.width].copy()


def save_cropped_png(
    image: npt.NDArray[np.uint8],
    filepath: str,
    *,
    target_aspect: float | Fraction = DEFAULT_EXPORT_ASPECT,
) -> CropRect:
    """Crop an 8-bit RGB(A) image to the target aspect and save it as PNG.

    Args:
        image: Array of shape (H, W, 3) or (H, W, 4) with dtype uint8.
        filepath: Output file path (should end in .png).
        target_aspect: Aspect ratio of the saved image.

    Returns:
        The crop rectangle that was applied.
    """
    rect = compute_crop(image.shape[1], image.shape[0], target_aspect)
    cropped = crop_image(image, rect)
    PILImage.fromarray(np.ascontiguousarray(cropped)).save(filepath)
    return rect


def export_filename(timestamp: datetime | None = None) -> str:
    """Default file name for an exported view.

    ``camera-frustums-2024-05-01T12-30-00-000.png`` for 12:30 on 2024-05-01;
    the ``:`` and ``.`` characters of the millisecond ISO timestamp are
    replaced by ``-``.
    """
    if timestamp is None:
        timestamp = datetime.now()
    stamp = timestamp.isoformat(timespec="milliseconds").replace(":", "-").replace(".", "-")
    return f"camera-frustums-{stamp}.png"
