"""Preview module for export and visualization.

Components:
    export: Fixed-aspect crop computation and cropped PNG export (Pillow)
    display: Matplotlib 3D wireframe preview and off-screen rendering

Example:
    >>> from src.frustum_viewer.preview import compute_crop, save_cropped_png
    >>> from src.frustum_viewer.preview import render_to_array
    >>>
    >>> image = render_to_array(scene, config, width=1280, height=720)
    >>> save_cropped_png(image, "view.png")  # 960x720 centered crop
"""

from src.frustum_viewer.preview.display import (
    apply_fit,
    draw_scene,
    plot_frustums,
    render_to_array,
    show_frustums,
    to_display_axes,
    view_angles,
)
from src.frustum_viewer.preview.export import (
    DEFAULT_EXPORT_ASPECT,
    CropRect,
    compute_crop,
    crop_image,
    export_filename,
    save_cropped_png,
)

__all__ = [
    # Display functions
    "show_frustums",
    "render_to_array",
    "draw_scene",
    "plot_frustums",
    "apply_fit",
    "to_display_axes",
    "view_angles",
    # Export functions
    "CropRect",
    "DEFAULT_EXPORT_ASPECT",
    "compute_crop",
    "crop_image",
    "save_cropped_png",
    "export_filename",
]
