"""Camera frustum viewer: geometry and scene composition for camera pose sets.

This package turns camera poses (a 4x4 transform plus a horizontal field of
view) into wireframe frustum geometry in a consistent world space, with support
for:
- Composing cameras from many named datasets into one ordered scene
- Axis-convention correction (Z-up sources) and optional pose inversion
- Bounding volumes and auto-framing of the whole scene
- Fixed-aspect crop rectangles for image export

Subpackages:
    core: Matrix construction/inversion, error types, viewer configuration
    geometry: Frustum corner and wireframe generation
    camera: Pose convention normalization
    scene: Input validation, group management, composition and bounds
    preview: Export cropping and Matplotlib preview
"""

__version__ = "0.1.0"
