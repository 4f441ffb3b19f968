"""Geometry module for frustum wireframes.

Components:
    frustum: Local corner generation, edge expansion, shared templates
"""

from .frustum import (
    ASPECT_FLOOR,
    EDGE_PAIRS,
    NUM_EDGE_POINTS,
    NUM_SEGMENTS,
    FrustumParams,
    build_edges,
    clamp_aspect,
    compute_local_corners,
    frustum_template,
    transform_geometry,
    world_geometry,
)

__all__ = [
    "FrustumParams",
    "compute_local_corners",
    "build_edges",
    "transform_geometry",
    "frustum_template",
    "world_geometry",
    "clamp_aspect",
    "ASPECT_FLOOR",
    "EDGE_PAIRS",
    "NUM_SEGMENTS",
    "NUM_EDGE_POINTS",
]
