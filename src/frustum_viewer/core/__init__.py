"""Core module: transforms, errors and configuration.

Components:
    transform: 4x4 matrix construction, inversion and point application
    errors: Error and warning taxonomy
    config: Viewer configuration dataclass
"""

from .errors import (
    DegenerateParameterWarning,
    FrustumViewerError,
    InputShapeError,
    SingularMatrixError,
)
from .transform import (
    IDENTITY,
    SINGULAR_TOLERANCE,
    Matrix,
    build_matrix,
    compose,
    invert,
    matrix_origin,
    max_abs_difference,
    transform_points,
)

__all__ = [
    # Transform module
    "Matrix",
    "IDENTITY",
    "SINGULAR_TOLERANCE",
    "build_matrix",
    "invert",
    "compose",
    "transform_points",
    "matrix_origin",
    "max_abs_difference",
    # Errors module
    "FrustumViewerError",
    "InputShapeError",
    "SingularMatrixError",
    "DegenerateParameterWarning",
]
