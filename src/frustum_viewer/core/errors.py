"""Error and warning types raised by the frustum viewer.

Only matrix inversion has a true failure mode inside the geometry pipeline;
input validation happens once, at the boundary where parsed records enter.
"""


class FrustumViewerError(Exception):
    """Base class for all frustum viewer errors."""


class InputShapeError(FrustumViewerError, ValueError):
    """A parsed pose record does not have the expected shape.

    Fails the load of that whole source. Groups that were loaded earlier are
    not affected.
    """


class SingularMatrixError(FrustumViewerError, ValueError):
    """A pose matrix could not be inverted.

    Callers treat this as a failure of a single camera, not of the scene.
    """


class DegenerateParameterWarning(UserWarning):
    """A frustum parameter was outside its usable range and has been clamped."""
