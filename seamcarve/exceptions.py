"""Custom exception hierarchy for seamcarve."""


class SeamCarvingError(Exception):
    """Base exception for all seam carving errors."""


class InvalidDimensionError(SeamCarvingError):
    """Raised when a grid has a non-positive width or height."""


class InvalidGridError(SeamCarvingError):
    """Raised when a grid cannot be traced or holds non-integer pixels."""


class InvalidSeamError(SeamCarvingError):
    """Raised when a seam does not fit the grid it is applied to."""


class InvalidTargetWidthError(SeamCarvingError):
    """Raised when the requested width is not positive or would widen the grid."""
