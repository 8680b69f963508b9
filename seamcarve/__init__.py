"""
Content-aware image width reduction by seam carving.

Repeatedly finds and removes the connected vertical path of pixels with the
least energy, shrinking an integer intensity grid one column at a time.
"""

__version__ = "0.1.0"

from .config import Config
from .context import ExecutionContext
from .exceptions import (
    SeamCarvingError,
    InvalidDimensionError,
    InvalidGridError,
    InvalidSeamError,
    InvalidTargetWidthError,
)
from .grid import PixelGrid
from .energy import estimate_energy, accumulate
from .seam import trace_seam, seam_energy, remove_seam
from .carving import (
    carve,
    carve_seams,
    resolve_target_width,
    CarvingSession,
    CarvingState,
    CarveResult,
    PartialResult,
    HaltReason,
)
from .logging_config import setup_logging

__all__ = [
    'Config',
    'ExecutionContext',
    'SeamCarvingError',
    'InvalidDimensionError',
    'InvalidGridError',
    'InvalidSeamError',
    'InvalidTargetWidthError',
    'PixelGrid',
    'estimate_energy',
    'accumulate',
    'trace_seam',
    'seam_energy',
    'remove_seam',
    'carve',
    'carve_seams',
    'resolve_target_width',
    'CarvingSession',
    'CarvingState',
    'CarveResult',
    'PartialResult',
    'HaltReason',
    'setup_logging',
]
