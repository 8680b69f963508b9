"""Precondition checks shared by the carving stages."""

from typing import Optional

import torch

from .exceptions import (InvalidDimensionError, InvalidGridError,
                         InvalidSeamError, InvalidTargetWidthError)


def validate_dimensions(width: int, height: int) -> None:
    """Validate grid dimensions.

    Raises:
        InvalidDimensionError: If either dimension is not positive.
    """
    if width <= 0 or height <= 0:
        raise InvalidDimensionError(
            f"Grid dimensions must be positive, got {width}x{height}"
        )


def validate_pixels(pixels: torch.Tensor) -> None:
    """Validate a pixel tensor of shape (H, W).

    Raises:
        InvalidDimensionError: If the tensor is not 2-D or is empty.
        InvalidGridError: If the tensor does not hold integers.
    """
    if pixels.dim() != 2:
        raise InvalidDimensionError(
            f"Pixel grid must be 2-D (H, W), got shape {tuple(pixels.shape)}"
        )
    H, W = pixels.shape
    validate_dimensions(W, H)
    if pixels.is_floating_point() or pixels.is_complex() or pixels.dtype == torch.bool:
        raise InvalidGridError(
            f"Pixel intensities must be integers, got dtype {pixels.dtype}"
        )


def validate_traceable(grid: torch.Tensor) -> None:
    """Validate an energy or cumulative grid before a DP pass.

    Raises:
        InvalidGridError: If the grid is not 2-D or has no rows or columns.
    """
    if grid.dim() != 2:
        raise InvalidGridError(f"Expected a 2-D grid, got shape {tuple(grid.shape)}")
    H, W = grid.shape
    if W == 0:
        raise InvalidGridError("Cannot trace a seam through a zero-width grid")
    if H == 0:
        raise InvalidGridError("Cannot trace a seam through a zero-height grid")


def as_seam(seam) -> torch.Tensor:
    """Coerce a sequence of column indices to a seam tensor.

    Raises:
        InvalidSeamError: If the value cannot be read as a sequence of indices.
    """
    if isinstance(seam, torch.Tensor):
        return seam
    try:
        return torch.as_tensor(seam)
    except (TypeError, ValueError, RuntimeError) as e:
        raise InvalidSeamError(f"Seam must be a sequence of column indices: {e}") from e


def validate_seam(seam: torch.Tensor, height: int, width: int) -> None:
    """Validate that a seam fits an (height, width) grid.

    Connectivity is not checked here; removal is row-local and only needs
    one in-bounds index per row.

    Raises:
        InvalidSeamError: If the seam has the wrong shape or an index is out of bounds.
    """
    if seam.dim() != 1:
        raise InvalidSeamError(f"Seam must be 1-D, got shape {tuple(seam.shape)}")
    if seam.shape[0] != height:
        raise InvalidSeamError(
            f"Seam length {seam.shape[0]} does not match grid height {height}"
        )
    if seam.is_floating_point() or seam.is_complex() or seam.dtype == torch.bool:
        raise InvalidSeamError(f"Seam indices must be integers, got dtype {seam.dtype}")
    out_of_bounds = (seam < 0) | (seam >= width)
    if out_of_bounds.any():
        row = int(torch.nonzero(out_of_bounds)[0, 0])
        raise InvalidSeamError(
            f"Seam index {int(seam[row])} in row {row} is outside [0, {width})"
        )


def validate_target_width(target_width: int, current_width: int) -> None:
    """Validate a narrowing request.

    Raises:
        InvalidTargetWidthError: If the target is not positive or exceeds the current width.
    """
    if target_width <= 0:
        raise InvalidTargetWidthError(f"Target width must be positive, got {target_width}")
    if target_width > current_width:
        raise InvalidTargetWidthError(
            f"Target width {target_width} exceeds current width {current_width}; "
            f"carving only narrows"
        )


def validate_threshold(energy_threshold: Optional[int]) -> None:
    if energy_threshold is not None and energy_threshold < 0:
        raise ValueError(f"energy_threshold must be non-negative, got {energy_threshold}")
