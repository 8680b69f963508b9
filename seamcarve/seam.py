"""
Seam tracing and removal.

A vertical seam holds one column index per row, top to bottom, with
consecutive indices differing by at most one.
"""

from typing import Union

import torch

from .exceptions import InvalidDimensionError
from .grid import PixelGrid
from .validators import as_seam, validate_seam, validate_traceable


def trace_seam(cumulative: torch.Tensor) -> torch.Tensor:
    """
    Backtrack the minimum-energy vertical seam from a cumulative energy map.

    The seed is the smallest value in the bottom row. Walking upward, each
    step picks the smallest of the (up to) three cells above the current
    column. Ties go to the smaller column index at every step, so the result
    is deterministic and its total energy equals the bottom-row minimum.

    Args:
        cumulative: Cumulative energy map (H, W) from accumulate()

    Returns:
        Seam indices (H,), torch.long, on the same device as the input

    Raises:
        InvalidGridError: If the map has zero width or height, or is not 2-D
    """
    validate_traceable(cumulative)
    H, W = cumulative.shape

    # The walk is sequential; do it on the host
    M = cumulative.cpu()
    seam = torch.zeros(H, dtype=torch.long)
    seam[H - 1] = torch.argmin(M[H - 1])

    for i in range(H - 2, -1, -1):
        col = seam[i + 1].item()
        left = max(0, col - 1)
        right = min(W - 1, col + 1)
        neighbors = M[i, left:right + 1]
        seam[i] = left + torch.argmin(neighbors)

    return seam.to(cumulative.device)


def seam_energy(energy: torch.Tensor, seam: torch.Tensor) -> int:
    """Total energy along a seam."""
    seam = as_seam(seam)
    H, W = energy.shape
    validate_seam(seam, H, W)
    rows = torch.arange(H, device=energy.device)
    return energy[rows, seam.to(energy.device)].sum().item()


def remove_seam(grid: Union[PixelGrid, torch.Tensor], seam: torch.Tensor) -> PixelGrid:
    """
    Remove a vertical seam from a pixel grid.

    In every row the seam's pixel is dropped and the pixels to its right
    shift one place left. All rows are handled at once through a boolean
    mask; the input grid is left untouched.

    Args:
        grid: PixelGrid (H, W)
        seam: Column index per row (H,), a tensor or a sequence of ints

    Returns:
        New PixelGrid (H, W - 1)

    Raises:
        InvalidSeamError: If the seam length differs from H or an index is out of bounds
        InvalidDimensionError: If the grid is a single column wide
    """
    if not isinstance(grid, PixelGrid):
        grid = PixelGrid(grid)
    seam = as_seam(seam)
    H, W = grid.height, grid.width
    validate_seam(seam, H, W)
    if W == 1:
        raise InvalidDimensionError("Cannot remove a seam from a single-column grid")

    pixels = grid.pixels
    mask = torch.ones(H, W, dtype=torch.bool, device=pixels.device)
    mask[torch.arange(H, device=pixels.device), seam.to(pixels.device).long()] = False

    carved = pixels[mask].reshape(H, W - 1)
    return PixelGrid(carved)
