"""
Energy functions for seam carving.

The energy function determines which pixels are "important".
Low-energy seams are preferred for removal.

Energy here is the sum of absolute intensity differences between a pixel and
its in-bounds 4-neighbours (left, right, up, down). Pixels on the border
simply have fewer neighbours; there is no padding and no wraparound.
"""

from typing import Optional, Union

import torch

from .context import ExecutionContext
from .grid import PixelGrid
from .validators import validate_traceable


def estimate_energy(grid: Union[PixelGrid, torch.Tensor],
                    context: Optional[ExecutionContext] = None) -> torch.Tensor:
    """
    Compute the 4-neighbour absolute-difference energy of a pixel grid.

    E(y, x) = sum over in-bounds neighbours n of |I(y, x) - I(n)|

    Each output cell depends only on the input grid, so the whole map is
    computed as four shifted differences over the full tensor.

    Args:
        grid: PixelGrid, or an integer tensor (H, W)
        context: Execution context naming the device to run on

    Returns:
        Energy map (H, W), torch.long, non-negative

    Raises:
        InvalidDimensionError: If the grid is empty or not 2-D
        InvalidGridError: If the pixels are not integers
    """
    if not isinstance(grid, PixelGrid):
        grid = PixelGrid(grid)
    pixels = grid.pixels
    if context is not None:
        pixels = pixels.to(context.device)

    energy = torch.zeros_like(pixels)

    # Horizontal neighbours: each difference counts for both pixels it touches
    dx = torch.abs(pixels[:, 1:] - pixels[:, :-1])
    energy[:, :-1] += dx
    energy[:, 1:] += dx

    # Vertical neighbours
    dy = torch.abs(pixels[1:, :] - pixels[:-1, :])
    energy[:-1, :] += dy
    energy[1:, :] += dy

    return energy


def accumulate(energy: torch.Tensor,
               context: Optional[ExecutionContext] = None) -> torch.Tensor:
    """
    Cumulative minimum energy via dynamic programming, top to bottom.

    M(0, x) = E(0, x)
    M(y, x) = E(y, x) + min(M(y-1, x-1), M(y-1, x), M(y-1, x+1))

    Columns outside the grid are excluded from the minimum. Rows are solved
    one after another; each row is a single vectorised operation over all
    of its columns.

    Args:
        energy: Energy map (H, W)
        context: Execution context naming the device to run on

    Returns:
        Cumulative energy map (H, W), same dtype as the input

    Raises:
        InvalidGridError: If the energy map is not 2-D or is empty
    """
    validate_traceable(energy)
    if context is not None:
        energy = energy.to(context.device)

    H, W = energy.shape
    if energy.is_floating_point():
        sentinel = float('inf')
    else:
        sentinel = torch.iinfo(energy.dtype).max

    M = energy.clone()

    for i in range(1, H):
        # Shifted versions of previous row's cumulative cost
        M_prev = M[i - 1]
        M_left = torch.full((W,), sentinel, device=energy.device, dtype=energy.dtype)
        M_left[1:] = M_prev[:-1]
        M_right = torch.full((W,), sentinel, device=energy.device, dtype=energy.dtype)
        M_right[:-1] = M_prev[1:]

        # Come from above-left, above, or above-right
        M[i] = energy[i] + torch.minimum(torch.minimum(M_left, M_prev), M_right)

    return M
