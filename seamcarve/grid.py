"""
Pixel grid exchanged between the carving stages.

A PixelGrid wraps an integer intensity tensor of shape (H, W). The engine
never mutates one in place: every stage hands back a new grid.
"""

from dataclasses import dataclass
from typing import List, Sequence, Union

import numpy as np
import torch

from .validators import validate_dimensions, validate_pixels
from .exceptions import InvalidDimensionError


@dataclass(frozen=True, eq=False)
class PixelGrid:
    """
    Rectangular grid of integer intensities, row-major.

    Args:
        pixels: Integer tensor (H, W); cast to torch.long
    """
    pixels: torch.Tensor

    def __post_init__(self):
        pixels = self.pixels
        if not isinstance(pixels, torch.Tensor):
            pixels = torch.as_tensor(np.asarray(pixels))
        validate_pixels(pixels)
        # Never aliases the caller's tensor
        object.__setattr__(self, 'pixels', pixels.to(torch.long, copy=True))

    @classmethod
    def from_flat(cls, width: int, height: int,
                  pixels: Union[Sequence[int], np.ndarray, torch.Tensor],
                  device='cpu') -> 'PixelGrid':
        """
        Build a grid from the exchange format: width, height and a flat
        row-major pixel sequence of length width * height.

        Raises:
            InvalidDimensionError: On non-positive dimensions or a length mismatch
            InvalidGridError: If the pixels are not integers
        """
        validate_dimensions(width, height)
        flat = torch.as_tensor(np.asarray(pixels) if not isinstance(pixels, torch.Tensor) else pixels)
        if flat.numel() != width * height:
            raise InvalidDimensionError(
                f"Expected {width}x{height}={width * height} pixels, got {flat.numel()}"
            )
        return cls(flat.reshape(height, width).to(device))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]], device='cpu') -> 'PixelGrid':
        """Build a grid from a list of equal-length rows."""
        if len(rows) == 0:
            raise InvalidDimensionError("Grid must have at least one row")
        widths = {len(row) for row in rows}
        if len(widths) != 1:
            raise InvalidDimensionError(f"Rows have differing lengths: {sorted(widths)}")
        return cls(torch.as_tensor(np.asarray(rows)).to(device))

    @classmethod
    def from_dict(cls, data: dict, device='cpu') -> 'PixelGrid':
        return cls.from_flat(data['width'], data['height'], data['pixels'], device=device)

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def device(self) -> torch.device:
        return self.pixels.device

    def to(self, device) -> 'PixelGrid':
        return PixelGrid(self.pixels.to(device))

    def to_flat(self) -> List[int]:
        return self.pixels.reshape(-1).tolist()

    def to_rows(self) -> List[List[int]]:
        return self.pixels.tolist()

    def to_dict(self) -> dict:
        return {'width': self.width, 'height': self.height, 'pixels': self.to_flat()}

    def __eq__(self, other):
        if not isinstance(other, PixelGrid):
            return NotImplemented
        return (self.pixels.shape == other.pixels.shape
                and torch.equal(self.pixels.cpu(), other.pixels.cpu()))

    def __repr__(self):
        return f"PixelGrid(width={self.width}, height={self.height}, device={self.device})"
