"""Shared test fixtures for the seamcarve test suite."""

import itertools
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest
from seamcarve.grid import PixelGrid


@pytest.fixture
def scenario_grid():
    """3x2 grid with one bright pixel in the bottom row."""
    return PixelGrid.from_rows([[10, 10, 10],
                                [10, 50, 10]])


@pytest.fixture
def random_grid():
    """Random 20x30 grid of 8-bit intensities."""
    torch.manual_seed(42)
    return PixelGrid(torch.randint(0, 256, (20, 30)))


def make_uniform_grid(H, W, value=128):
    return PixelGrid(torch.full((H, W), value, dtype=torch.long))


def make_edge_grid(H, W, edge_col, low=0, high=255):
    """Dark left half, bright right half, step at edge_col."""
    pixels = torch.full((H, W), low, dtype=torch.long)
    pixels[:, edge_col:] = high
    return PixelGrid(pixels)


def brute_force_min_seam_energy(energy):
    """Minimum total energy over every connected top-to-bottom path."""
    H, W = energy.shape
    best = None
    for start in range(W):
        for steps in itertools.product((-1, 0, 1), repeat=H - 1):
            col = start
            total = energy[0, col].item()
            valid = True
            for i, step in enumerate(steps, start=1):
                col += step
                if col < 0 or col >= W:
                    valid = False
                    break
                total += energy[i, col].item()
            if valid and (best is None or total < best):
                best = total
    return best
