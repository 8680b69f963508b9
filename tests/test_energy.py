"""Tests for energy estimation and cumulative energy."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest
from seamcarve.context import ExecutionContext
from seamcarve.energy import estimate_energy, accumulate
from seamcarve.exceptions import InvalidGridError
from seamcarve.grid import PixelGrid

from conftest import make_uniform_grid, make_edge_grid


class TestEstimateEnergy:
    def test_uniform_grid_is_zero(self):
        energy = estimate_energy(make_uniform_grid(6, 9))
        assert (energy == 0).all()

    def test_scenario_grid(self, scenario_grid):
        """Each pixel sums |diff| with its in-bounds 4-neighbours."""
        energy = estimate_energy(scenario_grid)
        assert energy.tolist() == [[0, 40, 0],
                                   [40, 120, 40]]

    def test_interior_pixel_uses_all_four_neighbours(self):
        grid = PixelGrid.from_rows([[0, 1, 0],
                                    [2, 10, 3],
                                    [0, 4, 0]])
        energy = estimate_energy(grid)
        assert energy[1, 1].item() == 9 + 8 + 7 + 6

    def test_single_pixel_has_zero_energy(self):
        energy = estimate_energy(PixelGrid.from_flat(1, 1, [200]))
        assert energy.tolist() == [[0]]

    def test_single_row(self):
        energy = estimate_energy(PixelGrid.from_rows([[1, 4, 2]]))
        assert energy.tolist() == [[3, 5, 2]]

    def test_single_column(self):
        energy = estimate_energy(PixelGrid.from_rows([[1], [4], [2]]))
        assert energy.tolist() == [[3], [5], [2]]

    def test_no_wraparound(self):
        """Left and right borders must not see each other."""
        grid = PixelGrid.from_rows([[0, 0, 0, 100]])
        energy = estimate_energy(grid)
        assert energy[0, 0].item() == 0

    def test_vertical_edge_has_energy(self):
        energy = estimate_energy(make_edge_grid(10, 10, edge_col=5))
        assert (energy[:, 4:6] == 255).all()
        assert (energy[:, :4] == 0).all()
        assert (energy[:, 6:] == 0).all()

    def test_output_shape_and_dtype(self, random_grid):
        energy = estimate_energy(random_grid)
        assert energy.shape == (20, 30)
        assert energy.dtype == torch.long

    def test_energy_nonnegative(self, random_grid):
        assert (estimate_energy(random_grid) >= 0).all()

    def test_input_untouched(self, random_grid):
        before = random_grid.pixels.clone()
        estimate_energy(random_grid)
        assert torch.equal(random_grid.pixels, before)

    def test_accepts_raw_tensor_and_context(self):
        pixels = torch.tensor([[1, 2], [3, 4]])
        energy = estimate_energy(pixels, ExecutionContext(device='cpu'))
        assert energy.tolist() == [[3, 3], [3, 3]]


class TestAccumulate:
    def test_first_row_copied(self, random_grid):
        energy = estimate_energy(random_grid)
        cumulative = accumulate(energy)
        assert torch.equal(cumulative[0], energy[0])

    def test_scenario_grid(self, scenario_grid):
        cumulative = accumulate(estimate_energy(scenario_grid))
        assert cumulative.tolist() == [[0, 40, 0],
                                       [40, 120, 40]]

    def test_three_way_minimum(self):
        energy = torch.tensor([[5, 1, 9],
                               [1, 1, 1]])
        cumulative = accumulate(energy)
        assert cumulative[1].tolist() == [2, 2, 2]

    def test_boundary_neighbours_excluded(self):
        """The right edge must not pick up the cheap left edge."""
        energy = torch.tensor([[1, 9, 9, 9],
                               [0, 0, 0, 0]])
        cumulative = accumulate(energy)
        assert cumulative[1].tolist() == [1, 1, 9, 9]

    def test_recurrence_holds_everywhere(self, random_grid):
        energy = estimate_energy(random_grid)
        M = accumulate(energy)
        H, W = M.shape
        for i in range(1, H):
            for j in range(W):
                above = M[i - 1, max(0, j - 1):min(W, j + 2)].min()
                assert M[i, j] == energy[i, j] + above

    def test_single_column(self):
        energy = torch.tensor([[3], [5], [2]])
        assert accumulate(energy).tolist() == [[3], [8], [10]]

    def test_float_energy(self):
        energy = torch.tensor([[0.5, 0.25], [1.0, 1.0]])
        cumulative = accumulate(energy)
        assert cumulative[1].tolist() == [1.25, 1.25]

    def test_zero_width_raises(self):
        with pytest.raises(InvalidGridError):
            accumulate(torch.zeros(3, 0, dtype=torch.long))

    def test_input_untouched(self):
        energy = torch.tensor([[1, 2], [3, 4]])
        accumulate(energy)
        assert energy.tolist() == [[1, 2], [3, 4]]
