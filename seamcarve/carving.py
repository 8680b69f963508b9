"""
High-level carving functions that orchestrate the seam carving workflow.

Each pass recomputes energy, cumulative energy and the minimum seam from
scratch on the current grid, then removes that seam. Passes run strictly
one after another; only the grid itself is carried from one to the next.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

import torch

from .config import Config
from .context import ExecutionContext, default_context
from .energy import accumulate, estimate_energy
from .grid import PixelGrid
from .seam import remove_seam, trace_seam
from .validators import validate_target_width, validate_threshold

logger = logging.getLogger("seamcarve.carving")

PassCallback = Callable[[int, torch.Tensor, int], None]


class CarvingState(Enum):
    RUNNING = "running"
    DONE = "done"
    FAILED = "failed"


class HaltReason(Enum):
    """Why a carve stopped before reaching its target width."""

    ENERGY_THRESHOLD = "energy_threshold"  # Cheapest seam cost more than allowed
    ITERATION_LIMIT = "iteration_limit"
    TIME_BUDGET = "time_budget"
    CANCELLED = "cancelled"


@dataclass(frozen=True, eq=False)
class CarveResult:
    """Outcome of a carve that reached its target width."""

    grid: PixelGrid
    final_width: int
    halted_early: bool = False

    def to_dict(self) -> dict:
        return {
            'grid': self.grid.to_dict(),
            'finalWidth': self.final_width,
            'haltedEarly': self.halted_early,
        }


@dataclass(frozen=True, eq=False)
class PartialResult(CarveResult):
    """Outcome of a carve that stopped early; the grid is wider than requested."""

    halted_early: bool = True
    halt_reason: Optional[HaltReason] = None
    seam_energy: Optional[int] = None  # Only set for ENERGY_THRESHOLD halts

    def to_dict(self) -> dict:
        data = super().to_dict()
        data['haltReason'] = self.halt_reason.value if self.halt_reason else None
        data['seamEnergy'] = self.seam_energy
        return data


class CarvingSession:
    """
    State for one carve request, from the first pass to completion.

    The session moves RUNNING -> DONE, or RUNNING -> FAILED when a stage
    raises. Call step() to run a single pass or run() to carve to the end.

    Args:
        grid: Input PixelGrid
        target_width: Width to carve down to (1 <= target_width <= grid.width)
        energy_threshold: Halt once the cheapest seam's energy exceeds this
        context: Execution context (device, iteration/time bounds, cancellation)
        on_pass: Called as on_pass(pass_index, seam, seam_energy) after each removal
    """

    def __init__(self, grid: PixelGrid, target_width: int,
                 energy_threshold: Optional[int] = None,
                 context: Optional[ExecutionContext] = None,
                 on_pass: Optional[PassCallback] = None):
        if not isinstance(grid, PixelGrid):
            grid = PixelGrid(grid)
        validate_target_width(target_width, grid.width)
        validate_threshold(energy_threshold)

        self.context = context if context is not None else default_context()
        if grid.device != self.context.device:
            grid = grid.to(self.context.device)

        self.grid = grid
        self.target_width = target_width
        self.energy_threshold = energy_threshold
        self.on_pass = on_pass

        self.state = CarvingState.RUNNING
        self.iterations = 0
        self.result: Optional[CarveResult] = None
        self._started: Optional[float] = None

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    def step(self) -> bool:
        """
        Run one carving pass.

        Any exception raised by a stage or by on_pass leaves the session FAILED.

        Returns:
            True while more passes are needed, False once the session is done

        Raises:
            RuntimeError: If the session has already finished or failed
            SeamCarvingError: If a stage fails
        """
        if self.state is not CarvingState.RUNNING:
            raise RuntimeError(f"Carving session is {self.state.value}")
        if self._started is None:
            self._started = time.monotonic()

        if self.width == self.target_width:
            self._finish(CarveResult(self.grid, self.width))
            return False

        reason = self._check_bounds()
        if reason is not None:
            self._halt(reason)
            return False

        try:
            energy = estimate_energy(self.grid, self.context)
            cumulative = accumulate(energy, self.context)
            seam = trace_seam(cumulative)
            cost = cumulative[-1, seam[-1]].item()

            if self.energy_threshold is not None and cost > self.energy_threshold:
                self._halt(HaltReason.ENERGY_THRESHOLD, cost)
                return False

            # Drop the old grid as soon as the narrower one exists
            self.grid = remove_seam(self.grid, seam)
            self.iterations += 1
            logger.debug("Pass %d: removed seam with energy %d, width now %d",
                         self.iterations, cost, self.width)
            if self.on_pass is not None:
                self.on_pass(self.iterations, seam, cost)
        except Exception as e:
            self.state = CarvingState.FAILED
            logger.error("Carving failed on %dx%d grid after %d passes: %s",
                         self.width, self.height, self.iterations, e)
            raise

        if self.width == self.target_width:
            self._finish(CarveResult(self.grid, self.width))
            return False
        return True

    def run(self) -> CarveResult:
        """Carve until the target width is reached or a bound halts the session."""
        while self.step():
            pass
        return self.result

    def _check_bounds(self) -> Optional[HaltReason]:
        ctx = self.context
        if ctx.cancelled:
            return HaltReason.CANCELLED
        if ctx.max_iterations is not None and self.iterations >= ctx.max_iterations:
            return HaltReason.ITERATION_LIMIT
        if ctx.time_budget is not None and time.monotonic() - self._started >= ctx.time_budget:
            return HaltReason.TIME_BUDGET
        return None

    def _halt(self, reason: HaltReason, cost: Optional[int] = None):
        logger.info("Carving halted early (%s) at width %d, target %d",
                    reason.value, self.width, self.target_width)
        self._finish(PartialResult(self.grid, self.width,
                                   halt_reason=reason, seam_energy=cost))

    def _finish(self, result: CarveResult):
        self.state = CarvingState.DONE
        self.result = result
        if not result.halted_early:
            logger.info("Carving done: %d passes, final size %dx%d",
                        self.iterations, result.final_width, self.height)


def carve(grid: PixelGrid, target_width: int,
          energy_threshold: Optional[int] = None,
          context: Optional[ExecutionContext] = None,
          on_pass: Optional[PassCallback] = None) -> CarveResult:
    """
    Content-aware width reduction by repeated seam removal.

    Args:
        grid: Input PixelGrid
        target_width: Width to carve down to
        energy_threshold: Optional cap on the cheapest seam's energy; once
            exceeded, carving stops and a PartialResult is returned
        context: Execution context
        on_pass: Per-pass callback, see CarvingSession

    Returns:
        CarveResult at target_width, or PartialResult if carving halted early

    Raises:
        InvalidTargetWidthError: If target_width <= 0 or exceeds the grid width
        SeamCarvingError: If any stage fails
    """
    session = CarvingSession(grid, target_width, energy_threshold, context, on_pass)
    return session.run()


def resolve_target_width(grid_width: int, target_width: Optional[int] = None,
                         ratio: float = Config.DEFAULT_SHRINK_RATIO) -> int:
    """
    Target width for a carve request.

    An explicit target_width is returned as given, including invalid values,
    so carve() can reject them. Without one the grid is scaled by ratio,
    never below a single column.
    """
    if target_width is not None:
        return target_width
    return max(1, int(grid_width * ratio))


def carve_seams(grid: PixelGrid, n_seams: int,
                energy_threshold: Optional[int] = None,
                context: Optional[ExecutionContext] = None,
                on_pass: Optional[PassCallback] = None) -> CarveResult:
    """
    Remove n_seams columns from a grid.

    Args:
        grid: Input PixelGrid
        n_seams: Number of seams to remove

    Returns:
        Result of carve(grid, grid.width - n_seams, ...)
    """
    if n_seams < 0:
        raise ValueError(f"n_seams must be non-negative, got {n_seams}")
    if not isinstance(grid, PixelGrid):
        grid = PixelGrid(grid)
    return carve(grid, grid.width - n_seams, energy_threshold, context, on_pass)
