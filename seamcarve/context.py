"""
Execution context for the carving stages.

The context is built once by the caller and handed to every stage. It names
the torch device the row-parallel work runs on and carries the driver-level
bounds (iteration cap, wall-clock budget, cancellation) that are checked
between carving passes.
"""

import threading
from dataclasses import dataclass, field
from typing import Optional

import torch

from .config import Config


@dataclass(frozen=True)
class ExecutionContext:
    """
    Where and for how long the carving loop may run.

    Args:
        device: Torch device for grids and kernels
        max_iterations: Stop after this many removed seams (None = unbounded)
        time_budget: Wall-clock budget in seconds (None = unbounded)
        cancel_event: Set from another thread to stop at the next pass boundary
    """
    device: torch.device = field(default_factory=lambda: torch.device(Config.DEVICE))
    max_iterations: Optional[int] = None
    time_budget: Optional[float] = None
    cancel_event: Optional[threading.Event] = None

    def __post_init__(self):
        # Accept 'cuda' / 'cpu' strings
        object.__setattr__(self, 'device', torch.device(self.device))
        if self.max_iterations is not None and self.max_iterations < 0:
            raise ValueError(f"max_iterations must be non-negative, got {self.max_iterations}")
        if self.time_budget is not None and self.time_budget < 0:
            raise ValueError(f"time_budget must be non-negative, got {self.time_budget}")

    @property
    def cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    def cancel(self):
        """Request that the carving loop stop before its next pass."""
        if self.cancel_event is None:
            raise RuntimeError("Context was created without a cancel_event")
        self.cancel_event.set()


def default_context() -> ExecutionContext:
    return ExecutionContext()
