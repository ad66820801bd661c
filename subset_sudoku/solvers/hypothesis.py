"""Bounded snapshot stack for speculative assignments."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

import numpy as np

from ..core.grid import CandidateGrid

Position = Tuple[int, int]

# Picks the cell to speculate on, or None when nothing is worth a guess
BranchPolicy = Callable[[CandidateGrid], Optional[Position]]


class HypothesisStackFull(RuntimeError):
    """Raised when pushing onto a stack already at its depth limit."""


@dataclass
class HypothesisFrame:
    """Grid snapshot taken before collapsing (row, col) to ``kept``."""
    grid: CandidateGrid
    row: int
    col: int
    kept: int


def first_bivalue_cell(grid: CandidateGrid) -> Optional[Position]:
    """First cell in row-major order with exactly two candidates left."""
    rows, cols = np.nonzero(grid.counts == 2)
    if rows.size == 0:
        return None
    return int(rows[0]), int(cols[0])


class HypothesisStack:
    """
    LIFO stack of hypothesis frames with a fixed capacity.

    Push records the grid before a guess; pop puts that grid back and
    removes the guessed candidate so the other branch is taken.
    """

    def __init__(self, capacity: int):
        if capacity < 0:
            raise ValueError(f"Capacity must be >= 0, got {capacity}")
        self.capacity = capacity
        self._frames: List[HypothesisFrame] = []

    @property
    def depth(self) -> int:
        return len(self._frames)

    def is_full(self) -> bool:
        return self.depth >= self.capacity

    def __len__(self) -> int:
        return self.depth

    def push(self, grid: CandidateGrid, row: int, col: int, kept: int) -> HypothesisFrame:
        """Snapshot ``grid`` by value and record the kept candidate mask."""
        if self.is_full():
            raise HypothesisStackFull(f"Hypothesis stack is full (capacity {self.capacity})")
        frame = HypothesisFrame(grid.copy(), row, col, kept)
        self._frames.append(frame)
        return frame

    def pop(self, grid: CandidateGrid) -> HypothesisFrame:
        """
        Undo the most recent hypothesis.

        Restores ``grid`` in place from the top frame and removes the
        candidate that was kept, forcing the untried branch.
        """
        if not self._frames:
            raise IndexError("pop from empty hypothesis stack")
        frame = self._frames.pop()
        grid.restore(frame.grid)
        grid.remove_candidates(frame.row, frame.col, frame.kept)
        return frame
