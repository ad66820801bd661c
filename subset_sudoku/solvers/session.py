"""State and control loop of a single solve."""

from __future__ import annotations
import logging
from typing import Optional

import numpy as np

from ..core.cell import lowest_bit, lowest_value
from ..core.grid import CandidateGrid, Index
from ..core.units import build_units
from ..core.validator import is_valid_solution
from .base_solver import SolveOutcome, SolverStats
from .difficulty import DifficultySettings
from .hypothesis import BranchPolicy, HypothesisStack, first_bivalue_cell
from .propagation import propagate

logger = logging.getLogger(__name__)


class SolverSession:
    """
    Everything one solve mutates: the grid, its units, the hypothesis
    stack and the contradiction flag.

    Sessions share nothing, so several can run side by side.
    """

    def __init__(
        self,
        grid: CandidateGrid,
        settings: DifficultySettings,
        verbose: bool = False,
        branch_policy: BranchPolicy = first_bivalue_cell,
        stats: Optional[SolverStats] = None,
    ):
        """
        Args:
            grid: Grid to solve, modified in place.
            settings: Subset size, iteration and stack depth caps.
            verbose: Log search events at INFO instead of DEBUG.
            branch_policy: Chooses the cell to guess on when propagation stalls.
            stats: Counters to update; a fresh SolverStats if omitted.
        """
        self.grid = grid
        self.settings = settings
        self.units = build_units()
        self.stack = HypothesisStack(settings.max_stack_depth)
        self.contradiction = grid.has_contradiction()
        self.branch_policy = branch_policy
        self.stats = stats if stats is not None else SolverStats()
        self._log = logger.info if verbose else logger.debug

    @property
    def depth(self) -> int:
        return self.stack.depth

    def remove_candidates(self, rows: Index, cols: Index, mask: int) -> bool:
        """Remove ``mask`` from the given cells, raising the contradiction flag on an empty cell."""
        effect = self.grid.remove_candidates(rows, cols, mask)
        if effect and np.any(self.grid.counts[rows, cols] == 0):
            self.contradiction = True
        return effect

    def propagate(self) -> bool:
        return propagate(self)

    def speculate(self) -> bool:
        """
        Guess on the cell picked by the branch policy.

        The grid is pushed onto the stack, then the cell is collapsed to its
        lowest candidate.

        Returns:
            False if the policy found no cell to guess on.
        """
        position = self.branch_policy(self.grid)
        if position is None:
            self._log("No more hypothesis ...")
            return False

        row, col = position
        mask = self.grid.mask(row, col)
        if self.grid.count(row, col) < 2:
            raise ValueError(f"Cannot branch on ({row},{col}): fewer than 2 candidates")

        kept = lowest_bit(mask)
        self.stack.push(self.grid, row, col, kept)
        self.remove_candidates(row, col, mask & ~kept)

        self.stats.hypotheses += 1
        self.stats.max_depth = max(self.stats.max_depth, self.depth)
        self._log("Hypothesis : (%d,%d) takes value %d", row, col, lowest_value(kept))
        return True

    def backtrack(self) -> None:
        """Drop the newest hypothesis and force its other branch."""
        frame = self.stack.pop(self.grid)
        self.contradiction = False
        self.stats.backtracks += 1
        self._log("Hypothesis is wrong, take other path ... (%d,%d) is not %d",
                  frame.row, frame.col, lowest_value(frame.kept))

    def run(self) -> SolveOutcome:
        """
        Alternate propagation and hypotheses until the grid is solved or
        the search cannot go further.
        """
        while True:
            self.stats.iterations += 1
            propagate(self)

            if not self.contradiction and self.grid.is_solved():
                if is_valid_solution(self.grid.to_values()):
                    self._log("Sudoku solved after %d pass(es)", self.stats.iterations)
                    return SolveOutcome.SOLVED
                self.contradiction = True

            if self.contradiction:
                if self.depth == 0:
                    self._log("Contradiction with no hypothesis left to undo")
                    return SolveOutcome.CONTRADICTION
                self.backtrack()
                continue

            self._log("Pass %d is not sufficient, need hypothesis ...\nCurrent state is:\n%s",
                      self.depth + 1, self.grid.to_text())

            if self.stack.is_full():
                self._log("Hypothesis stack is at its limit (%d)", self.stack.capacity)
                return SolveOutcome.EXHAUSTED
            if not self.speculate():
                return SolveOutcome.STALLED
