"""Difficulty-driven solver combining subset propagation and hypotheses."""

from __future__ import annotations
from typing import Optional, Union

from .base_solver import BaseSolver, SolveOutcome, SolveResult
from .difficulty import Difficulty, DifficultySettings
from .hypothesis import BranchPolicy, first_bivalue_cell
from .session import SolverSession
from ..core.grid import CandidateGrid

SettingsLike = Union[DifficultySettings, Difficulty, str, int]


class SubsetSolver(BaseSolver):
    """
    Sudoku solver using naked-subset propagation with bounded guessing.

    Features:
    - Subset elimination from singles up to ``max_subset_size``
    - Repeated passes so larger subsets can re-enable smaller ones
    - Snapshot stack of two-way hypotheses, at most ``max_stack_depth`` deep
    """

    name = "Subset Propagation"

    def __init__(
        self,
        difficulty: SettingsLike = Difficulty.MEDIUM,
        verbose: bool = False,
        branch_policy: BranchPolicy = first_bivalue_cell,
    ):
        """
        Initialize the solver.

        Args:
            difficulty: A Difficulty (or its name or level 0-3), or explicit
                DifficultySettings.
            verbose: Log hypotheses and backtracks at INFO level.
            branch_policy: Cell selection for hypotheses.
        """
        super().__init__()
        self.settings, self.difficulty = resolve_settings(difficulty)
        self.verbose = verbose
        self.branch_policy = branch_policy

    def _solve(self, grid: CandidateGrid) -> SolveOutcome:
        """Run one session over the grid."""
        if self.difficulty is not None:
            self.stats.extra["difficulty"] = self.difficulty.value
        self.stats.extra["max_subset_size"] = self.settings.max_subset_size
        self.stats.extra["max_iterations"] = self.settings.max_iterations
        self.stats.extra["max_stack_depth"] = self.settings.max_stack_depth

        session = SolverSession(
            grid,
            self.settings,
            verbose=self.verbose,
            branch_policy=self.branch_policy,
            stats=self.stats,
        )
        return session.run()


def resolve_settings(value: SettingsLike) -> tuple:
    """Return ``(settings, difficulty)``; difficulty is None for custom settings."""
    if isinstance(value, DifficultySettings):
        return value, None
    difficulty = Difficulty.parse(value)
    return difficulty.settings, difficulty


def solve(
    grid: CandidateGrid,
    settings: SettingsLike = Difficulty.MEDIUM,
    verbose: bool = False,
    branch_policy: Optional[BranchPolicy] = None,
) -> SolveResult:
    """
    Solve ``grid`` under the given difficulty settings.

    Returns:
        SolveResult with ``solved``, the grid as last computed and
        ``elapsed_micros``. The input grid is left untouched.
    """
    solver = SubsetSolver(settings, verbose=verbose,
                          branch_policy=branch_policy or first_bivalue_cell)
    return solver.solve(grid)
