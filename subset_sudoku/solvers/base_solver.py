"""Base solver interface and common result types."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any
import time
import tracemalloc

from ..core.grid import CandidateGrid


class SolveOutcome(Enum):
    """How a solve attempt ended."""
    SOLVED = "solved"
    EXHAUSTED = "exhausted"          # stack depth limit reached
    STALLED = "stalled"              # nothing left to branch on
    CONTRADICTION = "contradiction"  # no hypothesis left to undo

    @property
    def solved(self) -> bool:
        return self is SolveOutcome.SOLVED


@dataclass
class SolverStats:
    """Statistics from a solver run."""
    # Core metrics
    solved: bool = False
    outcome: str = ""
    time_seconds: float = 0.0
    memory_bytes: int = 0

    # Search metrics
    iterations: int = 0
    passes: int = 0
    hypotheses: int = 0
    backtracks: int = 0
    max_depth: int = 0

    # Additional metadata
    algorithm: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "solved": self.solved,
            "outcome": self.outcome,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "iterations": self.iterations,
            "passes": self.passes,
            "hypotheses": self.hypotheses,
            "backtracks": self.backtracks,
            "max_depth": self.max_depth,
            "algorithm": self.algorithm,
            **self.extra
        }


@dataclass
class SolveResult:
    """What a solve call hands back: the verdict and the grid as last computed."""
    solved: bool
    grid: CandidateGrid
    elapsed_micros: int
    outcome: SolveOutcome
    stats: SolverStats


class BaseSolver(ABC):
    """Abstract base class for Sudoku solvers."""

    name: str = "BaseSolver"

    def __init__(self):
        self.stats = SolverStats(algorithm=self.name)

    def solve(self, grid: CandidateGrid) -> SolveResult:
        """
        Solve a puzzle with timing and memory tracking.

        Args:
            grid: The puzzle to solve. It is copied, never modified.

        Returns:
            SolveResult holding the working grid in its final state.
        """
        self.stats = SolverStats(algorithm=self.name)
        work = grid.copy()

        # Start memory tracking unless an outer caller already is
        owns_tracing = not tracemalloc.is_tracing()
        if owns_tracing:
            tracemalloc.start()

        start_time = time.perf_counter()
        try:
            outcome = self._solve(work)
        finally:
            elapsed = time.perf_counter() - start_time
            current, peak = tracemalloc.get_traced_memory()
            if owns_tracing:
                tracemalloc.stop()

        self.stats.time_seconds = elapsed
        self.stats.memory_bytes = peak
        self.stats.solved = outcome.solved
        self.stats.outcome = outcome.value

        return SolveResult(
            solved=outcome.solved,
            grid=work,
            elapsed_micros=int(elapsed * 1_000_000),
            outcome=outcome,
            stats=self.stats,
        )

    @abstractmethod
    def _solve(self, grid: CandidateGrid) -> SolveOutcome:
        """
        Internal solve method to be implemented by subclasses.

        Args:
            grid: A copy of the puzzle to solve (modified in place).

        Returns:
            How the attempt ended.
        """
        pass
