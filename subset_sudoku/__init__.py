"""Sudoku solver built on naked-subset propagation and bounded hypotheses."""

from .core import CandidateGrid, PuzzleFormatError
from .solvers import Difficulty, DifficultySettings, SolveOutcome, SolveResult, SubsetSolver, solve

__version__ = "1.0.0"

__all__ = [
    "CandidateGrid",
    "PuzzleFormatError",
    "Difficulty",
    "DifficultySettings",
    "SolveOutcome",
    "SolveResult",
    "SubsetSolver",
    "solve",
]
