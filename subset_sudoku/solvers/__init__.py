"""Solvers module for Sudoku puzzles."""

from .base_solver import BaseSolver, SolverStats, SolveOutcome, SolveResult
from .difficulty import Difficulty, DifficultySettings
from .hypothesis import HypothesisFrame, HypothesisStack, HypothesisStackFull, first_bivalue_cell
from .propagation import analyse_unit, propagate, sweep
from .session import SolverSession
from .subset_solver import SubsetSolver, solve

__all__ = [
    "BaseSolver",
    "SolverStats",
    "SolveOutcome",
    "SolveResult",
    "Difficulty",
    "DifficultySettings",
    "HypothesisFrame",
    "HypothesisStack",
    "HypothesisStackFull",
    "first_bivalue_cell",
    "analyse_unit",
    "propagate",
    "sweep",
    "SolverSession",
    "SubsetSolver",
    "solve",
]
