"""Core module for candidate grids, units and validation."""

from .cell import candidates_equal, popcount
from .grid import CandidateGrid, PuzzleFormatError
from .units import Unit, build_units
from .validator import is_consistent, is_valid_solution, has_unique_solution

__all__ = [
    "candidates_equal",
    "popcount",
    "CandidateGrid",
    "PuzzleFormatError",
    "Unit",
    "build_units",
    "is_consistent",
    "is_valid_solution",
    "has_unique_solution",
]
