"""Generator module for seed grids and puzzles."""

from .generator import SeedGridGenerator
from ..solvers.difficulty import Difficulty

__all__ = ["SeedGridGenerator", "Difficulty"]
