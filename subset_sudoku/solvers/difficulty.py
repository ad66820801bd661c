"""Difficulty levels and the solver settings they select."""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

from ..core.cell import SIZE


@dataclass(frozen=True)
class DifficultySettings:
    """How hard the solver may try before declaring defeat."""
    max_subset_size: int
    max_iterations: int
    max_stack_depth: int

    def __post_init__(self):
        if not 1 <= self.max_subset_size <= SIZE:
            raise ValueError(f"max_subset_size must be 1-{SIZE}, got {self.max_subset_size}")
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be positive, got {self.max_iterations}")
        if self.max_stack_depth < 0:
            raise ValueError(f"max_stack_depth must be >= 0, got {self.max_stack_depth}")


class Difficulty(Enum):
    """Difficulty levels, used both to tune the solver and to generate puzzles."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXPERT = "expert"

    @property
    def settings(self) -> DifficultySettings:
        """Solver caps (subset size, iterations, stack depth) for this level."""
        settings = {
            Difficulty.EASY: DifficultySettings(1, 4, 1),
            Difficulty.MEDIUM: DifficultySettings(2, 3, 2),
            Difficulty.HARD: DifficultySettings(3, 3, 3),
            Difficulty.EXPERT: DifficultySettings(3, 3, 5),
        }
        return settings[self]

    @property
    def clue_range(self) -> Tuple[int, int]:
        """Get the range of clues for generated puzzles (min, max)."""
        ranges = {
            Difficulty.EASY: (36, 45),
            Difficulty.MEDIUM: (28, 35),
            Difficulty.HARD: (22, 27),
            Difficulty.EXPERT: (17, 21),    # 17 is minimum for unique solution
        }
        return ranges[self]

    @classmethod
    def parse(cls, value: Union[str, int, "Difficulty"]) -> "Difficulty":
        """Accept a Difficulty, a level number 0-3, or a name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, int) or (isinstance(value, str) and value.isdigit()):
            level = int(value)
            levels = list(cls)
            if not 0 <= level < len(levels):
                raise ValueError(f"Difficulty level must be 0-{len(levels) - 1}, got {level}")
            return levels[level]
        try:
            return cls(value.lower())
        except (AttributeError, ValueError):
            raise ValueError(f"Unknown difficulty: {value!r}") from None
