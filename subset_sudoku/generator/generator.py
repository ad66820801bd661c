"""Random seed grids and puzzles built from them."""

from __future__ import annotations
import os
import random
from typing import List, Optional, Tuple

import numpy as np

from ..core.cell import SIZE, BOX_SIZE
from ..core.grid import CandidateGrid
from ..core.validator import has_unique_solution
from ..solvers.difficulty import Difficulty


class SeedGridGenerator:
    """
    Generator for fully resolved grids and puzzles derived from them.

    Algorithm:
    1. Start from a fixed Latin square that satisfies every box
    2. Relabel the digits, shuffle rows within bands, bands, columns within
       stacks and stacks, then maybe transpose
    3. For puzzles, remove cells while the solution stays unique
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Initialize the generator.

        Args:
            seed: Random seed for reproducibility.
        """
        self.rng = random.Random(seed)

    def generate_seed_grid(self) -> CandidateGrid:
        """Generate a complete valid grid."""
        return CandidateGrid.from_values(self._seed_values())

    def generate(self, difficulty: Difficulty = Difficulty.MEDIUM) -> CandidateGrid:
        """
        Generate a puzzle with the specified difficulty.

        Args:
            difficulty: Desired difficulty level.

        Returns:
            The puzzle (clues only, no solution).
        """
        puzzle, _ = self.generate_with_solution(difficulty)
        return puzzle

    def generate_batch(self, count: int, difficulty: Difficulty = Difficulty.MEDIUM) -> List[CandidateGrid]:
        """Generate multiple puzzles of the same difficulty."""
        return [self.generate(difficulty) for _ in range(count)]

    def generate_with_solution(self, difficulty: Difficulty = Difficulty.MEDIUM) -> Tuple[CandidateGrid, CandidateGrid]:
        """
        Generate a puzzle along with its solution.

        Returns:
            Tuple of (puzzle, solution) grids.
        """
        solution = self._seed_values()
        puzzle = self._remove_cells(solution, difficulty)
        return CandidateGrid.from_values(puzzle), CandidateGrid.from_values(solution)

    def _seed_values(self) -> np.ndarray:
        base = np.array(
            [[(row * BOX_SIZE + row // BOX_SIZE + col) % SIZE + 1 for col in range(SIZE)]
             for row in range(SIZE)],
            dtype=np.int32,
        )

        # Relabel digits
        labels = list(range(1, SIZE + 1))
        self.rng.shuffle(labels)
        relabel = np.array([0] + labels, dtype=np.int32)
        values = relabel[base]

        values = values[self._shuffled_lines(), :]
        values = values[:, self._shuffled_lines()]
        if self.rng.random() < 0.5:
            values = values.T

        return np.ascontiguousarray(values)

    def _shuffled_lines(self) -> List[int]:
        """A line order that keeps each band (or stack) of 3 lines together."""
        bands = list(range(BOX_SIZE))
        self.rng.shuffle(bands)
        order = []
        for band in bands:
            lines = list(range(BOX_SIZE))
            self.rng.shuffle(lines)
            order.extend(band * BOX_SIZE + line for line in lines)
        return order

    def _remove_cells(self, solution: np.ndarray, difficulty: Difficulty) -> np.ndarray:
        """
        Remove cells from a complete solution to create a puzzle.

        Ensures the resulting puzzle has a unique solution.
        """
        puzzle = solution.copy()
        min_clues, max_clues = difficulty.clue_range

        target_clues = self.rng.randint(min_clues, max_clues)
        cells_to_remove = SIZE * SIZE - target_clues

        filled_cells = [(i, j) for i in range(SIZE) for j in range(SIZE)]
        self.rng.shuffle(filled_cells)

        removed = 0
        for row, col in filled_cells:
            if removed >= cells_to_remove:
                break

            original_value = puzzle[row, col]
            puzzle[row, col] = 0

            if has_unique_solution(puzzle):
                removed += 1
            else:
                puzzle[row, col] = original_value

        return puzzle

    @staticmethod
    def save_to_folder(puzzles: List[CandidateGrid], folder_path: str, prefix: str = "puzzle") -> List[str]:
        """
        Save puzzles as individual files in the solver input format.

        Args:
            puzzles: Grids to save.
            folder_path: Directory to save the puzzles.
            prefix: Prefix for the filename (default: "puzzle").

        Returns:
            Paths of the written files.
        """
        os.makedirs(folder_path, exist_ok=True)

        paths = []
        for i, puzzle in enumerate(puzzles, 1):
            file_path = os.path.join(folder_path, f"{prefix}_{i}.txt")
            with open(file_path, "w") as f:
                f.write(puzzle.to_puzzle_text())
                f.write("\n")
            paths.append(file_path)
        return paths
