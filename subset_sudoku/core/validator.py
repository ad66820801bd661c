"""Validation utilities for Sudoku grids."""

from __future__ import annotations
from typing import List

import numpy as np

from .cell import SIZE, FULL_MASK, mask_of, popcount, values_of
from .units import build_units, box_index


def _as_values(values) -> np.ndarray:
    arr = np.asarray(values)
    if arr.shape != (SIZE, SIZE):
        raise ValueError(f"Grid shape must be ({SIZE}, {SIZE})")
    return arr


def is_consistent(values) -> bool:
    """
    Check that no unit holds the same given twice.

    Args:
        values: 9x9 values, 0 for empty cells.

    Returns:
        True if no constraints are violated.
    """
    values = _as_values(values)
    for unit in build_units():
        unit_values = values[unit.rows, unit.cols]
        non_zero = unit_values[unit_values != 0]
        if len(non_zero) != len(set(non_zero.tolist())):
            return False
    return True


def is_valid_solution(values) -> bool:
    """True if every row, column and box contains 1..9 exactly once."""
    values = _as_values(values)
    expected = set(range(1, SIZE + 1))
    return all(
        set(values[unit.rows, unit.cols].tolist()) == expected
        for unit in build_units()
    )


def respects_clues(puzzle, solution) -> bool:
    """
    Validate that a solution keeps every given of the puzzle.

    Args:
        puzzle: The original values, 0 for empty cells.
        solution: The proposed solution values.
    """
    puzzle = _as_values(puzzle)
    solution = _as_values(solution)
    givens = puzzle != 0
    return bool(np.array_equal(puzzle[givens], solution[givens]))


def count_solutions(values, limit: int = 2) -> int:
    """
    Count the number of solutions for a puzzle (up to limit).

    Uses backtracking over row/column/box bitmasks with the MRV heuristic
    and stops early once limit is reached.

    Args:
        values: The puzzle values, 0 for empty cells.
        limit: Maximum solutions to count before stopping.

    Returns:
        Number of solutions found (up to limit).
    """
    values = _as_values(values)
    if not is_consistent(values):
        return 0

    row_used = [0] * SIZE
    col_used = [0] * SIZE
    box_used = [0] * SIZE
    empty: List[tuple] = []
    for row in range(SIZE):
        for col in range(SIZE):
            value = int(values[row, col])
            if value == 0:
                empty.append((row, col))
                continue
            bit = mask_of(value)
            row_used[row] |= bit
            col_used[col] |= bit
            box_used[box_index(row, col)] |= bit

    count = [0]  # Use list to allow modification in nested function

    def backtrack() -> bool:
        """Returns True if limit reached."""
        if not empty:
            count[0] += 1
            return count[0] >= limit

        # Pick the empty cell with fewest candidates
        best_idx = 0
        best_free = 0
        best_count = SIZE + 1
        for idx, (row, col) in enumerate(empty):
            free = FULL_MASK & ~(row_used[row] | col_used[col] | box_used[box_index(row, col)])
            n = popcount(free)
            if n < best_count:
                best_idx, best_free, best_count = idx, free, n
                if n == 0:
                    return False
                if n == 1:
                    break

        row, col = empty.pop(best_idx)
        box = box_index(row, col)
        for value in values_of(best_free):
            bit = mask_of(value)
            row_used[row] |= bit
            col_used[col] |= bit
            box_used[box] |= bit
            done = backtrack()
            row_used[row] &= ~bit
            col_used[col] &= ~bit
            box_used[box] &= ~bit
            if done:
                empty.insert(best_idx, (row, col))
                return True
        empty.insert(best_idx, (row, col))
        return False

    backtrack()
    return count[0]


def has_unique_solution(values) -> bool:
    """Check if a puzzle has exactly one solution."""
    return count_solutions(values, limit=2) == 1
