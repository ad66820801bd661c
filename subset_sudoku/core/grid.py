"""Candidate grid: the 9x9 puzzle state the solver works on."""

from __future__ import annotations
import os
from typing import List, Optional, Union

import numpy as np

from .cell import SIZE, BOX_SIZE, FULL_MASK, POPCOUNT, lowest_value, mask_of

Index = Union[int, np.ndarray]

BLANK_CHARS = ("x", "0", ".")


class PuzzleFormatError(ValueError):
    """Raised when puzzle text cannot be turned into a grid."""

    def __init__(self, message: str, row: Optional[int] = None,
                 col: Optional[int] = None, char: Optional[str] = None):
        super().__init__(message)
        self.row = row
        self.col = col
        self.char = char


class CandidateGrid:
    """
    A 9x9 Sudoku grid where every cell holds a set of candidate values.

    Candidates live in ``candidates`` (uint16 bitmasks, bit i => value i+1)
    and their cardinality in ``counts``. Both arrays are only changed
    through :meth:`remove_candidates` and :meth:`restore`, which keeps
    ``counts == popcount(candidates)`` at all times.
    """

    def __init__(self, candidates: Optional[np.ndarray] = None):
        """
        Initialize a grid.

        Args:
            candidates: Optional 9x9 array of candidate masks. If None, every
                cell starts with all 9 candidates open.
        """
        if candidates is None:
            self.candidates = np.full((SIZE, SIZE), FULL_MASK, dtype=np.uint16)
        else:
            candidates = np.asarray(candidates)
            if candidates.shape != (SIZE, SIZE):
                raise ValueError(f"Grid shape must be ({SIZE}, {SIZE})")
            if np.any((candidates < 0) | (candidates > FULL_MASK)):
                raise ValueError(f"Candidate masks must be within 0-{FULL_MASK}")
            self.candidates = candidates.astype(np.uint16)
        self.counts = POPCOUNT[self.candidates]

    def copy(self) -> CandidateGrid:
        """Create a deep copy of the grid."""
        new_grid = CandidateGrid.__new__(CandidateGrid)
        new_grid.candidates = self.candidates.copy()
        new_grid.counts = self.counts.copy()
        return new_grid

    def restore(self, snapshot: CandidateGrid) -> None:
        """Overwrite this grid in place with the state of ``snapshot``."""
        np.copyto(self.candidates, snapshot.candidates)
        np.copyto(self.counts, snapshot.counts)

    def mask(self, row: int, col: int) -> int:
        return int(self.candidates[row, col])

    def count(self, row: int, col: int) -> int:
        return int(self.counts[row, col])

    def value(self, row: int, col: int) -> int:
        """Resolved value at (row, col), 0 if the cell is still open."""
        if self.counts[row, col] != 1:
            return 0
        return lowest_value(self.candidates[row, col])

    def remove_candidates(self, rows: Index, cols: Index, mask: int) -> bool:
        """
        Clear the bits of ``mask`` from the cell(s) at (rows, cols).

        ``rows`` and ``cols`` may be scalars or matching index arrays.

        Returns:
            True if at least one candidate was actually removed.
        """
        keep = np.uint16(FULL_MASK & ~int(mask))
        before = self.candidates[rows, cols]
        after = before & keep
        if not np.any(after != before):
            return False
        self.candidates[rows, cols] = after
        self.counts[rows, cols] = POPCOUNT[after]
        return True

    def is_solved(self) -> bool:
        """True if every cell is down to exactly one candidate."""
        return bool(np.all(self.counts == 1))

    def has_contradiction(self) -> bool:
        """True if some cell has no candidate left."""
        return bool(np.any(self.counts == 0))

    def count_resolved(self) -> int:
        return int(np.sum(self.counts == 1))

    def to_values(self) -> np.ndarray:
        """Resolved values as a 9x9 int array, 0 for unresolved cells."""
        values = np.zeros((SIZE, SIZE), dtype=np.int32)
        for row in range(SIZE):
            for col in range(SIZE):
                values[row, col] = self.value(row, col)
        return values

    @classmethod
    def from_values(cls, values) -> CandidateGrid:
        """
        Create a grid from a 9x9 array of values.

        Args:
            values: 0 for an unknown cell, 1-9 for a given.
        """
        values = np.asarray(values)
        if values.shape != (SIZE, SIZE):
            raise ValueError(f"Grid shape must be ({SIZE}, {SIZE})")
        candidates = np.full((SIZE, SIZE), FULL_MASK, dtype=np.uint16)
        for row in range(SIZE):
            for col in range(SIZE):
                value = int(values[row, col])
                if value != 0:
                    candidates[row, col] = mask_of(value)
        return cls(candidates)

    @classmethod
    def from_text(cls, text: str) -> CandidateGrid:
        """
        Parse the 9-line puzzle format.

        Each line holds 9 characters separated by single spaces: '1'-'9'
        for a given, 'x' or '0' for an unknown cell.
        """
        lines = [line for line in text.splitlines() if line.strip()]
        if len(lines) != SIZE:
            raise PuzzleFormatError(f"Expected {SIZE} lines, got {len(lines)}")

        values = np.zeros((SIZE, SIZE), dtype=np.int32)
        for row, line in enumerate(lines):
            fields = line.split()
            if len(fields) == 1 and len(fields[0]) == SIZE:
                fields = list(fields[0])
            if len(fields) != SIZE:
                raise PuzzleFormatError(
                    f"Line {row + 1} must hold {SIZE} cells, got {len(fields)}", row=row
                )
            for col, char in enumerate(fields):
                values[row, col] = _parse_char(char, row, col)
        return cls.from_values(values)

    @classmethod
    def from_string(cls, s: str) -> CandidateGrid:
        """
        Create a grid from the compact 81-character form.

        0, x or . for unknown cells, 1-9 for givens.
        """
        s = "".join(s.split())
        if len(s) != SIZE * SIZE:
            raise PuzzleFormatError(f"String length must be {SIZE * SIZE}, got {len(s)}")
        values = np.zeros((SIZE, SIZE), dtype=np.int32)
        for idx, char in enumerate(s):
            row, col = divmod(idx, SIZE)
            values[row, col] = _parse_char(char, row, col)
        return cls.from_values(values)

    @classmethod
    def from_file(cls, path: Union[str, os.PathLike]) -> CandidateGrid:
        with open(path, "r") as f:
            return cls.from_text(f.read())

    def to_text(self) -> str:
        """Render in the solver output format: values, or x(n) for open cells."""
        lines: List[str] = []
        for row in range(SIZE):
            fields = []
            for col in range(SIZE):
                if self.counts[row, col] == 1:
                    fields.append(f"{self.value(row, col):4d} ")
                else:
                    fields.append(f"x({int(self.counts[row, col])}) ")
            lines.append("".join(fields))
        return "\n".join(lines)

    def to_puzzle_text(self) -> str:
        """Render in the 9-line input format, 'x' for unresolved cells."""
        values = self.to_values()
        return "\n".join(
            " ".join(str(v) if v else "x" for v in values[row].tolist())
            for row in range(SIZE)
        )

    def to_string(self) -> str:
        """Compact 81-character form, '0' for unresolved cells."""
        return "".join(str(v) for v in self.to_values().flatten())

    def __str__(self) -> str:
        """Pretty-print the resolved values."""
        lines = []
        horizontal_sep = '+' + (('-' * (BOX_SIZE * 2 + 1)) + '+') * BOX_SIZE

        for i in range(SIZE):
            if i % BOX_SIZE == 0:
                lines.append(horizontal_sep)

            row_str = '|'
            for j in range(SIZE):
                val = self.value(i, j)
                row_str += ' .' if val == 0 else f' {val}'
                if (j + 1) % BOX_SIZE == 0:
                    row_str += ' |'

            lines.append(row_str)

        lines.append(horizontal_sep)
        return '\n'.join(lines)

    def __repr__(self) -> str:
        return f"CandidateGrid(resolved={self.count_resolved()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CandidateGrid):
            return False
        return np.array_equal(self.candidates, other.candidates)

    __hash__ = None


def _parse_char(char: str, row: int, col: int) -> int:
    if char.lower() in BLANK_CHARS:
        return 0
    if len(char) == 1 and "1" <= char <= "9":
        return int(char)
    raise PuzzleFormatError(
        f"Unrecognized character at position ({row},{col}): {char!r}",
        row=row, col=col, char=char,
    )
