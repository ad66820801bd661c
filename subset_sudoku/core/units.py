"""Rows, columns and boxes as coordinate views over a grid."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np

from .cell import SIZE, BOX_SIZE

Position = Tuple[int, int]


@dataclass(frozen=True)
class Unit:
    """
    One group of 9 cells that must hold each value exactly once.

    The unit stores coordinates only; they are resolved against whatever
    grid is passed in, so a unit stays valid across snapshot/restore.
    """
    kind: str
    index: int
    cells: Tuple[Position, ...]
    rows: np.ndarray = field(init=False, repr=False, compare=False)
    cols: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if len(self.cells) != SIZE:
            raise ValueError(f"A unit holds {SIZE} cells, got {len(self.cells)}")
        object.__setattr__(self, "rows", np.array([r for r, _ in self.cells], dtype=np.intp))
        object.__setattr__(self, "cols", np.array([c for _, c in self.cells], dtype=np.intp))

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self):
        return iter(self.cells)


def row_unit(idx: int) -> Unit:
    return Unit("row", idx, tuple((idx, col) for col in range(SIZE)))


def column_unit(idx: int) -> Unit:
    return Unit("column", idx, tuple((row, idx) for row in range(SIZE)))


def box_unit(idx: int) -> Unit:
    """Box ``idx`` counted left to right, top to bottom."""
    base_row = (idx // BOX_SIZE) * BOX_SIZE
    base_col = (idx % BOX_SIZE) * BOX_SIZE
    return Unit("box", idx, tuple(
        (base_row + i, base_col + j) for i in range(BOX_SIZE) for j in range(BOX_SIZE)
    ))


def box_index(row: int, col: int) -> int:
    """Get the box index (0 to 8) for a cell."""
    return (row // BOX_SIZE) * BOX_SIZE + (col // BOX_SIZE)


def build_units() -> List[Unit]:
    """All 27 units, interleaved as row i, column i, box i."""
    units = []
    for i in range(SIZE):
        units.append(row_unit(i))
        units.append(column_unit(i))
        units.append(box_unit(i))
    return units
