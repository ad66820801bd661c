"""Candidate-set helpers for a single Sudoku cell.

A cell's candidates are held as a 9-bit mask: bit ``i`` set means value
``i + 1`` is still possible. The number of set bits is the cell's count.
"""

from __future__ import annotations
from typing import List

import numpy as np

SIZE = 9
BOX_SIZE = 3
FULL_MASK = (1 << SIZE) - 1

# Set-bit count for every possible candidate mask
POPCOUNT = np.array([bin(mask).count("1") for mask in range(FULL_MASK + 1)], dtype=np.int8)


def popcount(mask: int) -> int:
    """Number of candidates left in ``mask``."""
    return int(POPCOUNT[int(mask) & FULL_MASK])


def mask_of(value: int) -> int:
    """Bitmask holding the single candidate ``value`` (1-9)."""
    if value < 1 or value > SIZE:
        raise ValueError(f"Value must be 1-{SIZE}, got {value}")
    return 1 << (value - 1)


def lowest_bit(mask: int) -> int:
    mask = int(mask)
    return mask & -mask


def lowest_value(mask: int) -> int:
    """Smallest candidate in ``mask``; 0 for an empty mask."""
    return lowest_bit(mask).bit_length()


def values_of(mask: int) -> List[int]:
    """Candidates in ``mask`` in increasing order."""
    mask = int(mask)
    return [value for value in range(1, SIZE + 1) if mask & (1 << (value - 1))]


def candidates_equal(a: int, b: int) -> bool:
    """True if both masks hold exactly the same candidates."""
    return int(a) == int(b)

