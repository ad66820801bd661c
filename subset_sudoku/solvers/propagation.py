"""Naked-subset elimination over the 27 units of a grid.

If N cells of a unit hold exactly the same N candidates, those candidates
can be removed from every other cell of the unit. With N=1 this is the
basic exclusion rule for a cell that already holds a unique value.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

import numpy as np

from ..core.cell import SIZE, candidates_equal
from ..core.units import Unit

if TYPE_CHECKING:
    from .session import SolverSession


def analyse_unit(session: SolverSession, unit: Unit, k: int) -> bool:
    """
    Apply k-subset elimination to one unit.

    Each cell holding exactly ``k`` candidates is tried in turn as anchor.
    The unit is scanned left to right from the anchor for cells with the
    same mask, stopping as soon as ``k`` of them are found; a full group
    has its mask pruned from all the other cells of the unit.

    Args:
        session: The solving session owning the grid.
        unit: The row, column or box to examine.
        k: Subset size, 1 <= k <= 9.

    Returns:
        True if any candidate was removed.
    """
    if not 1 <= k <= SIZE:
        raise ValueError(f"Subset size must be 1-{SIZE}, got {k}")

    grid = session.grid
    rows, cols = unit.rows, unit.cols
    efficient = False
    start = 0

    while start < len(unit):
        counts = grid.counts[rows, cols]
        masks = grid.candidates[rows, cols]

        anchors = np.flatnonzero(counts[start:] == k)
        if anchors.size == 0:
            break
        anchor = start + int(anchors[0])
        start = anchor + 1
        shared = int(masks[anchor])

        matching = [anchor]
        for i in range(anchor + 1, len(unit)):
            if len(matching) == k:
                break
            if counts[i] == k and candidates_equal(masks[i], shared):
                matching.append(i)
        if len(matching) < k:
            continue

        others = np.ones(len(unit), dtype=bool)
        others[matching] = False
        effect = session.remove_candidates(rows[others], cols[others], shared)
        efficient = efficient or effect

    return efficient


def sweep(session: SolverSession, k: int) -> bool:
    """Run :func:`analyse_unit` once over every unit; True if anything moved."""
    session.stats.passes += 1
    efficient = False
    for unit in session.units:
        effect = analyse_unit(session, unit, k)
        efficient = efficient or effect
        if session.contradiction:
            break
    return efficient


def propagate(session: SolverSession) -> bool:
    """
    Drive the grid to a fixed point under the session's settings.

    For each iteration, subset sizes 1..max_subset_size are swept in turn,
    each until a whole sweep removes nothing. Iterations repeat (up to
    max_iterations) because a larger subset can make a smaller one
    productive again. Stops early on contradiction.

    Returns:
        True if any candidate was removed.
    """
    settings = session.settings
    changed = False

    for _ in range(settings.max_iterations):
        iteration_effect = False
        for k in range(1, settings.max_subset_size + 1):
            while sweep(session, k):
                iteration_effect = True
                if session.contradiction:
                    break
            if session.contradiction:
                break

        changed = changed or iteration_effect
        if not iteration_effect or session.contradiction:
            break

    return changed
