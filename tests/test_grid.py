"""Unit tests for cells, candidate grids, units and validation."""

import pytest
import numpy as np
from subset_sudoku.core.cell import (
    FULL_MASK, POPCOUNT, candidates_equal, lowest_value, mask_of, popcount, values_of,
)
from subset_sudoku.core.grid import CandidateGrid, PuzzleFormatError
from subset_sudoku.core.units import build_units, box_unit, box_index
from subset_sudoku.core.validator import (
    count_solutions, has_unique_solution, is_consistent, is_valid_solution, respects_clues,
)


PUZZLE = "003020600900305001001806400008102900700000008006708200002609500800203009005010300"
SOLUTION = "483921657967345821251876493548132976729564138136798245372689514814253769695417382"

PUZZLE_TEXT = """\
x x 3 x 2 x 6 x x
9 x x 3 x 5 x x 1
x x 1 8 x 6 4 x x
x x 8 1 x 2 9 x x
7 x x x x x x x 8
x x 6 7 x 8 2 x x
x x 2 6 x 9 5 x x
8 x x 2 x 3 x x 9
x x 5 x 1 x 3 x x
"""


class TestCell:
    """Tests for candidate mask helpers."""

    def test_popcount(self):
        assert popcount(0) == 0
        assert popcount(FULL_MASK) == 9
        assert popcount(0b101) == 2

    def test_mask_of(self):
        assert mask_of(1) == 0b1
        assert mask_of(9) == 0b100000000
        with pytest.raises(ValueError):
            mask_of(0)
        with pytest.raises(ValueError):
            mask_of(10)

    def test_lowest_value(self):
        assert lowest_value(mask_of(4) | mask_of(7)) == 4
        assert lowest_value(FULL_MASK) == 1
        assert lowest_value(0) == 0

    def test_values_of(self):
        assert values_of(mask_of(2) | mask_of(5) | mask_of(9)) == [2, 5, 9]
        assert values_of(0) == []

    def test_candidates_equal(self):
        assert candidates_equal(0b110, 0b110)
        assert not candidates_equal(0b110, 0b011)


class TestCandidateGrid:
    """Tests for CandidateGrid."""

    def test_empty_grid(self):
        grid = CandidateGrid()
        assert np.all(grid.candidates == FULL_MASK)
        assert np.all(grid.counts == 9)
        assert not grid.is_solved()
        assert grid.count_resolved() == 0

    def test_from_string(self):
        grid = CandidateGrid.from_string(PUZZLE)
        assert grid.value(0, 2) == 3
        assert grid.count(0, 2) == 1
        assert grid.count(0, 0) == 9
        assert grid.value(0, 0) == 0
        assert grid.count_resolved() == 32

    def test_from_text_matches_compact_form(self):
        assert CandidateGrid.from_text(PUZZLE_TEXT) == CandidateGrid.from_string(PUZZLE)

    def test_from_text_accepts_zero_and_unspaced_lines(self):
        text = "\n".join(PUZZLE[i:i + 9] for i in range(0, 81, 9))
        assert CandidateGrid.from_text(text) == CandidateGrid.from_string(PUZZLE)

    def test_malformed_character(self):
        text = PUZZLE_TEXT.replace("7 x x x", "7 x ? x", 1)
        with pytest.raises(PuzzleFormatError) as excinfo:
            CandidateGrid.from_text(text)
        assert excinfo.value.row == 4
        assert excinfo.value.col == 2
        assert excinfo.value.char == "?"

    def test_wrong_line_count(self):
        with pytest.raises(PuzzleFormatError):
            CandidateGrid.from_text("\n".join(PUZZLE_TEXT.splitlines()[:8]))

    def test_wrong_field_count(self):
        lines = PUZZLE_TEXT.splitlines()
        lines[3] = lines[3] + " x"
        with pytest.raises(PuzzleFormatError):
            CandidateGrid.from_text("\n".join(lines))

    def test_wrong_string_length(self):
        with pytest.raises(PuzzleFormatError):
            CandidateGrid.from_string(PUZZLE[:-1])

    def test_remove_candidates(self):
        grid = CandidateGrid()
        assert grid.remove_candidates(0, 0, mask_of(3) | mask_of(4))
        assert grid.count(0, 0) == 7
        assert 3 not in values_of(grid.mask(0, 0))

        # Nothing left to remove
        assert not grid.remove_candidates(0, 0, mask_of(3))
        assert grid.count(0, 0) == 7

    def test_remove_candidates_on_many_cells(self):
        grid = CandidateGrid()
        rows = np.array([0, 1, 2])
        cols = np.array([5, 5, 5])
        assert grid.remove_candidates(rows, cols, mask_of(9))
        assert list(grid.counts[:3, 5]) == [8, 8, 8]
        assert grid.count(3, 5) == 9

    def test_remove_to_empty(self):
        grid = CandidateGrid()
        grid.remove_candidates(4, 4, FULL_MASK)
        assert grid.count(4, 4) == 0
        assert grid.has_contradiction()

    def test_count_matches_popcount(self):
        grid = CandidateGrid.from_string(PUZZLE)
        grid.remove_candidates(0, 0, 0b1010)
        grid.remove_candidates(8, 8, 0b111)
        assert np.array_equal(grid.counts, POPCOUNT[grid.candidates])

    def test_copy_and_restore(self):
        grid = CandidateGrid.from_string(PUZZLE)
        snapshot = grid.copy()

        grid.remove_candidates(0, 0, mask_of(1))
        assert grid != snapshot
        assert snapshot.count(0, 0) == 9

        grid.restore(snapshot)
        assert grid == snapshot
        assert grid.count(0, 0) == 9

    def test_to_text(self):
        grid = CandidateGrid.from_string(PUZZLE)
        first_line = grid.to_text().splitlines()[0]
        assert first_line == "x(9) x(9)    3 x(9)    2 x(9)    6 x(9) x(9) "

    def test_to_text_solved(self):
        lines = CandidateGrid.from_string(SOLUTION).to_text().splitlines()
        assert len(lines) == 9
        assert lines[0] == "   4    8    3    9    2    1    6    5    7 "

    def test_to_puzzle_text(self):
        grid = CandidateGrid.from_string(PUZZLE)
        assert grid.to_puzzle_text().splitlines() == PUZZLE_TEXT.splitlines()

    def test_to_string(self):
        assert CandidateGrid.from_string(PUZZLE).to_string() == PUZZLE

    def test_str_pretty_print(self):
        text = str(CandidateGrid.from_string(PUZZLE))
        assert text.splitlines()[1] == "| . . 3 | . 2 . | 6 . . |"

    def test_rejects_bad_shape(self):
        with pytest.raises(ValueError):
            CandidateGrid(np.zeros((8, 9), dtype=np.uint16))


class TestUnits:
    """Tests for unit construction."""

    def test_unit_count(self):
        units = build_units()
        assert len(units) == 27
        assert [u.kind for u in units[:3]] == ["row", "column", "box"]

    def test_every_cell_in_three_units(self):
        membership = {}
        for unit in build_units():
            assert len(set(unit.cells)) == 9
            for pos in unit:
                membership[pos] = membership.get(pos, 0) + 1
        assert len(membership) == 81
        assert set(membership.values()) == {3}

    def test_box_unit(self):
        unit = box_unit(4)
        assert unit.cells[0] == (3, 3)
        assert unit.cells[-1] == (5, 5)
        assert all(box_index(r, c) == 4 for r, c in unit)


class TestValidator:
    """Tests for validation utilities."""

    def test_valid_solution(self):
        values = CandidateGrid.from_string(SOLUTION).to_values()
        assert is_valid_solution(values)
        assert is_consistent(values)

    def test_invalid_solution(self):
        values = CandidateGrid.from_string(SOLUTION).to_values()
        values[0, 0], values[0, 1] = values[0, 1], values[0, 0]
        assert not is_valid_solution(values)

    def test_consistency_of_givens(self):
        values = CandidateGrid.from_string(PUZZLE).to_values()
        assert is_consistent(values)
        values[0, 0] = 3  # Duplicate in row
        assert not is_consistent(values)

    def test_respects_clues(self):
        puzzle = CandidateGrid.from_string(PUZZLE).to_values()
        solution = CandidateGrid.from_string(SOLUTION).to_values()
        assert respects_clues(puzzle, solution)
        puzzle[0, 0] = 1
        assert not respects_clues(puzzle, solution)

    def test_count_solutions(self):
        values = CandidateGrid.from_string(PUZZLE).to_values()
        assert count_solutions(values) == 1
        assert has_unique_solution(values)

    def test_count_solutions_ambiguous(self):
        # An empty grid has many solutions
        values = np.zeros((9, 9), dtype=np.int32)
        assert count_solutions(values, limit=3) == 3
        assert not has_unique_solution(values)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
