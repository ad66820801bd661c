"""End-to-end tests for the subset propagation solver."""

import logging

import pytest
import numpy as np
from subset_sudoku.core.cell import POPCOUNT
from subset_sudoku.core.grid import CandidateGrid
from subset_sudoku.core.validator import is_valid_solution, respects_clues
from subset_sudoku.solvers import (
    Difficulty, DifficultySettings, SolveOutcome, SubsetSolver, solve,
)


# Solvable with single-candidate elimination alone
EASY_PUZZLE = "003020600900305001001806400008102900700000008006708200002609500800203009005010300"
EASY_SOLUTION = "483921657967345821251876493548132976729564138136798245372689514814253769695417382"

# EASY_SOLUTION with a 6/8 rectangle blanked: propagation stalls, one guess finishes it
RECTANGLE = (
    "403921057"
    "907345021"
    "251876493"
    "548132976"
    "729564138"
    "136798245"
    "372689514"
    "814253769"
    "695417382"
)

# Two 5s in the first row
INVALID_PUZZLE = "550070000600195000098000060800060003400803001700020006060000280000419005000080079"

# Too few constraints for subset propagation, and no cell is ever down to two candidates
STALLING_PUZZLE = "000000000000003085001020000000507000004000100090000000500009007070040000300000008"

MEDIUM_PUZZLE = "530070000600195000098000060800060003400803001700020006060000280000419005000080079"
MEDIUM_SOLUTION = "534678912672195348198342567859761423426853791713924856961537284287419635345286179"

# Propagation disproves the first guess, the other branch solves it
BACKTRACK_PUZZLE = "630400000041058000000002000080005000000100704000040009000004000004620000009000058"


class TestDifficulty:
    """Tests for the difficulty table."""

    def test_settings_table(self):
        assert Difficulty.EASY.settings == DifficultySettings(1, 4, 1)
        assert Difficulty.MEDIUM.settings == DifficultySettings(2, 3, 2)
        assert Difficulty.HARD.settings == DifficultySettings(3, 3, 3)
        assert Difficulty.EXPERT.settings == DifficultySettings(3, 3, 5)

    def test_levels_do_not_get_weaker(self):
        levels = list(Difficulty)
        for lower, higher in zip(levels, levels[1:]):
            assert lower.settings.max_subset_size <= higher.settings.max_subset_size
            assert lower.settings.max_stack_depth <= higher.settings.max_stack_depth

    def test_parse(self):
        assert Difficulty.parse(0) is Difficulty.EASY
        assert Difficulty.parse("3") is Difficulty.EXPERT
        assert Difficulty.parse("Hard") is Difficulty.HARD
        assert Difficulty.parse(Difficulty.MEDIUM) is Difficulty.MEDIUM

    def test_parse_rejects_unknown(self):
        with pytest.raises(ValueError):
            Difficulty.parse(4)
        with pytest.raises(ValueError):
            Difficulty.parse("impossible")

    def test_settings_validation(self):
        with pytest.raises(ValueError):
            DifficultySettings(0, 1, 1)
        with pytest.raises(ValueError):
            DifficultySettings(1, 0, 1)
        with pytest.raises(ValueError):
            DifficultySettings(1, 1, -1)


class TestSubsetSolver:
    """Tests for SubsetSolver and solve()."""

    @pytest.mark.parametrize("difficulty", list(Difficulty))
    def test_singles_puzzle_at_every_level(self, difficulty):
        result = SubsetSolver(difficulty).solve(CandidateGrid.from_string(EASY_PUZZLE))

        assert result.solved
        assert result.outcome is SolveOutcome.SOLVED
        assert result.grid.to_string() == EASY_SOLUTION

    def test_solve_function(self):
        grid = CandidateGrid.from_string(EASY_PUZZLE)
        original = grid.copy()

        result = solve(grid, Difficulty.EASY)

        assert result.solved
        assert result.elapsed_micros >= 0
        assert result.stats.time_seconds >= 0
        # The caller's grid is left alone
        assert grid == original
        assert result.grid is not grid

    def test_solve_accepts_level_number(self):
        result = solve(CandidateGrid.from_string(EASY_PUZZLE), 0)
        assert result.solved
        assert result.stats.extra["difficulty"] == "easy"

    def test_already_solved(self):
        result = solve(CandidateGrid.from_string(EASY_SOLUTION), Difficulty.EXPERT)

        assert result.solved
        assert result.stats.hypotheses == 0
        assert result.stats.iterations == 1

    def test_invalid_input_is_a_contradiction(self):
        for difficulty in Difficulty:
            result = solve(CandidateGrid.from_string(INVALID_PUZZLE), difficulty)

            assert not result.solved
            assert result.outcome is SolveOutcome.CONTRADICTION
            assert result.grid.has_contradiction()

    def test_zero_depth_is_exhausted(self):
        result = solve(CandidateGrid.from_string(RECTANGLE), DifficultySettings(3, 3, 0))

        assert not result.solved
        assert result.outcome is SolveOutcome.EXHAUSTED
        assert result.stats.hypotheses == 0

    def test_zero_depth_on_stalling_puzzle(self):
        result = solve(CandidateGrid.from_string(STALLING_PUZZLE), DifficultySettings(1, 1, 0))

        assert not result.solved
        assert result.outcome is SolveOutcome.EXHAUSTED

    def test_one_guess_finishes_rectangle(self):
        puzzle = CandidateGrid.from_string(RECTANGLE)
        result = solve(puzzle, Difficulty.EASY)

        assert result.solved
        assert result.stats.hypotheses == 1
        assert result.stats.backtracks == 0
        # Lowest candidate is tried first
        assert result.grid.value(0, 1) == 6
        values = result.grid.to_values()
        assert is_valid_solution(values)
        assert respects_clues(puzzle.to_values(), values)

    def test_custom_branch_policy(self):
        def last_bivalue_cell(grid):
            rows, cols = np.nonzero(grid.counts == 2)
            return (int(rows[-1]), int(cols[-1])) if rows.size else None

        result = solve(CandidateGrid.from_string(RECTANGLE), Difficulty.EASY,
                       branch_policy=last_bivalue_cell)

        assert result.solved
        assert result.grid.value(1, 6) == 6

    def test_empty_grid_stalls(self):
        result = solve(CandidateGrid(), Difficulty.EASY)

        assert not result.solved
        assert result.outcome is SolveOutcome.STALLED

    @pytest.mark.parametrize("difficulty", list(Difficulty))
    def test_stalling_puzzle_stalls_at_every_level(self, difficulty):
        puzzle = CandidateGrid.from_string(STALLING_PUZZLE)
        result = solve(puzzle, difficulty)

        assert not result.solved
        assert result.outcome is SolveOutcome.STALLED
        assert result.stats.hypotheses == 0
        assert not result.grid.has_contradiction()

    @pytest.mark.parametrize("difficulty", list(Difficulty))
    def test_medium_puzzle(self, difficulty):
        result = solve(CandidateGrid.from_string(MEDIUM_PUZZLE), difficulty)

        assert result.solved
        assert result.outcome is SolveOutcome.SOLVED
        assert result.grid.to_string() == MEDIUM_SOLUTION

    def test_wrong_guess_is_undone_by_propagation(self):
        puzzle = CandidateGrid.from_string(BACKTRACK_PUZZLE)
        result = solve(puzzle, Difficulty.EXPERT)

        assert result.solved
        assert result.stats.hypotheses >= 1
        assert result.stats.backtracks >= 1
        assert result.stats.max_depth <= Difficulty.EXPERT.settings.max_stack_depth
        values = result.grid.to_values()
        assert is_valid_solution(values)
        assert respects_clues(puzzle.to_values(), values)

    def test_final_grid_invariants(self):
        result = solve(CandidateGrid.from_string(STALLING_PUZZLE), Difficulty.EASY)
        grid = result.grid

        assert np.array_equal(grid.counts, POPCOUNT[grid.candidates])
        assert np.all(grid.candidates <= 0x1FF)

    def test_sessions_are_independent(self):
        first = SubsetSolver(Difficulty.EASY)
        second = SubsetSolver(Difficulty.EASY)

        a = first.solve(CandidateGrid.from_string(EASY_PUZZLE))
        b = second.solve(CandidateGrid.from_string(INVALID_PUZZLE))

        assert a.solved
        assert not b.solved
        assert a.grid.to_string() == EASY_SOLUTION

    def test_verbose_logs_hypotheses(self, caplog):
        caplog.set_level(logging.INFO, logger="subset_sudoku")
        solve(CandidateGrid.from_string(RECTANGLE), Difficulty.EASY, verbose=True)

        assert "Hypothesis : (0,1) takes value 6" in caplog.text

    def test_quiet_by_default(self, caplog):
        caplog.set_level(logging.INFO, logger="subset_sudoku")
        solve(CandidateGrid.from_string(RECTANGLE), Difficulty.EASY)

        assert "Hypothesis" not in caplog.text


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
