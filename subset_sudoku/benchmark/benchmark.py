"""Benchmarking framework comparing solver levels on generated puzzles."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional
import json
import logging
import os

from tqdm import tqdm

from ..core.grid import CandidateGrid
from ..core.validator import respects_clues
from ..generator import SeedGridGenerator
from ..solvers import Difficulty, SubsetSolver

logger = logging.getLogger(__name__)


@dataclass
class BenchmarkResult:
    """Results from a single benchmark run."""
    puzzle_id: int
    difficulty: str
    level: str
    solved: bool
    outcome: str
    time_seconds: float
    memory_bytes: int
    iterations: int
    passes: int
    hypotheses: int
    backtracks: int
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "puzzle_id": self.puzzle_id,
            "difficulty": self.difficulty,
            "level": self.level,
            "solved": self.solved,
            "outcome": self.outcome,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "memory_mb": self.memory_bytes / (1024 * 1024),
            "iterations": self.iterations,
            "passes": self.passes,
            "hypotheses": self.hypotheses,
            "backtracks": self.backtracks,
            **self.extra
        }


class Benchmark:
    """
    Runs every solver level over puzzles of every difficulty.

    Puzzle difficulty (clue count) and solver level are independent axes,
    so the results show how far each level reaches.
    """

    def __init__(
        self,
        puzzles_per_difficulty: int = 10,
        difficulties: Optional[List[Difficulty]] = None,
        levels: Optional[List[Difficulty]] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize the benchmark.

        Args:
            puzzles_per_difficulty: Number of puzzles to generate per difficulty.
            difficulties: Puzzle difficulties to test (default: all).
            levels: Solver levels to run (default: all).
            seed: Random seed for reproducibility.
        """
        self.puzzles_per_difficulty = puzzles_per_difficulty
        self.difficulties = difficulties or list(Difficulty)
        self.levels = levels or list(Difficulty)
        self.seed = seed

        self.solvers = {level.value: SubsetSolver(level) for level in self.levels}
        self.puzzles: Dict[str, List[CandidateGrid]] = {}
        self.results: List[BenchmarkResult] = []

    def generate_puzzles(self, show_progress: bool = True) -> None:
        """Generate all puzzles for benchmarking."""
        generator = SeedGridGenerator(seed=self.seed)

        logger.info("Generating %d puzzles per difficulty", self.puzzles_per_difficulty)
        for difficulty in tqdm(self.difficulties, desc="Difficulties", disable=not show_progress):
            self.puzzles[difficulty.value] = generator.generate_batch(
                self.puzzles_per_difficulty,
                difficulty
            )

    def run(self, show_progress: bool = True) -> List[BenchmarkResult]:
        """
        Run the full benchmark suite.

        Returns:
            List of BenchmarkResult objects.
        """
        if not self.puzzles:
            self.generate_puzzles(show_progress)

        self.results = []

        total_tests = sum(len(p) for p in self.puzzles.values()) * len(self.solvers)
        pbar = tqdm(total=total_tests, desc="Benchmarking", disable=not show_progress)

        for difficulty_name, puzzles in self.puzzles.items():
            for puzzle_id, puzzle in enumerate(puzzles):
                for level_name, solver in self.solvers.items():
                    self.results.append(
                        self._run_single(puzzle, puzzle_id, difficulty_name, level_name, solver)
                    )
                    pbar.update(1)

        pbar.close()
        return self.results

    def _run_single(
        self,
        puzzle: CandidateGrid,
        puzzle_id: int,
        difficulty: str,
        level_name: str,
        solver: SubsetSolver
    ) -> BenchmarkResult:
        """Run a single solver level on a single puzzle."""
        result = solver.solve(puzzle)
        stats = result.stats

        solved = result.solved and respects_clues(puzzle.to_values(), result.grid.to_values())
        if result.solved and not solved:
            logger.warning("Puzzle %s/%d: solution does not match the givens",
                           difficulty, puzzle_id)

        return BenchmarkResult(
            puzzle_id=puzzle_id,
            difficulty=difficulty,
            level=level_name,
            solved=solved,
            outcome=result.outcome.value,
            time_seconds=stats.time_seconds,
            memory_bytes=stats.memory_bytes,
            iterations=stats.iterations,
            passes=stats.passes,
            hypotheses=stats.hypotheses,
            backtracks=stats.backtracks,
            extra={"max_depth": stats.max_depth}
        )

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics from benchmark results."""
        summary = {
            "total_puzzles": len(self.results) // len(self.solvers) if self.solvers else 0,
            "levels_tested": list(self.solvers.keys()),
            "difficulties": [d.value for d in self.difficulties],
            "results_by_level": {},
            "results_by_difficulty": {}
        }

        # Group by solver level
        for level_name in self.solvers:
            level_results = [r for r in self.results if r.level == level_name]
            if level_results:
                solved = [r for r in level_results if r.solved]
                times = [r.time_seconds for r in level_results]
                hypotheses = [r.hypotheses for r in level_results]

                summary["results_by_level"][level_name] = {
                    "accuracy": len(solved) / len(level_results) * 100,
                    "avg_time_seconds": sum(times) / len(times),
                    "max_time_seconds": max(times),
                    "min_time_seconds": min(times),
                    "avg_hypotheses": sum(hypotheses) / len(hypotheses),
                    "total_solved": len(solved),
                    "total_tested": len(level_results)
                }

        # Group by puzzle difficulty
        for difficulty in self.difficulties:
            diff_results = [r for r in self.results if r.difficulty == difficulty.value]
            if diff_results:
                summary["results_by_difficulty"][difficulty.value] = {}

                for level_name in self.solvers:
                    level_diff_results = [r for r in diff_results if r.level == level_name]
                    if level_diff_results:
                        solved = [r for r in level_diff_results if r.solved]
                        times = [r.time_seconds for r in level_diff_results]

                        summary["results_by_difficulty"][difficulty.value][level_name] = {
                            "accuracy": len(solved) / len(level_diff_results) * 100,
                            "avg_time_seconds": sum(times) / len(times),
                            "solved": len(solved),
                            "tested": len(level_diff_results)
                        }

        return summary

    def save_results(self, output_dir: str) -> None:
        """Save benchmark results and generated puzzles to files."""
        os.makedirs(output_dir, exist_ok=True)

        results_file = os.path.join(output_dir, "benchmark_results.json")
        with open(results_file, "w") as f:
            json.dump([r.to_dict() for r in self.results], f, indent=2)

        summary_file = os.path.join(output_dir, "benchmark_summary.json")
        with open(summary_file, "w") as f:
            json.dump(self.get_summary(), f, indent=2)

        puzzles_dir = os.path.join(output_dir, "puzzles")
        for difficulty, puzzles in self.puzzles.items():
            diff_dir = os.path.join(puzzles_dir, difficulty)
            SeedGridGenerator.save_to_folder(puzzles, diff_dir, prefix=f"puzzle_{difficulty}")

        logger.info("Results and puzzles saved to %s", output_dir)
