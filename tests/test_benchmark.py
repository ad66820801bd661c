"""Tests for the benchmark harness and charts."""

import json
import os

import pytest
from subset_sudoku.benchmark import Benchmark, Visualizer
from subset_sudoku.solvers import Difficulty


@pytest.fixture(scope="module")
def benchmark():
    bench = Benchmark(
        puzzles_per_difficulty=2,
        difficulties=[Difficulty.EASY],
        levels=[Difficulty.EASY, Difficulty.MEDIUM],
        seed=11,
    )
    bench.run(show_progress=False)
    return bench


class TestBenchmark:
    """Tests for Benchmark."""

    def test_result_count(self, benchmark):
        assert len(benchmark.results) == 4
        assert {r.level for r in benchmark.results} == {"easy", "medium"}
        assert all(r.difficulty == "easy" for r in benchmark.results)

    def test_results_are_complete(self, benchmark):
        for result in benchmark.results:
            assert result.time_seconds >= 0
            assert result.iterations >= 1
            assert result.outcome in {"solved", "exhausted", "stalled", "contradiction"}
            assert result.solved == (result.outcome == "solved")

    def test_summary(self, benchmark):
        summary = benchmark.get_summary()

        assert summary["total_puzzles"] == 2
        assert summary["levels_tested"] == ["easy", "medium"]
        easy = summary["results_by_level"]["easy"]
        assert easy["total_tested"] == 2
        assert 0 <= easy["accuracy"] <= 100
        assert set(summary["results_by_difficulty"]["easy"]) == {"easy", "medium"}

    def test_save_results(self, benchmark, tmp_path):
        benchmark.save_results(str(tmp_path))

        with open(tmp_path / "benchmark_results.json") as f:
            assert len(json.load(f)) == 4
        assert (tmp_path / "benchmark_summary.json").exists()
        assert (tmp_path / "puzzles" / "easy" / "puzzle_easy_1.txt").exists()


class TestVisualizer:
    """Tests for chart generation."""

    def test_accuracy_matrix(self, benchmark, tmp_path):
        matrix = Visualizer(benchmark.results, str(tmp_path)).accuracy_matrix()
        assert matrix.shape == (2, 1)
        assert ((matrix >= 0) & (matrix <= 100)).all()

    def test_generate_all(self, benchmark, tmp_path):
        visualizer = Visualizer(benchmark.results, str(tmp_path))
        charts = visualizer.generate_all()

        assert len(charts) == 4
        for chart in charts:
            assert os.path.exists(chart)

    def test_summary_table(self, benchmark, tmp_path):
        path = Visualizer(benchmark.results, str(tmp_path)).generate_summary_table()
        with open(path) as f:
            content = f.read()
        assert "| Easy |" in content
        assert "| Medium |" in content


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
