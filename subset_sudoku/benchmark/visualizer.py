"""Visualization utilities for benchmark results."""

from __future__ import annotations
import os
from typing import List

import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from .benchmark import BenchmarkResult
from ..solvers import Difficulty, SolveOutcome

LEVEL_ORDER = [d.value for d in Difficulty]


class Visualizer:
    """
    Chart generator for solver level benchmark results.

    Creates charts comparing levels across puzzle difficulties.
    """

    COLORS = {
        "easy": "#2ecc71",      # Green
        "medium": "#3498db",    # Blue
        "hard": "#9b59b6",      # Purple
        "expert": "#e74c3c",    # Red
    }

    OUTCOME_COLORS = {
        SolveOutcome.SOLVED.value: "#2ecc71",
        SolveOutcome.EXHAUSTED.value: "#f39c12",
        SolveOutcome.STALLED.value: "#95a5a6",
        SolveOutcome.CONTRADICTION.value: "#e74c3c",
    }

    def __init__(self, results: List[BenchmarkResult], output_dir: str = "results"):
        """
        Initialize the visualizer.

        Args:
            results: List of benchmark results.
            output_dir: Directory to save generated charts.
        """
        self.results = results
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        plt.style.use('seaborn-v0_8-whitegrid')
        sns.set_palette("husl")

    def _levels(self) -> List[str]:
        present = {r.level for r in self.results}
        return [name for name in LEVEL_ORDER if name in present]

    def _difficulties(self) -> List[str]:
        present = {r.difficulty for r in self.results}
        return [name for name in LEVEL_ORDER if name in present]

    def generate_all(self) -> List[str]:
        """
        Generate all charts.

        Returns:
            List of paths to generated chart files.
        """
        return [
            self.plot_accuracy_heatmap(),
            self.plot_time_by_difficulty(),
            self.plot_hypotheses_by_difficulty(),
            self.plot_outcomes(),
        ]

    def accuracy_matrix(self) -> np.ndarray:
        """Solve rate (%) with one row per level and one column per difficulty."""
        levels = self._levels()
        difficulties = self._difficulties()
        matrix = np.zeros((len(levels), len(difficulties)))
        for i, level in enumerate(levels):
            for j, diff in enumerate(difficulties):
                cell = [r for r in self.results if r.level == level and r.difficulty == diff]
                if cell:
                    matrix[i, j] = sum(1 for r in cell if r.solved) / len(cell) * 100
        return matrix

    def plot_accuracy_heatmap(self) -> str:
        """Heatmap of solve rate by solver level and puzzle difficulty."""
        fig, ax = plt.subplots(figsize=(8, 6))

        sns.heatmap(
            self.accuracy_matrix(),
            annot=True, fmt=".0f", cmap="YlGn", vmin=0, vmax=100,
            xticklabels=[d.capitalize() for d in self._difficulties()],
            yticklabels=[lv.capitalize() for lv in self._levels()],
            cbar_kws={"label": "Solved (%)"},
            ax=ax,
        )

        ax.set_xlabel('Puzzle Difficulty', fontsize=12)
        ax.set_ylabel('Solver Level', fontsize=12)
        ax.set_title('Solve Rate by Level and Difficulty', fontsize=14, fontweight='bold')

        plt.tight_layout()
        path = os.path.join(self.output_dir, "accuracy_heatmap.png")
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()

        return path

    def _grouped_bars(self, metric: str, ylabel: str, title: str, filename: str,
                      log_scale: bool = False) -> str:
        fig, ax = plt.subplots(figsize=(12, 6))

        levels = self._levels()
        difficulties = self._difficulties()

        x = np.arange(len(difficulties))
        width = 0.8 / max(len(levels), 1)

        for i, level in enumerate(levels):
            means = []
            for diff in difficulties:
                values = [getattr(r, metric) for r in self.results
                          if r.level == level and r.difficulty == diff]
                means.append(np.mean(values) if values else 0)

            offset = (i - len(levels) / 2 + 0.5) * width
            ax.bar(x + offset, means, width,
                   label=level.capitalize(),
                   color=self.COLORS.get(level, "#95a5a6"),
                   edgecolor='black', linewidth=0.5)

        ax.set_xlabel('Puzzle Difficulty', fontsize=12)
        ax.set_ylabel(ylabel, fontsize=12)
        ax.set_title(title, fontsize=14, fontweight='bold')
        ax.set_xticks(x)
        ax.set_xticklabels([d.capitalize() for d in difficulties])
        ax.legend(title='Solver Level')
        if log_scale:
            ax.set_yscale('symlog')
        else:
            ax.set_ylim(bottom=0)

        plt.tight_layout()
        path = os.path.join(self.output_dir, filename)
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()

        return path

    def plot_time_by_difficulty(self) -> str:
        """Grouped bar chart of average solve time."""
        return self._grouped_bars(
            "time_seconds", 'Average Time (seconds)',
            'Solve Time by Difficulty and Level', "time_by_difficulty.png",
        )

    def plot_hypotheses_by_difficulty(self) -> str:
        """Grouped bar chart of average hypotheses pushed."""
        # Counts vary by orders of magnitude between levels
        return self._grouped_bars(
            "hypotheses", 'Average Hypotheses',
            'Hypotheses by Difficulty and Level', "hypotheses_by_difficulty.png",
            log_scale=True,
        )

    def plot_outcomes(self) -> str:
        """Stacked bar chart of how runs ended, per level."""
        fig, ax = plt.subplots(figsize=(10, 6))

        levels = self._levels()
        bottom = np.zeros(len(levels))
        for outcome, color in self.OUTCOME_COLORS.items():
            counts = np.array([
                sum(1 for r in self.results if r.level == level and r.outcome == outcome)
                for level in levels
            ], dtype=float)
            ax.bar([lv.capitalize() for lv in levels], counts, bottom=bottom,
                   label=outcome, color=color, edgecolor='black', linewidth=0.5)
            bottom += counts

        ax.set_xlabel('Solver Level', fontsize=12)
        ax.set_ylabel('Runs', fontsize=12)
        ax.set_title('Outcomes by Solver Level', fontsize=14, fontweight='bold')
        ax.legend(title='Outcome', bbox_to_anchor=(1.05, 1), loc='upper left')

        plt.tight_layout()
        path = os.path.join(self.output_dir, "outcomes.png")
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()

        return path

    def generate_summary_table(self) -> str:
        """Generate a markdown summary table."""
        lines = [
            "# Benchmark Summary\n",
            "| Level | Accuracy | Avg Time | Avg Hypotheses | Avg Backtracks |",
            "|-------|----------|----------|----------------|----------------|"
        ]

        for level in self._levels():
            level_results = [r for r in self.results if r.level == level]

            solved = sum(1 for r in level_results if r.solved)
            accuracy = (solved / len(level_results)) * 100

            avg_time = np.mean([r.time_seconds for r in level_results])
            avg_hyp = np.mean([r.hypotheses for r in level_results])
            avg_back = np.mean([r.backtracks for r in level_results])

            lines.append(
                f"| {level.capitalize()} | {accuracy:.1f}% | {avg_time:.4f}s | {avg_hyp:.1f} | {avg_back:.1f} |"
            )

        content = "\n".join(lines)

        path = os.path.join(self.output_dir, "benchmark_summary.md")
        with open(path, "w") as f:
            f.write(content)

        return path
