"""Command-line interface for the subset propagation solver."""

import argparse
import sys
import json
from typing import List, Optional

from .benchmark import Benchmark
from .benchmark.visualizer import Visualizer
from .core.grid import CandidateGrid, PuzzleFormatError
from .generator import SeedGridGenerator
from .logging_utils import configure_logging
from .solvers import Difficulty, SubsetSolver

EXIT_OK = 0
EXIT_BAD_INPUT = 1
EXIT_UNSOLVED = 2


def _difficulty_arg(value: str) -> Difficulty:
    try:
        return Difficulty.parse(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="subset-sudoku",
        description="Sudoku solver using naked-subset propagation and bounded hypotheses",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Solve a puzzle file (9 lines, 'x' or '0' for unknown cells) at level 2
  subset-sudoku solve puzzle.txt --difficulty 2 --verbose

  # Solve an 81-character puzzle string
  subset-sudoku solve --puzzle "0030206009003050010018064..."

  # Print three random seed grids
  subset-sudoku generate --full --count 3 --seed 7

  # Run every solver level over generated puzzles
  subset-sudoku benchmark --puzzles 5 --output results/
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Solve a Sudoku puzzle")
    solve_parser.add_argument(
        "file", nargs="?", default=None,
        help="Puzzle file: 9 lines of 9 space separated cells"
    )
    solve_parser.add_argument(
        "--puzzle", "-p", type=str,
        help="Puzzle string (81 chars, 0 for empty cells)"
    )
    solve_parser.add_argument(
        "--difficulty", "-d", type=_difficulty_arg, default=Difficulty.MEDIUM,
        help="Solver level 0-3 or easy/medium/hard/expert (default: medium)"
    )
    solve_parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Log hypotheses and show detailed solving statistics"
    )

    # Generate command
    gen_parser = subparsers.add_parser("generate", help="Generate seed grids or puzzles")
    gen_parser.add_argument(
        "--count", "-n", type=int, default=1,
        help="Number of grids to generate (default: 1)"
    )
    gen_parser.add_argument(
        "--difficulty", "-d", type=_difficulty_arg, default=Difficulty.MEDIUM,
        help="Puzzle difficulty, sets the clue count (default: medium)"
    )
    gen_parser.add_argument(
        "--full", action="store_true",
        help="Print fully resolved seed grids instead of puzzles"
    )
    gen_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducibility"
    )
    gen_parser.add_argument(
        "--output", "-o", type=str, default=None,
        help="Output file for the grids (JSON format)"
    )

    # Benchmark command
    bench_parser = subparsers.add_parser("benchmark", help="Benchmark solver levels")
    bench_parser.add_argument(
        "--puzzles", "-n", type=int, default=10,
        help="Puzzles per difficulty (default: 10)"
    )
    bench_parser.add_argument(
        "--output", "-o", type=str, default="results",
        help="Output directory for results (default: results)"
    )
    bench_parser.add_argument(
        "--seed", "-s", type=int, default=42,
        help="Random seed for reproducibility (default: 42)"
    )
    bench_parser.add_argument(
        "--no-charts", action="store_true",
        help="Skip chart generation"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_BAD_INPUT

    if args.command == "solve" and (args.file is None) == (args.puzzle is None):
        parser.error("solve needs exactly one of FILE or --puzzle")

    configure_logging(getattr(args, "verbose", False))

    if args.command == "solve":
        return cmd_solve(args)
    if args.command == "generate":
        return cmd_generate(args)
    return cmd_benchmark(args)


def cmd_solve(args) -> int:
    """Handle the solve command."""
    try:
        if args.puzzle is not None:
            grid = CandidateGrid.from_string(args.puzzle)
        else:
            grid = CandidateGrid.from_file(args.file)
    except (PuzzleFormatError, OSError) as e:
        print(f"Error parsing puzzle: {e}")
        return EXIT_BAD_INPUT

    print("Input puzzle:")
    print(grid.to_text())
    print()

    solver = SubsetSolver(args.difficulty, verbose=args.verbose)
    result = solver.solve(grid)
    stats = result.stats

    if result.solved:
        print("Sudoku solved :")
        print(result.grid.to_text())
        print(f"Solved in {result.elapsed_micros} us")
    else:
        print(f"Solver level '{args.difficulty.value}' is not strong enough for this input "
              f"({result.outcome.value}).")
        print("Last computed state:")
        print(result.grid.to_text())
        print(f"Gave up after {result.elapsed_micros} us")

    if args.verbose:
        print(f"  Passes: {stats.iterations:,}")
        print(f"  Sweeps: {stats.passes:,}")
        print(f"  Hypotheses: {stats.hypotheses:,} (max depth {stats.max_depth})")
        print(f"  Backtracks: {stats.backtracks:,}")
        print(f"  Memory: {stats.memory_bytes / 1024:.2f} KB")

    return EXIT_OK if result.solved else EXIT_UNSOLVED


def cmd_generate(args) -> int:
    """Handle the generate command."""
    generator = SeedGridGenerator(seed=args.seed)

    grids = []
    for i in range(1, args.count + 1):
        if args.full:
            grid = generator.generate_seed_grid()
            label = f"Seed grid {i}"
        else:
            grid = generator.generate(args.difficulty)
            label = (f"{args.difficulty.value.capitalize()} puzzle {i} "
                     f"({grid.count_resolved()} clues)")

        grids.append({
            "difficulty": None if args.full else args.difficulty.value,
            "index": i,
            "grid": grid.to_string(),
            "clues": grid.count_resolved(),
        })

        print(f"\n--- {label} ---")
        print(grid.to_puzzle_text())

    if args.output:
        with open(args.output, "w") as f:
            json.dump(grids, f, indent=2)
        print(f"\nAll grids saved to {args.output}")

    return EXIT_OK


def cmd_benchmark(args) -> int:
    """Handle the benchmark command."""
    print("=" * 60)
    print("SUBSET SOLVER BENCHMARK")
    print("=" * 60)
    print(f"Puzzles per difficulty: {args.puzzles}")
    print(f"Output directory: {args.output}")
    print("=" * 60)

    benchmark = Benchmark(puzzles_per_difficulty=args.puzzles, seed=args.seed)
    results = benchmark.run()
    summary = benchmark.get_summary()

    print("\n" + "=" * 60)
    print("RESULTS SUMMARY")
    print("=" * 60)

    print("\nBy Solver Level:")
    print("-" * 50)
    for level, stats in summary["results_by_level"].items():
        print(f"\n{level}:")
        print(f"  Accuracy: {stats['accuracy']:.1f}% ({stats['total_solved']}/{stats['total_tested']})")
        print(f"  Avg Time: {stats['avg_time_seconds']:.4f}s")
        print(f"  Avg Hypotheses: {stats['avg_hypotheses']:.1f}")

    benchmark.save_results(args.output)

    if not args.no_charts:
        print("\nGenerating charts...")
        visualizer = Visualizer(results, args.output)
        charts = visualizer.generate_all()
        visualizer.generate_summary_table()
        print(f"Charts saved to {args.output}/")
        for chart in charts:
            print(f"  - {chart.split('/')[-1]}")

    print("\n" + "=" * 60)
    print("Benchmark complete!")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
