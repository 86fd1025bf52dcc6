#!/usr/bin/env python3
"""
Benchmark the Euclidean and Stein GCD algorithms and save results.

**Purpose**: This script demonstrates how to:
  1. Generate reproducible GCD inputs inside the 32-bit domain.
  2. Time both algorithms on every case.
  3. Summarize the timings per algorithm.
  4. Save per-case timings and the summary to the results directory.

**Usage**:
    From project root:
    ```bash
    python actions/benchmark_gcd_algorithms.py --cases 5000 --arity 3 --seed 7
    ```

**Outputs** (saved to GCD_BENCHMARK_RESULTS_DIR, default data/results/):
  - gcd_benchmark_cases.csv: One row per (case, method) with elapsed_ns.
  - gcd_benchmark_summary.csv: Per-method mean/median/trimmed-mean/max.
"""

import argparse
import sys
from pathlib import Path

# Ensure project root is on path for imports
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from src.analytics.benchmark import (
    benchmark_algorithms,
    find_disagreements,
    generate_gcd_inputs,
    summarize_benchmark,
)
from src.config.settings import get_settings
from src.utils.log_setup import setup_logging_from_settings


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Compare Euclidean and Stein GCD timings on random inputs.",
    )
    parser.add_argument("--cases", type=int, default=1000, help="Number of cases (default: 1000)")
    parser.add_argument("--arity", type=int, default=2, help="Operands per case (default: 2)")
    parser.add_argument("--low", type=int, default=-1_000_000, help="Smallest operand")
    parser.add_argument("--high", type=int, default=1_000_000, help="Largest operand")
    parser.add_argument("--repeats", type=int, default=3, help="Runs per case, fastest kept")
    parser.add_argument("--trim", type=float, default=0.1, help="Tail fraction cut for trimmed mean")
    parser.add_argument("--seed", type=int, default=None, help="Random seed (overrides GCD_BENCHMARK_SEED)")
    parser.add_argument("--output-dir", type=Path, default=None, help="Results directory")
    parser.add_argument("--no-save", action="store_true", help="Print the summary without writing CSVs")
    parser.add_argument(
        "--legacy-unit-branch",
        action="store_true",
        default=None,
        help="Run Stein with the historical 'operand is 1' branch",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """
    Main entrypoint for the GCD benchmark.

    Steps:
      1. Generate inputs.
      2. Run the benchmark.
      3. Summarize and report disagreements.
      4. Save results.
    """
    args = parse_args(argv)
    settings = get_settings()
    setup_logging_from_settings(settings)

    seed = args.seed if args.seed is not None else settings.benchmark.seed
    output_dir = args.output_dir if args.output_dir is not None else settings.benchmark.results_dir
    legacy = (
        args.legacy_unit_branch
        if args.legacy_unit_branch is not None
        else settings.stein_legacy_unit_branch
    )

    print("=" * 80)
    print("GCD Algorithm Benchmark")
    print("=" * 80)
    print()

    # ========================================================================
    # Step 1: Generate inputs
    # ========================================================================
    print("Step 1: Generating inputs...")
    try:
        inputs = generate_gcd_inputs(
            n_cases=args.cases,
            arity=args.arity,
            low=args.low,
            high=args.high,
            seed=seed,
        )
    except ValueError as e:
        print(f"  ✗ {e}")
        return 2
    print(f"  ✓ {inputs.shape[0]} cases x {inputs.shape[1]} operands in [{args.low}, {args.high}] (seed={seed})")
    print()

    # ========================================================================
    # Step 2: Run benchmark
    # ========================================================================
    print("Step 2: Timing both algorithms...")
    cases = benchmark_algorithms(
        inputs,
        repeats=args.repeats,
        legacy_unit_branch=legacy,
    )
    print(f"  ✓ Recorded {len(cases)} timings")
    print()

    # ========================================================================
    # Step 3: Summarize
    # ========================================================================
    print("Step 3: Summary (nanoseconds)")
    summary = summarize_benchmark(cases, trim=args.trim)
    print(summary.round(1).to_string())
    print()

    disagreements = find_disagreements(cases)
    if disagreements.empty:
        print("  ✓ Euclidean and Stein agree on every case")
    else:
        print(f"  ⚠ {len(disagreements)} cases disagree (legacy unit branch?):")
        print(disagreements.head(10).to_string())
    print()

    # ========================================================================
    # Step 4: Save results
    # ========================================================================
    if args.no_save:
        return 0

    print("Step 4: Saving results...")
    output_dir.mkdir(parents=True, exist_ok=True)
    cases_path = output_dir / "gcd_benchmark_cases.csv"
    summary_path = output_dir / "gcd_benchmark_summary.csv"
    cases.to_csv(cases_path, index=False)
    summary.to_csv(summary_path)
    print(f"  ✓ Saved {cases_path}")
    print(f"  ✓ Saved {summary_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
