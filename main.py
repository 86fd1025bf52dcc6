"""
gcd_engine – Main entry point.

Computes the greatest common divisor of integers given on the command line.

**Usage**:
    ```bash
    python main.py 12 18
    python main.py 48 18 30 --method stein --timed
    python main.py -- -12 18          # negative first operand
    ```
"""

import argparse
import sys

from src.config.settings import get_settings
from src.gcd.engine import GcdError, gcd_euclidean, gcd_stein, timed
from src.utils.log_setup import setup_logging_from_settings


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        description="Compute the GCD of two or more 32-bit signed integers.",
    )
    parser.add_argument(
        "numbers",
        nargs="+",
        type=int,
        help="Two or more integers",
    )
    parser.add_argument(
        "--method",
        choices=["euclidean", "stein"],
        default="euclidean",
        help="Algorithm to use (default: euclidean)",
    )
    parser.add_argument(
        "--timed",
        action="store_true",
        help="Also print the elapsed time of the computation",
    )
    parser.add_argument(
        "--legacy-unit-branch",
        action="store_true",
        default=None,
        help="Stein only: reproduce the historical 'operand is 1' branch "
        "(default: GCD_STEIN_LEGACY_UNIT_BRANCH)",
    )
    return parser


def main(argv=None) -> int:
    """
    Parse arguments, compute the GCD, and print it.

    Returns:
        Process exit code: 0 on success, 2 on invalid input.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging_from_settings(settings)

    if len(args.numbers) < 2:
        parser.error("at least two integers are required")

    a, b, *others = args.numbers
    if args.method == "stein":
        func = gcd_stein
        legacy = args.legacy_unit_branch
        if legacy is None:
            legacy = settings.stein_legacy_unit_branch
        kwargs = {"legacy_unit_branch": legacy}
    else:
        func = gcd_euclidean
        kwargs = {}

    try:
        if args.timed:
            value, elapsed = timed(func)(a, b, others, **kwargs)
            print(f"{value}\t({elapsed.total_seconds() * 1e6:.1f} µs)")
        else:
            print(func(a, b, others, **kwargs))
    except GcdError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
