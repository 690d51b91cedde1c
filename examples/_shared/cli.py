"""
Unified CLI argument parsing for examples.
"""
import argparse
import sys
from typing import Optional, List

def build_parser(description: str) -> argparse.ArgumentParser:
    """Build a standard ArgumentParser with common flags."""
    parser = argparse.ArgumentParser(description=description)

    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Random seed for data generation and noise (default: 0)"
    )
    parser.add_argument(
        "--quick",
        action="store_true",
        help="Run in quick mode (fewer contributions per shard)"
    )
    parser.add_argument(
        "--outdir",
        type=str,
        default="./_outputs",
        help="Directory to save output files (default: ./_outputs relative to execution)"
    )
    parser.add_argument(
        "--mechanism",
        type=str,
        choices=["laplace", "gaussian"],
        default="laplace",
        help="Noise mechanism used for the release (default: laplace)"
    )
    parser.add_argument(
        "--epsilon",
        type=float,
        default=1.0,
        help="Privacy budget epsilon (default: 1.0)"
    )
    parser.add_argument(
        "--delta",
        type=float,
        default=1e-6,
        help="Privacy budget delta, only used by the gaussian mechanism (default: 1e-6)"
    )

    return parser

def parse_args(description: str, argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse arguments for an example script."""
    parser = build_parser(description)
    if argv is None:
        argv = sys.argv[1:]
    return parser.parse_args(argv)

def delta_for(args: argparse.Namespace) -> Optional[float]:
    """Laplace releases are pure epsilon-DP and take no delta."""
    return args.delta if args.mechanism == "gaussian" else None
