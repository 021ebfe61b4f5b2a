#!/usr/bin/env python3
"""
Estimate how many rounds full partner coverage takes in practice.

Runs the fair-round generator repeatedly until every pair of players has
partnered once and compares the result with the recommended lower bound.

Usage:
    python scripts/estimate_rounds.py --players 8 --courts 2 --trials 200

Examples:
    # Sweep several roster sizes on two courts
    python scripts/estimate_rounds.py --players 8 9 10 11 12 --courts 2 --seed 1
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from americano.tournament.display import format_estimate
from americano.tournament.runner import estimate_rounds_to_coverage


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Estimate rounds needed for full partner coverage.'
    )
    parser.add_argument(
        '--players', '-p',
        type=int, nargs='+', required=True,
        help='Roster sizes to simulate'
    )
    parser.add_argument(
        '--courts', '-c',
        type=int, default=1,
        help='Courts available (default: 1)'
    )
    parser.add_argument(
        '--trials', '-t',
        type=int, default=100,
        help='Simulated tournaments per roster size (default: 100)'
    )
    parser.add_argument(
        '--max-rounds',
        type=int, default=None,
        help='Give up after this many rounds (default: 4x recommendation)'
    )
    parser.add_argument(
        '--seed',
        type=int, default=None,
        help='Base random seed'
    )
    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Hide progress bars'
    )
    return parser.parse_args()


def main():
    args = parse_args()

    for n in args.players:
        estimate = estimate_rounds_to_coverage(
            n_players=n,
            courts=args.courts,
            trials=args.trials,
            seed=args.seed,
            max_rounds=args.max_rounds,
            progress=not args.quiet,
        )
        if estimate.recommended == 0:
            print(f"Players: {n}: not enough players for a court")
            print()
            continue
        for line in format_estimate(estimate):
            print(line)
        print()


if __name__ == '__main__':
    main()
