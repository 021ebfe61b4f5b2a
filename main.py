"""
Main script to simulate an Americano tournament.
"""
import argparse
import sys

from americano.scheduling.coverage import recommend_rounds
from americano.scheduling.stats import aggregate_stats
from americano.tournament.display import format_partner_matrix
from americano.tournament.runner import SimulationConfig, TournamentSimulator
from americano.tournament.session import TournamentConfig, TournamentError
from americano.utils.constants import (
    DEFAULT_COURTS, DEFAULT_PLAYER_COUNT, DEFAULT_POINTS_PER_MATCH, DEFAULT_TOURNAMENT_NAME
)


def build_player_names(names, count):
    """
    Use the given names, or 'Player 1'..'Player N' when none are given.
    """
    if names:
        return list(names)
    return [f"Player {i}" for i in range(1, count + 1)]


def main():
    """Main function to parse arguments and run the simulation."""
    parser = argparse.ArgumentParser(
        description='Simulate an Americano doubles tournament with random scores.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --players 8 --courts 2
  python main.py --names Anna Ben Cara Dan Eva Finn Gina Hugo Ida --courts 2 --seed 7
  python main.py --players 12 --courts 3 --rounds 8 --matrix
  python main.py --players 10 --courts 2 --recommend
'''
    )
    parser.add_argument('--name', type=str, default=DEFAULT_TOURNAMENT_NAME,
                        help='Tournament name')
    parser.add_argument('--players', type=int, default=DEFAULT_PLAYER_COUNT,
                        help='Number of generated players (ignored with --names)')
    parser.add_argument('--names', type=str, nargs='+',
                        help='Player names')
    parser.add_argument('--courts', type=int, default=DEFAULT_COURTS,
                        help='Number of courts')
    parser.add_argument('--rounds', type=int, default=None,
                        help='Rounds to play (default: recommended for partner coverage)')
    parser.add_argument('--points', type=int, default=DEFAULT_POINTS_PER_MATCH,
                        help='Points played per match (default: %(default)s)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for bench tie-breaks and scores')
    parser.add_argument('--matrix', action='store_true',
                        help='Print the partner matrix at the end')
    parser.add_argument('--recommend', action='store_true',
                        help='Only print the recommended number of rounds and exit')
    parser.add_argument('--quiet', action='store_true',
                        help='Run in quiet mode (no per-round output)')

    args = parser.parse_args()

    names = build_player_names(args.names, args.players)

    if args.recommend:
        print(f"Recommended rounds: {recommend_rounds(len(names), args.courts)}")
        return

    config = TournamentConfig(
        name=args.name,
        player_names=names,
        courts=args.courts,
        target_rounds=args.rounds,
    )
    sim_config = SimulationConfig(
        points_per_match=args.points,
        seed=args.seed,
        verbose=not args.quiet,
    )

    try:
        simulator = TournamentSimulator(config, sim_config)
    except TournamentError as e:
        print(f"Error: {e}")
        sys.exit(1)

    tournament = simulator.run()

    if args.quiet:
        coverage = tournament.coverage
        print(f"{tournament.name}: {len(tournament.saved_rounds)} rounds, "
              f"partner coverage {coverage.percent}%")

    if args.matrix:
        stats = aggregate_stats(tournament.players, tournament.saved_rounds)
        print(format_partner_matrix(tournament.players, stats))


if __name__ == "__main__":
    main()
