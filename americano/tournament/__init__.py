"""
Tournament module for running Americano sessions.

Provides:
- Tournament: Session holding roster, current round and history
- Standings helpers: total and current-round rankings, bench counts
- TournamentSimulator: Plays tournaments with random scores
- Display helpers for terminal output
"""

from americano.tournament.session import Tournament, TournamentConfig, TournamentError, ScoreEntry
from americano.tournament.standings import (
    Standing, PauseCount, total_ranking, current_round_ranking, pause_counts, most_benched
)
from americano.tournament.runner import (
    TournamentSimulator, SimulationConfig, CoverageEstimate, estimate_rounds_to_coverage
)
from americano.tournament.display import format_round, format_standings, format_coverage

__all__ = [
    'Tournament',
    'TournamentConfig',
    'TournamentError',
    'ScoreEntry',
    'Standing',
    'PauseCount',
    'total_ranking',
    'current_round_ranking',
    'pause_counts',
    'most_benched',
    'TournamentSimulator',
    'SimulationConfig',
    'CoverageEstimate',
    'estimate_rounds_to_coverage',
    'format_round',
    'format_standings',
    'format_coverage',
]
