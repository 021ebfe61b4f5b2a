"""
Fair-round scheduling core.

Provides:
- aggregate_stats: Games, partner and opponent counters from history
- partner_coverage: Share of partnerships seen at least once
- recommend_rounds: Lower bound on rounds for full partner coverage
- generate_fair_round: Bench selection and court assignment for one round
"""

from americano.scheduling.models import Player, Match, Score, SavedRound
from americano.scheduling.pairs import pair_key
from americano.scheduling.stats import StatsSnapshot, aggregate_stats
from americano.scheduling.coverage import CoverageReport, partner_coverage, recommend_rounds
from americano.scheduling.generator import (
    FairnessWeights, DEFAULT_WEIGHTS, RoundPlan, generate_fair_round
)

__all__ = [
    'Player',
    'Match',
    'Score',
    'SavedRound',
    'pair_key',
    'StatsSnapshot',
    'aggregate_stats',
    'CoverageReport',
    'partner_coverage',
    'recommend_rounds',
    'FairnessWeights',
    'DEFAULT_WEIGHTS',
    'RoundPlan',
    'generate_fair_round',
]
