"""
Fair round generation.

Picks who sits out, then fills courts one at a time. For each court every
group of four remaining players and each of its three team splits is scored:

    cost = partner * (partner repeats)
         + opponent * (opponent repeats)
         - playtime * (games already played)

and the cheapest candidate wins. With the default weights (14, 3, 0.25) a
single partner repeat costs more than any realistic opponent or playtime
difference, so new partnerships come first.
"""

import random
from dataclasses import dataclass, field
from itertools import combinations
from typing import List, Optional, Sequence, Tuple

from americano.scheduling.models import Match, Player, SavedRound, Team
from americano.scheduling.pairs import cross_pairs, team_splits
from americano.scheduling.stats import StatsSnapshot, aggregate_stats
from americano.utils import setup_logger
from americano.utils.constants import (
    OPPONENT_WEIGHT,
    PARTNER_WEIGHT,
    PLAYERS_PER_COURT,
    PLAYTIME_WEIGHT,
)

logger = setup_logger(__name__)


@dataclass(frozen=True)
class FairnessWeights:
    """Weights of the split cost."""
    partner: float = PARTNER_WEIGHT
    opponent: float = OPPONENT_WEIGHT
    playtime: float = PLAYTIME_WEIGHT


DEFAULT_WEIGHTS = FairnessWeights()


@dataclass
class RoundPlan:
    """Matches for one round plus everyone who sits out."""
    matches: List[Match] = field(default_factory=list)
    bench: List[Player] = field(default_factory=list)

    @property
    def used_courts(self) -> int:
        return len(self.matches)

    @property
    def active_players(self) -> List[Player]:
        return [p for m in self.matches for p in m.players]


def usable_courts(roster_size: int, courts_wanted: int) -> int:
    """Courts that can actually be filled with four players each."""
    return max(0, min(courts_wanted, roster_size // PLAYERS_PER_COURT))


def split_cost(
    stats: StatsSnapshot,
    team_a: Team,
    team_b: Team,
    weights: FairnessWeights = DEFAULT_WEIGHTS
) -> float:
    """Cost of playing team_a against team_b given prior history."""
    partner_penalty = weights.partner * (
        stats.partners(team_a[0].id, team_a[1].id)
        + stats.partners(team_b[0].id, team_b[1].id)
    )
    opponent_penalty = weights.opponent * sum(
        stats.opponents(x.id, y.id) for x, y in cross_pairs(team_a, team_b)
    )
    playtime_bonus = -weights.playtime * sum(
        stats.games(p.id) for p in (*team_a, *team_b)
    )
    return partner_penalty + opponent_penalty + playtime_bonus


def best_split(
    stats: StatsSnapshot,
    group: Sequence[Player],
    weights: FairnessWeights = DEFAULT_WEIGHTS
) -> Tuple[float, Team, Team]:
    """Cheapest of the three splits of four players; ties keep the first."""
    best = None
    for team_a, team_b in team_splits(group):
        cost = split_cost(stats, team_a, team_b, weights)
        if best is None or cost < best[0]:
            best = (cost, team_a, team_b)
    return best


def rank_for_play(
    roster: Sequence[Player],
    stats: StatsSnapshot,
    rng: random.Random
) -> List[Player]:
    """
    Order players so those with fewer games come first.

    Players tied on games played are ordered by a fresh shuffle, so the same
    group is not always benched when everyone is level.
    """
    ranked = list(roster)
    rng.shuffle(ranked)
    ranked.sort(key=lambda p: stats.games(p.id))
    return ranked


def generate_fair_round(
    roster: Sequence[Player],
    courts_wanted: int,
    history: Sequence[SavedRound],
    rng: Optional[random.Random] = None,
    weights: FairnessWeights = DEFAULT_WEIGHTS
) -> RoundPlan:
    """
    Generate the next round.

    Args:
        roster: All players in the tournament
        courts_wanted: Courts requested (clamped to what the roster can fill)
        history: Saved rounds so far
        rng: Random source for tie-breaking; a new unseeded one if None
        weights: Cost weights

    Returns:
        RoundPlan with matches on courts 1..k and the bench. Every roster
        player is either in exactly one match or on the bench.
    """
    rng = rng or random.Random()
    courts = usable_courts(len(roster), courts_wanted)
    if courts == 0:
        logger.debug("No court can be filled with %d players", len(roster))
        return RoundPlan(matches=[], bench=list(roster))

    stats = aggregate_stats(roster, history)
    ranked = rank_for_play(roster, stats, rng)

    slots = courts * PLAYERS_PER_COURT
    remaining = ranked[:slots]
    bench = ranked[slots:]

    matches: List[Match] = []
    for court in range(1, courts + 1):
        if len(remaining) < PLAYERS_PER_COURT:
            break

        best = None
        for group in combinations(remaining, PLAYERS_PER_COURT):
            cost, team_a, team_b = best_split(stats, group, weights)
            if best is None or cost < best[0]:
                best = (cost, team_a, team_b)

        cost, team_a, team_b = best
        matches.append(Match(court=court, team_a=team_a, team_b=team_b))
        chosen = {p.id for p in (*team_a, *team_b)}
        remaining = [p for p in remaining if p.id not in chosen]
        logger.debug("Court %d filled at cost %.2f", court, cost)

    # Active players left without a court sit out as well
    bench.extend(remaining)

    return RoundPlan(matches=matches, bench=bench)
