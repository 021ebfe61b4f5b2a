"""
History aggregation.

Recomputes games played, partner counts and opponent counts from the full
saved-round history on every call. Nothing is cached between calls.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable

from americano.scheduling.models import Player, SavedRound
from americano.scheduling.pairs import cross_pairs, pair_key


@dataclass
class StatsSnapshot:
    """Counters derived from history for a single scheduling call."""
    games_played: Dict[str, int] = field(default_factory=dict)
    partner_count: Dict[str, int] = field(default_factory=dict)
    opponent_count: Dict[str, int] = field(default_factory=dict)

    def games(self, player_id: str) -> int:
        return self.games_played.get(player_id, 0)

    def partners(self, a: str, b: str) -> int:
        """Times a and b have been on the same team."""
        return self.partner_count.get(pair_key(a, b), 0)

    def opponents(self, a: str, b: str) -> int:
        """Times a and b have been on opposite teams."""
        return self.opponent_count.get(pair_key(a, b), 0)


def aggregate_stats(
    roster: Iterable[Player],
    history: Iterable[SavedRound]
) -> StatsSnapshot:
    """
    Count games, partnerships and oppositions over the whole history.

    Every roster player starts at zero games. Players referenced in history
    but missing from the roster are not given a games-played entry.

    Args:
        roster: Current players
        history: Saved rounds (any order; only occurrences are counted)

    Returns:
        StatsSnapshot with fresh dictionaries
    """
    stats = StatsSnapshot(games_played={p.id: 0 for p in roster})

    for saved in history:
        for match in saved.matches:
            for pid in match.player_ids:
                if pid in stats.games_played:
                    stats.games_played[pid] += 1

            for team in (match.team_a, match.team_b):
                key = pair_key(team[0].id, team[1].id)
                stats.partner_count[key] = stats.partner_count.get(key, 0) + 1

            for x, y in cross_pairs(match.team_a, match.team_b):
                key = pair_key(x.id, y.id)
                stats.opponent_count[key] = stats.opponent_count.get(key, 0) + 1

    return stats
