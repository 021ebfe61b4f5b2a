"""
Partner coverage and recommended round count.

Coverage counts which of the N*(N-1)/2 possible partnerships have happened at
least once. The recommendation is a lower bound on rounds needed to see
every partnership, assuming no round ever repeats a partner.
"""

import math
from dataclasses import dataclass
from typing import Iterable, Sequence, Set

from americano.scheduling.models import Player, SavedRound
from americano.scheduling.pairs import pair_key
from americano.utils.constants import PLAYERS_PER_COURT


@dataclass(frozen=True)
class CoverageReport:
    """Progress towards every pair partnering at least once."""
    complete: bool
    percent: int
    missing_pairs: int
    total_pairs: int
    covered_pairs: int = 0


def total_partnerships(n_players: int) -> int:
    """Number of unordered player pairs."""
    return n_players * (n_players - 1) // 2


def seen_partnerships(history: Iterable[SavedRound]) -> Set[str]:
    """Pair keys of every team that appears in history."""
    seen = set()
    for saved in history:
        for match in saved.matches:
            seen.add(pair_key(match.team_a[0].id, match.team_a[1].id))
            seen.add(pair_key(match.team_b[0].id, match.team_b[1].id))
    return seen


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def partner_coverage(
    roster: Sequence[Player],
    history: Iterable[SavedRound]
) -> CoverageReport:
    """
    Measure partner coverage.

    A partnership repeated several times still counts once. Rosters of one
    player or none are reported as complete.
    """
    n = len(roster)
    if n <= 1:
        return CoverageReport(complete=True, percent=100, missing_pairs=0, total_pairs=0)

    total = total_partnerships(n)
    done = len(seen_partnerships(history))
    percent = max(0, min(100, _round_half_up(done / total * 100)))
    return CoverageReport(
        complete=done >= total,
        percent=percent,
        missing_pairs=max(0, total - done),
        total_pairs=total,
        covered_pairs=done,
    )


def recommend_rounds(roster_size: int, courts: int) -> int:
    """
    Lower-bound estimate of rounds needed for full partner coverage.

    Each court produces two partnerships per round, so a round covers at
    most 2*courts of the N*(N-1)/2 pairs.

    Returns:
        0 when fewer than four players are available, otherwise at least 1
    """
    if roster_size < PLAYERS_PER_COURT:
        return 0
    usable = max(1, min(courts, roster_size // PLAYERS_PER_COURT))
    slots = PLAYERS_PER_COURT * usable
    return max(1, math.ceil(roster_size * (roster_size - 1) / slots))
