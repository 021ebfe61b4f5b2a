"""
Pair keys and team splits.

Every partner and opponent statistic is keyed by an unordered pair of player
ids. A group of four players can be split into two teams of two in exactly
three ways.
"""

from typing import List, Sequence, Tuple, TypeVar

from americano.utils.constants import PAIR_KEY_SEPARATOR

T = TypeVar("T")


def pair_key(a: str, b: str) -> str:
    """
    Canonical key for an unordered pair of player ids.

    pair_key(a, b) == pair_key(b, a). Passing a == b is not supported;
    a player is never paired with themself.
    """
    if a < b:
        return f"{a}{PAIR_KEY_SEPARATOR}{b}"
    return f"{b}{PAIR_KEY_SEPARATOR}{a}"


def cross_pairs(team_a: Sequence[T], team_b: Sequence[T]) -> List[Tuple[T, T]]:
    """Opponent pairings between two teams: A1xB1, A1xB2, A2xB1, A2xB2."""
    return [(x, y) for x in team_a for y in team_b]


def team_splits(group: Sequence[T]) -> List[Tuple[Tuple[T, T], Tuple[T, T]]]:
    """
    The three ways to split four items into two unordered pairs.

    For (p, q, r, s): pq|rs, pr|qs, ps|qr. The first item is always on
    team A, so no split is listed twice.
    """
    p, q, r, s = group
    return [
        ((p, q), (r, s)),
        ((p, r), (q, s)),
        ((p, s), (q, r)),
    ]
