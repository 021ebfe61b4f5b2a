"""
Standings and bench statistics.

In Americano every player earns the points their team scored in each match,
so a player's total is the sum of their own side's scores.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from americano.scheduling.models import Match, Player, SavedRound


@dataclass
class Standing:
    """Points for one player."""
    player_id: str
    name: str
    points: int = 0

    def to_dict(self) -> Dict:
        return {"player_id": self.player_id, "name": self.name, "points": self.points}


@dataclass
class PauseCount:
    """Rounds a player sat out."""
    player_id: str
    name: str
    rests: int = 0


def _sort_standings(points: Dict[str, int], players: Sequence[Player]) -> List[Standing]:
    rows = [Standing(p.id, p.name, points.get(p.id, 0)) for p in players]
    rows.sort(key=lambda s: (-s.points, s.name.casefold()))
    return rows


def _add_match_points(points: Dict[str, int], match: Match, score_a: int, score_b: int):
    for p in match.team_a:
        if p.id in points:
            points[p.id] += score_a
    for p in match.team_b:
        if p.id in points:
            points[p.id] += score_b


def total_ranking(players: Sequence[Player], history: Iterable[SavedRound]) -> List[Standing]:
    """
    Total points over all saved rounds.

    Sorted by points (descending), then name. Courts without a recorded
    score contribute nothing.
    """
    points = {p.id: 0 for p in players}
    for saved in history:
        for match in saved.matches:
            score = saved.score_for(match.court)
            if score is None:
                continue
            _add_match_points(points, match, score.score_a, score.score_b)
    return _sort_standings(points, players)


def current_round_ranking(
    players: Sequence[Player],
    matches: Iterable[Match],
    scores: Mapping[int, Sequence[Optional[int]]]
) -> List[Standing]:
    """
    Points from the round in progress.

    Args:
        players: Roster
        matches: Current round's matches
        scores: Court -> (score_a, score_b); either side may be None

    Only courts with both scores entered are counted.
    """
    points = {p.id: 0 for p in players}
    for match in matches:
        entry = scores.get(match.court)
        if entry is None or entry[0] is None or entry[1] is None:
            continue
        _add_match_points(points, match, entry[0], entry[1])
    return _sort_standings(points, players)


def pause_counts(players: Sequence[Player], history: Iterable[SavedRound]) -> Dict[str, int]:
    """Number of saved rounds each player did not play in."""
    counts = {p.id: 0 for p in players}
    for saved in history:
        used = set(saved.player_ids)
        for p in players:
            if p.id not in used:
                counts[p.id] += 1
    return counts


def most_benched(
    players: Sequence[Player],
    history: Iterable[SavedRound],
    limit: int = 3
) -> List[PauseCount]:
    """Players who sat out most often, ties broken by name."""
    counts = pause_counts(players, history)
    rows = [PauseCount(p.id, p.name, counts[p.id]) for p in players]
    rows.sort(key=lambda r: (-r.rests, r.name.casefold()))
    return rows[:limit]
