"""
Conversion between scheduler dataclasses and JSON-ready dictionaries.
"""
from typing import Any, Dict, List

from americano.scheduling.coverage import CoverageReport
from americano.scheduling.models import Player, SavedRound
from americano.scheduling.stats import StatsSnapshot


def deserialize_roster(data: List[Dict[str, Any]]) -> List[Player]:
    """Roster from a list of {"id", "name"} dicts."""
    return [Player.from_dict(p) for p in data]


def deserialize_history(data: List[Dict[str, Any]]) -> List[SavedRound]:
    """Saved rounds from dicts, keeping the caller's order."""
    return [SavedRound.from_dict(r) for r in data]


def serialize_stats(stats: StatsSnapshot) -> Dict[str, Dict[str, int]]:
    return {
        "games_played": dict(stats.games_played),
        "partner_count": dict(stats.partner_count),
        "opponent_count": dict(stats.opponent_count),
    }


def serialize_coverage(report: CoverageReport) -> Dict[str, Any]:
    return {
        "complete": report.complete,
        "percent": report.percent,
        "missing_pairs": report.missing_pairs,
        "total_pairs": report.total_pairs,
        "covered_pairs": report.covered_pairs,
    }
