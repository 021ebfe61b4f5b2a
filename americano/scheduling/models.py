"""
Data model for rounds and match history.

Players, matches and saved rounds are immutable; history is a sequence of
SavedRound records ordered newest first.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple


@dataclass(frozen=True)
class Player:
    """A roster entry. Only the id takes part in scheduling."""
    id: str
    name: str

    @classmethod
    def new(cls, name: str) -> "Player":
        """Create a player with a fresh unique id."""
        return cls(id=str(uuid.uuid4()), name=name)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        return cls(id=str(data["id"]), name=data["name"])


Team = Tuple[Player, Player]


@dataclass(frozen=True)
class Match:
    """One court of a round: two teams of two players."""
    court: int
    team_a: Team
    team_b: Team

    @property
    def players(self) -> Tuple[Player, Player, Player, Player]:
        return (self.team_a[0], self.team_a[1], self.team_b[0], self.team_b[1])

    @property
    def player_ids(self) -> Tuple[str, str, str, str]:
        return tuple(p.id for p in self.players)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "court": self.court,
            "team_a": [p.to_dict() for p in self.team_a],
            "team_b": [p.to_dict() for p in self.team_b],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        team_a = [Player.from_dict(p) for p in data["team_a"]]
        team_b = [Player.from_dict(p) for p in data["team_b"]]
        return cls(
            court=int(data["court"]),
            team_a=(team_a[0], team_a[1]),
            team_b=(team_b[0], team_b[1]),
        )


@dataclass(frozen=True)
class Score:
    """Final score of one court."""
    score_a: int
    score_b: int

    def to_dict(self) -> Dict[str, int]:
        return {"score_a": self.score_a, "score_b": self.score_b}


@dataclass(frozen=True)
class SavedRound:
    """
    A completed round.

    Attributes:
        matches: Matches played, in court order
        results: Court number -> final score
        round_id: Unique id of the saved round
        created_at: Time the round was saved
    """
    matches: Tuple[Match, ...]
    results: Mapping[int, Score] = field(default_factory=dict)
    round_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def courts(self) -> int:
        return len(self.matches)

    @property
    def player_ids(self) -> List[str]:
        return [pid for m in self.matches for pid in m.player_ids]

    def score_for(self, court: int) -> Optional[Score]:
        return self.results.get(court)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "round_id": self.round_id,
            "created_at": self.created_at.isoformat(),
            "courts": self.courts,
            "matches": [m.to_dict() for m in self.matches],
            "results": {str(c): s.to_dict() for c, s in self.results.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SavedRound":
        results = {
            int(court): Score(int(s["score_a"]), int(s["score_b"]))
            for court, s in data.get("results", {}).items()
        }
        kwargs = {}
        if data.get("round_id"):
            kwargs["round_id"] = data["round_id"]
        created_at = data.get("created_at")
        if isinstance(created_at, datetime):
            kwargs["created_at"] = created_at
        elif created_at:
            kwargs["created_at"] = datetime.fromisoformat(created_at)
        return cls(
            matches=tuple(Match.from_dict(m) for m in data["matches"]),
            results=results,
            **kwargs
        )
