"""
Tournament session manager for the web interface.

Keeps active tournaments in memory, keyed by tournament id.
"""
import random
from typing import Any, Dict, List, Optional

from americano.tournament.session import Tournament, TournamentConfig
from americano.web.serialization import serialize_coverage
from americano.utils import setup_logger

logger = setup_logger(__name__)


class TournamentManager:
    """
    Manages active tournament sessions.

    Handles creation, lookup, state serialization and cleanup.
    """

    def __init__(self):
        self.sessions: Dict[str, Tournament] = {}

    def create_tournament(
        self,
        name: str,
        player_names: List[str],
        courts: int = 1,
        target_rounds: Optional[int] = None,
        auto_next_round: bool = False,
        seed: Optional[int] = None
    ) -> Tournament:
        """
        Create and register a new tournament.

        Args:
            name: Tournament name
            player_names: One entry per player
            courts: Courts available
            target_rounds: Planned rounds (recommendation if None)
            auto_next_round: Generate the next round after each save
            seed: Optional seed for the bench tie-break shuffle

        Returns:
            New Tournament

        Raises:
            TournamentError: If the setup is invalid
        """
        config = TournamentConfig(
            name=name,
            player_names=player_names,
            courts=courts,
            target_rounds=target_rounds,
            auto_next_round=auto_next_round,
        )
        tournament = Tournament.create(config, rng=random.Random(seed))
        self.sessions[tournament.tournament_id] = tournament
        return tournament

    def get_session(self, tournament_id: str) -> Optional[Tournament]:
        """Get a tournament by ID."""
        return self.sessions.get(tournament_id)

    def remove_tournament(self, tournament_id: str) -> bool:
        """Forget a tournament. Returns False if it did not exist."""
        removed = self.sessions.pop(tournament_id, None)
        if removed is not None:
            logger.info("Tournament %s removed", tournament_id)
        return removed is not None

    def list_tournaments(self) -> List[Dict[str, Any]]:
        """Summaries of all active tournaments."""
        return [
            {
                "tournament_id": t.tournament_id,
                "name": t.name,
                "players": len(t.players),
                "rounds_progress": t.rounds_progress,
                "is_finished": t.is_finished,
            }
            for t in self.sessions.values()
        ]

    def get_state(self, tournament: Tournament) -> Dict[str, Any]:
        """Get the full tournament state as a dictionary."""
        return {
            "tournament_id": tournament.tournament_id,
            "name": tournament.name,
            "players": [p.to_dict() for p in tournament.players],
            "courts": tournament.effective_courts,
            "target_rounds": tournament.target_rounds,
            "recommended_rounds": tournament.recommended_rounds,
            "rounds_progress": tournament.rounds_progress,
            "is_finished": tournament.is_finished,
            "manual_ended": tournament.manual_ended,
            "extra_mode": tournament.extra_mode,
            "auto_next_round": tournament.auto_next_round,
            "matches": [m.to_dict() for m in tournament.matches],
            "bench": [p.to_dict() for p in tournament.bench],
            "scores": {
                court: {"score_a": e.score_a, "score_b": e.score_b}
                for court, e in tournament.scores.items()
            },
            "can_save": tournament.can_save_current_round,
            "saved_rounds": [r.to_dict() for r in tournament.saved_rounds],
            "coverage": serialize_coverage(tournament.coverage),
        }

    def get_standings(self, tournament: Tournament) -> Dict[str, Any]:
        """Total and current-round standings plus most benched players."""
        return {
            "total": [s.to_dict() for s in tournament.total_ranking()],
            "current_round": [s.to_dict() for s in tournament.current_round_ranking()],
            "most_benched": [
                {"player_id": r.player_id, "name": r.name, "rests": r.rests}
                for r in tournament.most_benched()
            ],
        }
