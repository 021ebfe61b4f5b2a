"""
Tournament session.

Holds everything the scheduling core needs between rounds: the roster, court
count, the round being played with its scores, and the saved-round history
(newest first). All scheduling decisions are delegated to the stateless
functions in americano.scheduling.
"""

import random
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from americano.scheduling.coverage import CoverageReport, partner_coverage, recommend_rounds
from americano.scheduling.generator import (
    DEFAULT_WEIGHTS, FairnessWeights, generate_fair_round, usable_courts
)
from americano.scheduling.models import Match, Player, SavedRound, Score
from americano.tournament.standings import (
    PauseCount, Standing, current_round_ranking, most_benched, pause_counts, total_ranking
)
from americano.utils import setup_logger
from americano.utils.constants import (
    MIN_TOURNAMENT_NAME_LENGTH, PLAYERS_PER_COURT, SIDE_A, SIDE_B, SIDES
)

logger = setup_logger(__name__)


class TournamentError(ValueError):
    """Raised when a tournament operation is not allowed in the current state."""
    pass


@dataclass
class TournamentConfig:
    """Setup for a new tournament."""
    name: str
    player_names: List[str]
    courts: int = 1
    target_rounds: Optional[int] = None
    auto_next_round: bool = False


@dataclass
class ScoreEntry:
    """Scores being entered for one court. None means not entered yet."""
    score_a: Optional[int] = 0
    score_b: Optional[int] = 0

    @property
    def is_complete(self) -> bool:
        return self.score_a is not None and self.score_b is not None

    def as_pair(self):
        return (self.score_a, self.score_b)


@dataclass
class Tournament:
    """
    A running Americano tournament.

    Usage:
        t = Tournament.create(TournamentConfig("Friday", names, courts=2))
        t.generate_round()
        t.update_score(1, "A", 14)
        ...
        t.save_round()
    """
    name: str
    players: List[Player]
    courts: int
    target_rounds: int
    tournament_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    auto_next_round: bool = False
    manual_ended: bool = False
    extra_mode: bool = False
    matches: List[Match] = field(default_factory=list)
    bench: List[Player] = field(default_factory=list)
    scores: Dict[int, ScoreEntry] = field(default_factory=dict)
    saved_rounds: List[SavedRound] = field(default_factory=list)
    weights: FairnessWeights = DEFAULT_WEIGHTS
    rng: random.Random = field(default_factory=random.Random, repr=False)

    @classmethod
    def create(
        cls,
        config: TournamentConfig,
        rng: Optional[random.Random] = None,
        weights: FairnessWeights = DEFAULT_WEIGHTS
    ) -> "Tournament":
        """
        Validate the setup and start a tournament with fresh player ids.

        Raises:
            TournamentError: If the name is too short, there are fewer than
                four players or a name is blank
        """
        name = config.name.strip()
        names = [n.strip() for n in config.player_names]

        if len(name) < MIN_TOURNAMENT_NAME_LENGTH:
            raise TournamentError("Tournament name must have at least 2 characters")
        if len(names) < PLAYERS_PER_COURT:
            raise TournamentError("At least 4 players are required")
        if any(not n for n in names):
            raise TournamentError("Every player needs a name")

        max_courts = max(1, len(names) // PLAYERS_PER_COURT)
        courts = max(1, min(int(config.courts), max_courts))
        rounds = config.target_rounds
        if rounds is None or rounds <= 0:
            rounds = recommend_rounds(len(names), courts)

        tournament = cls(
            name=name,
            players=[Player.new(n) for n in names],
            courts=courts,
            target_rounds=rounds,
            auto_next_round=config.auto_next_round,
            weights=weights,
            rng=rng or random.Random(),
        )
        logger.info(
            "Tournament '%s' created: %d players, %d courts, %d target rounds",
            name, len(names), courts, rounds
        )
        return tournament

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def effective_courts(self) -> int:
        max_courts = max(1, len(self.players) // PLAYERS_PER_COURT)
        return min(max(1, self.courts), max_courts)

    @property
    def recommended_rounds(self) -> int:
        return recommend_rounds(len(self.players), self.effective_courts)

    @property
    def coverage(self) -> CoverageReport:
        return partner_coverage(self.players, self.saved_rounds)

    @property
    def is_finished(self) -> bool:
        if self.manual_ended:
            return True
        return (not self.extra_mode
                and self.target_rounds > 0
                and len(self.saved_rounds) >= self.target_rounds)

    @property
    def rounds_progress(self) -> str:
        saved = len(self.saved_rounds)
        if self.target_rounds > 0:
            return f"{min(saved, self.target_rounds)}/{self.target_rounds}"
        return str(saved)

    @property
    def can_save_current_round(self) -> bool:
        if not self.matches:
            return False
        return all(
            m.court in self.scores and self.scores[m.court].is_complete
            for m in self.matches
        )

    @property
    def unused_players(self) -> List[Player]:
        """Players without a match in the current round, by name."""
        used = {pid for m in self.matches for pid in m.player_ids}
        rest = [p for p in self.players if p.id not in used]
        return sorted(rest, key=lambda p: p.name.casefold())

    def total_ranking(self) -> List[Standing]:
        return total_ranking(self.players, self.saved_rounds)

    def current_round_ranking(self) -> List[Standing]:
        pairs = {court: entry.as_pair() for court, entry in self.scores.items()}
        return current_round_ranking(self.players, self.matches, pairs)

    def pause_counts(self) -> Dict[str, int]:
        return pause_counts(self.players, self.saved_rounds)

    def most_benched(self, limit: int = 3) -> List[PauseCount]:
        return most_benched(self.players, self.saved_rounds, limit)

    # ------------------------------------------------------------------
    # Round lifecycle
    # ------------------------------------------------------------------

    def _ensure_running(self):
        if self.is_finished:
            raise TournamentError(
                "Tournament is finished. Enable extra rounds or start a new tournament."
            )

    def generate_round(self) -> List[Match]:
        """
        Generate the next round, replacing any unsaved current round.

        Every court's score starts at 0:0.

        Raises:
            TournamentError: If the tournament is finished or has fewer
                than four players
        """
        self._ensure_running()
        if len(self.players) < PLAYERS_PER_COURT:
            raise TournamentError("At least 4 players are required")

        courts = usable_courts(len(self.players), self.effective_courts)
        plan = generate_fair_round(
            self.players, courts, self.saved_rounds, rng=self.rng, weights=self.weights
        )
        self.matches = plan.matches
        self.bench = plan.bench
        self.scores = {m.court: ScoreEntry(0, 0) for m in plan.matches}
        logger.info(
            "Round %d generated for '%s': %d matches, %d on the bench",
            len(self.saved_rounds) + 1, self.name, len(plan.matches), len(plan.bench)
        )
        return self.matches

    def update_score(self, court: int, side: str, value: Optional[int]) -> ScoreEntry:
        """
        Set one side's score for a court of the current round.

        Args:
            court: Court number of a current match
            side: "A" or "B"
            value: Points, or None to clear the entry

        Raises:
            TournamentError: Unknown court or side, or a negative score
        """
        if court not in self.scores:
            raise TournamentError(f"No match on court {court}")
        if side not in SIDES:
            raise TournamentError(f"Unknown side: {side}")
        if value is not None and value < 0:
            raise TournamentError("Scores cannot be negative")

        entry = self.scores[court]
        if side == SIDE_A:
            entry.score_a = value
        elif side == SIDE_B:
            entry.score_b = value
        return entry

    def save_round(self, now: Optional[datetime] = None) -> SavedRound:
        """
        Freeze the current round into history.

        With auto_next_round set, the next round is generated straight away
        unless this save finished the tournament.

        Raises:
            TournamentError: If the tournament is finished or a score is missing
        """
        self._ensure_running()
        if not self.can_save_current_round:
            raise TournamentError("Enter all scores before saving the round")

        results = {
            m.court: Score(int(self.scores[m.court].score_a), int(self.scores[m.court].score_b))
            for m in self.matches
        }
        saved = SavedRound(
            matches=tuple(self.matches),
            results=results,
            created_at=now or datetime.now(),
        )
        self.saved_rounds.insert(0, saved)
        self.matches = []
        self.bench = []
        self.scores = {}
        logger.info("Round %d saved for '%s'", len(self.saved_rounds), self.name)

        if self.auto_next_round and not self.is_finished:
            self.generate_round()

        return saved

    def delete_last_round(self) -> Optional[SavedRound]:
        """Drop the most recently saved round. Returns it, or None if history is empty."""
        if not self.saved_rounds:
            logger.warning("Cannot delete: no saved rounds in '%s'", self.name)
            return None
        removed = self.saved_rounds.pop(0)
        logger.info("Deleted round %d of '%s'", len(self.saved_rounds) + 1, self.name)
        return removed

    def end_now(self):
        """End the tournament early and discard the round in progress."""
        self.manual_ended = True
        self.matches = []
        self.bench = []
        self.scores = {}
        logger.info("Tournament '%s' ended after %d rounds", self.name, len(self.saved_rounds))

    def play_extra_rounds(self):
        """Keep playing beyond the target number of rounds."""
        self.manual_ended = False
        self.extra_mode = True
        logger.info("Extra rounds enabled for '%s'", self.name)
