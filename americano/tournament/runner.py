"""
Tournament simulation.

Plays tournaments with random scores to exercise the scheduler end to end,
and measures how many rounds full partner coverage really takes compared
with the recommended lower bound.
"""

import random
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np
from tqdm import tqdm

from americano.scheduling.coverage import partner_coverage, recommend_rounds
from americano.scheduling.generator import (
    DEFAULT_WEIGHTS, FairnessWeights, generate_fair_round, usable_courts
)
from americano.scheduling.models import Player, SavedRound
from americano.tournament.display import (
    format_coverage,
    format_most_benched,
    format_round,
    format_standings,
    format_tournament_header,
)
from americano.tournament.session import Tournament, TournamentConfig
from americano.utils import setup_logger
from americano.utils.constants import DEFAULT_POINTS_PER_MATCH

logger = setup_logger(__name__)


@dataclass
class SimulationConfig:
    """Settings for a simulated tournament."""
    points_per_match: int = DEFAULT_POINTS_PER_MATCH
    seed: Optional[int] = None
    verbose: bool = True


class TournamentSimulator:
    """
    Plays a tournament to its target with random scores.

    Usage:
        sim = TournamentSimulator(config, SimulationConfig(seed=7))
        tournament = sim.run()
    """

    def __init__(
        self,
        config: TournamentConfig,
        sim_config: Optional[SimulationConfig] = None,
        weights: FairnessWeights = DEFAULT_WEIGHTS
    ):
        """
        Initialize the simulator.

        Args:
            config: Tournament setup
            sim_config: Score and output settings
            weights: Cost weights for the scheduler
        """
        self.sim_config = sim_config or SimulationConfig()
        self.rng = random.Random(self.sim_config.seed)
        self.tournament = Tournament.create(config, rng=self.rng, weights=weights)

    def _random_score(self):
        total = self.sim_config.points_per_match
        score_a = self.rng.randint(0, total)
        return score_a, total - score_a

    def play_round(self) -> SavedRound:
        """Generate, score and save one round."""
        t = self.tournament
        if not t.matches:
            t.generate_round()
        round_no = len(t.saved_rounds) + 1
        for match in t.matches:
            score_a, score_b = self._random_score()
            t.update_score(match.court, "A", score_a)
            t.update_score(match.court, "B", score_b)

        if self.sim_config.verbose:
            scores = {c: e.as_pair() for c, e in t.scores.items()}
            print(format_round(round_no, t.matches, t.bench, scores))
            print("")
        return t.save_round()

    def run(self) -> Tournament:
        """Play until the target number of rounds has been saved."""
        t = self.tournament
        if self.sim_config.verbose:
            print(format_tournament_header(
                t.name, len(t.players), t.effective_courts,
                t.target_rounds, t.recommended_rounds
            ))

        while not t.is_finished:
            self.play_round()

        if self.sim_config.verbose:
            print(format_standings(t.total_ranking(), title="=== FINAL STANDINGS ==="))
            print("")
            print(format_coverage(t.coverage))
            print(format_most_benched(t.most_benched()))
        return t


@dataclass
class CoverageEstimate:
    """Rounds needed for full partner coverage over many simulated runs."""
    n_players: int
    courts: int
    trials: int
    recommended: int
    rounds: List[int] = field(default_factory=list)
    incomplete: int = 0

    @property
    def completed(self) -> int:
        return len(self.rounds)

    @property
    def mean_rounds(self) -> float:
        return float(np.mean(self.rounds)) if self.rounds else 0.0

    @property
    def median_rounds(self) -> float:
        return float(np.median(self.rounds)) if self.rounds else 0.0

    @property
    def min_rounds(self) -> int:
        return int(np.min(self.rounds)) if self.rounds else 0

    @property
    def max_rounds(self) -> int:
        return int(np.max(self.rounds)) if self.rounds else 0


def rounds_until_coverage(
    players: List[Player],
    courts: int,
    rng: random.Random,
    max_rounds: int,
    weights: FairnessWeights = DEFAULT_WEIGHTS
) -> Optional[int]:
    """
    Generate rounds until every pair has partnered once.

    Returns:
        Number of rounds played, or None if max_rounds was not enough
    """
    history: List[SavedRound] = []
    for round_no in range(1, max_rounds + 1):
        plan = generate_fair_round(players, courts, history, rng=rng, weights=weights)
        history.insert(0, SavedRound(matches=tuple(plan.matches)))
        if partner_coverage(players, history).complete:
            return round_no
    return None


def estimate_rounds_to_coverage(
    n_players: int,
    courts: int,
    trials: int = 100,
    seed: Optional[int] = None,
    max_rounds: Optional[int] = None,
    progress: bool = False,
    weights: FairnessWeights = DEFAULT_WEIGHTS
) -> CoverageEstimate:
    """
    Monte-Carlo estimate of rounds to full partner coverage.

    Args:
        n_players: Roster size
        courts: Courts requested
        trials: Number of independent runs
        seed: Base seed; trial i uses seed + i
        max_rounds: Give up after this many rounds (default 4x the
            recommendation)
        progress: Show a tqdm progress bar

    Returns:
        CoverageEstimate
    """
    recommended = recommend_rounds(n_players, courts)
    used = usable_courts(n_players, courts)
    estimate = CoverageEstimate(
        n_players=n_players, courts=used, trials=trials, recommended=recommended
    )
    if recommended == 0:
        return estimate

    limit = max_rounds or recommended * 4
    players = [Player(id=f"p{i:03d}", name=f"Player {i}") for i in range(1, n_players + 1)]

    for trial in tqdm(range(trials), desc="Simulating", disable=not progress):
        rng = random.Random(None if seed is None else seed + trial)
        result = rounds_until_coverage(players, used, rng, limit, weights)
        if result is None:
            estimate.incomplete += 1
        else:
            estimate.rounds.append(result)

    logger.info(
        "Estimate for %d players on %d courts: %d/%d trials reached full coverage",
        n_players, used, estimate.completed, trials
    )
    return estimate
