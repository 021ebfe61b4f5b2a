"""
Pydantic models for the Americano web API.

Defines request/response schemas for the stateless scheduling endpoints and
the tournament session endpoints.
"""
from datetime import datetime
from pydantic import BaseModel, Field, field_validator
from typing import List, Dict, Optional
from enum import Enum

from americano.utils.constants import PAIR_KEY_SEPARATOR


class Side(str, Enum):
    """Team side on a court."""
    A = "A"
    B = "B"


class PlayerModel(BaseModel):
    """A roster entry."""
    id: str
    name: str

    @field_validator("id")
    @classmethod
    def id_without_separator(cls, value: str) -> str:
        if not value:
            raise ValueError("Player id must not be empty")
        if PAIR_KEY_SEPARATOR in value:
            raise ValueError(f"Player id must not contain '{PAIR_KEY_SEPARATOR}'")
        return value


class MatchModel(BaseModel):
    """One court: two teams of two players."""
    court: int = Field(ge=1)
    team_a: List[PlayerModel] = Field(min_length=2, max_length=2)
    team_b: List[PlayerModel] = Field(min_length=2, max_length=2)


class ScoreModel(BaseModel):
    """Final score of a court."""
    score_a: int = Field(ge=0)
    score_b: int = Field(ge=0)


class SavedRoundModel(BaseModel):
    """A completed round as supplied by the caller."""
    matches: List[MatchModel]
    results: Dict[int, ScoreModel] = Field(default_factory=dict)
    round_id: Optional[str] = None
    created_at: Optional[datetime] = None


# Stateless scheduling requests/responses

class HistoryRequest(BaseModel):
    """Roster and history, newest round first."""
    roster: List[PlayerModel]
    history: List[SavedRoundModel] = Field(default_factory=list)


class GenerateRoundRequest(HistoryRequest):
    """Request for one fair round."""
    courts: int = Field(ge=0, description="Courts wanted; clamped to what the roster can fill")
    seed: Optional[int] = Field(default=None, description="Seed for the tie-break shuffle")


class RoundPlanResponse(BaseModel):
    """Generated round."""
    matches: List[MatchModel]
    bench: List[PlayerModel]


class StatsResponse(BaseModel):
    """Counters aggregated from history."""
    games_played: Dict[str, int]
    partner_count: Dict[str, int]
    opponent_count: Dict[str, int]


class CoverageResponse(BaseModel):
    """Partner coverage progress."""
    complete: bool
    percent: int
    missing_pairs: int
    total_pairs: int
    covered_pairs: int


class RecommendResponse(BaseModel):
    """Recommended number of rounds."""
    players: int
    courts: int
    recommended_rounds: int


# Tournament session requests/responses

class CreateTournamentRequest(BaseModel):
    """Configuration for creating a new tournament."""
    name: str = Field(default="Mein Americano")
    player_names: List[str]
    courts: int = Field(default=1, ge=1)
    target_rounds: Optional[int] = Field(default=None, description="Defaults to the recommendation")
    auto_next_round: bool = False
    seed: Optional[int] = None


class ScoreUpdateRequest(BaseModel):
    """Set one side's score on a court. None clears it."""
    side: Side
    value: Optional[int] = Field(default=None, ge=0)


class ScoreEntryModel(BaseModel):
    """Score being entered; None means missing."""
    score_a: Optional[int] = None
    score_b: Optional[int] = None


class StandingModel(BaseModel):
    """Points for one player."""
    player_id: str
    name: str
    points: int


class PauseCountModel(BaseModel):
    """Rounds a player sat out."""
    player_id: str
    name: str
    rests: int


class TournamentState(BaseModel):
    """Complete tournament state for API responses."""
    tournament_id: str
    name: str
    players: List[PlayerModel]
    courts: int
    target_rounds: int
    recommended_rounds: int
    rounds_progress: str
    is_finished: bool
    manual_ended: bool
    extra_mode: bool
    auto_next_round: bool
    matches: List[MatchModel]
    bench: List[PlayerModel]
    scores: Dict[int, ScoreEntryModel]
    can_save: bool
    saved_rounds: List[SavedRoundModel]
    coverage: CoverageResponse


class TournamentSummary(BaseModel):
    """Summary of a tournament for listings."""
    tournament_id: str
    name: str
    players: int
    rounds_progress: str
    is_finished: bool


class StandingsResponse(BaseModel):
    """Total and current-round standings."""
    total: List[StandingModel]
    current_round: List[StandingModel]
    most_benched: List[PauseCountModel]


class ErrorResponse(BaseModel):
    """Error response."""
    error: str
    detail: Optional[str] = None
