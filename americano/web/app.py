"""
FastAPI application for the Americano scheduler.
"""
from fastapi import FastAPI, HTTPException, Query
from typing import Optional
import random

from americano import __version__
from americano.scheduling.coverage import partner_coverage, recommend_rounds
from americano.scheduling.generator import generate_fair_round, usable_courts
from americano.scheduling.stats import aggregate_stats
from americano.tournament.session import Tournament, TournamentError
from americano.web.models import (
    CoverageResponse, CreateTournamentRequest, ErrorResponse, GenerateRoundRequest,
    HistoryRequest, RecommendResponse, RoundPlanResponse, ScoreUpdateRequest,
    StandingsResponse, StatsResponse, TournamentState, TournamentSummary
)
from americano.web.serialization import (
    deserialize_history, deserialize_roster, serialize_coverage, serialize_stats
)
from americano.web.session_manager import TournamentManager

# Create FastAPI app
app = FastAPI(
    title="Americano",
    description="Fair round scheduling for Americano doubles tournaments",
    version=__version__
)

# Global instance (initialized in startup)
tournament_manager: Optional[TournamentManager] = None

NOT_FOUND = {404: {"model": ErrorResponse}}


@app.on_event("startup")
async def startup():
    """Initialize global instances on startup."""
    global tournament_manager
    tournament_manager = TournamentManager()


def _get_tournament(tournament_id: str) -> Tournament:
    tournament = tournament_manager.get_session(tournament_id)
    if not tournament:
        raise HTTPException(status_code=404, detail="Tournament not found")
    return tournament


def _state(tournament: Tournament) -> TournamentState:
    return TournamentState(**tournament_manager.get_state(tournament))


# =============================================================================
# Stateless Scheduling Endpoints
# =============================================================================

@app.post("/api/schedule/stats", response_model=StatsResponse)
async def schedule_stats(request: HistoryRequest):
    """Aggregate games, partner and opponent counts from history."""
    roster = deserialize_roster([p.model_dump() for p in request.roster])
    history = deserialize_history([r.model_dump() for r in request.history])
    return StatsResponse(**serialize_stats(aggregate_stats(roster, history)))


@app.post("/api/schedule/coverage", response_model=CoverageResponse)
async def schedule_coverage(request: HistoryRequest):
    """Partner coverage for a roster and history."""
    roster = deserialize_roster([p.model_dump() for p in request.roster])
    history = deserialize_history([r.model_dump() for r in request.history])
    return CoverageResponse(**serialize_coverage(partner_coverage(roster, history)))


@app.get("/api/schedule/recommend", response_model=RecommendResponse)
async def schedule_recommend(
    players: int = Query(ge=0),
    courts: int = Query(default=1, ge=0)
):
    """Lower-bound number of rounds for full partner coverage."""
    return RecommendResponse(
        players=players,
        courts=usable_courts(players, courts),
        recommended_rounds=recommend_rounds(players, courts)
    )


@app.post("/api/schedule/round", response_model=RoundPlanResponse)
def schedule_round(request: GenerateRoundRequest):
    """Generate one fair round. Pass a seed for a reproducible tie-break.

    Declared without async so the search runs in the threadpool.
    """
    roster = deserialize_roster([p.model_dump() for p in request.roster])
    history = deserialize_history([r.model_dump() for r in request.history])
    plan = generate_fair_round(roster, request.courts, history, rng=random.Random(request.seed))
    return RoundPlanResponse(
        matches=[m.to_dict() for m in plan.matches],
        bench=[p.to_dict() for p in plan.bench]
    )


# =============================================================================
# Tournament Session Endpoints
# =============================================================================

@app.post("/api/tournaments", response_model=TournamentState)
async def create_tournament(request: CreateTournamentRequest):
    """Create a new tournament session."""
    try:
        tournament = tournament_manager.create_tournament(
            name=request.name,
            player_names=request.player_names,
            courts=request.courts,
            target_rounds=request.target_rounds,
            auto_next_round=request.auto_next_round,
            seed=request.seed
        )
    except TournamentError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _state(tournament)


@app.get("/api/tournaments")
async def list_tournaments():
    """List all active tournaments."""
    return {"tournaments": [TournamentSummary(**t) for t in tournament_manager.list_tournaments()]}


@app.get("/api/tournaments/{tournament_id}", response_model=TournamentState, responses=NOT_FOUND)
async def get_tournament(tournament_id: str):
    """Get current tournament state."""
    return _state(_get_tournament(tournament_id))


@app.delete("/api/tournaments/{tournament_id}", responses=NOT_FOUND)
async def delete_tournament(tournament_id: str):
    """Forget a tournament session."""
    if not tournament_manager.remove_tournament(tournament_id):
        raise HTTPException(status_code=404, detail="Tournament not found")
    return {"status": "deleted"}


@app.post("/api/tournaments/{tournament_id}/rounds", response_model=TournamentState, responses=NOT_FOUND)
def generate_round(tournament_id: str):
    """Generate the next round. Runs in the threadpool."""
    tournament = _get_tournament(tournament_id)
    try:
        tournament.generate_round()
    except TournamentError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _state(tournament)


@app.put("/api/tournaments/{tournament_id}/scores/{court}", response_model=TournamentState, responses=NOT_FOUND)
async def update_score(tournament_id: str, court: int, update: ScoreUpdateRequest):
    """Enter one side's score for a court."""
    tournament = _get_tournament(tournament_id)
    try:
        tournament.update_score(court, update.side.value, update.value)
    except TournamentError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _state(tournament)


@app.post("/api/tournaments/{tournament_id}/rounds/save", response_model=TournamentState, responses=NOT_FOUND)
async def save_round(tournament_id: str):
    """Save the current round into history."""
    tournament = _get_tournament(tournament_id)
    try:
        tournament.save_round()
    except TournamentError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _state(tournament)


@app.delete("/api/tournaments/{tournament_id}/rounds/last", response_model=TournamentState, responses=NOT_FOUND)
async def delete_last_round(tournament_id: str):
    """Delete the most recently saved round."""
    tournament = _get_tournament(tournament_id)
    tournament.delete_last_round()
    return _state(tournament)


@app.post("/api/tournaments/{tournament_id}/end", response_model=TournamentState, responses=NOT_FOUND)
async def end_tournament(tournament_id: str):
    """End the tournament now."""
    tournament = _get_tournament(tournament_id)
    tournament.end_now()
    return _state(tournament)


@app.post("/api/tournaments/{tournament_id}/extra", response_model=TournamentState, responses=NOT_FOUND)
async def play_extra_rounds(tournament_id: str):
    """Continue past the target number of rounds."""
    tournament = _get_tournament(tournament_id)
    tournament.play_extra_rounds()
    return _state(tournament)


@app.get("/api/tournaments/{tournament_id}/standings", response_model=StandingsResponse, responses=NOT_FOUND)
async def get_standings(tournament_id: str):
    """Total and current-round standings."""
    tournament = _get_tournament(tournament_id)
    return StandingsResponse(**tournament_manager.get_standings(tournament))


@app.get("/api/tournaments/{tournament_id}/coverage", response_model=CoverageResponse, responses=NOT_FOUND)
async def get_coverage(tournament_id: str):
    """Partner coverage so far."""
    tournament = _get_tournament(tournament_id)
    return CoverageResponse(**serialize_coverage(tournament.coverage))
