"""
Arena Bonus Backend API
"""
from fastapi import FastAPI, Query, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from typing import Optional, List, Dict, Any

from arena_bonus.errors import CorpusMismatchError
from arena_bonus.lichess_client import LichessClient
from arena_bonus.pgn_parser import parse_pgns, split_pgn_corpus, verify_game_count
from arena_bonus.pipeline import BonusRun, compute_bonuses
from arena_bonus.rules import DEFAULT_INELIGIBLE_MARKER

app = FastAPI(title="Arena Bonus API")


# ============================================
# Pydantic models for request/response
# ============================================

class BonusRequest(BaseModel):
    pgn: str
    gamesJson: Optional[List[Dict[str, Any]]] = None
    disqualified: List[str] = []
    ineligibleMarker: Optional[str] = DEFAULT_INELIGIBLE_MARKER


class AwardResponse(BaseModel):
    bonusPoints: int
    gameUrl: str


class LeaderboardEntryResponse(BaseModel):
    rank: int
    username: str
    totalBonusPoints: int
    awards: List[AwardResponse]


class MalformedGameResponse(BaseModel):
    gameUrl: str
    ply: Optional[int] = None
    move: Optional[str] = None
    reason: str


class BonusResponse(BaseModel):
    totalGames: int
    gamesProcessed: int
    leaderboard: List[LeaderboardEntryResponse]
    malformedGames: List[MalformedGameResponse]


# Enable CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://localhost:5174", "http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def run_to_response(run: BonusRun, total_games: int) -> BonusResponse:
    """Convert a BonusRun into the API response."""
    leaderboard = [
        LeaderboardEntryResponse(
            rank=i + 1,
            username=entry.username,
            totalBonusPoints=entry.total,
            awards=[
                AwardResponse(bonusPoints=award.points, gameUrl=award.game_reference)
                for award in entry.awards
            ],
        )
        for i, entry in enumerate(run.leaderboard)
    ]
    malformed = [
        MalformedGameResponse(gameUrl=e.game_reference, ply=e.ply, move=e.move, reason=e.reason)
        for e in run.malformed
    ]
    return BonusResponse(
        totalGames=total_games,
        gamesProcessed=run.games_processed,
        leaderboard=leaderboard,
        malformedGames=malformed,
    )


# ============================================
# Bonus endpoints
# ============================================

@app.post("/api/bonuses", response_model=BonusResponse)
async def calculate_bonuses(request: BonusRequest):
    """Compute comeback bonuses for an uploaded PGN export."""
    pgn_strings = split_pgn_corpus(request.pgn)
    if not pgn_strings:
        raise HTTPException(status_code=400, detail="No games found in PGN")

    games = parse_pgns(pgn_strings, ineligible_marker=request.ineligibleMarker)

    if request.gamesJson is not None:
        try:
            verify_game_count(games, request.gamesJson)
        except CorpusMismatchError as e:
            raise HTTPException(status_code=422, detail=str(e))

    run = compute_bonuses(games, disqualified=request.disqualified)
    return run_to_response(run, len(games))


@app.get("/api/tournaments/{tournament_id}/bonuses", response_model=BonusResponse)
async def get_tournament_bonuses(
    tournament_id: str,
    disqualified: List[str] = Query([], description="Usernames disqualified for fair-play violations"),
):
    """Download an arena tournament from Lichess and compute its comeback bonuses."""
    client = LichessClient()
    pgn_strings = client.fetch_tournament_games(tournament_id)
    if pgn_strings is None:
        raise HTTPException(status_code=502, detail=f"Could not fetch games for tournament {tournament_id}")

    games = parse_pgns(pgn_strings)
    print(f"Parsed {len(games)} games")

    run = compute_bonuses(games, disqualified=disqualified)
    return run_to_response(run, len(games))


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok"}
