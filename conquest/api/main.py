"""
FastAPI adapter for the placement engine.
Keeps games in memory and serializes commands per game; no auth, no database.
"""

import threading
import uuid
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from conquest.config import DEFAULT_SETUP_ID, DEFAULT_STARTING_UNITS, MAX_FINISHED_GAMES
from conquest.engine.definitions import list_setups, load_board
from conquest.engine.errors import PlacementError
from conquest.engine.game import Game
from conquest.engine.queries import get_available_action_types, get_game_summary
from conquest.engine.state import Phase, Player
from conquest.engine.utils import make_dice

app = FastAPI(
    title="Conquest Placement API",
    description="Placement phase of a turn-based territory-conquest game",
    version="1.0.0",
)


@app.middleware("http")
async def log_requests(request, call_next):
    """Log method and path so 500s can be traced to the failing endpoint."""
    method = getattr(request, "method", "?")
    url = getattr(request, "url", None)
    path = url.path if url else "?"
    try:
        response = await call_next(request)
        if response.status_code >= 500:
            print(f"[500] {method} {path}", flush=True)
        return response
    except Exception:
        print(f"[500] {method} {path} (exception)", flush=True)
        raise


@app.exception_handler(Exception)
async def unhandled_exception_handler(request, exc):
    """Return 500 with the error message so clients can read it."""
    import traceback
    traceback.print_exc()
    return JSONResponse(status_code=500, content={"detail": str(exc)})


# In-memory games; one lock per game so each game processes one command at a time.
# Unfinished games live until DELETE; finished ones are bounded by MAX_FINISHED_GAMES.
games: dict[str, Game] = {}
game_locks: dict[str, threading.Lock] = {}
_registry_lock = threading.Lock()

# PlacementError -> HTTP status
ERROR_STATUS = {
    PlacementError.PLAYER_NOT_FOUND: 404,
    PlacementError.TERRITORY_NOT_FOUND: 404,
    PlacementError.NOT_PLAYERS_TURN: 409,
    PlacementError.ILLEGAL_MOVE: 409,
    PlacementError.WRONG_PHASE: 409,
}


# ===== Pydantic Models =====

class CreateGameRequest(BaseModel):
    players: list[int] = Field(min_length=1)
    setup_id: str = DEFAULT_SETUP_ID
    starting_units: int = Field(default=DEFAULT_STARTING_UNITS, ge=1)
    # Fixed roll selecting the starting player (1-indexed); random when omitted
    dice: int | None = None


class PlaceUnitRequest(BaseModel):
    player_id: int
    territory_id: int


# ===== Helper Functions =====

def get_game(game_id: str) -> Game:
    """Get game; raise 404 if not found."""
    game = games.get(game_id)
    if game is None:
        raise HTTPException(status_code=404, detail=f"Game {game_id} not found")
    return game


def evict_finished_games() -> None:
    """Drop the oldest finished games past MAX_FINISHED_GAMES. Caller holds _registry_lock."""
    finished = [gid for gid, g in games.items() if g.phase == Phase.PLAYING]
    for gid in finished[:max(0, len(finished) - MAX_FINISHED_GAMES)]:
        games.pop(gid, None)
        game_locks.pop(gid, None)


def state_for_response(game: Game) -> dict[str, Any]:
    """State dict including computed summary for the UI."""
    state = game.state
    out = state.to_dict()
    out["summary"] = get_game_summary(state)
    return out


# ===== API Endpoints =====

@app.get("/")
def root():
    return {"message": "Conquest Placement API", "version": "1.0.0"}


@app.get("/setups")
def get_setups():
    return {"setups": list_setups()}


@app.post("/games")
def create_game(request: CreateGameRequest):
    """Create a game: load the board, grant reinforcements, roll for the starting player."""
    if len(set(request.players)) != len(request.players):
        raise HTTPException(status_code=400, detail="Player ids must be unique")
    try:
        board = load_board(setup_id=request.setup_id)
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail=f"Setup {request.setup_id} not found")

    if request.dice is not None:
        fixed = request.dice
        dice = lambda: fixed
    else:
        dice = make_dice(sides=len(request.players))

    try:
        game = Game(
            board,
            [Player(id=pid) for pid in request.players],
            dice,
            starting_units=request.starting_units,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    game_id = str(uuid.uuid4())
    with _registry_lock:
        evict_finished_games()
        games[game_id] = game
        game_locks[game_id] = threading.Lock()
    return {
        "game_id": game_id,
        "state": state_for_response(game),
        "events": [e.to_dict() for e in game.start_events],
    }


@app.get("/games/{game_id}")
def get_game_state(game_id: str):
    game = get_game(game_id)
    return {"game_id": game_id, "state": state_for_response(game)}


@app.get("/games/{game_id}/available-actions")
def get_available_actions(game_id: str):
    game = get_game(game_id)
    state = game.state
    return {
        "current_player": state.current_player.id,
        "phase": state.phase.value,
        "actions": get_available_action_types(state),
    }


@app.post("/games/{game_id}/place")
def do_place_unit(game_id: str, request: PlaceUnitRequest):
    """Place one unit. Rule failures map to 404 (unknown id) or 409 (not allowed now)."""
    game = get_game(game_id)
    lock = game_locks.get(game_id)
    if lock is None:
        raise HTTPException(status_code=404, detail=f"Game {game_id} not found")
    with lock:
        result = game.place_unit(request.player_id, request.territory_id)
        if not result.ok:
            raise HTTPException(
                status_code=ERROR_STATUS[result.error],
                detail={"error": result.error.value, "message": result.message},
            )
        return {
            "state": state_for_response(game),
            "events": [e.to_dict() for e in result.events],
        }


@app.delete("/games/{game_id}")
def delete_game(game_id: str):
    get_game(game_id)
    with _registry_lock:
        games.pop(game_id, None)
        game_locks.pop(game_id, None)
    return {"deleted": game_id}
