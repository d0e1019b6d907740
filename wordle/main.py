'''
DB-backed Wordle API (shared games)

Endpoints:
POST /api/v1/create                  -> create a game from a secret answer
POST /api/v1/game/{id}/register      -> join a game (header X-Player-Name)
GET  /api/v1/game/{id}/state         -> resume: rows submitted so far + round_over
POST /api/v1/game/{id}/play          -> score one guess

Extras:
GET  /api/v1/manage/{id}             -> leaderboard: every player's guesses + the answer

Guesses are scored by the same engine a local Session uses.
'''

import logging
import os
from typing import Optional

from fastapi import FastAPI, HTTPException, Depends, Header
from fastapi.middleware.cors import CORSMiddleware

from .db import get_db                  # SQLAlchemy Session dependency
from .repository import DBGameStore     # DB-backed store
from .bootstrap_db import create_all    # dev-only: create tables
from .types import PLAYER_HEADER

from .schemas import (
    CreateGameRequest,
    CreateGameResponse,
    PlayRequest,
    PlayResponse,
    PlayerStateOut,
    ManageGameResponse,
)

APP_ENV = os.getenv("APP_ENV", "local")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s | %(levelname)s | %(name)s | %(message)s")
app = FastAPI(title="Wordle API (DB)", version="1.0.0")

# Allow everything in dev so the docs and front-end work easily
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)

# --- Dev convenience: auto-create tables locally ---
if APP_ENV == "local":
    @app.on_event("startup")
    def _dev_create_tables():
        create_all()

# Small factory so routes get a per-request store (bound to the current DB session)
def get_store(session = Depends(get_db)) -> DBGameStore:
    return DBGameStore(session)

# Who is playing: passed explicitly on every request, never kept server-side
def get_player(player: Optional[str] = Header(None, alias=PLAYER_HEADER)) -> str:
    name = (player or "").strip()
    if not name:
        raise HTTPException(status_code=401, detail=f"Missing {PLAYER_HEADER} header.")
    return name

_STATUS_ERRORS = {
    "not_found": (404, "Game not found"),
    "not_registered": (409, "Player is not registered for this game."),
    "round_over": (409, "Round is over. No more guesses allowed."),
}

def _raise_for(status: str) -> None:
    if status in _STATUS_ERRORS:
        code, detail = _STATUS_ERRORS[status]
        raise HTTPException(status_code=code, detail=detail)

# ---------------- Routes ----------------

@app.post("/api/v1/create", response_model=CreateGameResponse, summary="Create a shared game")
def create_game(
    payload: CreateGameRequest,
    store: DBGameStore = Depends(get_store),
) -> CreateGameResponse:
    return CreateGameResponse(game_id=store.create_game(payload.answer))

@app.post("/api/v1/game/{game_id}/register", response_model=PlayerStateOut, summary="Join a game")
def register_player(
    game_id: str,
    player: str = Depends(get_player),
    store: DBGameStore = Depends(get_store),
) -> PlayerStateOut:
    status, state = store.register_player(game_id, player)
    _raise_for(status)
    return state

@app.get("/api/v1/game/{game_id}/state", response_model=PlayerStateOut, summary="Resume a game")
def get_player_state(
    game_id: str,
    player: str = Depends(get_player),
    store: DBGameStore = Depends(get_store),
) -> PlayerStateOut:
    status, state = store.player_state(game_id, player)
    _raise_for(status)
    return state

@app.post("/api/v1/game/{game_id}/play", response_model=PlayResponse, summary="Submit a guess")
def play(
    game_id: str,
    payload: PlayRequest,
    player: str = Depends(get_player),
    store: DBGameStore = Depends(get_store),
) -> PlayResponse:
    # repository.play() performs the length check & records the scored row
    try:
        status, result = store.play(game_id, player, payload.guess)
    except ValueError as ve:
        raise HTTPException(status_code=400, detail=str(ve))
    _raise_for(status)
    return result

@app.get("/api/v1/manage/{game_id}", response_model=ManageGameResponse, summary="Leaderboard for a game")
def manage_game(
    game_id: str,
    store: DBGameStore = Depends(get_store),
) -> ManageGameResponse:
    board = store.manage(game_id)
    if not board:
        raise HTTPException(status_code=404, detail="Game not found")
    return board
