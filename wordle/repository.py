"""
DB-backed repository for shared games.

Public methods:
- create_game(answer) -> game_id
- register_player(game_id, name) -> tuple[str, PlayerStateOut | None]
- player_state(game_id, name) -> tuple[str, PlayerStateOut | None]
- play(game_id, name, guess) -> tuple[str, PlayResponse | None]
- manage(game_id) -> ManageGameResponse | None

Status strings: "ok", "not_found", "not_registered", "round_over".
Routes turn them into HTTP codes; the repository never imports FastAPI.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional
from uuid import uuid4

from sqlalchemy.orm import Session
from sqlalchemy import select

from .models import Game as GameORM, Player as PlayerORM, Guess as GuessORM
from .types import MAX_ATTEMPTS, WORD_LENGTH, Word
from .engine import evaluate, is_win, normalize_word
from .schemas import (
    GuessOut, PlayerOut, PlayerStateOut, PlayResponse, ManageGameResponse,
)

logger = logging.getLogger(__name__)

# --- Small DTO builders: DB rows -> API responses ---

def _scored(g: GuessORM) -> list:
    return [[letter, correctness] for letter, correctness in zip(g.letters, g.result)]

def _to_guess_out(g: GuessORM) -> GuessOut:
    return GuessOut(guess=_scored(g), submit_time=g.submitted_at.timestamp())

def _to_player_state(player: PlayerORM) -> PlayerStateOut:
    return PlayerStateOut(
        game_id=player.game_id,
        name=player.name,
        start_time=player.joined_at.timestamp(),
        guesses=[_to_guess_out(g) for g in player.guesses],
        round_over=player.round_over,
        won=player.won,
    )

class DBGameStore:
    """Shared games, their players and every scored guess, stored via SQLAlchemy."""

    def __init__(self, db: Session):
        self.db = db

    def _find_player(self, game_id: str, name: str) -> Optional[PlayerORM]:
        return self.db.execute(
            select(PlayerORM).where(PlayerORM.game_id == game_id, PlayerORM.name == name)
        ).scalar_one_or_none()

    # --- Public API ---

    def create_game(self, answer: str) -> str:
        word = normalize_word(answer, WORD_LENGTH)
        gid = str(uuid4())
        self.db.add(GameORM(id=gid, answer="".join(word), created_at=datetime.utcnow()))
        self.db.commit()
        logger.info("Created game %s", gid)
        return gid

    def register_player(self, game_id: str, name: str):
        game = self.db.get(GameORM, game_id)
        if not game:
            return ("not_found", None)

        player = self._find_player(game_id, name)
        if player is None:
            player = PlayerORM(game_id=game_id, name=name, joined_at=datetime.utcnow())
            self.db.add(player)
            self.db.commit()
            self.db.refresh(player)
            logger.info("Player %r joined game %s", name, game_id)

        # Registering twice just returns the existing round
        return ("ok", _to_player_state(player))

    def player_state(self, game_id: str, name: str):
        if not self.db.get(GameORM, game_id):
            return ("not_found", None)
        player = self._find_player(game_id, name)
        if player is None:
            return ("not_registered", None)
        return ("ok", _to_player_state(player))

    def play(self, game_id: str, name: str, guess: Word):
        game = self.db.get(GameORM, game_id)
        if not game:
            return ("not_found", None)
        player = self._find_player(game_id, name)
        if player is None:
            return ("not_registered", None)
        if player.round_over:
            return ("round_over", None)

        # Length guard
        if len(guess) != len(game.answer):
            raise ValueError(f"Guess must have exactly {len(game.answer)} letters for this game.")

        letters = [letter.upper() for letter in guess]
        result = evaluate(game.answer, letters)

        player.guesses.append(GuessORM(
            letters=letters,
            result=[c.value for c in result],
            submitted_at=datetime.utcnow(),
        ))

        attempts = len(player.guesses)
        if is_win(game.answer, letters):
            player.won = True
            player.round_over = True
        elif attempts >= MAX_ATTEMPTS:
            player.round_over = True

        self.db.commit()
        logger.info(
            "Game %s: %r guessed %s (%d/%d)%s",
            game_id, name, "".join(letters), attempts, MAX_ATTEMPTS,
            " - won" if player.won else (" - out of attempts" if player.round_over else ""),
        )

        return ("ok", PlayResponse(
            game_over=player.round_over,
            guess=[(letter, c.value) for letter, c in zip(letters, result)],
        ))

    def manage(self, game_id: str) -> Optional[ManageGameResponse]:
        game = self.db.get(GameORM, game_id)
        if not game:
            return None
        return ManageGameResponse(
            start_time=game.created_at.timestamp(),
            answer=game.answer,
            players=[
                PlayerOut(
                    name=p.name,
                    start_time=p.joined_at.timestamp(),
                    guesses=[_to_guess_out(g) for g in p.guesses],
                )
                for p in game.players
            ],
        )

