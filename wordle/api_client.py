"""
- HTTP client for the game API, used by sessions that score remotely.
Anything that goes wrong (no server, timeout, error status, a body we cannot
decode) comes back as one ApiError, so the session has a single thing to
catch and revert on. No retries: the player resubmits.
"""

import logging
import os
from typing import Any, Callable, List, Optional, Tuple

import requests
from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError

from .schemas import (
    CreateGameResponse,
    ManageGameResponse,
    PlayerStateOut,
    PlayResponse,
)
from .types import PLAYER_HEADER, Correctness, PlayerContext, RemoteError, ScoredRow, Word

logger = logging.getLogger(__name__)

load_dotenv()
DEFAULT_API_URL = os.getenv("WORDLE_API_URL", "http://localhost:8000")


class ApiError(RemoteError):
    """A remote operation failed; the caller should revert and tell the user."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def _to_row(scored: List[Tuple[str, str]]) -> ScoredRow:
    return [(letter, Correctness(value)) for letter, value in scored]


class WordleClient:
    def __init__(self, base_url: str = DEFAULT_API_URL, timeout: float = 3.0, http: Any = None):
        # keep network quick; a slow server should surface as an error, not a hang
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.http = http if http is not None else requests.Session()

    # --- Endpoints ---

    def create_game(self, answer: str) -> str:
        body = self._post("/api/v1/create", CreateGameResponse, json={"answer": answer})
        return body.game_id

    def register(self, context: PlayerContext) -> PlayerStateOut:
        return self._post(
            f"/api/v1/game/{context.game_id}/register", PlayerStateOut, player=context.player_name
        )

    def game_state(self, context: PlayerContext) -> PlayerStateOut:
        return self._get(
            f"/api/v1/game/{context.game_id}/state", PlayerStateOut, player=context.player_name
        )

    def play(self, context: PlayerContext, guess: Word) -> PlayResponse:
        return self._post(
            f"/api/v1/game/{context.game_id}/play",
            PlayResponse,
            player=context.player_name,
            json={"guess": list(guess)},
        )

    def manage(self, game_id: str) -> ManageGameResponse:
        return self._get(f"/api/v1/manage/{game_id}", ManageGameResponse)

    # --- Adapters for Session ---

    def scorer(self, context: PlayerContext) -> Callable[[Word], Tuple[ScoredRow, bool]]:
        def score(guess: Word) -> Tuple[ScoredRow, bool]:
            response = self.play(context, guess)
            return _to_row(response.guess), response.game_over
        return score

    def restorer(self, context: PlayerContext) -> Callable[[], Tuple[List[ScoredRow], bool]]:
        def fetch() -> Tuple[List[ScoredRow], bool]:
            state = self.game_state(context)
            return [_to_row(g.guess) for g in state.guesses], state.round_over
        return fetch

    # --- Transport ---

    def _get(self, path: str, model, player: Optional[str] = None):
        return self._request("GET", path, model, player=player)

    def _post(self, path: str, model, player: Optional[str] = None, json: Any = None):
        return self._request("POST", path, model, player=player, json=json)

    def _request(self, method: str, path: str, model, player: Optional[str] = None, json: Any = None):
        url = f"{self.base_url}{path}"
        headers = {PLAYER_HEADER: player} if player else {}

        try:
            if method == "GET":
                response = self.http.get(url, headers=headers, timeout=self.timeout)
            else:
                response = self.http.post(url, headers=headers, json=json, timeout=self.timeout)
        except requests.RequestException as error:
            logger.warning("%s %s failed: %s", method, path, error)
            raise ApiError(f"Could not reach the game server ({error.__class__.__name__}).") from error

        if response.status_code >= 400:
            detail = _error_detail(response)
            logger.warning("%s %s -> %s %s", method, path, response.status_code, detail)
            raise ApiError(detail, status_code=response.status_code)

        try:
            body: BaseModel = model.model_validate(response.json())
        except (ValueError, ValidationError) as error:
            logger.warning("%s %s returned an unexpected body: %s", method, path, error)
            raise ApiError("The game server sent an unexpected response.") from error

        logger.debug("%s %s -> %s", method, path, body)
        return body


def _error_detail(response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    detail = body.get("detail") if isinstance(body, dict) else None
    if isinstance(detail, str) and detail:
        return detail
    return f"Request failed with status {response.status_code}."
