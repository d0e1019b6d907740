"""
Explicit validation & Pydantic models
- Models are used to validate and serialize/deserialize data
  exchanged between the client and server.
- Defines the structure of API requests and responses.
- The same models decode responses on the client side (api_client.py).
"""

from typing import List, Tuple

from pydantic import BaseModel, Field, field_validator

from .engine import normalize_word
from .types import WORD_LENGTH, ResolvedCorrectness

# A scored letter travels as a 2-item JSON array: ["H", "correct"]
ScoredLetterOut = Tuple[str, ResolvedCorrectness]


# 1. Create a shared game from a secret answer
class CreateGameRequest(BaseModel):
    answer: str = Field(..., description="The secret 5 letter answer")

    @field_validator("answer")
    @classmethod
    def validate_answer(cls, answer: str) -> str:
        return "".join(normalize_word(answer, WORD_LENGTH))

    model_config = {"json_schema_extra": {"examples": [{"answer": "HELLO"}]}}


class CreateGameResponse(BaseModel):
    game_id: str = Field(..., description="Unique ID for the game; answer is never returned")


# 2. Validates player's guess
class PlayRequest(BaseModel):
    guess: List[str] = Field(..., description="The guessed letters, one per item")

    @field_validator("guess")
    @classmethod
    def validate_letters(cls, guess_list: List[str]) -> List[str]:
        """
        Each item must be a single letter A-Z (case-insensitive).
        We do not check the length here; the repository does, same as for answers.
        """
        letters = []
        for item in guess_list:
            letter = item.strip().upper()
            if len(letter) != 1 or not ("A" <= letter <= "Z"):
                raise ValueError("Each item must be a single letter A-Z.")
            letters.append(letter)
        return letters

    model_config = {"json_schema_extra": {"examples": [{"guess": ["C", "R", "A", "N", "E"]}]}}


# 3. Remote scoring result for one row
class PlayResponse(BaseModel):
    game_over: bool = Field(..., description="True once the player's round has ended")
    guess: List[ScoredLetterOut] = Field(..., description="Each guessed letter with its correctness")


# 4. One submitted row in a player's history
class GuessOut(BaseModel):
    guess: List[ScoredLetterOut] = Field(..., description="Scored letters of this row")
    submit_time: float = Field(..., description="When the guess was made")


# 5. Game-state restore for one player
class PlayerStateOut(BaseModel):
    game_id: str = Field(..., description="Unique ID for the game")
    name: str = Field(..., description="Player name")
    start_time: float = Field(..., description="When the player joined")
    guesses: List[GuessOut] = Field(..., description="All rows submitted so far, oldest first")
    round_over: bool = Field(..., description="True once the player won or used every attempt")
    won: bool = Field(False, description="True if the last row was fully correct")


# 6. Leaderboard snapshot for whoever created the game
class PlayerOut(BaseModel):
    name: str
    start_time: float
    guesses: List[GuessOut]


class ManageGameResponse(BaseModel):
    start_time: float = Field(..., description="When the game was created")
    players: List[PlayerOut] = Field(..., description="Everyone registered for the game")
    answer: str = Field(..., description="The secret answer")
