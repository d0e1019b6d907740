"""
Labels for clarity, plus the Correctness model shared by engine, hints and session.
"""

from dataclasses import dataclass
from enum import Enum
from string import ascii_uppercase
from typing import List, Literal, Tuple

WORD_LENGTH = 5     # cells per row
MAX_ATTEMPTS = 6    # rows per grid
ALPHABET = tuple(ascii_uppercase)
PLAYER_HEADER = "X-Player-Name"  # identifies the player on shared-game requests

Letter = str  # one uppercase ASCII letter
Word = List[Letter]  # 5 letter guess
SessionStatus = Literal["loading", "composing", "submitting", "won", "lost"]
ResolvedCorrectness = Literal["correct", "incorrect_position", "incorrect"]


class Correctness(str, Enum):
    """
    Outcome for one guessed letter.
    GUESS marks a cell that has not been scored yet; evaluation never returns it.
    """

    GUESS = "guess"
    INCORRECT = "incorrect"
    INCORRECT_POSITION = "incorrect_position"
    CORRECT = "correct"

    @property
    def is_resolved(self) -> bool:
        return self is not Correctness.GUESS


ScoredLetter = Tuple[Letter, Correctness]
ScoredRow = List[ScoredLetter]


class RemoteError(Exception):
    """A remote scoring or restore call failed; the session reverts and tells the player."""


@dataclass(frozen=True)
class PlayerContext:
    """Who is playing which shared game. Passed in explicitly, never looked up."""

    player_name: str
    game_id: str
