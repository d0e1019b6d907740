"""
Session state machine for one round of guessing.

Holds the 6x5 grid, the (row, col) cursor, the keyboard hint map and the
round status. Rows are scored either locally (secret answer known) or by a
remote scorer (shared game on the API server).

Status flow:
  composing --submit--> submitting --scored--> composing (next row) | won | lost
                                   --failed--> composing (same row, cells untouched)
  loading --restore--> composing | won | lost
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, List, Mapping, Optional, Sequence, Tuple

from .engine import is_winning_row, normalize_word, score_row
from .hints import apply_row, new_hint_map
from .types import (
    ALPHABET,
    MAX_ATTEMPTS,
    WORD_LENGTH,
    Correctness,
    Letter,
    PlayerContext,
    RemoteError,
    ScoredRow,
    SessionStatus,
    Word,
)

logger = logging.getLogger(__name__)

# word -> (scored row, round_over)
Scorer = Callable[[Word], Tuple[ScoredRow, bool]]
# () -> (submitted rows, round_over)
Fetcher = Callable[[], Tuple[List[ScoredRow], bool]]
Notifier = Callable[[str], None]


@dataclass(frozen=True)
class Cell:
    letter: Optional[Letter] = None
    correctness: Correctness = Correctness.GUESS

    @property
    def is_empty(self) -> bool:
        return self.letter is None


EMPTY_CELL = Cell()


class Session:
    def __init__(
        self,
        answer: Optional[str] = None,
        scorer: Optional[Scorer] = None,
        context: Optional[PlayerContext] = None,
        notify: Optional[Notifier] = None,
        rows: int = MAX_ATTEMPTS,
        width: int = WORD_LENGTH,
    ) -> None:
        if answer is None and scorer is None:
            raise ValueError("A session needs either a secret answer or a remote scorer.")

        self.rows = rows
        self.width = width
        self.context = context
        self.last_message: Optional[str] = None

        self._answer: Optional[Word] = normalize_word(answer, width) if answer is not None else None
        self._scorer = scorer
        self._notify = notify

        self._grid: List[List[Cell]] = [[EMPTY_CELL] * width for _ in range(rows)]
        self._row = 0
        self._col = 0
        self._hints = new_hint_map()
        self._status: SessionStatus = "composing"
        self._pending: Optional[Word] = None

    # --- Read-only views for the rendering layer ---

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def game_over(self) -> bool:
        return self._status in ("won", "lost")

    @property
    def cursor(self) -> Tuple[int, int]:
        return (self._row, self._col)

    @property
    def attempts_used(self) -> int:
        return self._row

    @property
    def grid(self) -> Tuple[Tuple[Cell, ...], ...]:
        return tuple(tuple(row) for row in self._grid)

    @property
    def hints(self) -> Mapping[Letter, Correctness]:
        return MappingProxyType(dict(self._hints))

    @property
    def current_word(self) -> Word:
        """Letters typed so far in the active row."""
        if self._row >= self.rows:
            return []
        return [cell.letter for cell in self._grid[self._row][: self._col]]

    # --- Character-level edits ---

    def input_letter(self, ch: str) -> bool:
        if self._status != "composing" or self._col >= self.width:
            return False
        if not isinstance(ch, str) or len(ch) != 1:
            return False
        letter = ch.upper()
        if letter not in ALPHABET:
            return False

        self._grid[self._row][self._col] = Cell(letter)
        self._col += 1
        return True

    def backspace(self) -> bool:
        if self._status != "composing" or self._col == 0:
            return False
        self._col -= 1
        self._grid[self._row][self._col] = EMPTY_CELL
        return True

    # --- Submission ---

    def submit(self) -> bool:
        """
        Score the active row and move on.
        Returns True when the row was scored, False when the submission was
        rejected (row not full, round over) or the remote scorer failed.
        """
        word = self.begin_submit()
        if word is None:
            return False

        if self._answer is not None:
            return self.complete_submit(score_row(self._answer, word), round_over=False)

        try:
            scored, round_over = self._scorer(word)
        except RemoteError as error:
            self.fail_submit(str(error))
            return False
        except Exception as error:
            # Any scorer failure must end the submission, or the session stays locked
            logger.exception("Scorer raised while scoring %s", "".join(word))
            self.fail_submit(f"Scoring failed ({error.__class__.__name__}).")
            return False
        return self.complete_submit(scored, round_over)

    def begin_submit(self) -> Optional[Word]:
        """Lock the active row for scoring. Returns the word to score, or None if not allowed."""
        if self._status != "composing" or self._col != self.width:
            return None

        word = self.current_word
        self._pending = word
        self._status = "submitting"
        logger.info("Submitting %s (row %d)", "".join(word), self._row + 1)
        return word

    def complete_submit(self, scored_row: Sequence[Tuple[str, object]], round_over: bool) -> bool:
        if self._status != "submitting":
            return False

        try:
            row = self._check_row(scored_row, expected=self._pending)
        except (TypeError, ValueError) as error:
            self.fail_submit(f"Unexpected scoring result: {error}")
            return False

        for col, (letter, correctness) in enumerate(row):
            self._grid[self._row][col] = Cell(letter, correctness)
        apply_row(self._hints, row)

        self._pending = None
        self._row += 1
        self._col = 0
        self._settle(row, round_over)
        return True

    def fail_submit(self, reason: str) -> bool:
        """Put the pending row back the way it was before submit; the user can retry."""
        if self._status != "submitting":
            return False

        for col, letter in enumerate(self._pending):
            self._grid[self._row][col] = Cell(letter)
        self._pending = None
        self._status = "composing"

        logger.warning("Submission reverted: %s", reason)
        self._emit(f"Could not submit guess: {reason}")
        return True

    # --- Resuming a shared game ---

    def load(self, fetch: Fetcher) -> bool:
        """Fetch previously submitted rows and replay them. Stays in 'loading' on failure."""
        if self._status == "submitting":
            return False

        self._status = "loading"
        try:
            rows, round_over = fetch()
            self.restore(rows, round_over)
        except (RemoteError, TypeError, ValueError) as error:
            logger.warning("Could not restore game: %s", error)
            self._emit(f"Could not load game: {error}")
            return False
        except Exception as error:
            logger.exception("Fetching the saved game raised")
            self._emit(f"Could not load game ({error.__class__.__name__}).")
            return False
        return True

    def restore(self, rows: Sequence[Sequence[Tuple[str, object]]], round_over: bool) -> None:
        """
        Rebuild grid and hints from rows that were already scored.
        Rows go through the hint aggregator only; nothing is re-evaluated.
        """
        if len(rows) > self.rows:
            raise ValueError(f"Cannot restore {len(rows)} rows into a {self.rows}-row grid.")
        checked = [self._check_row(row) for row in rows]

        self._grid = [[EMPTY_CELL] * self.width for _ in range(self.rows)]
        self._hints = new_hint_map()
        for index, row in enumerate(checked):
            self._grid[index] = [Cell(letter, correctness) for letter, correctness in row]
            apply_row(self._hints, row)

        self._row = len(checked)
        self._col = 0
        self._pending = None
        self._status = "composing"
        if checked or round_over:
            self._settle(checked[-1] if checked else [], round_over, announce=False)
        logger.info("Restored %d row(s), status %s", self._row, self._status)

    # --- Helpers ---

    def _settle(self, row: ScoredRow, round_over: bool, announce: bool = True) -> None:
        if is_winning_row(row):
            self._status = "won"
            message = "You won!"
        elif round_over or self._row >= self.rows:
            self._status = "lost"
            message = "Game over"
            if self._answer is not None:
                message += f". The word was {''.join(self._answer)}"
        else:
            self._status = "composing"
            return

        logger.info("Round finished: %s after %d guess(es)", self._status, self._row)
        if announce:
            self._emit(message)

    def _check_row(
        self, row: Sequence[Tuple[str, object]], expected: Optional[Word] = None
    ) -> ScoredRow:
        if len(row) != self.width:
            raise ValueError(f"expected {self.width} letters, got {len(row)}")

        checked: ScoredRow = []
        for col, (letter, value) in enumerate(row):
            correctness = Correctness(value)
            if not correctness.is_resolved:
                raise ValueError(f"letter {col + 1} was not scored")
            if letter not in ALPHABET:
                raise ValueError(f"{letter!r} is not a letter")
            if expected is not None and expected[col] != letter:
                raise ValueError(f"letter {col + 1} is {letter!r}, submitted {expected[col]!r}")
            checked.append((letter, correctness))
        return checked

    def _emit(self, message: str) -> None:
        self.last_message = message
        if self._notify is not None:
            self._notify(message)
