"""
Pure game logic (no HTTP, no storage).
We score each guessed letter against the secret answer:
- correct: same letter at the same position
- incorrect_position: letter is in the answer, but not at this position
- incorrect: letter does not appear in the answer at all

Duplicate letters are handled by comparing position sets per letter,
so the result never depends on the order we walk the word in.
"""

from typing import Dict, List, Sequence, Set

from .types import Correctness, Letter, ScoredRow, Word


def normalize_word(text: str, width: int) -> Word:
    """
    Strip + uppercase, then check it is exactly `width` ASCII letters.
    Returns the word as a list of letters.
    """
    cleaned = text.strip().upper()
    if len(cleaned) != width:
        raise ValueError(f"Word must have exactly {width} letters.")
    for ch in cleaned:
        if not ("A" <= ch <= "Z"):
            raise ValueError("Word may only contain the letters A-Z.")
    return list(cleaned)


def letter_positions(word: Sequence[Letter]) -> Dict[Letter, Set[int]]:
    """
    Example:
      word = "HELLO"
      -> {"H": {0}, "E": {1}, "L": {2, 3}, "O": {4}}
    """
    positions: Dict[Letter, Set[int]] = {}
    for index, letter in enumerate(word):
        positions.setdefault(letter, set()).add(index)
    return positions


def evaluate(answer: Sequence[Letter], guess: Sequence[Letter]) -> List[Correctness]:
    """
    Example:
      answer = "HELLO"
      guess  = "LLAMA"
      L: guess {0, 1}, answer {2, 3} -> no overlap, L is in the answer -> incorrect_position x2
      A: not in answer -> incorrect at {2, 4}
      M: not in answer -> incorrect at {3}
      Returns [incorrect_position, incorrect_position, incorrect, incorrect, incorrect]
    """

    # 0. Validate lengths match
    n = len(answer)
    if n == 0 or len(guess) != n:
        raise ValueError("Answer and guess must be the same non-zero length.")

    answer_positions = letter_positions(answer)
    guess_positions = letter_positions(guess)

    result: List[Correctness] = [Correctness.GUESS] * n

    for letter, in_guess in guess_positions.items():
        in_answer = answer_positions.get(letter, set())

        # 1. Exact position matches
        for index in in_guess & in_answer:
            result[index] = Correctness.CORRECT

        # 2. Surplus occurrences: present somewhere else, or absent altogether
        surplus = Correctness.INCORRECT_POSITION if in_answer else Correctness.INCORRECT
        for index in in_guess - in_answer:
            result[index] = surplus

    return result


def score_row(answer: Sequence[Letter], guess: Sequence[Letter]) -> ScoredRow:
    """Pair every guessed letter with its evaluation (the wire shape of a scored row)."""
    return list(zip(guess, evaluate(answer, guess)))


def is_win(answer: Sequence[Letter], guess: Sequence[Letter]) -> bool:
    """
    Win = every letter sits at the same positions in both words.
    Mismatched lengths are never a win.
    """
    if len(answer) == 0 or len(guess) != len(answer):
        return False
    return letter_positions(guess) == letter_positions(answer)


def is_winning_row(row: ScoredRow) -> bool:
    return len(row) > 0 and all(correctness is Correctness.CORRECT for _, correctness in row)
