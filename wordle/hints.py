"""
Keyboard hint map: one Correctness per letter, built up across guesses.

Promotion rules:
- correct never changes again
- incorrect (or an unscored letter) takes whatever comes next
- incorrect_position takes anything except incorrect

Duplicate letters can score differently inside one row (one L correct, the
other L incorrect), so the map keeps the most useful signal seen so far.
"""

from typing import Dict, Iterable

from .types import ALPHABET, Correctness, Letter, ScoredLetter

HintMap = Dict[Letter, Correctness]


def new_hint_map() -> HintMap:
    return {letter: Correctness.GUESS for letter in ALPHABET}


def update_hint(hints: HintMap, letter: Letter, correctness: Correctness) -> HintMap:
    if letter not in hints:
        raise ValueError(f"No keyboard hint for {letter!r}.")
    if not correctness.is_resolved:
        return hints

    current = hints[letter]
    if current is Correctness.CORRECT:
        return hints
    if current is Correctness.INCORRECT_POSITION and correctness is Correctness.INCORRECT:
        return hints

    hints[letter] = correctness
    return hints


def apply_row(hints: HintMap, row: Iterable[ScoredLetter]) -> HintMap:
    for letter, correctness in row:
        update_hint(hints, letter, correctness)
    return hints
