"""
Testing the keyboard hint map (promotion rules).
"""

import pytest

from wordle.engine import score_row
from wordle.hints import apply_row, new_hint_map, update_hint
from wordle.types import ALPHABET, Correctness

C = Correctness.CORRECT
P = Correctness.INCORRECT_POSITION
X = Correctness.INCORRECT
G = Correctness.GUESS

def test_new_map_has_every_letter_unscored():
    hints = new_hint_map()
    assert sorted(hints) == list(ALPHABET)
    assert set(hints.values()) == {G}

def test_unscored_letter_takes_any_result():
    for value in (X, P, C):
        hints = new_hint_map()
        update_hint(hints, "A", value)
        assert hints["A"] is value

def test_correct_is_never_demoted():
    hints = new_hint_map()
    update_hint(hints, "A", C)
    for value in (X, P, G, X, P):
        update_hint(hints, "A", value)
        assert hints["A"] is C

def test_present_is_not_demoted_to_absent():
    hints = new_hint_map()
    update_hint(hints, "L", P)
    update_hint(hints, "L", X)
    assert hints["L"] is P
    update_hint(hints, "L", C)
    assert hints["L"] is C

def test_absent_can_be_promoted():
    hints = new_hint_map()
    update_hint(hints, "E", X)
    update_hint(hints, "E", P)
    assert hints["E"] is P

def test_update_returns_the_same_map():
    hints = new_hint_map()
    assert update_hint(hints, "Q", X) is hints

def test_unknown_letter_is_a_programming_error():
    with pytest.raises(ValueError):
        update_hint(new_hint_map(), "1", C)

def test_apply_row_keeps_best_signal_for_doubled_letter():
    # answer has one O; the second O of the guess scores differently
    hints = apply_row(new_hint_map(), [("O", C), ("O", X)])
    assert hints["O"] is C
    hints = apply_row(new_hint_map(), [("L", P), ("L", X)])
    assert hints["L"] is P

def test_apply_row_from_evaluated_guesses():
    hints = new_hint_map()
    apply_row(hints, score_row("HELLO", "LLAMA"))
    assert hints["L"] is P
    assert hints["A"] is X
    assert hints["M"] is X
    apply_row(hints, score_row("HELLO", "HELLO"))
    assert hints["L"] is C
    assert hints["H"] is C
    assert hints["Z"] is G
