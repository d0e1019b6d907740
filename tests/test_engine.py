"""
Testing pure game logic.
"""

import pytest

from wordle.engine import evaluate, is_win, is_winning_row, letter_positions, normalize_word, score_row
from wordle.types import Correctness

C = Correctness.CORRECT
P = Correctness.INCORRECT_POSITION
X = Correctness.INCORRECT

def test_letter_positions_groups_repeats():
    assert letter_positions("HELLO") == {"H": {0}, "E": {1}, "L": {2, 3}, "O": {4}}

def test_evaluate_no_matches():
    assert evaluate("HELLO", "QUIRK") == [X, X, X, X, X]

def test_evaluate_llama_against_hello():
    # L is in HELLO but never at 0 or 1; A and M are not in it at all
    assert evaluate("HELLO", "LLAMA") == [P, P, X, X, X]

def test_evaluate_exact_word_is_all_correct():
    assert evaluate("HELLO", "HELLO") == [C] * 5

def test_evaluate_repeated_letter_marks_each_match_correct():
    # answer L's at {2, 3}, guess L's at {0, 2, 3, 4}
    assert evaluate("HELLO", "LOLLL") == [P, P, C, C, P]

def test_evaluate_absent_repeated_letter_is_incorrect_everywhere():
    assert evaluate("CRANE", "ZZZZZ") == [X, X, X, X, X]

def test_evaluate_accepts_lists_and_strings_alike():
    assert evaluate(list("CRANE"), "TRACE") == evaluate("CRANE", list("TRACE"))
    assert evaluate("CRANE", "TRACE") == [X, C, C, P, C]

def test_evaluate_never_returns_unscored_cells():
    pairs = [("HELLO", "LLAMA"), ("ABBEY", "BABES"), ("SPEED", "ERASE"), ("CRANE", "NACRE")]
    for answer, guess in pairs:
        assert Correctness.GUESS not in evaluate(answer, guess)

def test_correct_iff_same_letter_same_position():
    pairs = [("ABBEY", "BABES"), ("SPEED", "ERASE"), ("CRANE", "NACRE"), ("MOMMY", "MAMMA")]
    for answer, guess in pairs:
        result = evaluate(answer, guess)
        for i in range(5):
            assert (result[i] is C) == (answer[i] == guess[i])

def test_correct_count_never_exceeds_letter_overlap():
    pairs = [("ABBEY", "BBBBB"), ("MOMMY", "MAMMA"), ("HELLO", "LOLLL"), ("EERIE", "EEEEE")]
    for answer, guess in pairs:
        result = evaluate(answer, guess)
        for letter in set(guess):
            correct = sum(1 for i in range(5) if guess[i] == letter and result[i] is C)
            assert correct <= min(answer.count(letter), guess.count(letter))

def test_evaluate_rejects_mismatched_lengths():
    with pytest.raises(ValueError):
        evaluate("HELLO", "HELL")
    with pytest.raises(ValueError):
        evaluate("", "")

def test_score_row_pairs_letters_with_results():
    assert score_row("HELLO", "HOLES") == [("H", C), ("O", P), ("L", C), ("E", P), ("S", X)]

def test_is_win_true_and_false():
    assert is_win("HELLO", "HELLO") is True
    assert is_win("HELLO", list("HELLO")) is True
    assert is_win("HELLO", "HELLS") is False
    assert is_win("HELLO", "HELL") is False

def test_is_winning_row():
    assert is_winning_row(score_row("HELLO", "HELLO")) is True
    assert is_winning_row(score_row("HELLO", "HOLES")) is False
    assert is_winning_row([]) is False

def test_normalize_word():
    assert normalize_word("  crane ", 5) == ["C", "R", "A", "N", "E"]
    with pytest.raises(ValueError):
        normalize_word("cran", 5)
    with pytest.raises(ValueError):
        normalize_word("cr4ne", 5)
