"""Tests for the grading engine."""

import pytest

from core.digits import (
    PAUSE,
    DigitToken,
    EmptyTargetSequenceError,
    InvalidSessionTransition,
    count_tokens,
    grade_digit,
    new_session_state,
)
from core.digits.grading import find_lookahead_match, is_pause
from tests.conftest import T0, at


def _grade_all(state, target, digits, step=0.5):
    results = []
    for index, digit in enumerate(digits):
        results.append(grade_digit(state, target, digit, at(index * step)))
    return results


def _assert_invariants(state):
    counts = count_tokens(state.transcript)
    assert len(state.transcript) == state.correct_count + state.wrong_count + state.pause_count
    assert counts.correct == state.correct_count
    assert counts.wrong == state.wrong_count
    assert counts.pauses == state.pause_count


def test_perfect_recitation_is_all_correct():
    target = tuple("31415926")
    state = new_session_state(T0)

    results = _grade_all(state, target, "31415926")

    assert state.wrong_count == 0
    assert state.pause_count == 0
    assert state.correct_count == 8
    assert state.cursor == 8
    assert state.transcript == [DigitToken(d, True) for d in "31415926"]
    assert not any(r.terminate for r in results)
    _assert_invariants(state)


def test_pause_inserted_above_threshold():
    target = tuple("314")
    state = new_session_state(T0)

    grade_digit(state, target, "3", at(0))
    result = grade_digit(state, target, "1", at(2.1))

    assert result.tokens == (PAUSE, DigitToken("1", True))
    assert state.transcript == [DigitToken("3", True), PAUSE, DigitToken("1", True)]
    assert state.pause_count == 1
    _assert_invariants(state)


def test_no_pause_at_exact_threshold():
    target = tuple("314")
    state = new_session_state(T0)

    grade_digit(state, target, "3", at(0))
    grade_digit(state, target, "1", at(2.0))

    assert state.pause_count == 0
    assert PAUSE not in state.transcript


def test_no_pause_before_first_digit():
    assert is_pause(None, at(100)) is False
    state = new_session_state(T0)
    grade_digit(state, tuple("3"), "3", at(100))
    assert state.pause_count == 0


def test_lookahead_skip_marks_skipped_digit_wrong():
    target = tuple("314")
    state = new_session_state(T0)

    result = grade_digit(state, target, "1", at(0))

    assert result.tokens == (DigitToken("3", False), DigitToken("1", True))
    assert state.cursor == 2
    assert state.wrong_count == 1
    assert state.correct_count == 1
    _assert_invariants(state)


def test_genuine_miss_consumes_one_position():
    target = tuple("314")
    state = new_session_state(T0)

    result = grade_digit(state, target, "9", at(0))

    assert result.tokens == (DigitToken("9", False),)
    assert state.cursor == 1
    assert state.wrong_count == 1
    assert state.correct_count == 0


def test_lookahead_prefers_smallest_offset():
    # '1' matches at offsets 0 and 1
    target = tuple("113")
    assert find_lookahead_match(target, 0, "1") == 0

    state = new_session_state(T0)
    result = grade_digit(state, target, "1", at(0))
    assert result.tokens == (DigitToken("1", True),)
    assert state.cursor == 1


def test_lookahead_window_is_two_positions():
    target = tuple("3141")
    # '4' sits at offset 2, outside the window
    assert find_lookahead_match(target, 0, "4") is None

    state = new_session_state(T0)
    result = grade_digit(state, target, "4", at(0))
    assert result.tokens == (DigitToken("4", False),)
    assert state.cursor == 1


def test_lookahead_window_shrinks_at_sequence_end():
    target = tuple("31")
    state = new_session_state(T0)
    grade_digit(state, target, "3", at(0))

    # Only position 1 remains; '3' does not match it
    result = grade_digit(state, target, "3", at(0.5))
    assert result.tokens == (DigitToken("3", False),)
    assert state.cursor == 2


def test_overflow_grades_wrong_without_advancing():
    target = tuple("31")
    state = new_session_state(T0)
    _grade_all(state, target, "31")
    assert state.cursor == 2

    result = grade_digit(state, target, "4", at(5))
    assert result.tokens == (PAUSE, DigitToken("4", False))
    assert state.cursor == 2

    # Even a digit equal to the last target is wrong once the sequence is done
    grade_digit(state, target, "1", at(5.5))
    assert state.transcript[-1] == DigitToken("1", False)
    assert state.cursor == 2
    assert state.digits_recited == 4
    _assert_invariants(state)


def test_wrong_limit_triggers_termination():
    target = tuple("0" * 50)
    state = new_session_state(T0)

    results = _grade_all(state, target, "9" * 10)

    assert [r.terminate for r in results] == [False] * 9 + [True]
    assert state.wrong_count == 10


def test_skip_penalty_can_reach_wrong_limit():
    target = tuple("0" * 9 + "12")
    state = new_session_state(T0)
    _grade_all(state, target, "9" * 9)
    assert state.wrong_count == 9

    # '2' matches at offset 1: the skipped '1' is the tenth wrong digit
    result = grade_digit(state, target, "2", at(4.5))

    assert result.tokens == (DigitToken("1", False), DigitToken("2", True))
    assert state.wrong_count == 10
    assert result.terminate is True


def test_correct_digit_never_terminates():
    target = tuple("0" * 9 + "5")
    state = new_session_state(T0)
    state.wrong_count = 12

    result = grade_digit(state, target, "0", at(0))

    assert result.terminate is False


def test_counts_and_cursor_are_monotonic():
    target = tuple("3141592653")
    state = new_session_state(T0)
    previous = (0, 0, 0, 0)
    for index, digit in enumerate("3145926999999"):
        grade_digit(state, target, digit, at(index * 1.5))
        current = (state.cursor, state.correct_count, state.wrong_count, state.pause_count)
        assert all(c >= p for c, p in zip(current, previous))
        assert state.cursor <= len(target)
        _assert_invariants(state)
        previous = current


def test_accuracy_excludes_pauses():
    target = tuple("0123456789")
    state = new_session_state(T0)
    state.correct_count = 7
    state.wrong_count = 3
    state.pause_count = 4

    assert state.digits_recited == 10
    assert state.accuracy == 0.7


def test_accuracy_is_zero_without_digits():
    assert new_session_state(T0).accuracy == 0.0


def test_rejects_inactive_state():
    state = new_session_state(T0)
    state.active = False
    with pytest.raises(InvalidSessionTransition):
        grade_digit(state, tuple("3"), "3", at(0))


def test_rejects_empty_target():
    with pytest.raises(EmptyTargetSequenceError):
        grade_digit(new_session_state(T0), (), "3", at(0))


@pytest.mark.parametrize("bad", ["", "12", "a", "٣"])
def test_rejects_non_digit_symbols(bad):
    with pytest.raises(ValueError):
        grade_digit(new_session_state(T0), tuple("3"), bad, at(0))
