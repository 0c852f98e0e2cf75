"""
Grading Engine - Digit Classification Logic

Pure state transitions for one incoming digit (no I/O, no clock reads).

Per digit:
1. Pause detection against the previous arrival
2. Overflow grading once the whole target has been recited
3. Bounded lookahead match to absorb recognition dropouts
4. Auto-end check on the wrong-digit limit

The lifecycle controller owns the state and is the only caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Sequence

from loguru import logger

from core.digits.constants import (
    AUTO_END_WRONG_LIMIT,
    DIGIT_SYMBOLS,
    LOOKAHEAD_WINDOW,
    PAUSE_THRESHOLD_SECONDS,
)
from core.digits.errors import EmptyTargetSequenceError, InvalidSessionTransition
from core.digits.tokens import PAUSE, DigitToken, TranscriptToken


@dataclass
class SessionState:
    """
    Live state of one recitation session.

    Invariant: len(transcript) == correct_count + wrong_count + pause_count.
    """
    session_start: datetime
    cursor: int = 0  # Next expected target position
    transcript: list[TranscriptToken] = field(default_factory=list)
    correct_count: int = 0
    wrong_count: int = 0
    pause_count: int = 0
    last_arrival: Optional[datetime] = None
    active: bool = True

    @property
    def digits_recited(self) -> int:
        """Digit tokens emitted so far, including overflow and skipped digits."""
        return self.correct_count + self.wrong_count

    @property
    def accuracy(self) -> float:
        recited = self.digits_recited
        return self.correct_count / recited if recited > 0 else 0.0


@dataclass(frozen=True)
class StateSnapshot:
    """Read-only copy of the live counters and transcript."""
    cursor: int
    correct_count: int
    wrong_count: int
    pause_count: int
    digits_recited: int
    accuracy: float
    transcript: tuple[TranscriptToken, ...]
    active: bool


@dataclass(frozen=True)
class GradeResult:
    """Tokens appended by one digit event, and whether the session must end."""
    tokens: tuple[TranscriptToken, ...]
    terminate: bool


IDLE_SNAPSHOT = StateSnapshot(
    cursor=0,
    correct_count=0,
    wrong_count=0,
    pause_count=0,
    digits_recited=0,
    accuracy=0.0,
    transcript=(),
    active=False,
)


def new_session_state(session_start: datetime) -> SessionState:
    """Fresh state for a session starting at session_start."""
    return SessionState(session_start=session_start)


def snapshot_state(state: Optional[SessionState]) -> StateSnapshot:
    if state is None:
        return IDLE_SNAPSHOT
    return StateSnapshot(
        cursor=state.cursor,
        correct_count=state.correct_count,
        wrong_count=state.wrong_count,
        pause_count=state.pause_count,
        digits_recited=state.digits_recited,
        accuracy=state.accuracy,
        transcript=tuple(state.transcript),
        active=state.active,
    )


def is_pause(last_arrival: Optional[datetime], arrival_time: datetime) -> bool:
    """True when the gap since the previous digit strictly exceeds the threshold."""
    if last_arrival is None:
        return False
    return (arrival_time - last_arrival).total_seconds() > PAUSE_THRESHOLD_SECONDS


def find_lookahead_match(target: Sequence[str], cursor: int, digit: str) -> Optional[int]:
    """
    Smallest offset i in the lookahead window with target[cursor + i] == digit.

    Args:
        target: Target digit sequence
        cursor: Next expected position (must be < len(target))
        digit: Incoming digit symbol

    Returns:
        Relative offset of the first match, or None
    """
    window = min(LOOKAHEAD_WINDOW, len(target) - cursor)
    for offset in range(window):
        if target[cursor + offset] == digit:
            return offset
    return None


def grade_digit(
    state: SessionState,
    target: Sequence[str],
    digit: str,
    arrival_time: datetime,
) -> GradeResult:
    """
    Grade one incoming digit and update the state in place.

    Args:
        state: Active session state (modified in place)
        target: Target digit sequence for the session's constant
        digit: Recognized digit symbol '0'..'9'
        arrival_time: When the digit arrived

    Returns:
        GradeResult with the newly appended tokens and the termination flag

    Raises:
        InvalidSessionTransition: If the state is not active
        EmptyTargetSequenceError: If target has no digits
        ValueError: If digit is not a single ASCII digit
    """
    if not state.active:
        raise InvalidSessionTransition("Cannot grade a digit for an inactive session")
    if not target:
        raise EmptyTargetSequenceError("Target sequence is empty")
    if digit not in DIGIT_SYMBOLS:
        raise ValueError(f"Not a digit symbol: {digit!r}")

    appended: list[TranscriptToken] = []
    wrong_before = state.wrong_count

    if is_pause(state.last_arrival, arrival_time):
        appended.append(PAUSE)
        state.pause_count += 1
    state.last_arrival = arrival_time

    if state.cursor >= len(target):
        # Whole sequence already recited; cursor stays at the end
        appended.append(DigitToken(symbol=digit, correct=False))
        state.wrong_count += 1
    else:
        offset = find_lookahead_match(target, state.cursor, digit)
        if offset is None:
            appended.append(DigitToken(symbol=digit, correct=False))
            state.wrong_count += 1
            state.cursor += 1
        else:
            for position in range(state.cursor, state.cursor + offset):
                appended.append(DigitToken(symbol=target[position], correct=False))
                state.wrong_count += 1
            appended.append(DigitToken(symbol=digit, correct=True))
            state.correct_count += 1
            state.cursor += offset + 1

    state.transcript.extend(appended)

    terminate = state.wrong_count > wrong_before and state.wrong_count >= AUTO_END_WRONG_LIMIT
    if terminate:
        logger.debug(f"Wrong-digit limit reached ({state.wrong_count}); signalling auto-end")

    return GradeResult(tokens=tuple(appended), terminate=terminate)
