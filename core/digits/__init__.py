"""
Digit Trainer - recitation grading for pi, phi and e

Main API for the constant-recitation trainer.

Digits arrive one at a time (speech, keypad or pasted text), are graded live
against the constant's target sequence, and each finished session is stored
in a per-constant history.

Quick start:
    from core import digits

    store = digits.SessionStore()
    controller = digits.SessionController(digits.ConstantKind.PI, store=store)

    controller.start()
    controller.on_digit_event("3")
    outcome = controller.end()
"""

# Grading engine (algorithm logic)
from core.digits.grading import (
    GradeResult,
    SessionState,
    StateSnapshot,
    grade_digit,
    new_session_state,
    snapshot_state,
)

# Session lifecycle
from core.digits.lifecycle import DigitEventResult, SessionController
from core.digits.summary import SessionOutcome, SessionSummary, build_summary

# Persistence
from core.digits.database import init_db, reset_db, is_test_mode
from core.digits.store import SessionStore

# Transcript tokens
from core.digits.tokens import (
    PAUSE,
    DigitToken,
    PauseToken,
    TranscriptToken,
    count_tokens,
)

# Target sequences
from core.digits.sequences import get_target_sequence, sequence_length

# Transcription adapter
from core.digits.transcription import DigitFeed, extract_digits, map_to_digit

# Constants and parameters
from core.digits.constants import (
    ConstantKind,
    TAB_ORDER,
    PAUSE_THRESHOLD_SECONDS,
    LOOKAHEAD_WINDOW,
    AUTO_END_WRONG_LIMIT,
)

# Errors
from core.digits.errors import (
    DigitTrainerError,
    InvalidSessionTransition,
    EmptyTargetSequenceError,
    StoreUnavailableError,
)


__all__ = [
    # Grading engine
    "GradeResult",
    "SessionState",
    "StateSnapshot",
    "grade_digit",
    "new_session_state",
    "snapshot_state",

    # Lifecycle
    "DigitEventResult",
    "SessionController",
    "SessionOutcome",
    "SessionSummary",
    "build_summary",

    # Persistence
    "init_db",
    "reset_db",
    "is_test_mode",
    "SessionStore",

    # Tokens
    "PAUSE",
    "DigitToken",
    "PauseToken",
    "TranscriptToken",
    "count_tokens",

    # Sequences
    "get_target_sequence",
    "sequence_length",

    # Transcription
    "DigitFeed",
    "extract_digits",
    "map_to_digit",

    # Parameters
    "ConstantKind",
    "TAB_ORDER",
    "PAUSE_THRESHOLD_SECONDS",
    "LOOKAHEAD_WINDOW",
    "AUTO_END_WRONG_LIMIT",

    # Errors
    "DigitTrainerError",
    "InvalidSessionTransition",
    "EmptyTargetSequenceError",
    "StoreUnavailableError",
]
