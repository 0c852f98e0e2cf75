"""
Session Summary - the finalized result of one recitation session.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from core.digits.constants import ConstantKind
from core.digits.grading import SessionState
from core.digits.tokens import TranscriptToken


@dataclass(frozen=True)
class SessionSummary:
    """
    Immutable record of a finished session.

    Created exactly once when a session ends, then handed to the session store.
    """
    constant: ConstantKind
    started_at: datetime
    duration_seconds: float
    digits_recited: int
    correct: int
    wrong: int
    pauses: int
    accuracy: float  # 0.0 ... 1.0
    tokens: tuple[TranscriptToken, ...]
    auto_ended: bool = False
    record_id: str = field(default_factory=lambda: str(uuid.uuid4()))


@dataclass(frozen=True)
class SessionOutcome:
    """
    What the caller gets back when a session ends.

    persist_error is set when the store rejected the summary; the summary
    itself is still valid for display.
    """
    summary: SessionSummary
    persist_error: Optional[str] = None

    @property
    def persisted(self) -> bool:
        return self.persist_error is None


def build_summary(
    constant: ConstantKind,
    state: SessionState,
    ended_at: datetime,
    auto: bool = False,
) -> SessionSummary:
    """
    Convert a session state into its summary.

    digits_recited counts every Digit token (correct, wrong, skipped and
    overflow); pauses are excluded from the accuracy denominator.
    """
    duration = max(0.0, (ended_at - state.session_start).total_seconds())
    return SessionSummary(
        constant=constant,
        started_at=state.session_start,
        duration_seconds=duration,
        digits_recited=state.digits_recited,
        correct=state.correct_count,
        wrong=state.wrong_count,
        pauses=state.pause_count,
        accuracy=state.accuracy,
        tokens=tuple(state.transcript),
        auto_ended=auto,
    )
