"""
Session Lifecycle Controller

Owns the live session state for one constant and drives it through
Idle -> Active -> Idle:

- start():           Idle -> Active, fresh state
- on_digit_event():  grade while Active, drop while Idle
- end(auto):         Active -> Idle, build + persist the summary
- reset():           any -> Idle, discard without a summary

All mutations run under one re-entrant lock, so digit events are applied one
at a time and each call is atomic for observers.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional, Protocol, Sequence

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from core.digits.constants import ConstantKind
from core.digits.errors import InvalidSessionTransition, StoreUnavailableError
from core.digits.grading import (
    IDLE_SNAPSHOT,
    SessionState,
    StateSnapshot,
    grade_digit,
    new_session_state,
    snapshot_state,
)
from core.digits.sequences import get_target_sequence, validate_sequence
from core.digits.summary import SessionOutcome, SessionSummary, build_summary
from core.digits.tokens import TranscriptToken


Clock = Callable[[], datetime]
SnapshotListener = Callable[[StateSnapshot], None]
OutcomeListener = Callable[[SessionOutcome], None]


class SummarySink(Protocol):
    """The part of the session store the controller uses."""

    def append(self, summary: SessionSummary) -> None: ...


class DigitSource(Protocol):
    """Start/stop control of the transcription collaborator."""

    def start(self, on_digit: Callable[[str, Optional[datetime]], object]) -> None: ...

    def stop(self) -> None: ...


@dataclass(frozen=True)
class DigitEventResult:
    """
    Result of delivering one digit to the controller.

    outcome is set when this digit triggered the automatic end of the session.
    """
    tokens: tuple[TranscriptToken, ...]
    snapshot: StateSnapshot
    outcome: Optional[SessionOutcome] = None

    @property
    def dropped(self) -> bool:
        return not self.tokens and self.outcome is None


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SessionController:
    """
    Start/end/reset semantics around the grading engine for one constant.
    """

    def __init__(
        self,
        constant: ConstantKind,
        store: Optional[SummarySink] = None,
        target: Optional[Sequence[str]] = None,
        clock: Optional[Clock] = None,
        source: Optional[DigitSource] = None,
    ):
        """
        Args:
            constant: Constant being drilled
            store: Receives each finished summary; None keeps results in memory only
            target: Override of the constant's target digits (validated on start)
            clock: Time source for session start/end and unstamped digits
            source: Transcription collaborator started/stopped with the session
        """
        self.constant = ConstantKind(constant)
        self.store = store
        self.source = source
        self._target = tuple(target) if target is not None else None
        self._clock = clock or utc_now
        self._lock = threading.RLock()
        self._state: Optional[SessionState] = None
        self._listeners: list[SnapshotListener] = []
        self._end_listeners: list[OutcomeListener] = []

    # ---- Read-only surface ----

    @property
    def active(self) -> bool:
        with self._lock:
            return self._state is not None and self._state.active

    @property
    def target(self) -> tuple[str, ...]:
        if self._target is not None:
            return self._target
        return get_target_sequence(self.constant)

    def snapshot(self) -> StateSnapshot:
        with self._lock:
            return snapshot_state(self._state)

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """
        Register a listener called with a fresh snapshot after every change.

        Listeners run under the controller lock, in state order, and must not
        block.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def on_session_end(self, listener: OutcomeListener) -> Callable[[], None]:
        """Register a listener for every finished session (manual or automatic)."""
        self._end_listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._end_listeners:
                self._end_listeners.remove(listener)

        return _unsubscribe

    # ---- Transitions ----

    def start(self) -> StateSnapshot:
        """
        Begin a new session.

        Raises:
            InvalidSessionTransition: If a session is already active
            EmptyTargetSequenceError: If the target sequence has no digits
        """
        with self._lock:
            if self._state is not None and self._state.active:
                raise InvalidSessionTransition(
                    f"A {self.constant.tab_label} session is already active"
                )
            validate_sequence(self.target)
            self._state = new_session_state(self._clock())
            snapshot = snapshot_state(self._state)
            logger.info(f"Started {self.constant.slug} session at {self._state.session_start.isoformat()}")
            self._notify(snapshot)

        if self.source is not None:
            self.source.start(self.on_digit_event)
        return snapshot

    def on_digit_event(self, digit: str, arrival_time: Optional[datetime] = None) -> DigitEventResult:
        """
        Grade one recognized digit.

        Events arriving while no session is active are dropped. When the
        digit pushes the wrong count to the limit, the session is ended
        before this call returns.
        """
        outcome = None
        with self._lock:
            state = self._state
            if state is None or not state.active:
                logger.debug(f"Dropped late digit {digit!r} for idle {self.constant.slug} session")
                return DigitEventResult(tokens=(), snapshot=snapshot_state(state))

            if arrival_time is None:
                arrival_time = self._clock()
            result = grade_digit(state, self.target, digit, arrival_time)
            snapshot = snapshot_state(state)

            if result.terminate:
                logger.info(
                    f"Auto-ending {self.constant.slug} session after {state.wrong_count} wrong digits"
                )
                outcome = self._finish(auto=True)
                snapshot = IDLE_SNAPSHOT
            self._notify(snapshot)

        if outcome is not None:
            self._notify_end(outcome)
        return DigitEventResult(tokens=result.tokens, snapshot=snapshot, outcome=outcome)

    def end(self, auto: bool = False) -> Optional[SessionOutcome]:
        """
        Finish the active session and persist its summary.

        Returns:
            SessionOutcome, or None when no session is active
        """
        with self._lock:
            if self._state is None or not self._state.active:
                return None
            outcome = self._finish(auto=auto)
            self._notify(IDLE_SNAPSHOT)

        self._notify_end(outcome)
        return outcome

    def reset(self) -> None:
        """Discard any live session without creating a summary. Safe from any state."""
        with self._lock:
            had_session = self._state is not None
            self._stop_source()
            self._state = None
            if had_session:
                logger.info(f"Reset {self.constant.slug} session")
                self._notify(IDLE_SNAPSHOT)

    # ---- Internals ----

    def _finish(self, auto: bool) -> SessionOutcome:
        """End the session; caller holds the lock."""
        state = self._state
        state.active = False
        self._stop_source()

        summary = build_summary(self.constant, state, self._clock(), auto=auto)
        self._state = None

        persist_error = None
        if self.store is not None:
            try:
                self.store.append(summary)
            except (StoreUnavailableError, SQLAlchemyError, OSError) as exc:
                persist_error = str(exc) or exc.__class__.__name__
                logger.warning(
                    f"Could not persist {self.constant.slug} session {summary.record_id}: {persist_error}"
                )

        logger.info(
            f"Ended {self.constant.slug} session ({'auto' if auto else 'manual'}): "
            f"{summary.correct} correct, {summary.wrong} wrong, {summary.pauses} pauses"
        )
        return SessionOutcome(summary=summary, persist_error=persist_error)

    def _stop_source(self) -> None:
        if self.source is not None:
            self.source.stop()

    def _notify(self, snapshot: StateSnapshot) -> None:
        """Deliver a snapshot; caller holds the lock so listeners see states in order."""
        for listener in list(self._listeners):
            listener(snapshot)

    def _notify_end(self, outcome: SessionOutcome) -> None:
        for listener in list(self._end_listeners):
            listener(outcome)
