"""Tests for the session lifecycle controller."""

import threading

import pytest
from sqlalchemy.exc import OperationalError

from core.digits import (
    ConstantKind,
    DigitFeed,
    DigitToken,
    EmptyTargetSequenceError,
    InvalidSessionTransition,
    SessionController,
    StoreUnavailableError,
)
from tests.conftest import T0, at


def _controller(clock, store=None, target="31415926535", source=None):
    return SessionController(
        ConstantKind.PI,
        store=store,
        target=tuple(target) if target is not None else None,
        clock=clock,
        source=source,
    )


def test_start_creates_fresh_active_session(clock):
    controller = _controller(clock)

    snapshot = controller.start()

    assert controller.active
    assert snapshot.active
    assert snapshot.cursor == 0
    assert snapshot.transcript == ()
    assert (snapshot.correct_count, snapshot.wrong_count, snapshot.pause_count) == (0, 0, 0)


def test_start_while_active_is_rejected_without_touching_state(clock):
    controller = _controller(clock)
    controller.start()
    controller.on_digit_event("3", at(0))

    with pytest.raises(InvalidSessionTransition):
        controller.start()

    assert controller.snapshot().correct_count == 1


def test_start_refuses_empty_target(clock):
    controller = _controller(clock, target="")

    with pytest.raises(EmptyTargetSequenceError):
        controller.start()
    assert not controller.active


def test_default_target_comes_from_sequence_provider(clock):
    controller = _controller(clock, target=None)
    assert controller.target[:5] == ("3", "1", "4", "1", "5")


def test_digit_events_are_graded_in_order(clock):
    controller = _controller(clock)
    controller.start()

    for index, digit in enumerate("3141"):
        result = controller.on_digit_event(digit, at(index))

    assert result.tokens == (DigitToken("1", True),)
    snapshot = controller.snapshot()
    assert snapshot.correct_count == 4
    assert snapshot.cursor == 4


def test_unstamped_digit_uses_clock(clock):
    controller = _controller(clock)
    controller.start()
    controller.on_digit_event("3")
    clock.advance(3)
    result = controller.on_digit_event("1")

    assert result.snapshot.pause_count == 1


def test_idle_digit_events_are_dropped(clock):
    controller = _controller(clock)

    result = controller.on_digit_event("3", at(0))

    assert result.dropped
    assert result.snapshot.transcript == ()
    assert not controller.active


def test_end_builds_and_stores_summary(clock, recording_store):
    controller = _controller(clock, store=recording_store)
    controller.start()
    controller.on_digit_event("3", at(0))
    controller.on_digit_event("9", at(1))
    controller.on_digit_event("4", at(4))
    clock.advance(12.5)

    outcome = controller.end()

    summary = outcome.summary
    assert outcome.persisted
    assert recording_store.summaries == [summary]
    assert summary.constant is ConstantKind.PI
    assert summary.started_at == T0
    assert summary.duration_seconds == 12.5
    assert (summary.correct, summary.wrong, summary.pauses) == (2, 1, 1)
    assert summary.digits_recited == 3
    assert summary.accuracy == pytest.approx(2 / 3)
    assert summary.auto_ended is False
    assert len(summary.tokens) == 4
    assert not controller.active
    assert controller.snapshot().transcript == ()


def test_end_when_idle_returns_none(clock, recording_store):
    controller = _controller(clock, store=recording_store)
    assert controller.end() is None
    assert recording_store.summaries == []


def test_accuracy_is_zero_for_empty_session(clock):
    controller = _controller(clock)
    controller.start()

    outcome = controller.end()

    assert outcome.summary.digits_recited == 0
    assert outcome.summary.accuracy == 0.0


def test_auto_end_at_ten_wrong(clock, recording_store):
    controller = _controller(clock, store=recording_store, target="0" * 40)
    ended = []
    controller.on_session_end(ended.append)
    controller.start()

    results = [controller.on_digit_event("9", at(i)) for i in range(10)]

    assert all(r.outcome is None for r in results[:9])
    outcome = results[-1].outcome
    assert outcome is not None
    assert outcome.summary.wrong == 10
    assert outcome.summary.auto_ended is True
    assert not controller.active
    assert results[-1].snapshot.active is False
    assert ended == [outcome]
    assert recording_store.summaries == [outcome.summary]

    late = controller.on_digit_event("9", at(11))
    assert late.dropped
    assert len(recording_store.summaries) == 1


def test_reset_discards_without_summary(clock, recording_store):
    controller = _controller(clock, store=recording_store)
    controller.start()
    controller.on_digit_event("3", at(0))

    controller.reset()

    assert not controller.active
    assert controller.snapshot().transcript == ()
    assert recording_store.summaries == []
    assert controller.on_digit_event("1", at(1)).dropped


def test_reset_on_idle_is_idempotent(clock):
    controller = _controller(clock)
    before = controller.snapshot()

    controller.reset()
    controller.reset()

    after = controller.snapshot()
    assert after == before
    assert (after.correct_count, after.wrong_count, after.pause_count, after.cursor) == (0, 0, 0, 0)


def test_can_restart_after_end(clock, recording_store):
    controller = _controller(clock, store=recording_store)
    controller.start()
    controller.on_digit_event("9", at(0))
    controller.end()

    controller.start()

    assert controller.snapshot().wrong_count == 0


class _FailingStore:
    def __init__(self, exc):
        self.exc = exc

    def append(self, summary):
        raise self.exc


@pytest.mark.parametrize(
    "exc",
    [
        StoreUnavailableError("disk full"),
        OperationalError("INSERT", {}, Exception("locked")),
        OSError("read-only file system"),
    ],
)
def test_store_failure_is_reported_not_raised(clock, exc):
    controller = _controller(clock, store=_FailingStore(exc))
    controller.start()
    controller.on_digit_event("3", at(0))

    outcome = controller.end()

    assert not outcome.persisted
    assert outcome.persist_error
    assert outcome.summary.correct == 1
    assert not controller.active


def test_subscribers_receive_snapshots(clock):
    controller = _controller(clock)
    seen = []
    unsubscribe = controller.subscribe(seen.append)

    controller.start()
    controller.on_digit_event("3", at(0))
    unsubscribe()
    controller.on_digit_event("1", at(1))

    assert [s.correct_count for s in seen] == [0, 1]


def test_source_is_started_and_stopped_with_session(clock):
    feed = DigitFeed(clock=clock)
    controller = _controller(clock, source=feed)

    controller.start()
    assert feed.running
    feed.push("three one four", arrival_time=at(0))
    assert controller.snapshot().correct_count == 3

    controller.end()
    assert not feed.running
    assert feed.push("1", arrival_time=at(1)) == 0


def test_auto_end_stops_feed_mid_push(clock, recording_store):
    feed = DigitFeed(clock=clock)
    controller = _controller(clock, store=recording_store, target="0" * 40, source=feed)
    controller.start()

    delivered = feed.push("9" * 15, arrival_time=at(0))

    assert delivered == 10
    assert recording_store.summaries[0].wrong == 10


def test_concurrent_events_are_serialized(clock):
    controller = _controller(clock, target="0" * 500)
    controller.start()

    def _worker():
        for _ in range(50):
            controller.on_digit_event("0", at(0))

    threads = [threading.Thread(target=_worker) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    snapshot = controller.snapshot()
    assert snapshot.correct_count == 200
    assert snapshot.cursor == 200
    assert len(snapshot.transcript) == 200


def test_concurrent_subscribers_see_snapshots_in_order(clock):
    controller = _controller(clock, target="0" * 500)
    seen = []
    controller.subscribe(lambda snapshot: seen.append(snapshot.cursor))
    controller.start()

    def _worker():
        for _ in range(50):
            controller.on_digit_event("0", at(0))

    threads = [threading.Thread(target=_worker) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert seen == list(range(201))
