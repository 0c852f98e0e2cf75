"""Shared fixtures for the digit trainer tests."""

from datetime import datetime, timedelta, timezone

import pytest

from core.digits import SessionStore


T0 = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


def at(seconds: float) -> datetime:
    """Timestamp `seconds` after T0."""
    return T0 + timedelta(seconds=seconds)


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, start: datetime = T0):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> datetime:
        self.now = self.now + timedelta(seconds=seconds)
        return self.now


class RecordingStore:
    """In-memory sink that records appended summaries."""

    def __init__(self):
        self.summaries = []

    def append(self, summary) -> None:
        self.summaries.insert(0, summary)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def recording_store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def database_url(tmp_path, monkeypatch) -> str:
    """Point the session store at a fresh SQLite file."""
    url = f"sqlite:///{tmp_path / 'digit_sessions.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    monkeypatch.delenv("TEST_MODE", raising=False)
    return url


@pytest.fixture
def store(database_url) -> SessionStore:
    return SessionStore()
