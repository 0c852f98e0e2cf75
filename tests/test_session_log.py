"""Tests for the session log's handling of store failures."""

from app.ui import session_log
from core.digits import StoreUnavailableError


def test_store_failure_becomes_warning(monkeypatch):
    warnings = []
    monkeypatch.setattr(session_log.st, "warning", warnings.append)

    def _fail():
        raise StoreUnavailableError("database is locked")

    assert session_log._apply(_fail) is False
    assert warnings == ["Session history unavailable: database is locked"]


def test_successful_write_passes_through(monkeypatch):
    warnings = []
    monkeypatch.setattr(session_log.st, "warning", warnings.append)
    calls = []

    assert session_log._apply(lambda: calls.append("deleted")) is True
    assert calls == ["deleted"]
    assert warnings == []
