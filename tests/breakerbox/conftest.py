from __future__ import annotations

import pytest

import breakerbox.circuit_breaker.breaker as breaker_mod
from tests.breakerbox.support.fakes import FakeClock, FakeLogger, RecordingListener


@pytest.fixture
def fake_logger() -> FakeLogger:
    """Provide a fresh structured logger test double per test."""
    return FakeLogger()


@pytest.fixture
def clock(monkeypatch: pytest.MonkeyPatch) -> FakeClock:
    """Freeze breaker time on a manually advanced clock."""
    fake = FakeClock()
    monkeypatch.setattr(breaker_mod, "_utcnow", fake.now)
    return fake


@pytest.fixture
def recording_listener() -> RecordingListener:
    """Provide a fresh listener recording breaker events."""
    return RecordingListener()
