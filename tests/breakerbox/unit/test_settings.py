from __future__ import annotations

import pytest
from pydantic import ValidationError

from breakerbox.circuit_breaker import BreakerConfig
from breakerbox.settings import BreakerSettings


def test_breaker_settings_defaults_build_default_config() -> None:
    settings = BreakerSettings()

    assert settings.log_level == "INFO"
    assert settings.breaker_config() == BreakerConfig()


def test_breaker_settings_reads_prefixed_environment(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("BREAKER_FAILURE_THRESHOLD", "0.25")
    monkeypatch.setenv("BREAKER_WINDOW_SIZE", "20")
    monkeypatch.setenv("breaker_timeout", "5")
    monkeypatch.setenv("BREAKER_SUCCESS_THRESHOLD", "3")
    monkeypatch.setenv("BREAKER_LOG_LEVEL", " debug ")

    settings = BreakerSettings()

    assert settings.log_level == "DEBUG"
    assert settings.breaker_config() == BreakerConfig(
        failure_threshold=0.25,
        window_size=20,
        timeout=5.0,
        success_threshold=3,
    )


def test_breaker_settings_accepts_zero_window_and_timeout() -> None:
    settings = BreakerSettings(window_size=0, timeout=0, failure_threshold=0.0)

    config = settings.breaker_config()

    assert config.window_size == 0
    assert config.timeout == 0
    assert config.failure_threshold == 0.0


@pytest.mark.parametrize(
    "overrides",
    [
        {"failure_threshold": 1.01},
        {"failure_threshold": -0.5},
        {"window_size": -1},
        {"timeout": -0.1},
        {"success_threshold": 0},
        {"log_level": "TRACE"},
    ],
)
def test_breaker_settings_rejects_invalid_values(overrides: dict[str, object]) -> None:
    with pytest.raises(ValidationError):
        BreakerSettings(**overrides)  # type: ignore[arg-type]
