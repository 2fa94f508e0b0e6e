from __future__ import annotations

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from breakerbox.circuit_breaker import BreakerConfig
from breakerbox.logging import get_log_level_value


def prefixed_settings_config(prefix: str) -> SettingsConfigDict:
    """Build standard Pydantic settings config for prefixed environments."""
    return SettingsConfigDict(env_prefix=prefix, case_sensitive=False)


class BreakerSettings(BaseSettings):
    """Circuit breaker settings read from ``BREAKER_*`` environment variables."""

    model_config = prefixed_settings_config("BREAKER_")

    failure_threshold: float = 0.5
    window_size: int = 10
    timeout: float = 30.0
    success_threshold: int = 1
    log_level: str = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object) -> object:
        if not isinstance(value, str):
            return value
        normalized = value.strip().upper()
        get_log_level_value(normalized)
        return normalized

    @model_validator(mode="after")
    def _validate_breaker_settings(self) -> BreakerSettings:
        if not 0.0 <= self.failure_threshold <= 1.0:
            raise ValueError("failure_threshold must be between 0.0 and 1.0")
        if self.window_size < 0:
            raise ValueError("window_size must be >= 0")
        if self.timeout < 0:
            raise ValueError("timeout must be >= 0")
        if self.success_threshold < 1:
            raise ValueError("success_threshold must be >= 1")
        return self

    def breaker_config(self) -> BreakerConfig:
        """Build the breaker configuration described by these settings."""
        return BreakerConfig(
            failure_threshold=self.failure_threshold,
            window_size=self.window_size,
            timeout=self.timeout,
            success_threshold=self.success_threshold,
        )
