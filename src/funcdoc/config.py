"""Configuration for the funcdoc calling layers.

Built once at the edge (CLI, web app) and passed down explicitly. The
extraction and synthesis core never reads it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from .exceptions import ConfigError

DEFAULT_API_URL = "https://api.openai.com/v1/chat/completions"
DEFAULT_MODEL = "gpt-4o-mini"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _flag(value: str | None) -> bool:
    return (value or "").lower() in ("1", "true", "yes", "on")


def _number(environ: Mapping[str, str], key: str, default: float) -> float:
    raw = environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigError(f"{key} must be a number, got {raw!r}") from e


@dataclass(frozen=True)
class Config:
    """Settings for remote documentation and logging."""

    remote_enabled: bool = False
    api_key: str | None = None
    api_url: str = DEFAULT_API_URL
    model: str = DEFAULT_MODEL
    temperature: float = 0.3
    timeout: float = 30.0  # Seconds per remote request
    log_level: str = "INFO"

    def __post_init__(self):
        if self.timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {self.timeout}")
        if not 0 <= self.temperature <= 2:
            raise ConfigError(f"temperature must be between 0 and 2, got {self.temperature}")
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ConfigError(f"Unknown log level: {self.log_level}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Config:
        """Read settings from ``FUNCDOC_*`` environment variables.

        The API key falls back to ``OPENAI_API_KEY``.

        Raises:
            ConfigError: If a numeric or log level value is invalid
        """
        if environ is None:
            environ = os.environ

        return cls(
            remote_enabled=_flag(environ.get("FUNCDOC_REMOTE")),
            api_key=environ.get("FUNCDOC_API_KEY") or environ.get("OPENAI_API_KEY") or None,
            api_url=environ.get("FUNCDOC_API_URL") or DEFAULT_API_URL,
            model=environ.get("FUNCDOC_MODEL") or DEFAULT_MODEL,
            temperature=_number(environ, "FUNCDOC_TEMPERATURE", 0.3),
            timeout=_number(environ, "FUNCDOC_TIMEOUT", 30.0),
            log_level=(environ.get("FUNCDOC_LOG_LEVEL") or "INFO").upper(),
        )

    @property
    def remote_ready(self) -> bool:
        """True when remote documentation is enabled and has a key."""
        return self.remote_enabled and bool(self.api_key)
