"""
Runtime configuration for the recognition engine.

Defaults live on :class:`EngineConfig`.  :meth:`EngineConfig.from_env` loads a
``.env`` file (if present) with python-dotenv and then applies any
``SYNAPSE_*`` overrides found in the environment.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from .commands.phrase_table import WAKE_PHRASE
from .errors import ConfigError


@dataclass(frozen=True)
class EngineConfig:
    wake_phrase: str = WAKE_PHRASE
    awake_window_ms: int = 4000  # how long a bare wake word waits for its command
    restart_delay_ms: int = 300  # backoff before resubscribing after end-of-stream
    language: str = "en-US"

    def __post_init__(self) -> None:
        phrase = self.wake_phrase.strip().lower()
        if not phrase:
            raise ConfigError("wake_phrase must not be empty")
        object.__setattr__(self, "wake_phrase", phrase)
        if self.awake_window_ms < 0:
            raise ConfigError("awake_window_ms must not be negative")
        if self.restart_delay_ms < 0:
            raise ConfigError("restart_delay_ms must not be negative")

    @property
    def awake_window_seconds(self) -> float:
        return self.awake_window_ms / 1000.0

    @property
    def restart_delay_seconds(self) -> float:
        return self.restart_delay_ms / 1000.0

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        *,
        dotenv: bool = True,
    ) -> "EngineConfig":
        """
        Build a config from environment variables.

        Parameters
        ----------
        environ:
            Mapping to read from.  Defaults to ``os.environ``.
        dotenv:
            Load a ``.env`` file into ``os.environ`` first.  Ignored when an
            explicit ``environ`` is given.
        """
        if environ is None:
            if dotenv:
                load_dotenv()
            environ = os.environ

        defaults = cls()
        return cls(
            wake_phrase=environ.get("SYNAPSE_WAKE_PHRASE") or defaults.wake_phrase,
            awake_window_ms=_int_from(environ, "SYNAPSE_AWAKE_WINDOW_MS", defaults.awake_window_ms),
            restart_delay_ms=_int_from(environ, "SYNAPSE_RESTART_DELAY_MS", defaults.restart_delay_ms),
            language=environ.get("SYNAPSE_LANGUAGE") or defaults.language,
        )


def _int_from(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise ConfigError(f"{name} must be an integer number of milliseconds, got {raw!r}") from None
    if value < 0:
        raise ConfigError(f"{name} must not be negative, got {value}")
    return value
