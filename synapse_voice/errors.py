"""
Error taxonomy for the recognition pipeline.

Transcript sources report failures as a category string (the Web Speech
vocabulary: ``"no-speech"``, ``"aborted"``, ``"network"`` ...).  The engine
normalizes those into :class:`SourceErrorCategory` and hands anything that is
not routine noise to the caller as a :class:`SourceError` diagnostic.  None of
these are raised by the engine; only configuration problems raise.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SynapseVoiceError(Exception):
    """Base class for exceptions raised by synapse_voice."""


class ConfigError(SynapseVoiceError, ValueError):
    """Raised when an environment override cannot be parsed."""


class SourceErrorCategory(str, Enum):
    NO_SPEECH = "no-speech"
    ABORTED = "aborted"
    AUDIO_CAPTURE = "audio-capture"
    NETWORK = "network"
    NOT_ALLOWED = "not-allowed"
    SERVICE_NOT_ALLOWED = "service-not-allowed"
    BAD_GRAMMAR = "bad-grammar"
    LANGUAGE_NOT_SUPPORTED = "language-not-supported"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: "str | SourceErrorCategory") -> "SourceErrorCategory":
        """Map a raw category string onto the enum; unknown strings become ``UNKNOWN``."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.UNKNOWN

    @property
    def recoverable(self) -> bool:
        return self in RECOVERABLE_ERRORS


# Routine conditions: silence and caller-initiated aborts.
RECOVERABLE_ERRORS = frozenset({SourceErrorCategory.NO_SPEECH, SourceErrorCategory.ABORTED})


@dataclass(frozen=True)
class SourceError:
    """Non-fatal diagnostic reported by a transcript source."""

    category: SourceErrorCategory
    message: str = ""

    def __str__(self) -> str:
        if self.message:
            return f"{self.category.value}: {self.message}"
        return self.category.value
