"""Voice recognition components for synapse_voice.

This package exposes the ``RecognitionEngine`` which turns a stream of
transcripts into command events, together with the transcript-source and
scheduler interfaces it is driven by.
"""

from .awake_window import AwakeWindow  # noqa: F401
from .recognition_engine import EngineState, RecognitionEngine  # noqa: F401
from .scheduler import Scheduler, ThreadingScheduler  # noqa: F401
from .transcript_source import (  # noqa: F401
    ConsoleTranscriptSource,
    TranscriptListener,
    TranscriptResult,
    TranscriptSource,
)

__all__ = [
    "AwakeWindow",
    "ConsoleTranscriptSource",
    "EngineState",
    "RecognitionEngine",
    "Scheduler",
    "ThreadingScheduler",
    "TranscriptListener",
    "TranscriptResult",
    "TranscriptSource",
]
