"""
synapse_voice package.

Voice-command recognition for a transcript stream: detect the wake phrase
"synapse", pull the command that follows it (in the same utterance or the
next one) and hand the decoded command to the caller.

Example usage:
    from synapse_voice import RecognitionEngine

    engine = RecognitionEngine(source, on_command=print, on_state=print)
    engine.start()
"""

from .commands import PHRASE_TABLE, WAKE_PHRASE, Command, CommandEvent, PhraseMatcher, match
from .config import EngineConfig
from .errors import ConfigError, SourceError, SourceErrorCategory, SynapseVoiceError
from .voice_recognition import (
    ConsoleTranscriptSource,
    EngineState,
    RecognitionEngine,
    ThreadingScheduler,
    TranscriptResult,
)

__all__ = [
    "PHRASE_TABLE",
    "WAKE_PHRASE",
    "Command",
    "CommandEvent",
    "ConfigError",
    "ConsoleTranscriptSource",
    "EngineConfig",
    "EngineState",
    "PhraseMatcher",
    "RecognitionEngine",
    "SourceError",
    "SourceErrorCategory",
    "SynapseVoiceError",
    "ThreadingScheduler",
    "TranscriptResult",
    "match",
]
__version__ = "0.1.0"
