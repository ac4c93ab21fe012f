"""
Transcript sources feed finished speech-to-text results to a listener.

A source is injected into :class:`~synapse_voice.voice_recognition.RecognitionEngine`
rather than discovered at runtime.  It reports whether it can run at all
(``supported``), accepts one listener at a time via ``subscribe`` and drops it
via ``unsubscribe``.  Once ``unsubscribe`` returns the listener receives no
further callbacks.

``ConsoleTranscriptSource`` treats each line of a text stream as one final
utterance, which is handy for driving the engine from a terminal or from an
upstream STT process piping its output.
"""
from __future__ import annotations

import sys
import threading
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence, TextIO

from ..utils.logging_system import setup_log_system

logger = setup_log_system("transcript_source")


@dataclass(frozen=True)
class TranscriptResult:
    transcript: str
    is_final: bool = True
    confidence: Optional[float] = None


class TranscriptListener(Protocol):
    def on_start(self) -> None:
        ...

    def on_results(self, results: Sequence[TranscriptResult], result_index: int = 0) -> None:
        """``results[result_index:]`` are new; earlier entries were delivered before."""
        ...

    def on_end(self) -> None:
        ...

    def on_error(self, category: str, message: str = "") -> None:
        ...


class TranscriptSource(Protocol):
    @property
    def supported(self) -> bool:
        ...

    def subscribe(self, listener: TranscriptListener) -> None:
        ...

    def unsubscribe(self) -> None:
        ...


class ConsoleTranscriptSource:
    """
    Reads utterances line by line from a text stream on a daemon thread.

    End of file is reported to the listener as end-of-stream.  After that the
    source is exhausted: further ``subscribe`` calls attach the listener but
    deliver nothing.
    """

    def __init__(self, stream: Optional[TextIO] = None, *, language: str = "en-US") -> None:
        self._stream = stream if stream is not None else sys.stdin
        self.language = language
        self._lock = threading.RLock()
        self._listener: Optional[TranscriptListener] = None
        self._reader: Optional[threading.Thread] = None
        self.exhausted = threading.Event()

    @property
    def supported(self) -> bool:
        return self._stream is not None and not getattr(self._stream, "closed", False)

    def subscribe(self, listener: TranscriptListener) -> None:
        with self._lock:
            self._listener = listener
            if self.exhausted.is_set():
                logger.debug("Console source exhausted; subscription will stay silent.")
                return
            self._deliver("on_start")
            if self._reader is None or not self._reader.is_alive():
                self._reader = threading.Thread(
                    target=self._read_loop, name="console-transcripts", daemon=True
                )
                self._reader.start()

    def unsubscribe(self) -> None:
        with self._lock:
            self._listener = None

    def _deliver(self, method: str, *args) -> None:
        # Held across the callback so unsubscribe() waits for an in-flight delivery.
        with self._lock:
            if self._listener is None:
                return
            getattr(self._listener, method)(*args)

    def _read_loop(self) -> None:
        try:
            for line in self._stream:
                text = line.strip()
                if not text:
                    continue
                self._deliver("on_results", [TranscriptResult(text)], 0)
        except (OSError, ValueError) as e:
            logger.error(f"Console transcript stream failed: {e}")
            self._deliver("on_error", "audio-capture", str(e))
        finally:
            self.exhausted.set()
            self._deliver("on_end")
