"""
Wake-phrase command recognition over a stream of transcripts.

``RecognitionEngine`` subscribes to an injected transcript source and looks
at every finished utterance.  An utterance containing the wake phrase is a
command if what follows the wake phrase matches a known phrase ("synapse run
scan").  A bare wake phrase opens a short awake window instead, and the next
utterance that matches while the window is open becomes the command
("synapse" ... "show metrics").  Everything else is ambient speech and is
ignored.

The engine never raises out of a source callback.  Ending of the transcript
stream while listening is treated as a hiccup and the engine resubscribes
after a short delay; source errors are logged and, unless they are routine
(silence, aborts), passed to the optional ``on_error`` callback.
"""
from __future__ import annotations

import re
import threading
from enum import Enum
from functools import partial
from typing import Callable, Optional, Sequence, TypeVar

from ..commands.phrase_matcher import PhraseMatcher
from ..commands.phrase_table import Command, CommandEvent
from ..config import EngineConfig
from ..errors import SourceError, SourceErrorCategory
from ..utils.logging_system import setup_log_system
from .awake_window import AwakeWindow
from .scheduler import Scheduler, ThreadingScheduler, TimerHandle
from .transcript_source import TranscriptResult, TranscriptSource

logger = setup_log_system("recognition_engine")

_LEADING_NOISE = re.compile(r"^[\s,.;:!?]+")

T = TypeVar("T")


class EngineState(str, Enum):
    IDLE = "idle"
    LISTENING = "listening"
    UNSUPPORTED = "unsupported"

    def __str__(self) -> str:
        return self.value


CommandHandler = Callable[[CommandEvent], None]
StateHandler = Callable[[EngineState], None]
ErrorHandler = Callable[[SourceError], None]


class RecognitionEngine:
    """
    Turns transcripts into :class:`CommandEvent` values.

    Parameters
    ----------
    source:
        The transcript source.  ``None`` or a source whose ``supported`` is
        false puts the engine in the ``unsupported`` state on ``start()``.
    on_command:
        Called with each decoded command.
    on_state:
        Called on state transitions (``listening``, ``idle``, ``unsupported``).
    on_error:
        Called with non-routine source errors.  The engine keeps listening.
    matcher:
        Phrase matcher; defaults to the built-in command table.
    scheduler:
        Provides ``call_later`` and ``time``.  Defaults to
        :class:`ThreadingScheduler`; an asyncio loop works as well.
    config:
        Wake phrase and timings; defaults to :class:`EngineConfig`.
    """

    def __init__(
        self,
        source: Optional[TranscriptSource],
        on_command: CommandHandler,
        on_state: Optional[StateHandler] = None,
        *,
        on_error: Optional[ErrorHandler] = None,
        matcher: Optional[PhraseMatcher] = None,
        scheduler: Optional[Scheduler] = None,
        config: Optional[EngineConfig] = None,
    ) -> None:
        self.config = config or EngineConfig()
        self._source = source
        self._on_command = on_command
        self._on_state = on_state
        self._on_error = on_error
        self._matcher = matcher or PhraseMatcher()
        self._scheduler: Scheduler = scheduler or ThreadingScheduler()

        # Serializes source callbacks, timer callbacks and the public API.
        # Source methods are never called while holding it.
        self._lock = threading.RLock()
        self._state = EngineState.IDLE
        self._last_notified: Optional[EngineState] = None
        self._restart_generation = 0
        self._restart_handle: Optional[TimerHandle] = None
        self._window = AwakeWindow(
            self._scheduler.call_later,
            self.config.awake_window_seconds,
            clock=self._scheduler.time,
            on_expire=self._on_window_expired,
            lock=self._lock,
        )

    # -------------- properties --------------
    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def is_listening(self) -> bool:
        return self._state is EngineState.LISTENING

    @property
    def awake(self) -> bool:
        """True while an awake window is waiting for its command."""
        return self._window.is_open

    @property
    def supported(self) -> bool:
        return self._source is not None and bool(self._source.supported)

    # -------------- lifecycle --------------
    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()

    def start(self) -> None:
        """Subscribe to the transcript source and start listening."""
        with self._lock:
            if self._state is EngineState.UNSUPPORTED or not self.supported:
                logger.warning("No transcript source available; voice commands are unsupported.")
                self._state = EngineState.UNSUPPORTED
                self._notify_state(EngineState.UNSUPPORTED)
                return
            if self._state is EngineState.LISTENING:
                return
            # Set before subscribing so results delivered during subscribe() count.
            self._state = EngineState.LISTENING

        if not self._subscribe():
            with self._lock:
                if self._state is EngineState.LISTENING:
                    self._state = EngineState.IDLE
            return

        with self._lock:
            if self._state is EngineState.LISTENING:
                logger.info(f"Listening for wake phrase '{self.config.wake_phrase}'.")
                self._notify_state(EngineState.LISTENING)

    def stop(self) -> None:
        """Stop listening.  Safe to call repeatedly and from any state."""
        with self._lock:
            self._cancel_restart()
            self._window.close()
            if self._state is EngineState.UNSUPPORTED:
                announce = False
            else:
                # A fresh engine announces idle once; after that only on leaving listening.
                announce = self._last_notified is not EngineState.IDLE
                self._state = EngineState.IDLE

        if self._source is not None:
            try:
                self._source.unsubscribe()
            except Exception as e:
                logger.error(f"Failed to unsubscribe from transcript source: {e}", exc_info=True)

        if announce:
            logger.info("Voice recognition stopped.")
            self._notify_state(EngineState.IDLE)

    def _subscribe(self) -> bool:
        """Subscribe to the source; False if that failed or stop() won the race."""
        try:
            self._source.subscribe(self)
        except Exception as e:
            logger.error(f"Failed to subscribe to transcript source: {e}", exc_info=True)
            return False
        with self._lock:
            still_listening = self._state is EngineState.LISTENING
        if not still_listening:
            # stop() ran while subscribe() was in progress
            self._source.unsubscribe()
        return still_listening

    # -------------- utterance handling --------------
    def handle_transcript(self, text: str) -> Optional[CommandEvent]:
        """
        Process one finished utterance.

        Returns the emitted event, if any.  Ignored unless the engine is
        listening.
        """
        with self._lock:
            if self._state is not EngineState.LISTENING:
                return None
            return self._process(text)

    def _process(self, text: str) -> Optional[CommandEvent]:
        utterance = text.strip().lower()
        if not utterance:
            return None

        wake = self.config.wake_phrase
        if wake in utterance:
            after = _LEADING_NOISE.sub("", utterance.rsplit(wake, 1)[1])
            command = self._matcher.match(after)
            if command is None:
                logger.debug(
                    f"Wake phrase heard; waiting {self.config.awake_window_seconds:.1f}s for a command."
                )
                self._window.open()
                return None
            self._window.close()
            return self._emit(command, utterance)

        if self._window.is_open:
            command = self._matcher.match(utterance)
            if command is None:
                return None
            self._window.close()
            return self._emit(command, utterance)

        return None

    def _emit(self, command: Command, raw: str) -> CommandEvent:
        event = CommandEvent(command=command, raw=raw)
        logger.info(f"Command '{command}' from '{raw}'.")
        self._dispatch(self._on_command, event)
        return event

    def _on_window_expired(self) -> None:
        logger.debug("Awake window expired without a command.")

    # -------------- transcript listener --------------
    def on_start(self) -> None:
        logger.debug("Transcript source started.")

    def on_results(self, results: Sequence[TranscriptResult], result_index: int = 0) -> None:
        with self._lock:
            if self._state is not EngineState.LISTENING:
                return
            for result in results[max(0, result_index):]:
                # Interim hypotheses are revised later; only final text counts.
                if not result.is_final:
                    continue
                self._process(result.transcript)
                if self._state is not EngineState.LISTENING:
                    break

    def on_end(self) -> None:
        with self._lock:
            if self._state is not EngineState.LISTENING:
                return
            self._cancel_restart()
            delay = self.config.restart_delay_seconds
            logger.debug(f"Transcript stream ended; resubscribing in {delay:.2f}s.")
            self._restart_handle = self._scheduler.call_later(
                delay, partial(self._restart, self._restart_generation)
            )

    def on_error(self, category: str, message: str = "") -> None:
        error = SourceError(SourceErrorCategory.parse(category), message)
        with self._lock:
            if self._state is not EngineState.LISTENING:
                return
            if error.category.recoverable:
                logger.debug(f"Ignoring transcript source condition: {error}")
                return
            logger.warning(f"Transcript source error: {error}")
            self._dispatch(self._on_error, error)

    def _restart(self, generation: int) -> None:
        with self._lock:
            if generation != self._restart_generation or self._state is not EngineState.LISTENING:
                return
            self._restart_handle = None
            self._restart_generation += 1

        if self._subscribe():
            logger.debug("Resubscribed to transcript source.")

    def _cancel_restart(self) -> None:
        self._restart_generation += 1
        if self._restart_handle is not None:
            self._restart_handle.cancel()
            self._restart_handle = None

    # -------------- sink --------------
    def _notify_state(self, state: EngineState) -> None:
        self._last_notified = state
        self._dispatch(self._on_state, state)

    @staticmethod
    def _dispatch(callback: Optional[Callable[[T], None]], value: T) -> None:
        if callback is None:
            return
        try:
            callback(value)
        except Exception as e:
            logger.error(f"Exception in recognition callback: {e}", exc_info=True)
