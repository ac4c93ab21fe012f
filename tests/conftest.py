"""
Pytest configuration for synapse_voice tests.

Nothing here touches a microphone or a real speech service.  The engine is
driven by a ``FakeTranscriptSource`` that tests push utterances through, and
timers run on a ``FakeScheduler`` whose clock only moves when a test calls
``advance()``.
"""

from typing import Callable, List, Optional

import pytest

from synapse_voice.config import EngineConfig
from synapse_voice.voice_recognition import RecognitionEngine, TranscriptResult


class FakeHandle:
    def __init__(self, when: float, callback: Callable[[], None]) -> None:
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Virtual clock; due callbacks run in deadline order during ``advance``."""

    def __init__(self) -> None:
        self.now = 0.0
        self._handles: List[FakeHandle] = []

    def time(self) -> float:
        return self.now

    def call_later(self, delay: float, callback: Callable[[], None]) -> FakeHandle:
        handle = FakeHandle(self.now + delay, callback)
        self._handles.append(handle)
        return handle

    @property
    def pending(self) -> List[FakeHandle]:
        return [h for h in self._handles if not h.cancelled]

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = [h for h in self.pending if h.when <= target]
            if not due:
                break
            handle = min(due, key=lambda h: h.when)
            self._handles.remove(handle)
            self.now = handle.when
            handle.callback()
        self.now = target


class FakeTranscriptSource:
    """In-memory transcript source that counts subscribe/unsubscribe calls."""

    def __init__(self, supported: bool = True) -> None:
        self.supported = supported
        self.listener = None
        self.subscribe_calls = 0
        self.unsubscribe_calls = 0

    def subscribe(self, listener) -> None:
        self.subscribe_calls += 1
        self.listener = listener
        listener.on_start()

    def unsubscribe(self) -> None:
        self.unsubscribe_calls += 1
        self.listener = None

    # -- helpers used by tests to play the role of the speech service --
    def say(self, *texts: str) -> None:
        for text in texts:
            if self.listener is not None:
                self.listener.on_results([TranscriptResult(text)], 0)

    def end(self) -> None:
        listener, self.listener = self.listener, None
        if listener is not None:
            listener.on_end()

    def error(self, category: str, message: str = "") -> None:
        if self.listener is not None:
            self.listener.on_error(category, message)


class Sink:
    """Records everything the engine hands to its callbacks."""

    def __init__(self) -> None:
        self.commands = []
        self.states = []
        self.errors = []

    def on_command(self, event) -> None:
        self.commands.append(event)

    def on_state(self, state) -> None:
        self.states.append(state)

    def on_error(self, error) -> None:
        self.errors.append(error)


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def source():
    return FakeTranscriptSource()


@pytest.fixture
def sink():
    return Sink()


@pytest.fixture
def make_engine(scheduler, sink):
    """Factory building an engine wired to the fake scheduler and recording sink."""

    def _make(source: Optional[FakeTranscriptSource], config: Optional[EngineConfig] = None):
        return RecognitionEngine(
            source,
            sink.on_command,
            sink.on_state,
            on_error=sink.on_error,
            scheduler=scheduler,
            config=config or EngineConfig(),
        )

    return _make


@pytest.fixture
def engine(make_engine, source):
    """A listening engine with the default configuration."""
    eng = make_engine(source)
    eng.start()
    yield eng
    eng.stop()
