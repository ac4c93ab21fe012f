"""
Delayed-call scheduling for the recognition engine.

The engine only needs two things from a scheduler: ``call_later`` returning
a handle with ``cancel()``, and ``time()`` for reading the clock that
``call_later`` delays are measured against.  ``asyncio`` event loops already
provide both, so an engine driven from an asyncio application can be handed
``asyncio.get_running_loop()`` directly.  :class:`ThreadingScheduler` covers
everything else with daemon ``threading.Timer`` objects.
"""
from __future__ import annotations

import threading
import time
from typing import Callable, Protocol

from ..utils.logging_system import setup_log_system

logger = setup_log_system("scheduler")


class TimerHandle(Protocol):
    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        ...

    def time(self) -> float:
        ...


class ThreadingScheduler:
    """Runs each delayed call on its own daemon ``threading.Timer``."""

    def __init__(self, name: str = "synapse-timer") -> None:
        self._name = name

    def call_later(self, delay: float, callback: Callable[[], None]) -> threading.Timer:
        def _run() -> None:
            try:
                callback()
            except Exception as e:
                logger.error(f"Exception in scheduled callback: {e}", exc_info=True)

        timer = threading.Timer(max(0.0, delay), _run)
        timer.name = self._name
        timer.daemon = True
        timer.start()
        return timer

    def time(self) -> float:
        return time.monotonic()
