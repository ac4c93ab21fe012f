"""
The awake window: a short period after a bare wake word during which the
next utterance is treated as the command.
"""
from __future__ import annotations

import threading
from functools import partial
from typing import Callable, ContextManager, Optional

from .scheduler import TimerHandle

CallLater = Callable[[float, Callable[[], None]], TimerHandle]


class AwakeWindow:
    """
    A single re-armable expiry timer.

    Every ``open()`` and ``close()`` bumps a generation counter and cancels
    the pending timer.  The expiry callback carries the generation it was
    armed with and does nothing unless that generation is still current, so
    a timer that fires late can never close a newer window.
    """

    def __init__(
        self,
        call_later: CallLater,
        duration: float,
        *,
        clock: Callable[[], float],
        on_expire: Optional[Callable[[], None]] = None,
        lock: Optional[ContextManager] = None,
    ) -> None:
        self._call_later = call_later
        self._duration = duration
        self._clock = clock
        self._on_expire = on_expire
        self._lock = lock if lock is not None else threading.RLock()
        self._generation = 0
        self._is_open = False
        self._deadline: Optional[float] = None
        self._handle: Optional[TimerHandle] = None

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def deadline(self) -> Optional[float]:
        """Clock value at which the open window lapses, ``None`` when closed."""
        return self._deadline if self._is_open else None

    @property
    def generation(self) -> int:
        return self._generation

    def open(self) -> None:
        """Open a fresh window, discarding any previous one and its timer."""
        with self._lock:
            self._invalidate()
            self._is_open = True
            self._deadline = self._clock() + self._duration
            self._handle = self._call_later(self._duration, partial(self._expire, self._generation))

    def close(self) -> None:
        with self._lock:
            if not self._is_open and self._handle is None:
                return
            self._invalidate()

    def _invalidate(self) -> None:
        self._generation += 1
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._is_open = False
        self._deadline = None

    def _expire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or not self._is_open:
                return
            self._handle = None
            self._is_open = False
            self._deadline = None
            if self._on_expire is not None:
                self._on_expire()
