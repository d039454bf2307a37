"""
Purpose: Fixed-interval clocks ("ticks") used by every polling component.
What it does:
- Ticker: start(callback, interval) / stop() contract
- ThreadTicker: background daemon thread, for the running demo
- ManualTicker: advanced explicitly, for tests and deterministic simulations

A ticker runs at most one callback at a time and never fires after stop().
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable, Optional

logger = logging.getLogger(__name__)

TickCallback = Callable[[], None]


class Ticker(ABC):

    @abstractmethod
    def start(self, callback: TickCallback, interval_seconds: float) -> None:
        ...

    @abstractmethod
    def stop(self) -> None:
        ...

    @property
    @abstractmethod
    def is_running(self) -> bool:
        ...


class ThreadTicker(Ticker):
    """
    Calls `callback` every `interval_seconds` on a daemon thread until stopped.
    Exceptions raised by the callback are logged and the clock keeps running.
    """

    def __init__(self, name: str = "ticker"):
        self.name = name
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

    @property
    def is_running(self) -> bool:
        return self._thread is not None

    def start(self, callback: TickCallback, interval_seconds: float) -> None:
        if self._thread is not None:
            return
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be > 0")

        stop_event = threading.Event()
        self._stop_event = stop_event

        def run() -> None:
            # wait() returns True once stop() is called
            while not stop_event.wait(interval_seconds):
                try:
                    callback()
                except Exception:
                    logger.exception("Tick callback failed on %s", self.name)

        self._thread = threading.Thread(target=run, name=self.name, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        # no join: stop() may be called from inside the tick callback itself
        if self._thread is None:
            return
        self._stop_event.set()
        self._thread = None


class ManualTicker(Ticker):
    """
    Deterministic ticker. Nothing happens until advance() or fire() is called.
    """

    def __init__(self):
        self._callback: Optional[TickCallback] = None
        self.interval_seconds: Optional[float] = None
        self._elapsed = 0.0
        self.fired = 0

    @property
    def is_running(self) -> bool:
        return self._callback is not None

    def start(self, callback: TickCallback, interval_seconds: float) -> None:
        if self._callback is not None:
            return
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be > 0")
        self._callback = callback
        self.interval_seconds = interval_seconds
        self._elapsed = 0.0

    def stop(self) -> None:
        self._callback = None
        self._elapsed = 0.0

    def fire(self) -> bool:
        """Run one tick now. Returns False if the ticker is stopped."""
        if self._callback is None:
            return False
        self.fired += 1
        self._callback()
        return True

    def advance(self, seconds: float) -> int:
        """
        Let `seconds` of simulated time pass, firing once per whole interval.
        Returns how many ticks fired.
        """
        if self._callback is None:
            return 0
        self._elapsed += seconds
        count = 0
        while self._callback is not None and self._elapsed >= self.interval_seconds:
            self._elapsed -= self.interval_seconds
            self.fire()
            count += 1
        return count
