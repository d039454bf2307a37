"""
Purpose: Realtime Notifier, cross-panel change propagation without a server.
What it does:
- Keeps callbacks per channel ("orders" is the one the app uses)
- notify(channel) runs that channel's callbacks synchronously, in subscription order
- One shared clock per notifier fires notify_all() every poll interval while
  anything is subscribed anywhere; it stops when the last subscription goes

Writers call trigger_update() right after a write so readers do not wait for
the next tick. The Notifier base class is the seam for a push-backed
implementation (websocket/SSE) with the same call sites.

Rule: One instance per process, built by the composition root and passed in.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional

from .policy import RealtimePolicy, default_realtime_policy
from .ticker import Ticker, ThreadTicker

logger = logging.getLogger(__name__)

ORDERS_CHANNEL = "orders"

Callback = Callable[[], None]


class Subscription:
    """
    Handle returned by subscribe(). Call it (or use it as a context manager)
    to unsubscribe. Unsubscribing twice is a no-op.
    """

    def __init__(self, notifier: "Notifier", channel: str, callback: Callback):
        self.notifier = notifier
        self.channel = channel
        self.callback = callback
        self.active = True

    def unsubscribe(self) -> None:
        if not self.active:
            return
        self.active = False
        self.notifier._unsubscribe(self.channel, self.callback)

    __call__ = unsubscribe

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.unsubscribe()


class Notifier(ABC):
    """
    Transport-agnostic publish/subscribe contract used by every panel.
    """

    @abstractmethod
    def subscribe(self, channel: str, callback: Callback) -> Subscription:
        ...

    @abstractmethod
    def _unsubscribe(self, channel: str, callback: Callback) -> None:
        ...

    @abstractmethod
    def trigger_update(self, channel: Optional[str] = None) -> None:
        ...

    @abstractmethod
    def close(self) -> None:
        ...


class PollingNotifier(Notifier):
    """
    Polling-backed notifier. The shared ticker is the "push channel": every
    tick re-notifies all channels so readers re-read storage.
    """

    def __init__(self, ticker: Optional[Ticker] = None, policy: Optional[RealtimePolicy] = None):
        self.policy = policy or default_realtime_policy()
        self.policy.validate()
        self.ticker = ticker or ThreadTicker(name="realtime-notifier")

        self._listeners: Dict[str, List[Callback]] = {}
        # dispatch of one notify never interleaves with another (tick vs trigger)
        self._lock = threading.RLock()

    # --- introspection ---

    @property
    def is_polling(self) -> bool:
        return self.ticker.is_running

    def subscriber_count(self, channel: Optional[str] = None) -> int:
        with self._lock:
            if channel is not None:
                return len(self._listeners.get(channel, []))
            return sum(len(callbacks) for callbacks in self._listeners.values())

    # --- Public API ---

    def subscribe(self, channel: str, callback: Callback) -> Subscription:
        with self._lock:
            callbacks = self._listeners.setdefault(channel, [])
            # idempotent per distinct callback
            if callback not in callbacks:
                callbacks.append(callback)

            if not self.ticker.is_running:
                logger.debug("First subscriber; starting shared poll clock")
                self.ticker.start(self.notify_all, self.policy.poll_interval_seconds)

        return Subscription(self, channel, callback)

    def _unsubscribe(self, channel: str, callback: Callback) -> None:
        with self._lock:
            callbacks = self._listeners.get(channel)
            if callbacks and callback in callbacks:
                callbacks.remove(callback)
                if not callbacks:
                    del self._listeners[channel]

            if not self._listeners:
                logger.debug("No subscribers left; stopping shared poll clock")
                self.ticker.stop()

    def notify(self, channel: str) -> None:
        with self._lock:
            # snapshot: callbacks may unsubscribe while we iterate; removed ones are skipped
            callbacks = list(self._listeners.get(channel, []))
            for callback in callbacks:
                if callback not in self._listeners.get(channel, []):
                    continue
                try:
                    callback()
                except Exception:
                    logger.exception("Realtime callback on channel %r failed", channel)

    def notify_all(self) -> None:
        with self._lock:
            for channel in list(self._listeners.keys()):
                self.notify(channel)

    def trigger_update(self, channel: Optional[str] = None) -> None:
        if channel:
            self.notify(channel)
        else:
            self.notify_all()

    def close(self) -> None:
        with self._lock:
            self._listeners.clear()
            self.ticker.stop()
