"""
Realtime package: publish/subscribe between panels without a message bus.

Public API:
- Notifier (interface), PollingNotifier, Subscription, ORDERS_CHANNEL
- Ticker (interface), ThreadTicker, ManualTicker
- RealtimePolicy, default_realtime_policy
"""
from .ticker import Ticker, ThreadTicker, ManualTicker
from .policy import RealtimePolicy, default_realtime_policy
from .notifier import Notifier, PollingNotifier, Subscription, ORDERS_CHANNEL

__all__ = [
    "Ticker",
    "ThreadTicker",
    "ManualTicker",
    "RealtimePolicy",
    "default_realtime_policy",
    "Notifier",
    "PollingNotifier",
    "Subscription",
    "ORDERS_CHANNEL",
]
