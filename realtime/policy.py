"""
Purpose: Central configuration for the realtime notifier.

POLL_INTERVAL_SECONDS = 2 (shared clock firing notify_all)

Rule: No logic here, just parameters.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class RealtimePolicy:
    # Any panel open longer than one interval observes writes made elsewhere.
    poll_interval_seconds: float = 2.0

    def validate(self) -> None:
        if self.poll_interval_seconds <= 0:
            raise ValueError("poll_interval_seconds must be > 0")


def default_realtime_policy() -> RealtimePolicy:
    p = RealtimePolicy()
    p.validate()
    return p
