"""
Purpose: Central configuration for simulated driver assignment.
What it does:

Stores the tunables for the auto-assignment loop:

DISPATCH_POLL_SECONDS = 3
MATCH_AMBULANCE_TYPE = False (first available driver regardless of vehicle)

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class DriverPolicy:
    """
    Central configuration for the dispatcher.
    """

    # --- Dispatcher clock ---
    # How often pending orders are re-scanned for a free driver.
    dispatch_poll_seconds: float = 3.0

    # --- Matching ---
    # Demo behavior: any free driver takes any order.
    # Set True to only hand an order to a driver running the booked ambulance type.
    match_ambulance_type: bool = False

    def validate(self) -> None:
        """
        Basic sanity checks.
        """
        if self.dispatch_poll_seconds <= 0:
            raise ValueError("dispatch_poll_seconds must be > 0")


def default_driver_policy() -> DriverPolicy:
    """
    Convenience factory for the default policy.
    """
    p = DriverPolicy()
    p.validate()
    return p
