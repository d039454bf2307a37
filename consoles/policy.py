"""
Purpose: Refresh cadence of the panels.

DRIVER_POLL_SECONDS = 3
ADMIN_POLL_SECONDS = 5

These run in addition to the notifier's shared clock.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class ConsolePolicy:
    driver_poll_seconds: float = 3.0
    admin_poll_seconds: float = 5.0

    # radius used when the admin console loads nearby hospitals
    hospital_radius_km: float = 15.0

    def validate(self) -> None:
        if self.driver_poll_seconds <= 0 or self.admin_poll_seconds <= 0:
            raise ValueError("poll intervals must be > 0")

        if self.hospital_radius_km <= 0:
            raise ValueError("hospital_radius_km must be > 0")


def default_console_policy() -> ConsolePolicy:
    p = ConsolePolicy()
    p.validate()
    return p
