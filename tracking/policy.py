"""
Purpose: Central configuration for the tracking simulation.
What it does:

Stores the tunables of the two independent clocks:

TICK_SECONDS = 2              one animation step
CONVERGENCE_FACTOR = 0.15     fraction of the remaining gap covered per tick
START_JITTER_DEGREES = 0.01   max start offset per axis (~1 km)
COUNTDOWN_SECONDS = 240       displayed ETA budget
COUNTDOWN_STEP_SECONDS = 3    budget consumed per tick

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class TrackingPolicy:
    """
    Position convergence and the ETA countdown are deliberately independent:
    the countdown does not look at geometry.
    """

    # --- Animation clock ---
    tick_seconds: float = 2.0

    # --- Geometric approach ---
    # new_pos = pos + (target - pos) * convergence_factor
    convergence_factor: float = 0.15
    start_jitter_degrees: float = 0.01

    # --- ETA countdown ---
    countdown_seconds: int = 240
    countdown_step_seconds: int = 3

    def validate(self) -> None:
        """
        Basic sanity checks.
        """
        if self.tick_seconds <= 0:
            raise ValueError("tick_seconds must be > 0")

        if not 0 < self.convergence_factor <= 1:
            raise ValueError("convergence_factor must be in (0, 1]")

        if self.start_jitter_degrees < 0:
            raise ValueError("start_jitter_degrees must be >= 0")

        if self.countdown_seconds < 0:
            raise ValueError("countdown_seconds must be >= 0")

        if self.countdown_step_seconds <= 0:
            raise ValueError("countdown_step_seconds must be > 0")


def default_tracking_policy() -> TrackingPolicy:
    p = TrackingPolicy()
    p.validate()
    return p
