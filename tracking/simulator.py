"""
Purpose: Customer-side tracking of an ambulance approaching the pickup point.
What it does:
- Starts a synthetic ambulance up to ~1 km away from the pickup
- Every tick moves it a fixed fraction of the remaining gap (exponential approach)
- Every tick burns a fixed slice of a countdown that drives the ETA text;
  when the countdown runs out the display says "Arrived"
- Listens on the "orders" channel and overlays the stored order status
  (e.g. a driver marking the order arrived) without touching the animation

Nothing here writes to the order repository: "arrived" from the countdown is
display state only.
"""

from __future__ import annotations

import logging
import math
import random
import threading
from dataclasses import dataclass
from typing import Optional, Tuple

from orders.models import Order, OrderStatus
from orders.repository import OrderRepository
from realtime.notifier import Notifier, Subscription, ORDERS_CHANNEL
from realtime.ticker import Ticker, ThreadTicker
from routing.eta_service import haversine_km, has_arrived
from .policy import TrackingPolicy, default_tracking_policy

LatLng = Tuple[float, float]

logger = logging.getLogger(__name__)

ARRIVED_TEXT = "Arrived"

PRE_ARRIVAL_STATUSES = frozenset({OrderStatus.PENDING, OrderStatus.ACCEPTED, OrderStatus.ARRIVING})


def format_countdown(seconds: int) -> str:
    if seconds > 60:
        minutes = math.ceil(seconds / 60)
        return f"{minutes} min{'s' if minutes > 1 else ''}"
    if seconds > 0:
        return f"{seconds} secs"
    return ARRIVED_TEXT


@dataclass(frozen=True)
class TrackingSnapshot:
    position: LatLng
    target: LatLng
    distance_km: float
    formatted_distance: str
    formatted_eta: str
    status: OrderStatus
    countdown_seconds: int


class TrackingSimulator:
    """
    Drives the tracking view for one order.

    Usage:
        with TrackingSimulator(order, repository, notifier) as simulator:
            ...
            simulator.snapshot()
    """

    def __init__(
        self,
        order: Order,
        repository: OrderRepository,
        notifier: Notifier,
        policy: Optional[TrackingPolicy] = None,
        ticker: Optional[Ticker] = None,
        rng: Optional[random.Random] = None,
    ):
        self.order = order
        self.repository = repository
        self.notifier = notifier
        self.policy = policy or default_tracking_policy()
        self.policy.validate()
        self.ticker = ticker or ThreadTicker(name=f"tracking-{order.id}")
        self._rng = rng or random.Random()

        self.target: LatLng = order.location.coordinates
        jitter = self.policy.start_jitter_degrees
        self.position: LatLng = (
            self.target[0] + (self._rng.random() - 0.5) * 2 * jitter,
            self.target[1] + (self._rng.random() - 0.5) * 2 * jitter,
        )

        self.countdown_seconds = self.policy.countdown_seconds
        self.status = OrderStatus.ARRIVING
        self.formatted_eta = format_countdown(self.countdown_seconds)
        self.distance_km = haversine_km(self.position, self.target)

        self._subscription: Optional[Subscription] = None
        self._lock = threading.Lock()

    # --- clocks ---

    def tick(self) -> TrackingSnapshot:
        """One animation step: move, recompute distance, burn countdown."""
        with self._lock:
            lat, lng = self.position
            target_lat, target_lng = self.target
            factor = self.policy.convergence_factor

            self.position = (
                lat + (target_lat - lat) * factor,
                lng + (target_lng - lng) * factor,
            )
            self.distance_km = haversine_km(self.position, self.target)

            self.countdown_seconds -= self.policy.countdown_step_seconds
            self.formatted_eta = format_countdown(self.countdown_seconds)
            self.status = self._display_status(self.status)

        return self.snapshot()

    def on_orders_update(self) -> None:
        """Overlay the stored status (written by a driver console) onto the display."""
        stored = self.repository.get(self.order.id) or self.repository.get_current()
        if stored is None or stored.id != self.order.id:
            return
        with self._lock:
            self.order = stored
            status = self._display_status(stored.status)
            if status != self.status:
                logger.debug("Order %s status overlay: %s", stored.id, status.value)
            self.status = status

    def _display_status(self, status: OrderStatus) -> OrderStatus:
        # once the countdown is spent the display never goes back to a pre-arrival status
        if self.countdown_seconds <= 0 and status in PRE_ARRIVAL_STATUSES:
            return OrderStatus.ARRIVED
        return status

    # --- lifecycle ---

    def start(self) -> None:
        if self._subscription is not None:
            return
        self._subscription = self.notifier.subscribe(ORDERS_CHANNEL, self.on_orders_update)
        try:
            self.ticker.start(self.tick, self.policy.tick_seconds)
        except Exception:
            self._subscription.unsubscribe()
            self._subscription = None
            raise

    def stop(self) -> None:
        self.ticker.stop()
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def __enter__(self) -> TrackingSimulator:
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    # --- read side ---

    def has_reached(self) -> bool:
        return has_arrived(self.position, self.target)

    def snapshot(self) -> TrackingSnapshot:
        return TrackingSnapshot(
            position=self.position,
            target=self.target,
            distance_km=self.distance_km,
            formatted_distance=f"{self.distance_km:.2f} km",
            formatted_eta=self.formatted_eta,
            status=self.status,
            countdown_seconds=self.countdown_seconds,
        )
