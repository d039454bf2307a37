"""
Purpose: Simulated assignment loop (the "glue" between bookings and drivers).
What it does:
On every poll tick, scans pending orders oldest first and hands each one to
the first available roster driver through the guarded accept transition.
Any assignment triggers one "orders" notification so open panels refresh.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from drivers.models import Driver
from drivers.policy import DriverPolicy, default_driver_policy
from drivers.roster import DRIVERS
from drivers.selection import select_first_available
from orders.models import OrderStatus
from orders.repository import OrderRepository, ConcurrentUpdateError
from realtime.notifier import Notifier, ORDERS_CHANNEL
from realtime.ticker import Ticker, ThreadTicker
from .state_machines.order_state import accept_order, OrderStateException

logger = logging.getLogger(__name__)


class Dispatcher:
    """
    Coordinates the hand-off of pending Orders to demo Drivers.
    """
    def __init__(
        self,
        repository: OrderRepository,
        notifier: Notifier,
        drivers: Optional[Sequence[Driver]] = None,
        policy: Optional[DriverPolicy] = None,
        ticker: Optional[Ticker] = None,
    ):
        self.repository = repository
        self.notifier = notifier
        self.drivers = list(drivers if drivers is not None else DRIVERS)
        self.policy = policy or default_driver_policy()
        self.policy.validate()
        self.ticker = ticker or ThreadTicker(name="dispatcher")

    def run_cycle(self) -> List[Tuple[str, str]]:
        """
        One matching pass. Returns (order_id, driver_id) pairs assigned in this pass.
        """
        assignments: List[Tuple[str, str]] = []

        pending = sorted(self.repository.list_pending(), key=lambda order: order.created_at)
        if not pending:
            return assignments

        for order in pending:
            # re-read every time: our own accepts change who is on duty
            orders = self.repository.list()
            driver = select_first_available(
                self.drivers,
                orders,
                ambulance_type=order.ambulance_type if self.policy.match_ambulance_type else None,
            )
            if driver is None:
                logger.info("No available driver for order %s", order.id)
                continue

            try:
                updated = accept_order(self.repository, order.id, driver)
            except (OrderStateException, ConcurrentUpdateError) as exc:
                # another panel got there first
                logger.warning("Skipping order %s: %s", order.id, exc)
                continue

            if updated is not None and updated.status == OrderStatus.ACCEPTED:
                logger.info("Assigned order %s to driver %s", order.id, driver.id)
                assignments.append((order.id, driver.id))

        if assignments:
            self.notifier.trigger_update(ORDERS_CHANNEL)
        return assignments

    def start(self) -> None:
        self.ticker.start(self.run_cycle, self.policy.dispatch_poll_seconds)

    def stop(self) -> None:
        self.ticker.stop()

    def __enter__(self) -> "Dispatcher":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
