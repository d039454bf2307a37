"""
Purpose: Driver console (the ambulance crew's panel).
What it does:
- Shows pending orders and the driver's own in-progress order
- Accept a pending order, then walk it through start -> arrive -> depart -> complete
  (or cancel) using the guarded transitions
- Every successful write triggers an "orders" notification
- Refreshes on its own poll clock and on every notification
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional

from dispatch.state_machines.order_state import (
    OrderStateException,
    accept_order,
    start_trip,
    mark_arrived,
    depart_to_hospital,
    complete_order,
    cancel_order,
)
from drivers.models import Driver
from drivers.selection import current_order_for
from orders.models import Order, OrderStatus
from orders.repository import OrderRepository, ConcurrentUpdateError
from realtime.notifier import Notifier, Subscription, ORDERS_CHANNEL
from realtime.ticker import Ticker, ThreadTicker
from .policy import ConsolePolicy, default_console_policy

logger = logging.getLogger(__name__)


class DriverAction(str, Enum):
    """Buttons on the console; each maps to one lifecycle transition."""
    START = "start"
    ARRIVE = "arrive"
    DEPART = "depart"
    COMPLETE = "complete"
    CANCEL = "cancel"


# the one button shown for the current status
NEXT_ACTION = {
    OrderStatus.ACCEPTED: DriverAction.START,
    OrderStatus.ARRIVING: DriverAction.ARRIVE,
    OrderStatus.ARRIVED: DriverAction.DEPART,
    OrderStatus.IN_TRANSIT: DriverAction.COMPLETE,
}


class DriverConsole:

    def __init__(
        self,
        driver: Driver,
        repository: OrderRepository,
        notifier: Notifier,
        policy: Optional[ConsolePolicy] = None,
        ticker: Optional[Ticker] = None,
    ):
        self.driver = driver
        self.repository = repository
        self.notifier = notifier
        self.policy = policy or default_console_policy()
        self.policy.validate()
        self.ticker = ticker or ThreadTicker(name=f"driver-console-{driver.id}")

        self.pending_orders: List[Order] = []
        self.current_order: Optional[Order] = None
        self.is_online = True
        self._subscription: Optional[Subscription] = None

    # --- read side ---

    def load_orders(self) -> None:
        orders = self.repository.list()
        self.pending_orders = [order for order in orders if order.status == OrderStatus.PENDING]
        self.current_order = current_order_for(self.driver, orders)

    def next_action(self) -> Optional[DriverAction]:
        if self.current_order is None:
            return None
        return NEXT_ACTION.get(self.current_order.status)

    # --- write side ---

    def accept_order(self, order_id: str) -> Optional[Order]:
        try:
            updated = accept_order(self.repository, order_id, self.driver)
        except (OrderStateException, ConcurrentUpdateError) as exc:
            logger.warning("Driver %s could not accept %s: %s", self.driver.id, order_id, exc)
            self.load_orders()
            return None

        if updated is None:
            return None

        self.current_order = updated
        self.pending_orders = [order for order in self.pending_orders if order.id != order_id]
        self.notifier.trigger_update(ORDERS_CHANNEL)
        return updated

    def perform(self, action: DriverAction) -> Optional[Order]:
        if self.current_order is None:
            return None

        order_id = self.current_order.id
        transitions = {
            DriverAction.START: lambda: start_trip(self.repository, order_id),
            DriverAction.ARRIVE: lambda: mark_arrived(self.repository, order_id),
            DriverAction.DEPART: lambda: depart_to_hospital(self.repository, order_id),
            DriverAction.COMPLETE: lambda: complete_order(self.repository, order_id),
            DriverAction.CANCEL: lambda: cancel_order(self.repository, order_id),
        }

        try:
            updated = transitions[DriverAction(action)]()
        except (OrderStateException, ConcurrentUpdateError) as exc:
            logger.warning("Driver %s: %s on %s rejected: %s", self.driver.id, DriverAction(action).value, order_id, exc)
            self.load_orders()
            return None

        if updated is None or updated.is_terminal:
            self.current_order = None
        else:
            self.current_order = updated

        self.notifier.trigger_update(ORDERS_CHANNEL)
        return updated

    def update_status(self, new_status: OrderStatus) -> Optional[Order]:
        """Status-based entry point: the action whose transition produces `new_status`."""
        by_status = {
            OrderStatus.ARRIVING: DriverAction.START,
            OrderStatus.ARRIVED: DriverAction.ARRIVE,
            OrderStatus.IN_TRANSIT: DriverAction.DEPART,
            OrderStatus.COMPLETED: DriverAction.COMPLETE,
            OrderStatus.CANCELLED: DriverAction.CANCEL,
        }
        action = by_status.get(OrderStatus(new_status))
        if action is None:
            logger.warning("Driver console cannot set status %s directly", new_status)
            return None
        return self.perform(action)

    # --- lifecycle ---

    def start(self) -> None:
        if self._subscription is not None:
            return
        self.load_orders()
        self._subscription = self.notifier.subscribe(ORDERS_CHANNEL, self.load_orders)
        try:
            self.ticker.start(self.load_orders, self.policy.driver_poll_seconds)
        except Exception:
            self._subscription.unsubscribe()
            self._subscription = None
            raise

    def stop(self) -> None:
        self.ticker.stop()
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def __enter__(self) -> DriverConsole:
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
