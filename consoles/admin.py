"""
Purpose: Hospital admin console.
What it does:
- Order statistics (total, active, completed today, available drivers)
- Incoming ambulances (arriving / in transit) and per-driver current order
- Nearby hospitals merged with locally edited copies, bed edits, new hospitals
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import List, Optional, Sequence, Tuple

from drivers.models import Driver
from drivers.roster import DRIVERS
from drivers.selection import current_order_for
from hospitals.models import Hospital
from hospitals.registry import HospitalRegistry
from orders.models import Order, OrderStatus, ACTIVE_STATUSES
from orders.repository import OrderRepository
from realtime.notifier import Notifier, Subscription, ORDERS_CHANNEL
from realtime.ticker import Ticker, ThreadTicker
from .policy import ConsolePolicy, default_console_policy

logger = logging.getLogger(__name__)

INCOMING_STATUSES = frozenset({OrderStatus.ARRIVING, OrderStatus.IN_TRANSIT})


@dataclass(frozen=True)
class AdminStats:
    total_orders: int
    # pending counts as active here
    active_orders: int
    completed_today: int
    available_drivers: int


class AdminConsole:

    def __init__(
        self,
        repository: OrderRepository,
        notifier: Notifier,
        hospitals: HospitalRegistry,
        drivers: Optional[Sequence[Driver]] = None,
        policy: Optional[ConsolePolicy] = None,
        ticker: Optional[Ticker] = None,
    ):
        self.repository = repository
        self.notifier = notifier
        self.registry = hospitals
        self.drivers = list(drivers if drivers is not None else DRIVERS)
        self.policy = policy or default_console_policy()
        self.policy.validate()
        self.ticker = ticker or ThreadTicker(name="admin-console")

        self.orders: List[Order] = []
        self.stats = AdminStats(0, 0, 0, 0)
        self.hospitals: List[Hospital] = []
        self.selected_hospital: Optional[Hospital] = None
        self._subscription: Optional[Subscription] = None

    # --- orders ---

    def load_data(self, today: Optional[date] = None) -> AdminStats:
        today = today or date.today()
        self.orders = self.repository.list()

        completed_today = sum(
            1 for order in self.orders
            if order.status == OrderStatus.COMPLETED
            and order.completed_at is not None
            and order.completed_at.astimezone().date() == today
        )
        active = sum(
            1 for order in self.orders
            if order.status == OrderStatus.PENDING or order.status in ACTIVE_STATUSES
        )

        self.stats = AdminStats(
            total_orders=len(self.orders),
            active_orders=active,
            completed_today=completed_today,
            available_drivers=sum(1 for driver in self.drivers if driver.is_available),
        )
        return self.stats

    def incoming_ambulances(self) -> List[Order]:
        return [order for order in self.orders if order.status in INCOMING_STATUSES]

    def driver_assignments(self) -> List[Tuple[Driver, Optional[Order]]]:
        return [(driver, current_order_for(driver, self.orders)) for driver in self.drivers]

    # --- hospitals ---

    def load_hospitals(self, lat: float, lng: float) -> List[Hospital]:
        self.hospitals = self.registry.load_hospitals(lat, lng, self.policy.hospital_radius_km)
        self.selected_hospital = self.hospitals[0] if self.hospitals else None
        return self.hospitals

    def save_hospital_edit(self, hospital: Hospital, **changes) -> Hospital:
        updated = self.registry.update_hospital(replace(hospital, **changes))
        self.hospitals = [updated if item.id == updated.id else item for item in self.hospitals]
        if self.selected_hospital is not None and self.selected_hospital.id == updated.id:
            self.selected_hospital = updated
        return updated

    def add_hospital(self, name: str, lat: float, lng: float, **details) -> Optional[Hospital]:
        hospital = self.registry.add_custom_hospital(name, lat, lng, **details)
        if hospital is not None:
            self.hospitals.append(hospital)
        return hospital

    # --- lifecycle ---

    def _refresh(self) -> None:
        self.load_data()

    def start(self) -> None:
        if self._subscription is not None:
            return
        self.load_data()
        self._subscription = self.notifier.subscribe(ORDERS_CHANNEL, self._refresh)
        try:
            self.ticker.start(self._refresh, self.policy.admin_poll_seconds)
        except Exception:
            self._subscription.unsubscribe()
            self._subscription = None
            raise

    def stop(self) -> None:
        self.ticker.stop()
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def __enter__(self) -> AdminConsole:
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
