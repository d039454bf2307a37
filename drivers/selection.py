"""
Purpose: Business rules for choosing a driver for a pending order.
What it does:
Derives which roster drivers are on duty from the current orders, filters out
ineligible drivers, and picks the first available one in roster order.

Closest-driver ranking is deliberately not done here: matching is
first-available.
"""

from typing import Iterable, List, Optional

from orders.models import Order, ACTIVE_STATUSES
from .models import Driver


def current_order_for(driver: Driver, orders: Iterable[Order]) -> Optional[Order]:
    """The in-progress order referencing this driver, if any."""
    for order in orders:
        if order.driver_id == driver.id and order.status in ACTIVE_STATUSES:
            return order
    return None


def is_on_duty(driver: Driver, orders: Iterable[Order]) -> bool:
    return current_order_for(driver, orders) is not None


def filter_eligible_drivers(
    drivers: Iterable[Driver],
    orders: Iterable[Order],
    ambulance_type: Optional[str] = None,
) -> List[Driver]:
    """
    Returns only drivers who are flagged available on the roster, are not
    already on an in-progress order and (if requested) run the right ambulance type.
    """
    orders = list(orders)
    eligible = []

    for driver in drivers:
        if not driver.is_available:
            continue

        if ambulance_type is not None and driver.ambulance_type != ambulance_type:
            continue

        if is_on_duty(driver, orders):
            continue

        eligible.append(driver)

    return eligible


def select_first_available(
    drivers: Iterable[Driver],
    orders: Iterable[Order],
    ambulance_type: Optional[str] = None,
) -> Optional[Driver]:
    eligible = filter_eligible_drivers(drivers, orders, ambulance_type)
    return eligible[0] if eligible else None
