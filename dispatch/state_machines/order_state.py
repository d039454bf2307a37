"""
Purpose: Guarded order lifecycle.

pending --accept(driver)--> accepted --start--> arriving --arrive--> arrived
        --depart--> in_transit --complete--> completed
any non-terminal state --cancel--> cancelled

Each transition checks the graph, then writes through the repository with an
optimistic status check so two panels racing on the same order cannot both win.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from drivers.models import Driver
from orders.models import Order, OrderStatus, utcnow
from orders.repository import OrderRepository

ALLOWED_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.ACCEPTED, OrderStatus.CANCELLED},
    OrderStatus.ACCEPTED: {OrderStatus.ARRIVING, OrderStatus.CANCELLED},
    OrderStatus.ARRIVING: {OrderStatus.ARRIVED, OrderStatus.CANCELLED},
    OrderStatus.ARRIVED: {OrderStatus.IN_TRANSIT, OrderStatus.CANCELLED},
    OrderStatus.IN_TRANSIT: {OrderStatus.COMPLETED, OrderStatus.CANCELLED},
    OrderStatus.COMPLETED: set(),
    OrderStatus.CANCELLED: set(),
}


class OrderStateException(Exception):
    """Raised when an invalid state transition is attempted."""
    pass


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    return OrderStatus(target) in ALLOWED_TRANSITIONS[OrderStatus(current)]


def transition_order(
    repository: OrderRepository,
    order_id: str,
    target: OrderStatus,
    patch: Optional[Dict[str, Any]] = None,
) -> Optional[Order]:
    """
    Move an order to `target`. Returns None for an unknown id.
    Raises OrderStateException for an edge outside the graph and
    ConcurrentUpdateError if another writer changed the status meanwhile.
    """
    order = repository.get(order_id)
    if order is None:
        return None

    if not can_transition(order.status, target):
        raise OrderStateException(
            f"Cannot transition order {order.id} from {order.status.value} to {OrderStatus(target).value}"
        )

    return repository.update_status(order_id, target, patch, expected_status=order.status)


def accept_order(
    repository: OrderRepository,
    order_id: str,
    driver: Driver,
    now: Optional[datetime] = None,
) -> Optional[Order]:
    """
    Called when a driver takes a pending order. Driver id, name and phone are
    written together with acceptedAt.
    """
    if not (driver.id and driver.name and driver.phone):
        raise OrderStateException(f"Driver {driver.id!r} is missing id, name or phone")

    return transition_order(
        repository,
        order_id,
        OrderStatus.ACCEPTED,
        {
            "driver_id": driver.id,
            "driver_name": driver.name,
            "driver_phone": driver.phone,
            "accepted_at": now or utcnow(),
        },
    )


def start_trip(repository: OrderRepository, order_id: str) -> Optional[Order]:
    return transition_order(repository, order_id, OrderStatus.ARRIVING)


def mark_arrived(repository: OrderRepository, order_id: str, now: Optional[datetime] = None) -> Optional[Order]:
    return transition_order(repository, order_id, OrderStatus.ARRIVED, {"arrived_at": now or utcnow()})


def depart_to_hospital(repository: OrderRepository, order_id: str) -> Optional[Order]:
    return transition_order(repository, order_id, OrderStatus.IN_TRANSIT)


def complete_order(repository: OrderRepository, order_id: str, now: Optional[datetime] = None) -> Optional[Order]:
    return transition_order(repository, order_id, OrderStatus.COMPLETED, {"completed_at": now or utcnow()})


def cancel_order(repository: OrderRepository, order_id: str) -> Optional[Order]:
    return transition_order(repository, order_id, OrderStatus.CANCELLED)
