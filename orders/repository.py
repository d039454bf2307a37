"""
Purpose: Order Repository (the order collection owned by the storage layer).
What it does:
- Owns the persisted, insertion-ordered list of orders under "allOrders"
- Provides operations:
   - create(order)            upsert by id
   - get(order_id)            Order | None
   - list()                   insertion order
   - update_status(...)       merge patch + overwrite status
   - list_pending / list_active / list_for_driver
   - save_current / get_current  (booking -> tracking hand-off snapshot)

Rule: Repository persists, it does not judge. The transition graph is enforced
by dispatch.state_machines.order_state, not here. There is no delete.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Any, Dict, List, Optional

from storage import KeyValueStore, ALL_ORDERS_KEY, CURRENT_ORDER_KEY
from .models import Order, OrderStatus, ACTIVE_STATUSES

logger = logging.getLogger(__name__)

# write-once
TIMESTAMP_FIELDS = ("created_at", "accepted_at", "arrived_at", "completed_at")


class ConcurrentUpdateError(Exception):
    """Raised when an optimistic status check fails (someone else wrote first)."""

    def __init__(self, order_id: str, expected: OrderStatus, actual: OrderStatus):
        super().__init__(
            f"Order {order_id} was expected in status {expected.value} but is {actual.value}"
        )
        self.order_id = order_id
        self.expected = expected
        self.actual = actual


class OrderRepository:
    """
    CRUD over the persisted order collection.

    Every operation re-reads storage so writes made by another process sharing
    the same backend are observed (last write wins across processes).
    """

    def __init__(self, store: KeyValueStore):
        self.store = store
        # serializes read-modify-write within this process (ticker threads)
        self._lock = threading.RLock()

    # --- internal helpers ---

    def _load_raw(self) -> List[Dict[str, Any]]:
        return self.store.get(ALL_ORDERS_KEY, []) or []

    def _save_raw(self, raw_orders: List[Dict[str, Any]]) -> None:
        self.store.put(ALL_ORDERS_KEY, raw_orders)

    @staticmethod
    def _index_of(raw_orders: List[Dict[str, Any]], order_id: str) -> int:
        for index, raw in enumerate(raw_orders):
            if raw.get("id") == order_id:
                return index
        return -1

    # --- Public API ---

    def create(self, order: Order) -> Order:
        """
        Append a new order. An existing id is replaced in place (upsert),
        keeping its position in the collection.
        """
        with self._lock:
            raw_orders = self._load_raw()
            index = self._index_of(raw_orders, order.id)
            if index >= 0:
                logger.info("Order %s already stored; updating in place", order.id)
                raw_orders[index] = order.to_dict()
            else:
                raw_orders.append(order.to_dict())
                logger.info("Created order %s (%s)", order.id, order.status.value)
            self._save_raw(raw_orders)
        return order

    def get(self, order_id: str) -> Optional[Order]:
        raw_orders = self._load_raw()
        index = self._index_of(raw_orders, order_id)
        if index < 0:
            return None
        return Order.from_dict(raw_orders[index])

    def list(self) -> List[Order]:
        return [Order.from_dict(raw) for raw in self._load_raw()]

    def update_status(
        self,
        order_id: str,
        status: OrderStatus,
        patch: Optional[Dict[str, Any]] = None,
        *,
        expected_status: Optional[OrderStatus] = None,
    ) -> Optional[Order]:
        """
        Merge `patch` (Order attribute names) into the stored order and overwrite
        its status. Fields missing from the patch are kept; None values in the
        patch are ignored so a write never clears a field. A timestamp that is
        already set cannot be rewritten (ValueError, nothing is written).

        Returns the updated order, or None when the id is unknown (nothing is written).

        expected_status: optimistic concurrency guard. When given and the stored
        status differs, raises ConcurrentUpdateError without writing.
        """
        status = OrderStatus(status)
        changes = {key: value for key, value in (patch or {}).items() if value is not None}
        changes.pop("status", None)
        if "id" in changes and changes["id"] != order_id:
            raise ValueError("Order id is immutable")

        with self._lock:
            raw_orders = self._load_raw()
            index = self._index_of(raw_orders, order_id)
            if index < 0:
                logger.warning("update_status: order %s not found", order_id)
                return None

            current = Order.from_dict(raw_orders[index])
            if expected_status is not None and current.status != OrderStatus(expected_status):
                raise ConcurrentUpdateError(order_id, OrderStatus(expected_status), current.status)

            for name in TIMESTAMP_FIELDS:
                if name in changes and getattr(current, name) is not None and changes[name] != getattr(current, name):
                    raise ValueError(f"Order {order_id}: {name} is already set and cannot be rewritten")

            updated = replace(current, status=status, **changes)
            raw_orders[index] = updated.to_dict()
            self._save_raw(raw_orders)

        logger.info("Order %s: %s -> %s", order_id, current.status.value, status.value)
        return updated

    def list_pending(self) -> List[Order]:
        return [order for order in self.list() if order.status == OrderStatus.PENDING]

    def list_active(self) -> List[Order]:
        return [order for order in self.list() if order.status in ACTIVE_STATUSES]

    def list_for_driver(self, driver_id: str) -> List[Order]:
        return [order for order in self.list() if order.driver_id == driver_id]

    # --- booking -> tracking hand-off ---

    def save_current(self, order: Order) -> None:
        self.store.put(CURRENT_ORDER_KEY, order.to_dict())

    def get_current(self) -> Optional[Order]:
        raw = self.store.get(CURRENT_ORDER_KEY)
        if not raw:
            return None
        return Order.from_dict(raw)
