#Expose the assignment pipeline pieces:
#Guarded lifecycle transitions (state machine)
#Dispatcher (first-available matching loop)

from .state_machines.order_state import (
    OrderStateException,
    accept_order,
    start_trip,
    mark_arrived,
    depart_to_hospital,
    complete_order,
    cancel_order,
)
from .dispatcher import Dispatcher

__all__ = [
    "OrderStateException",
    "accept_order",
    "start_trip",
    "mark_arrived",
    "depart_to_hospital",
    "complete_order",
    "cancel_order",
    "Dispatcher",
]
