from .order_state import (
    ALLOWED_TRANSITIONS,
    OrderStateException,
    can_transition,
    transition_order,
    accept_order,
    start_trip,
    mark_arrived,
    depart_to_hospital,
    complete_order,
    cancel_order,
)
