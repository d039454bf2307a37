"""
Drivers domain package.

Public API:
- Driver, DRIVERS, get_driver
- select_first_available, is_on_duty, current_order_for
- DriverPolicy, default_driver_policy
"""
from .models import Driver
from .roster import DRIVERS, get_driver
from .selection import select_first_available, filter_eligible_drivers, is_on_duty, current_order_for
from .policy import DriverPolicy, default_driver_policy

__all__ = [
    "Driver",
    "DRIVERS",
    "get_driver",
    "select_first_available",
    "filter_eligible_drivers",
    "is_on_duty",
    "current_order_for",
    "DriverPolicy",
    "default_driver_policy",
]
