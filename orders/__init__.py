"""
Orders domain package.

Public API:
- Domain models: Order, Location, Destination, PatientInfo, OrderStatus
- Repository: OrderRepository, ConcurrentUpdateError
- Catalog: AMBULANCE_TYPES, get_ambulance_type

"""
from .models import (
    Order,
    Location,
    Destination,
    PatientInfo,
    OrderStatus,
    ACTIVE_STATUSES,
    TERMINAL_STATUSES,
    generate_order_id,
)
from .repository import OrderRepository, ConcurrentUpdateError
from .ambulance_types import AmbulanceType, AMBULANCE_TYPES, get_ambulance_type

__all__ = ["Order",
           "Location",
             "Destination",
               "PatientInfo",
               "OrderStatus",
               "ACTIVE_STATUSES",
               "TERMINAL_STATUSES",
               "generate_order_id",
               "OrderRepository",
               "ConcurrentUpdateError",
               "AmbulanceType",
               "AMBULANCE_TYPES",
               "get_ambulance_type",
               ]
