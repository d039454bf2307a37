"""
Purpose: Domain models for the Orders capability.
What it does:
- Defines core data structures:
- Order (id, customer, pickup location, optional destination, ambulance type,
  patient info, status, driver assignment, timestamps, emergency flag)
- Location / Destination (lat, lng, free-text address)
- PatientInfo (embedded patient record)

Defines enums/constants:
- OrderStatus = pending | accepted | arriving | arrived | in_transit | completed | cancelled
- ACTIVE_STATUSES / TERMINAL_STATUSES

Persisted shape: camelCase JSON keys, ISO-8601 timestamps, unset optionals omitted.

Rule: No storage access, no transition logic. Models only.
"""
from __future__ import annotations

import random
import string
from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Tuple

LatLng = Tuple[float, float]

ORDER_ID_PREFIX = "ORD-"
ORDER_ID_LENGTH = 9
_BASE36_UPPER = string.digits + string.ascii_uppercase


class OrderStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    ARRIVING = "arriving"
    ARRIVED = "arrived"
    IN_TRANSIT = "in_transit"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# an ambulance is on its way or carrying the patient
ACTIVE_STATUSES = frozenset({
    OrderStatus.ACCEPTED,
    OrderStatus.ARRIVING,
    OrderStatus.ARRIVED,
    OrderStatus.IN_TRANSIT,
})

TERMINAL_STATUSES = frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED})


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def generate_order_id(rng: Optional[random.Random] = None) -> str:
    """ORD- followed by 9 uppercase base36 characters."""
    rng = rng or random
    return ORDER_ID_PREFIX + "".join(rng.choice(_BASE36_UPPER) for _ in range(ORDER_ID_LENGTH))


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _format_timestamp(value: datetime) -> str:
    return value.isoformat()


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    # browsers write a trailing Z (toISOString)
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def _flat_to_dict(instance: Any) -> Dict[str, Any]:
    data = {}
    for item in fields(instance):
        value = getattr(instance, item.name)
        if value is None:
            continue
        data[_camel(item.name)] = value
    return data


def _flat_from_dict(cls: Any, data: Dict[str, Any]) -> Any:
    kwargs = {}
    for item in fields(cls):
        key = _camel(item.name)
        if key in data:
            kwargs[item.name] = data[key]
    return cls(**kwargs)


@dataclass
class Location:
    lat: float
    lng: float
    address: str = "Current Location"

    @property
    def coordinates(self) -> LatLng:
        return (self.lat, self.lng)

    def to_dict(self) -> Dict[str, Any]:
        return _flat_to_dict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Location:
        return _flat_from_dict(cls, data)


@dataclass
class Destination:
    lat: float
    lng: float
    address: str
    hospital_name: str

    @property
    def coordinates(self) -> LatLng:
        return (self.lat, self.lng)

    def to_dict(self) -> Dict[str, Any]:
        return _flat_to_dict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Destination:
        return _flat_from_dict(cls, data)


@dataclass
class PatientInfo:
    """
    Patient record captured by the booking form. Age and phone are kept as the
    strings the form produced; validation lives in booking.validation.
    """
    name: str = ""
    age: str = ""
    emergency_type: str = ""
    phone: str = ""
    gender: Optional[str] = None
    blood_group: Optional[str] = None
    emergency_contact: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    medical_conditions: Optional[str] = None
    allergies: Optional[str] = None
    current_medications: Optional[str] = None
    is_conscious: Optional[bool] = None
    is_breathing: Optional[bool] = None
    visible_injuries: Optional[str] = None
    number_of_patients: Optional[str] = None
    notes: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _flat_to_dict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> PatientInfo:
        return _flat_from_dict(cls, data)


@dataclass
class Order:
    """
    One ambulance-dispatch request.

    Driver fields stay unset while pending and are written together on accept.
    Timestamps are write-once.
    """

    id: str
    customer_id: str
    customer_name: str
    customer_phone: str
    location: Location
    ambulance_type: str
    patient_info: PatientInfo = field(default_factory=PatientInfo)
    status: OrderStatus = OrderStatus.PENDING
    destination: Optional[Destination] = None

    driver_id: Optional[str] = None
    driver_name: Optional[str] = None
    driver_phone: Optional[str] = None

    created_at: datetime = field(default_factory=utcnow)
    accepted_at: Optional[datetime] = None
    arrived_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    is_emergency: bool = False

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES

    @staticmethod # Factory method to create a pending Order with a fresh id
    def new(
        *,
        customer_id: str,
        customer_name: str,
        customer_phone: str,
        location: Location,
        ambulance_type: str,
        patient_info: PatientInfo,
        destination: Optional[Destination] = None,
        is_emergency: bool = False,
        rng: Optional[random.Random] = None,
        now: Optional[datetime] = None,
    ) -> Order:
        return Order(
            id=generate_order_id(rng),
            customer_id=customer_id,
            customer_name=customer_name,
            customer_phone=customer_phone,
            location=location,
            destination=destination,
            ambulance_type=ambulance_type,
            patient_info=patient_info,
            status=OrderStatus.PENDING,
            created_at=now or utcnow(),
            is_emergency=is_emergency,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        for item in fields(self):
            value = getattr(self, item.name)
            if value is None:
                continue
            if isinstance(value, OrderStatus):
                value = value.value
            elif isinstance(value, datetime):
                value = _format_timestamp(value)
            elif isinstance(value, (Location, Destination, PatientInfo)):
                value = value.to_dict()
            data[_camel(item.name)] = value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Order:
        destination = data.get("destination")
        return cls(
            id=data["id"],
            customer_id=data.get("customerId", "guest"),
            customer_name=data.get("customerName", ""),
            customer_phone=data.get("customerPhone", ""),
            location=Location.from_dict(data["location"]),
            destination=Destination.from_dict(destination) if destination else None,
            ambulance_type=data.get("ambulanceType", ""),
            patient_info=PatientInfo.from_dict(data.get("patientInfo") or {}),
            status=OrderStatus(data.get("status", OrderStatus.PENDING.value)),
            driver_id=data.get("driverId"),
            driver_name=data.get("driverName"),
            driver_phone=data.get("driverPhone"),
            created_at=_parse_timestamp(data.get("createdAt")) or utcnow(),
            accepted_at=_parse_timestamp(data.get("acceptedAt")),
            arrived_at=_parse_timestamp(data.get("arrivedAt")),
            completed_at=_parse_timestamp(data.get("completedAt")),
            is_emergency=bool(data.get("isEmergency", False)),
        )
