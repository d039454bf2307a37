"""
Purpose: Core data models for the drivers domain.
What it does:
Defines the structure of a demo ambulance Driver. Drivers are static roster
entries; "on duty" is derived from orders at read time, never stored.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

LatLng = Tuple[float, float]


@dataclass(frozen=True)
class Driver:
    """
    A purely stateless representation of a roster Driver.
    """
    id: str
    name: str
    phone: str
    ambulance_type: str
    vehicle_number: str
    location: LatLng

    # Roster flag; the admin console counts these as "available drivers".
    is_available: bool = True
    rating: float = 0.0
    total_rides: int = 0

    @classmethod
    def new(
        cls,
        driver_id: str,
        name: str,
        phone: str,
        ambulance_type: str,
        vehicle_number: str,
        lat: float,
        lng: float,
        is_available: bool = True,
        rating: float = 0.0,
        total_rides: int = 0,
    ) -> Driver:
        return cls(
            id=driver_id,
            name=name,
            phone=phone,
            ambulance_type=ambulance_type,
            vehicle_number=vehicle_number,
            location=(lat, lng),
            is_available=is_available,
            rating=rating,
            total_rides=total_rides,
        )

    def to_dict(self) -> Dict[str, Any]:
        lat, lng = self.location
        return {
            "id": self.id,
            "name": self.name,
            "phone": self.phone,
            "ambulanceType": self.ambulance_type,
            "vehicleNumber": self.vehicle_number,
            "isAvailable": self.is_available,
            "rating": self.rating,
            "totalRides": self.total_rides,
            "location": {"lat": lat, "lng": lng},
        }
