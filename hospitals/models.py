"""
Hospital directory entry as shown on the admin console.
`distance` is relative to the viewer and recomputed on every load.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

DEFAULT_EMERGENCY_CONTACT = "+91 100"

_KEYS = {
    "id": "id",
    "name": "name",
    "address": "address",
    "lat": "lat",
    "lng": "lng",
    "distance": "distance",
    "total_beds": "totalBeds",
    "available_beds": "availableBeds",
    "icu_beds": "icuBeds",
    "available_icu_beds": "availableIcuBeds",
    "emergency_contact": "emergencyContact",
    "phone": "phone",
    "is_custom": "isCustom",
}


@dataclass
class Hospital:
    id: str
    name: str
    address: str
    lat: float
    lng: float
    distance: float = 0.0
    total_beds: int = 0
    available_beds: int = 0
    icu_beds: int = 0
    available_icu_beds: int = 0
    emergency_contact: str = DEFAULT_EMERGENCY_CONTACT
    phone: Optional[str] = None
    is_custom: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data = {}
        for item in fields(self):
            value = getattr(self, item.name)
            if value is None:
                continue
            if item.name == "is_custom" and not value:
                continue
            data[_KEYS[item.name]] = value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Hospital:
        kwargs = {name: data[key] for name, key in _KEYS.items() if key in data}
        return cls(**kwargs)


def synthetic_beds(rng: Optional[random.Random] = None) -> Dict[str, int]:
    """Demo bed availability for entries the directory knows nothing about."""
    rng = rng or random
    total_beds = int(rng.random() * 400) + 100
    available_beds = int(rng.random() * (total_beds * 0.3))
    icu_beds = int(total_beds * 0.1)
    available_icu_beds = int(rng.random() * (icu_beds * 0.4))
    return {
        "total_beds": total_beds,
        "available_beds": available_beds,
        "icu_beds": icu_beds,
        "available_icu_beds": available_icu_beds,
    }
