"""
Catalog of bookable ambulance types. Static data, shown by the booking
wizard and the consoles.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class AmbulanceType:
    id: str
    name: str
    description: str
    estimated_time: str
    features: Tuple[str, ...]
    equipment: str
    staff: str
    capacity: str


AMBULANCE_TYPES: List[AmbulanceType] = [
    AmbulanceType(
        id="basic",
        name="Basic Ambulance",
        description="Standard life support for non-critical transport",
        estimated_time="8-10 mins",
        features=(
            "Two trained paramedics",
            "Oxygen supply",
            "First aid equipment",
            "GPS tracking",
            "Climate controlled",
        ),
        equipment="Basic",
        staff="2 Paramedics",
        capacity="1 Patient + 1 Attendant",
    ),
    AmbulanceType(
        id="icu",
        name="Ambulance with ICU",
        description="Advanced life support with ICU facilities",
        estimated_time="10-12 mins",
        features=(
            "Advanced life support equipment",
            "Cardiac monitor & defibrillator",
            "Ventilator support",
            "Intensive care trained staff",
            "Advanced medications",
        ),
        equipment="Advanced ICU",
        staff="2 Advanced Paramedics + 1 Nurse",
        capacity="1 Patient + 1 Attendant",
    ),
    AmbulanceType(
        id="critical",
        name="Critical Care Ambulance",
        description="Mobile ICU for critical emergency situations",
        estimated_time="12-15 mins",
        features=(
            "Full ICU equipment",
            "Critical care specialists",
            "Advanced imaging capability",
            "Telemedicine support",
            "Direct hospital coordination",
        ),
        equipment="Full Critical Care",
        staff="2 Advanced Paramedics + 2 Nurses + 1 Doctor",
        capacity="1 Critical Patient + 2 Attendants",
    ),
    AmbulanceType(
        id="neonatal",
        name="Neonatal Ambulance",
        description="Specialized transport for newborns and infants",
        estimated_time="10-12 mins",
        features=(
            "Neonatal ICU equipment",
            "Temperature control pods",
            "Specialized pediatric staff",
            "Incubator support",
            "Gentle handling protocols",
        ),
        equipment="Neonatal ICU",
        staff="2 Neonatal Specialists + 1 Nurse",
        capacity="1-2 Neonates + Parents",
    ),
    AmbulanceType(
        id="air",
        name="Air Ambulance",
        description="Helicopter for critical long-distance transport",
        estimated_time="5-7 mins",
        features=(
            "Helicopter transport",
            "Flight doctor & paramedics",
            "Advanced flight medical equipment",
            "Long-distance capability",
            "Emergency landing sites",
        ),
        equipment="Helicopter Medical",
        staff="1 Flight Doctor + 2 Paramedics + Pilot",
        capacity="1 Critical Patient + 1 Attendant",
    ),
]

_BY_ID: Dict[str, AmbulanceType] = {ambulance.id: ambulance for ambulance in AMBULANCE_TYPES}


def get_ambulance_type(type_id: str) -> Optional[AmbulanceType]:
    return _BY_ID.get(type_id)


def is_known_ambulance_type(type_id: str) -> bool:
    return type_id in _BY_ID
