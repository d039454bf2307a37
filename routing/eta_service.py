"""
Purpose: Geo math for distance / ETA display.
What it does:
- haversine great-circle distance in km (earth radius 6371 km)
- converts a distance into a customer-facing "arrives in X" estimate
- arrival radius test used by any simulated approach

Pure functions. Inputs are not validated (NaN propagates).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

LatLng = Tuple[float, float]

EARTH_RADIUS_KM = 6371.0
DEFAULT_AVG_SPEED_KMH = 40.0
ARRIVAL_RADIUS_M = 50.0


@dataclass(frozen=True)
class EtaResult:
    distance_km: float
    distance_m: float
    eta_minutes: int
    eta_seconds: int
    formatted_distance: str
    formatted_eta: str


def haversine_km(origin: LatLng, destination: LatLng) -> float:
    lat1, lng1 = origin
    lat2, lng2 = destination

    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)

    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def format_distance(distance_km: float) -> str:
    """Meters below 1 km, otherwise km with two decimals."""
    if distance_km < 1:
        return f"{round(distance_km * 1000)} m"
    return f"{distance_km:.2f} km"


def format_eta(eta_minutes: int) -> str:
    if eta_minutes < 60:
        return f"{eta_minutes} min"
    return f"{eta_minutes // 60}h {eta_minutes % 60}m"


def estimate_eta(origin: LatLng, destination: LatLng, avg_speed_kmh: float = DEFAULT_AVG_SPEED_KMH) -> EtaResult:
    """
    ETA at a constant average ambulance speed.

    minutes = ceil(hours * 60), seconds = ceil(hours * 3600)
    """
    distance_km = haversine_km(origin, destination)
    hours = distance_km / avg_speed_kmh

    eta_minutes = math.ceil(hours * 60)
    eta_seconds = math.ceil(hours * 3600)

    return EtaResult(
        distance_km=distance_km,
        distance_m=distance_km * 1000,
        eta_minutes=eta_minutes,
        eta_seconds=eta_seconds,
        formatted_distance=format_distance(distance_km),
        formatted_eta=format_eta(eta_minutes),
    )


def has_arrived(position: LatLng, target: LatLng) -> bool:
    # boundary inclusive: exactly 50 m counts as arrived
    return haversine_km(position, target) * 1000 <= ARRIVAL_RADIUS_M
