"""
Purpose: Nearby hospital lookup.
What it does:
- NominatimClient: the HTTP adapter (OpenStreetMap search for "hospital"
  inside a +/-0.1 degree box around the viewer)
- fetch_nearby_hospitals: normalizes results (distance, synthetic beds),
  filters by radius, sorts nearest first
- fallback_hospitals: a fixed list used whenever the lookup fails or finds nothing

Rule: fetch_nearby_hospitals never raises; the caller always gets a list.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Dict, List, Optional

import requests

import config
from routing.eta_service import haversine_km
from .models import Hospital, DEFAULT_EMERGENCY_CONTACT, synthetic_beds

logger = logging.getLogger(__name__)

MAX_RESULTS = 15
SEARCH_LIMIT = 20
VIEWBOX_DEGREES = 0.1

# (name, lat, lng, city)
FALLBACK_DIRECTORY = [
    ("AIIMS Hospital", 28.5672, 77.21, "Delhi"),
    ("Apollo Hospital", 28.5355, 77.25, "Delhi"),
    ("Max Super Speciality Hospital", 28.528, 77.219, "Delhi"),
    ("Fortis Hospital", 28.4595, 77.0266, "Gurgaon"),
    ("Sir Ganga Ram Hospital", 28.6392, 77.1897, "Delhi"),
    ("Safdarjung Hospital", 28.5682, 77.2067, "Delhi"),
    ("BLK Super Speciality Hospital", 28.6489, 77.1866, "Delhi"),
    ("Medanta - The Medicity", 28.4089, 77.041, "Gurgaon"),
    ("Indraprastha Apollo Hospital", 28.5407, 77.2834, "Delhi"),
    ("Ram Manohar Lohia Hospital", 28.6257, 77.2042, "Delhi"),
    ("Lilavati Hospital", 19.0509, 72.8294, "Mumbai"),
    ("Kokilaben Hospital", 19.1308, 72.8264, "Mumbai"),
    ("CMC Vellore", 12.9249, 79.1326, "Vellore"),
    ("NIMHANS", 12.9432, 77.5966, "Bangalore"),
]


class DirectoryError(Exception):
    """Raised by the HTTP adapter when the directory cannot be queried."""
    pass


class NominatimClient:
    """
    Sole responsibility: talk to Nominatim via HTTP and return raw place records.
    """

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        self.base_url = (base_url or config.NOMINATIM_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else config.HTTP_TIMEOUT_SECONDS

    def search_hospitals(self, lat: float, lng: float) -> List[Dict[str, Any]]:
        viewbox = f"{lng - VIEWBOX_DEGREES},{lat + VIEWBOX_DEGREES},{lng + VIEWBOX_DEGREES},{lat - VIEWBOX_DEGREES}"
        try:
            response = requests.get(
                f"{self.base_url}/search",
                params={
                    "format": "json",
                    "q": "hospital",
                    "limit": SEARCH_LIMIT,
                    "bounded": 1,
                    "viewbox": viewbox,
                },
                headers={"User-Agent": config.USER_AGENT},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise DirectoryError(f"Directory request failed: {exc}") from exc

        if not response.ok:
            raise DirectoryError(f"Directory returned HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as exc:
            raise DirectoryError(f"Directory returned invalid JSON: {exc}") from exc

        return data if isinstance(data, list) else []


def fallback_hospitals(lat: float, lng: float, rng: Optional[random.Random] = None) -> List[Hospital]:
    hospitals = []
    for index, (name, h_lat, h_lng, city) in enumerate(FALLBACK_DIRECTORY):
        distance = haversine_km((lat, lng), (h_lat, h_lng))
        hospitals.append(
            Hospital(
                id=f"FALLBACK_{index}",
                name=name,
                address=f"{city} - {distance:.1f} km from your location",
                lat=h_lat,
                lng=h_lng,
                distance=distance,
                emergency_contact=DEFAULT_EMERGENCY_CONTACT,
                **synthetic_beds(rng),
            )
        )
    hospitals.sort(key=lambda hospital: hospital.distance)
    return hospitals


def _from_place(place: Dict[str, Any], lat: float, lng: float, rng: Optional[random.Random]) -> Hospital:
    h_lat = float(place["lat"])
    h_lng = float(place["lon"])
    distance = haversine_km((lat, lng), (h_lat, h_lng))

    name_parts = place["display_name"].split(",")
    address = ",".join(name_parts[1:3]).strip() or f"{distance:.1f} km away"

    return Hospital(
        id=f"OSM_{place['place_id']}",
        name=name_parts[0].strip(),
        address=address,
        lat=h_lat,
        lng=h_lng,
        distance=distance,
        emergency_contact=DEFAULT_EMERGENCY_CONTACT,
        **synthetic_beds(rng),
    )


def fetch_nearby_hospitals(
    lat: float,
    lng: float,
    radius_km: float = 10,
    client: Optional[NominatimClient] = None,
    rng: Optional[random.Random] = None,
) -> List[Hospital]:
    """
    Hospitals within `radius_km`, nearest first, at most 15.
    Falls back to the fixed list on any failure or empty result.
    """
    client = client or NominatimClient()
    try:
        places = client.search_hospitals(lat, lng)
        hospitals = [
            _from_place(place, lat, lng, rng)
            for place in places
            if isinstance(place, dict) and place.get("display_name")
        ]
    except Exception as exc:
        # this lookup never raises: anything unexpected degrades to the fixed list
        logger.warning("Hospital directory unavailable (%s: %s); using fallback list", type(exc).__name__, exc)
        return fallback_hospitals(lat, lng, rng)

    hospitals = [hospital for hospital in hospitals if hospital.distance <= radius_km]
    hospitals.sort(key=lambda hospital: hospital.distance)
    hospitals = hospitals[:MAX_RESULTS]

    if not hospitals:
        logger.info("No hospitals within %s km; using fallback list", radius_km)
        return fallback_hospitals(lat, lng, rng)
    return hospitals
