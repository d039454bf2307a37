"""
Locally created / edited hospitals ("customHospitals") and the load-time merge
with directory results. A local copy sharing an id with a directory entry
shadows it.
"""

from __future__ import annotations

import logging
import time
from dataclasses import replace
from typing import Callable, List, Optional

from storage import KeyValueStore, CUSTOM_HOSPITALS_KEY
from .directory import fetch_nearby_hospitals
from .models import Hospital, DEFAULT_EMERGENCY_CONTACT

logger = logging.getLogger(__name__)

DirectoryLookup = Callable[[float, float, float], List[Hospital]]


def merge_hospitals(directory: List[Hospital], custom: List[Hospital]) -> List[Hospital]:
    """
    Directory order is kept, each entry replaced by its local copy if one exists;
    purely custom entries are appended.
    """
    custom_by_id = {hospital.id: hospital for hospital in custom}
    directory_ids = {hospital.id for hospital in directory}

    merged = [custom_by_id.get(hospital.id, hospital) for hospital in directory]
    merged.extend(
        hospital for hospital in custom
        if hospital.is_custom and hospital.id not in directory_ids
    )
    return merged


class HospitalRegistry:

    def __init__(self, store: KeyValueStore, lookup: Optional[DirectoryLookup] = None):
        self.store = store
        self.lookup = lookup or (lambda lat, lng, radius_km: fetch_nearby_hospitals(lat, lng, radius_km))

    def custom_hospitals(self) -> List[Hospital]:
        return [Hospital.from_dict(raw) for raw in self.store.get(CUSTOM_HOSPITALS_KEY, []) or []]

    def save_custom_hospitals(self, hospitals: List[Hospital]) -> None:
        self.store.put(CUSTOM_HOSPITALS_KEY, [hospital.to_dict() for hospital in hospitals])

    def update_hospital(self, hospital: Hospital) -> Hospital:
        """Upsert a local copy. First-time copies are flagged custom."""
        hospitals = self.custom_hospitals()
        for index, existing in enumerate(hospitals):
            if existing.id == hospital.id:
                hospitals[index] = hospital
                break
        else:
            hospital = replace(hospital, is_custom=True)
            hospitals.append(hospital)
        self.save_custom_hospitals(hospitals)
        logger.info("Saved local copy of hospital %s", hospital.id)
        return hospital

    def add_custom_hospital(
        self,
        name: str,
        lat: float,
        lng: float,
        address: str = "",
        total_beds: int = 100,
        available_beds: int = 20,
        icu_beds: int = 10,
        available_icu_beds: int = 5,
        emergency_contact: str = "",
        now_ms: Optional[int] = None,
    ) -> Optional[Hospital]:
        if not name:
            return None
        now_ms = now_ms if now_ms is not None else int(time.time() * 1000)
        hospital = Hospital(
            id=f"CUSTOM_{now_ms}",
            name=name,
            address=address or "Custom Hospital",
            lat=lat,
            lng=lng,
            distance=0.0,
            total_beds=total_beds,
            available_beds=available_beds,
            icu_beds=icu_beds,
            available_icu_beds=available_icu_beds,
            emergency_contact=emergency_contact or DEFAULT_EMERGENCY_CONTACT,
            is_custom=True,
        )
        self.save_custom_hospitals(self.custom_hospitals() + [hospital])
        return hospital

    def load_hospitals(self, lat: float, lng: float, radius_km: float = 15) -> List[Hospital]:
        return merge_hospitals(self.lookup(lat, lng, radius_km), self.custom_hospitals())
