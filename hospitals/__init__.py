"""
Hospitals package: nearby hospital directory and locally edited bed counts.

Public API:
- Hospital
- NominatimClient, DirectoryError, fetch_nearby_hospitals, fallback_hospitals
- HospitalRegistry, merge_hospitals
"""
from .models import Hospital
from .directory import NominatimClient, DirectoryError, fetch_nearby_hospitals, fallback_hospitals
from .registry import HospitalRegistry, merge_hospitals

__all__ = [
    "Hospital",
    "NominatimClient",
    "DirectoryError",
    "fetch_nearby_hospitals",
    "fallback_hospitals",
    "HospitalRegistry",
    "merge_hospitals",
]
