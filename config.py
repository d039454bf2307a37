"""
Purpose: Deployment settings read from the environment (.env supported).

Example .env:
OSRM_BASE_URL=https://router.project-osrm.org
NOMINATIM_BASE_URL=https://nominatim.openstreetmap.org
STORAGE_PATH=.ambulance_storage.json

Rule: Only deployment settings here. Algorithm tunables live in the
policy dataclasses next to the code that uses them.
"""

import os

from dotenv import load_dotenv

load_dotenv()

OSRM_BASE_URL = os.getenv("OSRM_BASE_URL", "https://router.project-osrm.org")
NOMINATIM_BASE_URL = os.getenv("NOMINATIM_BASE_URL", "https://nominatim.openstreetmap.org")
HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "5"))
USER_AGENT = os.getenv("USER_AGENT", "AmbulanceApp/1.0")

STORAGE_PATH = os.getenv("STORAGE_PATH", ".ambulance_storage.json")

# Fallback viewer position when no location is known (New Delhi)
DEFAULT_LAT = float(os.getenv("DEFAULT_LAT", "28.6139"))
DEFAULT_LNG = float(os.getenv("DEFAULT_LNG", "77.2090"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
