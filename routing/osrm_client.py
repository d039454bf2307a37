#Purpose: The OSRM "adapter/client".
#Sole responsibility: talk to OSRM via HTTP and return normalized outputs.
#Encapsulates OSRM-specific details:
#coordinate formatting (lon,lat)
#URL construction (/route)
#timeouts and error handling
#parsing response JSON into your internal shape (lat, lng) points
#It should not contain fallback rules or map drawing.

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests

import config

# Internal coordinate type: (lat, lng)
LatLng = Tuple[float, float]

logger = logging.getLogger(__name__)


class OSRMError(Exception):
    """Custom exception for OSRM client errors."""
    pass


class OSRMClient:
    """
    OSRM Adapter / Client

    Sole responsibility:
    - Talk to OSRM via HTTP
    - Convert internal (lat, lng) -> OSRM (lng,lat)
    - Return normalized outputs

    """
    def __init__(self, profile: str = "driving", timeout: Optional[float] = None, base_url: Optional[str] = None):
        self.base_url = (base_url or config.OSRM_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else config.HTTP_TIMEOUT_SECONDS
        self.profile = profile #the mode of transportation (driving, walking, cycling)

        if not self.base_url:
            raise ValueError("OSRM base URL not set. Please set OSRM_BASE_URL in the .env file.")

    def format_coordinates(self, coords: List[LatLng]) -> str:
        """Convert list of (lat, lng) to OSRM format 'lng,lat;lng,lat;...'"""
        return ';'.join([f"{lng},{lat}" for lat, lng in coords])

    def compute_route(self, coordinates: List[LatLng]) -> Dict[str, Any]:
        """
        calls the OSRM /route endpoint with the given coordinates and
        returns the full route geometry plus distance and duration

        Returns:
            {
                "distance": float, # in meters
                "duration": float, # in seconds
                "points": [(lat, lng), ...], # polyline, internal order
            }
        """
        if len(coordinates) < 2:
            raise ValueError("At least two coordinates are required to compute a route.")

        url = f"{self.base_url}/route/v1/{self.profile}/{self.format_coordinates(coordinates)}"

        try:
            response = requests.get(
                url,
                params={
                    "overview": "full",
                    "geometries": "geojson",
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise OSRMError(f"OSRM request failed: {exc}") from exc

        #validating OSRM response
        if not isinstance(data, dict):
            raise OSRMError(f"OSRM returned an unexpected body: {type(data).__name__}")
        if data.get("code") != "Ok" or not data.get("routes"):
            raise OSRMError(f"OSRM error: {data.get('message', 'Unknown error')}")

        try:
            route = data["routes"][0] #take the first route (OSRM may return alternatives)

            # geojson is [lng, lat]; flip back to the internal order
            points = [(lat, lng) for lng, lat in route["geometry"]["coordinates"]]
            distance = float(route["distance"])
            duration = float(route["duration"])
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            raise OSRMError(f"OSRM returned a malformed route: {exc!r}") from exc

        logger.debug("OSRM route: %d points, %.0f m", len(points), distance)
        return {
            "distance": distance,
            "duration": duration,
            "points": points,
        }
