#Purpose: Route computation for map display.
#Returns the polyline drawn between the ambulance and the patient.
#Uses OSRM /route; when OSRM is unavailable the caller still gets a
#drawable result: a straight (dashed) line between the two points.
#Never raises for routing failures.

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .eta_service import haversine_km, DEFAULT_AVG_SPEED_KMH
from .osrm_client import OSRMClient, OSRMError

LatLng = Tuple[float, float]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RouteResult:
    points: List[LatLng]
    distance_m: float
    duration_s: float
    # True when the route is the straight-line fallback (draw it dashed)
    is_fallback: bool = False


def straight_line_route(origin: LatLng, destination: LatLng) -> RouteResult:
    distance_km = haversine_km(origin, destination)
    return RouteResult(
        points=[origin, destination],
        distance_m=distance_km * 1000,
        duration_s=distance_km / DEFAULT_AVG_SPEED_KMH * 3600,
        is_fallback=True,
    )


def compute_route(origin: LatLng, destination: LatLng, client: Optional[OSRMClient] = None) -> RouteResult:
    """
    Road route from origin to destination, or the straight-line fallback.
    """
    try:
        client = client or OSRMClient()
        route = client.compute_route([origin, destination])
    except (OSRMError, ValueError) as exc:
        logger.warning("Routing unavailable (%s); falling back to straight line", exc)
        return straight_line_route(origin, destination)

    if len(route["points"]) < 2:
        logger.warning("OSRM returned an empty geometry; falling back to straight line")
        return straight_line_route(origin, destination)

    return RouteResult(
        points=route["points"],
        distance_m=float(route["distance"]),
        duration_s=float(route["duration"]),
    )
